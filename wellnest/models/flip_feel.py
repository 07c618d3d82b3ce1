# wellnest/models/flip_feel.py
from enum import Enum

from wellnest.core.database import db
from wellnest.models.base import generate_uuid, utcnow

CHOICES_PER_QUESTION = 4


class FlipFeelCategory(Enum):
    SCHOOL = "school"
    OPPOSITE_SEX = "opposite_sex"
    PEERS = "peers"
    FAMILY = "family"
    CRISES = "crises"
    EMOTIONS = "emotions"
    RECREATION = "recreation"


class MoodLabel(Enum):
    EXCELLING = "Excelling"
    THRIVING = "Thriving"
    STRUGGLING = "Struggling"
    IN_CRISIS = "InCrisis"


class FlipFeelQuestion(db.Model):
    __tablename__ = 'flip_feel_questions'

    question_id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    category = db.Column(db.String(20), nullable=False, index=True)
    question_text = db.Column(db.String(500), nullable=False, unique=True)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    choices = db.relationship(
        'FlipFeelChoice', back_populates='question', lazy='selectin',
        cascade='all, delete-orphan', order_by='FlipFeelChoice.position'
    )


class FlipFeelChoice(db.Model):
    __tablename__ = 'flip_feel_choices'

    choice_id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    question_id = db.Column(
        db.String(36), db.ForeignKey('flip_feel_questions.question_id', ondelete='CASCADE'), nullable=False, index=True
    )
    choice_text = db.Column(db.String(300), nullable=False)
    mood_label = db.Column(db.String(20), nullable=False)
    position = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)

    question = db.relationship('FlipFeelQuestion', back_populates='choices')


class FlipFeelSession(db.Model):
    """한 번의 플립 앤 필 진행 기록. finished_at 이 비어 있으면 진행 중인 세션입니다."""
    __tablename__ = 'flip_feel_sessions'

    flip_feel_id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    user_id = db.Column(db.String(64), nullable=False, index=True)
    started_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)
    finished_at = db.Column(db.DateTime(timezone=True), nullable=True)

    responses = db.relationship(
        'FlipFeelResponse', back_populates='session', lazy='selectin',
        cascade='all, delete-orphan', order_by='FlipFeelResponse.created_at'
    )


class FlipFeelResponse(db.Model):
    __tablename__ = 'flip_feel_responses'

    response_id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    flip_feel_id = db.Column(
        db.String(36), db.ForeignKey('flip_feel_sessions.flip_feel_id', ondelete='CASCADE'), nullable=False, index=True
    )
    question_id = db.Column(db.String(36), db.ForeignKey('flip_feel_questions.question_id'), nullable=False)
    choice_id = db.Column(db.String(36), db.ForeignKey('flip_feel_choices.choice_id'), nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)

    session = db.relationship('FlipFeelSession', back_populates='responses')
    question = db.relationship('FlipFeelQuestion', lazy='joined')
    choice = db.relationship('FlipFeelChoice', lazy='joined')
