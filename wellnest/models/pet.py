# wellnest/models/pet.py
from enum import Enum

from wellnest.core.database import db
from wellnest.models.base import generate_uuid, utcnow


class PetMood(Enum):
    EXCITED = "excited"
    SAD = "sad"
    PUPPY_EYES = "puppy_eyes"
    FRUSTRATED = "frustrated"
    SLEEPY = "sleepy"


class AgeStage(Enum):
    INFANT = "infant"
    TEEN = "teen"
    ADULT = "adult"


class InteractionType(Enum):
    FEED = "feed"
    CLEAN = "clean"
    PLAY = "play"
    PET = "pet"
    SLEEP = "sleep"


class Pet(db.Model):
    """
    사용자(학생)당 하나씩 존재하는 가상 반려동물.
    level 과 age_stage 는 experience 로부터 계산되는 파생 값입니다.
    """
    __tablename__ = 'pets'

    pet_id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    owner_id = db.Column(db.String(64), nullable=False, unique=True, index=True)
    name = db.Column(db.String(50), nullable=False)
    species = db.Column(db.String(30), nullable=False, default="heron")
    level = db.Column(db.Integer, nullable=False, default=1)
    experience = db.Column(db.Integer, nullable=False, default=0)
    age_stage = db.Column(db.String(10), nullable=False, default=AgeStage.INFANT.value)
    mood = db.Column(db.String(20), nullable=False, default=PetMood.EXCITED.value)
    coin = db.Column(db.Integer, nullable=False, default=500)
    energy = db.Column(db.Integer, nullable=False, default=100)
    hunger = db.Column(db.Integer, nullable=False, default=100)
    cleanliness = db.Column(db.Integer, nullable=False, default=100)
    happiness = db.Column(db.Integer, nullable=False, default=100)
    sleep_until = db.Column(db.DateTime(timezone=True), nullable=True)
    last_interaction_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)

    interactions = db.relationship(
        'PetInteraction', back_populates='pet', lazy='dynamic', cascade='all, delete-orphan'
    )

    def __repr__(self):
        return f"<Pet {self.pet_id} owner={self.owner_id} level={self.level}>"


class PetInteraction(db.Model):
    """반려동물과의 상호작용 기록 (먹이, 목욕, 놀이, 쓰다듬기, 재우기)."""
    __tablename__ = 'pet_interactions'

    interaction_id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    pet_id = db.Column(db.String(36), db.ForeignKey('pets.pet_id', ondelete='CASCADE'), nullable=False, index=True)
    interaction_type = db.Column(db.String(10), nullable=False)
    timestamp = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)

    pet = db.relationship('Pet', back_populates='interactions')
