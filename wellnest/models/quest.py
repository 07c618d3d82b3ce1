# wellnest/models/quest.py
from enum import Enum

from wellnest.core.database import db
from wellnest.models.base import generate_uuid, utcnow


class QuestStatus(Enum):
    PENDING = "pending"
    COMPLETE = "complete"
    CLAIMED = "claimed"
    EXPIRED = "expired"


class QuestScope(Enum):
    GLOBAL = "global"
    PERSONALIZED = "personalized"


class QuestTag(Enum):
    WELL_BEING = "well-being"
    PET_CARE = "pet-care"
    PET_INTERACTION = "pet-interaction"


class RewardType(Enum):
    COIN = "coin"
    FOOD = "food"


class QuestDefinition(db.Model):
    """퀘스트의 내용과 보상을 정의하는 템플릿."""
    __tablename__ = 'quest_definitions'

    quest_definition_id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    name = db.Column(db.String(100), nullable=False, unique=True)
    description = db.Column(db.Text, nullable=True)
    reward_money = db.Column(db.Integer, nullable=False, default=1)
    reward_experience = db.Column(db.Integer, nullable=False, default=10)
    hunger_recovery = db.Column(db.Integer, nullable=False, default=5)
    reward_type = db.Column(db.String(10), nullable=False, default=RewardType.COIN.value)
    reward_food_id = db.Column(db.String(36), db.ForeignKey('pet_foods.food_id', ondelete='SET NULL'), nullable=True)
    quest_tag = db.Column(db.String(20), nullable=False)
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)

    reward_food = db.relationship('PetFood', lazy='joined')


class DailyQuest(db.Model):
    """특정 날짜에 발행된 퀘스트. 전체 대상(global) 또는 특정 사용자 대상(personalized)."""
    __tablename__ = 'daily_quests'

    daily_quest_id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    quest_definition_id = db.Column(
        db.String(36), db.ForeignKey('quest_definitions.quest_definition_id', ondelete='CASCADE'), nullable=False
    )
    scope = db.Column(db.String(20), nullable=False, default=QuestScope.GLOBAL.value)
    target_user_id = db.Column(db.String(64), nullable=True, index=True)
    timestamp = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow, index=True)

    quest_definition = db.relationship('QuestDefinition', lazy='joined')


class UserQuest(db.Model):
    """
    사용자별 퀘스트 인스턴스. 그날 처음 조회할 때 지연 생성됩니다.
    상태는 pending -> complete -> claimed 순서로만 진행되며, 언제든 expired 가 될 수 있습니다.
    """
    __tablename__ = 'user_quests'
    __table_args__ = (
        db.UniqueConstraint('owner_id', 'daily_quest_id', name='uq_user_quest_owner_daily_quest'),
    )

    user_quest_id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    owner_id = db.Column(db.String(64), nullable=False, index=True)
    daily_quest_id = db.Column(
        db.String(36), db.ForeignKey('daily_quests.daily_quest_id', ondelete='CASCADE'), nullable=False
    )
    status = db.Column(db.String(10), nullable=False, default=QuestStatus.PENDING.value)
    expires_at = db.Column(db.DateTime(timezone=True), nullable=False)
    completed_at = db.Column(db.DateTime(timezone=True), nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow, index=True)

    daily_quest = db.relationship('DailyQuest', lazy='joined')
