# wellnest/api/quests/schemas.py
from marshmallow import Schema, fields, validate, validates_schema, ValidationError, post_load

from wellnest.api.pets.schemas import PetResponseSchema
from wellnest.models.quest import QuestScope, QuestTag, RewardType


class ClaimQuestSchema(Schema):
    """POST /api/v1/quests/claim 요청 스키마."""
    user_quest_id = fields.UUID(
        required=True,
        error_messages={
            "required": "user_quest_id는 필수입니다.",
            "invalid_uuid": "user_quest_id는 올바른 UUID 형식이어야 합니다.",
        }
    )

    @post_load
    def stringify_id(self, data, **kwargs):
        data['user_quest_id'] = str(data['user_quest_id'])
        return data


class QuestDefinitionCreateSchema(Schema):
    """POST /api/v1/quests/definitions 관리자용 퀘스트 정의 생성 스키마."""
    name = fields.Str(required=True, validate=validate.Length(min=1, max=100))
    description = fields.Str(load_default=None, allow_none=True)
    reward_money = fields.Int(load_default=1, validate=validate.Range(min=0, max=9999))
    reward_experience = fields.Int(load_default=10, validate=validate.Range(min=0))
    hunger_recovery = fields.Int(load_default=5, validate=validate.Range(min=0, max=100))
    reward_type = fields.Str(load_default=RewardType.COIN.value, validate=validate.OneOf([e.value for e in RewardType]))
    reward_food_id = fields.Str(load_default=None, allow_none=True)
    quest_tag = fields.Str(required=True, validate=validate.OneOf([e.value for e in QuestTag]))
    is_active = fields.Bool(load_default=True)


class QuestDefinitionQuerySchema(Schema):
    active_only = fields.Bool(load_default=False)


class DailyQuestIssueSchema(Schema):
    """POST /api/v1/quests/daily 관리자용 오늘의 퀘스트 발행 스키마."""
    quest_definition_id = fields.Str(required=True, validate=validate.Length(min=1))
    scope = fields.Str(load_default=QuestScope.GLOBAL.value, validate=validate.OneOf([e.value for e in QuestScope]))
    target_user_id = fields.Str(load_default=None, allow_none=True)

    @validates_schema
    def validate_target(self, data, **kwargs):
        if data.get('scope') == QuestScope.PERSONALIZED.value and not data.get('target_user_id'):
            raise ValidationError("개인 퀘스트에는 target_user_id가 필요합니다.", field_name="target_user_id")


class QuestDefinitionResponseSchema(Schema):
    quest_definition_id = fields.Str()
    name = fields.Str()
    description = fields.Str(allow_none=True)
    reward_money = fields.Int()
    reward_experience = fields.Int()
    hunger_recovery = fields.Int()
    reward_type = fields.Str()
    reward_food_id = fields.Str(allow_none=True)
    quest_tag = fields.Str()
    is_active = fields.Bool()
    created_at = fields.DateTime()


class DailyQuestResponseSchema(Schema):
    daily_quest_id = fields.Str()
    scope = fields.Str()
    target_user_id = fields.Str(allow_none=True)
    timestamp = fields.DateTime()
    quest_definition = fields.Nested(QuestDefinitionResponseSchema)


class UserQuestResponseSchema(Schema):
    user_quest_id = fields.Str()
    owner_id = fields.Str()
    status = fields.Str()
    expires_at = fields.DateTime()
    completed_at = fields.DateTime(allow_none=True)
    created_at = fields.DateTime()
    daily_quest = fields.Nested(DailyQuestResponseSchema)


class QuestRewardSchema(Schema):
    money = fields.Int()
    experience = fields.Int()
    hunger_recovery = fields.Int()
    food_id = fields.Str(allow_none=True)


class ClaimQuestResponseSchema(Schema):
    user_quest = fields.Nested(UserQuestResponseSchema)
    pet = fields.Nested(PetResponseSchema)
    rewards = fields.Nested(QuestRewardSchema)


class QuestStatsResponseSchema(Schema):
    total = fields.Int()
    pending = fields.Int()
    complete = fields.Int()
    claimed = fields.Int()
    expired = fields.Int()
