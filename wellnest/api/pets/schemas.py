# wellnest/api/pets/schemas.py
from marshmallow import Schema, fields, validate, pre_load


class _TrimmedNameSchema(Schema):
    @pre_load
    def strip_name(self, data, **kwargs):
        if isinstance(data, dict) and isinstance(data.get('name'), str):
            data = dict(data, name=data['name'].strip())
        return data


class PetCreateSchema(_TrimmedNameSchema):
    """POST /api/v1/pets/ 반려동물 생성 요청 스키마."""
    name = fields.Str(required=True, validate=validate.Length(min=1, max=50))


class PetNameUpdateSchema(_TrimmedNameSchema):
    """PATCH /api/v1/pets/name 이름 변경 요청 스키마."""
    name = fields.Str(required=True, validate=validate.Length(min=1, max=50))


class InteractionsQuerySchema(Schema):
    limit = fields.Int(load_default=20, validate=validate.Range(min=1, max=100))


class PetResponseSchema(Schema):
    pet_id = fields.Str(dump_only=True)
    owner_id = fields.Str(dump_only=True)
    name = fields.Str()
    species = fields.Str()
    level = fields.Int()
    experience = fields.Int()
    age_stage = fields.Str()
    mood = fields.Str()
    coin = fields.Int()
    energy = fields.Int()
    hunger = fields.Int()
    cleanliness = fields.Int()
    happiness = fields.Int()
    sleep_until = fields.DateTime(allow_none=True)
    last_interaction_at = fields.DateTime()
    created_at = fields.DateTime()


class GaugeSchema(Schema):
    value = fields.Int()
    percentage = fields.Int()


class ExperienceGaugeSchema(GaugeSchema):
    next_level_xp = fields.Int()


class PetGaugesSchema(Schema):
    hunger = fields.Nested(GaugeSchema)
    energy = fields.Nested(GaugeSchema)
    cleanliness = fields.Nested(GaugeSchema)
    happiness = fields.Nested(GaugeSchema)
    experience = fields.Nested(ExperienceGaugeSchema)


class PetStatsResponseSchema(Schema):
    """GET /api/v1/pets/ 반려동물 상태 조회 응답 스키마."""
    pet = fields.Nested(PetResponseSchema)
    level = fields.Int()
    coins = fields.Int()
    stats = fields.Nested(PetGaugesSchema)
    is_sleeping = fields.Bool()
    sleep_remaining_minutes = fields.Int(allow_none=True)
    can_wake_up = fields.Bool()


class PetInteractionResponseSchema(Schema):
    interaction_id = fields.Str()
    interaction_type = fields.Str()
    timestamp = fields.DateTime()
