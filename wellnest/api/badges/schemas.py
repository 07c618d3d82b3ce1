# wellnest/api/badges/schemas.py
from marshmallow import Schema, fields


class BadgeResponseSchema(Schema):
    badge_id = fields.Str()
    name = fields.Str()
    description = fields.Str(allow_none=True)
    icon_url = fields.Str(allow_none=True)
    event_trigger = fields.Str(allow_none=True)
    threshold = fields.Int(allow_none=True)
    condition_type = fields.Str(allow_none=True)
    level = fields.Int()


class UserBadgeResponseSchema(Schema):
    user_badge_id = fields.Str()
    badge_id = fields.Str()
    awarded_at = fields.DateTime()
    badge = fields.Nested(BadgeResponseSchema)


class ObtainableBadgeResponseSchema(Schema):
    badge = fields.Nested(BadgeResponseSchema)
    is_obtained = fields.Bool()
    awarded_at = fields.DateTime(allow_none=True)
