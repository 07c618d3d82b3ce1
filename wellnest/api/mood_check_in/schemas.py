# wellnest/api/mood_check_in/schemas.py
from marshmallow import Schema, fields, validate


class MoodCheckInCreateSchema(Schema):
    """POST /api/v1/activities/mood-check-in/ 요청 스키마. 감정 값의 검증은 서비스에서 수행합니다."""
    mood_1 = fields.Str(required=True, validate=validate.Length(min=1, max=30))
    mood_2 = fields.Str(load_default=None, allow_none=True, validate=validate.Length(max=30))
    mood_3 = fields.Str(load_default=None, allow_none=True, validate=validate.Length(max=30))


class MoodHistoryQuerySchema(Schema):
    limit = fields.Int(load_default=30, validate=validate.Range(min=1, max=100))


class MoodCheckInResponseSchema(Schema):
    check_in_id = fields.Str()
    user_id = fields.Str()
    mood_1 = fields.Str()
    mood_2 = fields.Str(allow_none=True)
    mood_3 = fields.Str(allow_none=True)
    checked_in_at = fields.DateTime()
    check_in_date = fields.Date()


class MoodCheckInStatusSchema(Schema):
    hasCheckedIn = fields.Bool()
    check_in = fields.Nested(MoodCheckInResponseSchema, allow_none=True)
