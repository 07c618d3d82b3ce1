# wellnest/api/journal/schemas.py
from marshmallow import Schema, fields, validate, pre_load, validates_schema, ValidationError

from wellnest.utils.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE

TITLE_LENGTH = validate.Length(min=5, max=100, error="제목은 5자 이상 100자 이하로 입력해 주세요.")
CONTENT_LENGTH = validate.Length(min=20, max=2000, error="내용은 20자 이상 2000자 이하로 입력해 주세요.")


class _TrimmedJournalSchema(Schema):
    @pre_load
    def strip_text(self, data, **kwargs):
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for key in ('title', 'content'):
            if isinstance(data.get(key), str):
                data[key] = data[key].strip()
        return data


class JournalEntryCreateSchema(_TrimmedJournalSchema):
    """POST /api/v1/activities/mind-mirror/ 요청 스키마."""
    title = fields.Str(required=True, validate=TITLE_LENGTH)
    content = fields.Str(required=True, validate=CONTENT_LENGTH)
    wellness_state = fields.Dict(keys=fields.Str(), values=fields.Float(), load_default=None, allow_none=True)


class JournalEntryUpdateSchema(_TrimmedJournalSchema):
    """PUT /api/v1/activities/mind-mirror/<journal_id> 부분 수정 스키마."""
    title = fields.Str(validate=TITLE_LENGTH)
    content = fields.Str(validate=CONTENT_LENGTH)
    wellness_state = fields.Dict(keys=fields.Str(), values=fields.Float(), allow_none=True)

    @validates_schema
    def validate_not_empty(self, data, **kwargs):
        if not data:
            raise ValidationError("수정할 항목이 없습니다.")


class EntriesQuerySchema(Schema):
    """커서 기반 목록 조회 쿼리 파라미터."""
    limit = fields.Int(load_default=DEFAULT_PAGE_SIZE, validate=validate.Range(min=1, max=MAX_PAGE_SIZE))
    lastEntryId = fields.Str(load_default=None)


class JournalEntryResponseSchema(Schema):
    journal_id = fields.Str()
    user_id = fields.Str()
    title = fields.Str()
    content = fields.Str()
    wellness_state = fields.Dict(allow_none=True)
    created_at = fields.DateTime()
    updated_at = fields.DateTime()


class JournalEntriesPageSchema(Schema):
    entries = fields.List(fields.Nested(JournalEntryResponseSchema))
    hasMore = fields.Bool()
    nextCursor = fields.Str(allow_none=True)
