# wellnest/api/gratitude_jar/schemas.py
import re

from marshmallow import Schema, fields, validate, pre_load

_WHITESPACE = re.compile(r'\s+')


class GratitudeEntrySchema(Schema):
    """감사 일기 작성/수정 요청 스키마. 앞뒤 공백을 제거하고 연속 공백은 하나로 합칩니다."""
    content = fields.Str(
        required=True,
        validate=validate.Length(min=3, max=500, error="감사 내용은 3자 이상 500자 이하로 입력해 주세요.")
    )

    @pre_load
    def normalize_content(self, data, **kwargs):
        if isinstance(data, dict) and isinstance(data.get('content'), str):
            data = dict(data, content=_WHITESPACE.sub(' ', data['content']).strip())
        return data


class GratitudeEntryResponseSchema(Schema):
    gratitude_id = fields.Str()
    user_id = fields.Str()
    content = fields.Str()
    created_at = fields.DateTime()
    updated_at = fields.DateTime()


class GratitudeEntriesPageSchema(Schema):
    entries = fields.List(fields.Nested(GratitudeEntryResponseSchema))
    hasMore = fields.Bool()
    nextCursor = fields.Str(allow_none=True)
