# wellnest/api/flip_feel/schemas.py
from marshmallow import Schema, fields, validate, pre_load, validates_schema, ValidationError

from wellnest.models.flip_feel import FlipFeelCategory, MoodLabel, CHOICES_PER_QUESTION

CATEGORIES = [e.value for e in FlipFeelCategory]


class ChoiceCreateSchema(Schema):
    choice_text = fields.Str(required=True, validate=validate.Length(min=1, max=300))
    mood_label = fields.Str(required=True, validate=validate.OneOf([e.value for e in MoodLabel]))


class QuestionCreateSchema(Schema):
    category = fields.Str(required=True, validate=validate.OneOf(CATEGORIES))
    question_text = fields.Str(required=True, validate=validate.Length(min=1, max=500))
    choices = fields.List(
        fields.Nested(ChoiceCreateSchema), required=True,
        validate=validate.Length(equal=CHOICES_PER_QUESTION, error=f"선택지는 정확히 {CHOICES_PER_QUESTION}개여야 합니다.")
    )

    @pre_load
    def strip_text(self, data, **kwargs):
        if isinstance(data, dict) and isinstance(data.get('question_text'), str):
            data = dict(data, question_text=data['question_text'].strip())
        return data


class QuestionsCreateSchema(Schema):
    """POST /api/v1/activities/flip-and-feel/questions 요청 스키마 (관리자)."""
    questions = fields.List(fields.Nested(QuestionCreateSchema), required=True, validate=validate.Length(min=1))


class QuestionUpdateSchema(Schema):
    category = fields.Str(validate=validate.OneOf(CATEGORIES))
    question_text = fields.Str(validate=validate.Length(min=1, max=500))

    @validates_schema
    def validate_not_empty(self, data, **kwargs):
        if not data:
            raise ValidationError("수정할 항목이 없습니다.")


class QuestionsQuerySchema(Schema):
    category = fields.Str(required=True, validate=validate.OneOf(CATEGORIES))
    count = fields.Int(load_default=10)


class ResponseItemSchema(Schema):
    question_id = fields.Str(required=True, validate=validate.Length(min=1))
    choice_id = fields.Str(required=True, validate=validate.Length(min=1))


class ResponsesSubmitSchema(Schema):
    """응답 제출 요청 스키마."""
    responses = fields.List(fields.Nested(ResponseItemSchema), required=True, validate=validate.Length(min=1))


class SessionsQuerySchema(Schema):
    with_responses = fields.Bool(load_default=False)


class ChoiceResponseSchema(Schema):
    choice_id = fields.Str()
    choice_text = fields.Str()
    mood_label = fields.Str()


class QuestionResponseSchema(Schema):
    question_id = fields.Str()
    category = fields.Str()
    question_text = fields.Str()
    choices = fields.List(fields.Nested(ChoiceResponseSchema))
    created_at = fields.DateTime()
    updated_at = fields.DateTime()


class FlipFeelAnswerSchema(Schema):
    response_id = fields.Str()
    question_id = fields.Str()
    choice_id = fields.Str()
    mood_label = fields.Str(attribute="choice.mood_label")
    created_at = fields.DateTime()


class FlipFeelSessionResponseSchema(Schema):
    flip_feel_id = fields.Str()
    user_id = fields.Str()
    started_at = fields.DateTime()
    finished_at = fields.DateTime(allow_none=True)
    responses = fields.List(fields.Nested(FlipFeelAnswerSchema))
