# wellnest/api/flip_feel/routes.py
from flask import Blueprint, request, current_app

from wellnest.api.flip_feel.schemas import (
    QuestionsCreateSchema,
    QuestionUpdateSchema,
    QuestionsQuerySchema,
    ResponsesSubmitSchema,
    SessionsQuerySchema,
    QuestionResponseSchema,
    FlipFeelSessionResponseSchema
)
from wellnest.core.errors import api_response
from wellnest.core.security import role_required, current_user_id, STUDENT_ROLES, CONTENT_MANAGER_ROLES

flip_feel_bp = Blueprint('flip_feel_bp', __name__)


# --- 질문 관리 (관리자/상담사) ---

@flip_feel_bp.route('/questions', methods=['POST'])
@role_required(*CONTENT_MANAGER_ROLES)
def create_questions():
    """질문과 선택지 일괄 등록 API. 질문마다 선택지는 정확히 4개입니다."""
    validated_data = QuestionsCreateSchema().load(request.get_json(silent=True) or {})
    questions = current_app.services['flip_feel'].create_questions_and_choices(validated_data['questions'])
    return api_response("QUESTIONS_CREATED", "질문이 등록되었습니다.", QuestionResponseSchema(many=True).dump(questions), 201)


@flip_feel_bp.route('/questions/<string:question_id>', methods=['PUT'])
@role_required(*CONTENT_MANAGER_ROLES)
def update_question(question_id: str):
    validated_data = QuestionUpdateSchema().load(request.get_json(silent=True) or {})
    question = current_app.services['flip_feel'].update_question(question_id, validated_data)
    return api_response("QUESTION_UPDATED", "질문이 수정되었습니다.", QuestionResponseSchema().dump(question))


@flip_feel_bp.route('/questions/<string:question_id>', methods=['DELETE'])
@role_required(*CONTENT_MANAGER_ROLES)
def delete_question(question_id: str):
    current_app.services['flip_feel'].delete_question(question_id)
    return api_response("QUESTION_DELETED", "질문이 삭제되었습니다.")


# --- 학생용 ---

@flip_feel_bp.route('/questions', methods=['GET'])
@role_required(*STUDENT_ROLES)
def get_questions():
    """카테고리별 무작위 질문 조회 API. (category 필수, count 5~15, 기본값 10)"""
    params = QuestionsQuerySchema().load(request.args)
    questions = current_app.services['flip_feel'].get_questions_by_category(params['category'], params['count'])
    return api_response("QUESTIONS_RETRIEVED", "질문을 조회했습니다.", QuestionResponseSchema(many=True).dump(questions))


@flip_feel_bp.route('/responses', methods=['POST'])
@role_required(*STUDENT_ROLES)
def submit_responses():
    """세션과 응답을 한 번에 제출하는 API."""
    validated_data = ResponsesSubmitSchema().load(request.get_json(silent=True) or {})
    session = current_app.services['flip_feel'].submit_responses(current_user_id(), validated_data['responses'])
    return api_response("RESPONSES_SUBMITTED", "응답이 저장되었습니다.", FlipFeelSessionResponseSchema().dump(session), 201)


@flip_feel_bp.route('/sessions', methods=['POST'])
@role_required(*STUDENT_ROLES)
def start_session():
    session = current_app.services['flip_feel'].start_session(current_user_id())
    return api_response("SESSION_STARTED", "세션을 시작했습니다.", FlipFeelSessionResponseSchema().dump(session), 201)


@flip_feel_bp.route('/sessions/<string:session_id>/responses', methods=['POST'])
@role_required(*STUDENT_ROLES)
def add_responses(session_id: str):
    validated_data = ResponsesSubmitSchema().load(request.get_json(silent=True) or {})
    session = current_app.services['flip_feel'].add_responses(current_user_id(), session_id, validated_data['responses'])
    return api_response("RESPONSES_SUBMITTED", "응답이 저장되었습니다.", FlipFeelSessionResponseSchema().dump(session))


@flip_feel_bp.route('/sessions/<string:session_id>/complete', methods=['POST'])
@role_required(*STUDENT_ROLES)
def complete_session(session_id: str):
    session = current_app.services['flip_feel'].complete_session(current_user_id(), session_id)
    return api_response("SESSION_COMPLETED", "세션을 완료했습니다.", FlipFeelSessionResponseSchema().dump(session))


@flip_feel_bp.route('/sessions', methods=['GET'])
@role_required(*STUDENT_ROLES)
def get_sessions():
    params = SessionsQuerySchema().load(request.args)
    sessions = current_app.services['flip_feel'].get_user_sessions(current_user_id(), params['with_responses'])
    schema = FlipFeelSessionResponseSchema(many=True) if params['with_responses'] \
        else FlipFeelSessionResponseSchema(many=True, exclude=('responses',))
    return api_response("SESSIONS_RETRIEVED", "세션 기록을 조회했습니다.", schema.dump(sessions))


@flip_feel_bp.route('/sessions/<string:session_id>', methods=['GET'])
@role_required(*STUDENT_ROLES)
def get_session(session_id: str):
    session = current_app.services['flip_feel'].get_session_by_id(current_user_id(), session_id)
    return api_response("SESSION_RETRIEVED", "세션을 조회했습니다.", FlipFeelSessionResponseSchema().dump(session))
