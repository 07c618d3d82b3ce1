# wellnest/api/mood_check_in/routes.py
from flask import Blueprint, request, current_app

from wellnest.api.mood_check_in.schemas import (
    MoodCheckInCreateSchema,
    MoodHistoryQuerySchema,
    MoodCheckInResponseSchema,
    MoodCheckInStatusSchema
)
from wellnest.core.errors import api_response
from wellnest.core.security import role_required, current_user_id, STUDENT_ROLES

mood_check_in_bp = Blueprint('mood_check_in_bp', __name__)


@mood_check_in_bp.route('/', methods=['POST'])
@role_required(*STUDENT_ROLES)
def create_mood_check_in():
    """오늘의 감정 체크인 API. 하루에 한 번만 가능합니다."""
    validated_data = MoodCheckInCreateSchema().load(request.get_json(silent=True) or {})
    check_in = current_app.services['mood_check_in'].create_check_in(current_user_id(), **validated_data)
    return api_response("MOOD_CHECKIN_CREATED", "감정 체크인이 저장되었습니다.", MoodCheckInResponseSchema().dump(check_in), 201)


@mood_check_in_bp.route('/today', methods=['GET'])
@role_required(*STUDENT_ROLES)
def get_today_status():
    check_in = current_app.services['mood_check_in'].get_check_in_for_today(current_user_id())
    status = {"hasCheckedIn": check_in is not None, "check_in": check_in}
    return api_response("MOOD_CHECKIN_STATUS", "오늘의 체크인 여부를 조회했습니다.", MoodCheckInStatusSchema().dump(status))


@mood_check_in_bp.route('/history', methods=['GET'])
@role_required(*STUDENT_ROLES)
def get_history():
    params = MoodHistoryQuerySchema().load(request.args)
    history = current_app.services['mood_check_in'].get_check_in_history(current_user_id(), params['limit'])
    return api_response(
        "MOOD_CHECKIN_HISTORY", "감정 체크인 기록을 조회했습니다.",
        MoodCheckInResponseSchema(many=True).dump(history)
    )
