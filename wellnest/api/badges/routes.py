# wellnest/api/badges/routes.py
from flask import Blueprint, current_app

from wellnest.api.badges.schemas import UserBadgeResponseSchema, ObtainableBadgeResponseSchema
from wellnest.core.errors import api_response
from wellnest.core.security import role_required, current_user_id, STUDENT_ROLES

badges_bp = Blueprint('badges_bp', __name__)


@badges_bp.route('/', methods=['GET'])
@role_required(*STUDENT_ROLES)
def get_user_badges():
    """획득한 배지 목록 (최근 획득 순)."""
    badges = current_app.services['badges'].get_user_badges(current_user_id())
    return api_response("BADGES_RETRIEVED", "획득한 배지를 조회했습니다.", UserBadgeResponseSchema(many=True).dump(badges))


@badges_bp.route('/count', methods=['GET'])
@role_required(*STUDENT_ROLES)
def get_badge_count():
    count = current_app.services['badges'].get_user_badge_count(current_user_id())
    return api_response("BADGE_COUNT_RETRIEVED", "배지 개수를 조회했습니다.", {"count": count})


@badges_bp.route('/all', methods=['GET'])
@role_required(*STUDENT_ROLES)
def get_all_badges():
    badges = current_app.services['badges'].get_all_obtainable_badges(current_user_id())
    return api_response("ALL_BADGES_RETRIEVED", "전체 배지를 조회했습니다.", ObtainableBadgeResponseSchema(many=True).dump(badges))


@badges_bp.route('/<string:badge_id>/owned', methods=['GET'])
@role_required(*STUDENT_ROLES)
def check_badge_owned(badge_id: str):
    owned = current_app.services['badges'].check_user_has_badge(current_user_id(), badge_id)
    return api_response("BADGE_OWNERSHIP_CHECKED", "배지 보유 여부를 조회했습니다.", {"badge_id": badge_id, "has_badge": owned})
