# wellnest/api/gratitude_jar/routes.py
from flask import Blueprint, request, current_app

from wellnest.api.gratitude_jar.schemas import (
    GratitudeEntrySchema,
    GratitudeEntryResponseSchema,
    GratitudeEntriesPageSchema
)
from wellnest.api.journal.schemas import EntriesQuerySchema
from wellnest.core.errors import api_response
from wellnest.core.security import role_required, current_user_id, STUDENT_ROLES

gratitude_jar_bp = Blueprint('gratitude_jar_bp', __name__)


@gratitude_jar_bp.route('/', methods=['POST'])
@role_required(*STUDENT_ROLES)
def create_gratitude_entry():
    validated_data = GratitudeEntrySchema().load(request.get_json(silent=True) or {})
    entry = current_app.services['gratitude_jar'].create_entry(current_user_id(), validated_data['content'])
    return api_response(
        "GRATITUDE_ENTRY_CREATED", "감사 일기가 저장되었습니다.", GratitudeEntryResponseSchema().dump(entry), 201
    )


@gratitude_jar_bp.route('/', methods=['GET'])
@role_required(*STUDENT_ROLES)
def get_gratitude_entries():
    """감사 일기 목록 조회 API (lastEntryId, limit 커서 기반 페이지네이션)."""
    params = EntriesQuerySchema().load(request.args)
    page = current_app.services['gratitude_jar'].get_entries_by_user(
        current_user_id(), params['limit'], params['lastEntryId']
    )
    return api_response("GRATITUDE_ENTRIES_FETCHED", "감사 일기 목록을 조회했습니다.", GratitudeEntriesPageSchema().dump(page))


@gratitude_jar_bp.route('/count', methods=['GET'])
@role_required(*STUDENT_ROLES)
def count_gratitude_entries():
    count = current_app.services['gratitude_jar'].count_entries(current_user_id())
    return api_response("GRATITUDE_ENTRIES_COUNTED", "감사 일기 개수를 조회했습니다.", {"count": count})


@gratitude_jar_bp.route('/latest', methods=['GET'])
@role_required(*STUDENT_ROLES)
def get_latest_gratitude_entry():
    entry = current_app.services['gratitude_jar'].get_latest_entry(current_user_id())
    data = GratitudeEntryResponseSchema().dump(entry) if entry else None
    return api_response("GRATITUDE_ENTRY_RETRIEVED", "최근 감사 일기를 조회했습니다.", data)


@gratitude_jar_bp.route('/<string:gratitude_id>', methods=['GET'])
@role_required(*STUDENT_ROLES)
def get_gratitude_entry(gratitude_id: str):
    entry = current_app.services['gratitude_jar'].get_entry_by_id(current_user_id(), gratitude_id)
    return api_response("GRATITUDE_ENTRY_RETRIEVED", "감사 일기를 조회했습니다.", GratitudeEntryResponseSchema().dump(entry))


@gratitude_jar_bp.route('/<string:gratitude_id>', methods=['PUT'])
@role_required(*STUDENT_ROLES)
def update_gratitude_entry(gratitude_id: str):
    validated_data = GratitudeEntrySchema().load(request.get_json(silent=True) or {})
    entry = current_app.services['gratitude_jar'].update_entry(current_user_id(), gratitude_id, validated_data['content'])
    return api_response("GRATITUDE_ENTRY_UPDATED", "감사 일기가 수정되었습니다.", GratitudeEntryResponseSchema().dump(entry))


@gratitude_jar_bp.route('/<string:gratitude_id>', methods=['DELETE'])
@role_required(*STUDENT_ROLES)
def soft_delete_gratitude_entry(gratitude_id: str):
    current_app.services['gratitude_jar'].soft_delete_entry(current_user_id(), gratitude_id)
    return api_response("GRATITUDE_ENTRY_DELETED", "감사 일기가 삭제되었습니다.")


@gratitude_jar_bp.route('/<string:gratitude_id>/permanent', methods=['DELETE'])
@role_required(*STUDENT_ROLES)
def hard_delete_gratitude_entry(gratitude_id: str):
    current_app.services['gratitude_jar'].hard_delete_entry(current_user_id(), gratitude_id)
    return api_response("GRATITUDE_ENTRY_PERMANENTLY_DELETED", "감사 일기가 영구 삭제되었습니다.")
