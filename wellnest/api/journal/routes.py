# wellnest/api/journal/routes.py
from flask import Blueprint, request, current_app

from wellnest.api.journal.schemas import (
    JournalEntryCreateSchema,
    JournalEntryUpdateSchema,
    EntriesQuerySchema,
    JournalEntryResponseSchema,
    JournalEntriesPageSchema
)
from wellnest.core.errors import api_response
from wellnest.core.security import role_required, current_user_id, STUDENT_ROLES

journal_bp = Blueprint('journal_bp', __name__)


@journal_bp.route('/', methods=['POST'])
@role_required(*STUDENT_ROLES)
def create_journal_entry():
    """일기 작성 API. 제목과 본문은 암호화되어 저장됩니다."""
    validated_data = JournalEntryCreateSchema().load(request.get_json(silent=True) or {})
    entry = current_app.services['journal'].create_entry(
        current_user_id(), validated_data['title'], validated_data['content'], validated_data['wellness_state']
    )
    return api_response("JOURNAL_ENTRY_CREATED", "일기가 저장되었습니다.", JournalEntryResponseSchema().dump(entry), 201)


@journal_bp.route('/', methods=['GET'])
@role_required(*STUDENT_ROLES)
def get_journal_entries():
    """
    일기 목록 조회 API (커서 기반 페이지네이션).

    쿼리 파라미터:
    - limit: 1-50, 기본값 10
    - lastEntryId: 이전 페이지의 nextCursor
    """
    params = EntriesQuerySchema().load(request.args)
    page = current_app.services['journal'].get_entries_by_user(current_user_id(), params['limit'], params['lastEntryId'])
    return api_response("JOURNAL_ENTRIES_FETCHED", "일기 목록을 조회했습니다.", JournalEntriesPageSchema().dump(page))


@journal_bp.route('/count', methods=['GET'])
@role_required(*STUDENT_ROLES)
def count_journal_entries():
    count = current_app.services['journal'].count_entries(current_user_id())
    return api_response("JOURNAL_ENTRIES_COUNTED", "일기 개수를 조회했습니다.", {"count": count})


@journal_bp.route('/latest', methods=['GET'])
@role_required(*STUDENT_ROLES)
def get_latest_journal_entry():
    entry = current_app.services['journal'].get_latest_entry(current_user_id())
    data = JournalEntryResponseSchema().dump(entry) if entry else None
    return api_response("JOURNAL_ENTRY_RETRIEVED", "최근 일기를 조회했습니다.", data)


@journal_bp.route('/<string:journal_id>', methods=['GET'])
@role_required(*STUDENT_ROLES)
def get_journal_entry(journal_id: str):
    entry = current_app.services['journal'].get_entry_by_id(current_user_id(), journal_id)
    return api_response("JOURNAL_ENTRY_RETRIEVED", "일기를 조회했습니다.", JournalEntryResponseSchema().dump(entry))


@journal_bp.route('/<string:journal_id>', methods=['PUT'])
@role_required(*STUDENT_ROLES)
def update_journal_entry(journal_id: str):
    validated_data = JournalEntryUpdateSchema().load(request.get_json(silent=True) or {})
    entry = current_app.services['journal'].update_entry(current_user_id(), journal_id, validated_data)
    return api_response("JOURNAL_ENTRY_UPDATED", "일기가 수정되었습니다.", JournalEntryResponseSchema().dump(entry))


@journal_bp.route('/<string:journal_id>', methods=['DELETE'])
@role_required(*STUDENT_ROLES)
def soft_delete_journal_entry(journal_id: str):
    current_app.services['journal'].soft_delete_entry(current_user_id(), journal_id)
    return api_response("JOURNAL_ENTRY_DELETED", "일기가 삭제되었습니다.")


@journal_bp.route('/<string:journal_id>/permanent', methods=['DELETE'])
@role_required(*STUDENT_ROLES)
def hard_delete_journal_entry(journal_id: str):
    current_app.services['journal'].hard_delete_entry(current_user_id(), journal_id)
    return api_response("JOURNAL_ENTRY_PERMANENTLY_DELETED", "일기가 영구 삭제되었습니다.")
