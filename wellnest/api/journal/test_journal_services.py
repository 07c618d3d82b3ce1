# wellnest/api/journal/test_journal_services.py
"""마음 거울(일기) 서비스 및 API 테스트"""

import pytest

from wellnest.core.database import db
from wellnest.core.errors import AppError
from wellnest.models.journal_entry import JournalEntry
from wellnest.conftest import STUDENT_ID, OTHER_STUDENT_ID

TITLE = "A calm afternoon"
CONTENT = "I spent the afternoon reading in the library and felt calm."


@pytest.fixture
def journal_service(services):
    return services['journal']


def test_entries_are_encrypted_at_rest(journal_service):
    entry = journal_service.create_entry(STUDENT_ID, TITLE, CONTENT, {"stress": 2, "sleep": 7.5})
    assert entry["title"] == TITLE
    assert entry["content"] == CONTENT
    assert "title_encrypted" not in entry

    row = db.session.get(JournalEntry, entry["journal_id"])
    assert set(row.title_encrypted.keys()) == {"iv", "content", "tag"}
    assert TITLE not in str(row.title_encrypted)
    assert CONTENT not in str(row.content_encrypted)
    assert row.wellness_state == {"stress": 2, "sleep": 7.5}


def test_ownership_is_enforced(journal_service):
    entry = journal_service.create_entry(STUDENT_ID, TITLE, CONTENT)
    with pytest.raises(AppError) as exc_info:
        journal_service.get_entry_by_id(OTHER_STUDENT_ID, entry["journal_id"])
    assert exc_info.value.code == "FORBIDDEN"

    with pytest.raises(AppError) as exc_info:
        journal_service.get_entry_by_id(STUDENT_ID, "missing")
    assert exc_info.value.code == "JOURNAL_ENTRY_NOT_FOUND"


def test_soft_then_hard_delete(journal_service):
    entry = journal_service.create_entry(STUDENT_ID, TITLE, CONTENT)
    journal_id = entry["journal_id"]

    journal_service.soft_delete_entry(STUDENT_ID, journal_id)
    assert journal_service.count_entries(STUDENT_ID) == 0
    with pytest.raises(AppError):
        journal_service.get_entry_by_id(STUDENT_ID, journal_id)
    # 소프트 삭제된 항목도 직접 조회는 가능
    assert journal_service.get_entry_by_id(STUDENT_ID, journal_id, include_deleted=True)["title"] == TITLE

    journal_service.hard_delete_entry(STUDENT_ID, journal_id)
    assert db.session.get(JournalEntry, journal_id) is None


def test_update_and_latest(journal_service, clock):
    journal_service.create_entry(STUDENT_ID, TITLE, CONTENT)
    clock.advance(minutes=1)
    second = journal_service.create_entry(STUDENT_ID, "Second entry", CONTENT)

    updated = journal_service.update_entry(STUDENT_ID, second["journal_id"], {"title": "Renamed entry"})
    assert updated["title"] == "Renamed entry"
    assert updated["content"] == CONTENT
    assert journal_service.get_latest_entry(STUDENT_ID)["journal_id"] == second["journal_id"]
    assert journal_service.count_entries(STUDENT_ID) == 2


def test_create_validation_via_route(client, auth_headers):
    headers = auth_headers()
    response = client.post('/api/v1/activities/mind-mirror/', json={"title": "Tiny", "content": CONTENT}, headers=headers)
    assert response.status_code == 400
    assert "title" in response.get_json()["data"]["details"]

    response = client.post('/api/v1/activities/mind-mirror/', json={"title": TITLE, "content": "   too short   "}, headers=headers)
    assert response.status_code == 400

    response = client.post('/api/v1/activities/mind-mirror/', json={"title": f"  {TITLE}  ", "content": CONTENT}, headers=headers)
    assert response.status_code == 201
    assert response.get_json()["code"] == "JOURNAL_ENTRY_CREATED"
    assert response.get_json()["data"]["title"] == TITLE


def test_decryption_failure_returns_generic_500(client, auth_headers, journal_service):
    entry = journal_service.create_entry(STUDENT_ID, TITLE, CONTENT)
    row = db.session.get(JournalEntry, entry["journal_id"])
    row.content_encrypted = dict(row.content_encrypted, tag="00" * 16)
    db.session.commit()

    response = client.get(f'/api/v1/activities/mind-mirror/{entry["journal_id"]}', headers=auth_headers())
    assert response.status_code == 500
    assert response.get_json()["code"] == "INTERNAL_SERVER_ERROR"


def test_delete_routes(client, auth_headers, journal_service):
    headers = auth_headers()
    journal_id = journal_service.create_entry(STUDENT_ID, TITLE, CONTENT)["journal_id"]

    response = client.delete(f'/api/v1/activities/mind-mirror/{journal_id}', headers=headers)
    assert response.get_json()["code"] == "JOURNAL_ENTRY_DELETED"

    response = client.delete(f'/api/v1/activities/mind-mirror/{journal_id}/permanent', headers=headers)
    assert response.get_json()["code"] == "JOURNAL_ENTRY_PERMANENTLY_DELETED"
    assert db.session.get(JournalEntry, journal_id) is None
