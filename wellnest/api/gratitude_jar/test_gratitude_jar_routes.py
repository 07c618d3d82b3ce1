# wellnest/api/gratitude_jar/test_gratitude_jar_routes.py
"""감사 항아리 API 테스트 (커서 기반 페이지네이션 포함)"""

import pytest

from wellnest.conftest import STUDENT_ID, OTHER_STUDENT_ID

BASE_URL = '/api/v1/activities/gratitude-jar/'


@pytest.fixture
def gratitude_service(services):
    return services['gratitude_jar']


def test_content_is_normalized(client, auth_headers):
    response = client.post(BASE_URL, json={"content": "  I am   grateful\n for  tea  "}, headers=auth_headers())
    assert response.status_code == 201
    assert response.get_json()["code"] == "GRATITUDE_ENTRY_CREATED"
    assert response.get_json()["data"]["content"] == "I am grateful for tea"


@pytest.mark.parametrize("content", ["  ab  ", "x" * 501])
def test_content_length_is_validated(client, auth_headers, content):
    response = client.post(BASE_URL, json={"content": content}, headers=auth_headers())
    assert response.status_code == 400
    assert response.get_json()["code"] == "VALIDATION_ERROR"


def test_cursor_pagination_walks_all_entries(client, auth_headers, gratitude_service, clock):
    """25개를 10개씩 조회하면 10, 10, 5개가 중복 없이 최신순으로 반환"""
    created = []
    for i in range(25):
        created.append(gratitude_service.create_entry(STUDENT_ID, f"Grateful thing number {i}")["gratitude_id"])
        clock.advance(seconds=1)
    gratitude_service.create_entry(OTHER_STUDENT_ID, "Someone else's entry")

    headers = auth_headers()
    pages = []
    url = f"{BASE_URL}?limit=10"
    while True:
        body = client.get(url, headers=headers).get_json()
        assert body["code"] == "GRATITUDE_ENTRIES_FETCHED"
        pages.append(body["data"])
        if not body["data"]["hasMore"]:
            break
        url = f"{BASE_URL}?limit=10&lastEntryId={body['data']['nextCursor']}"

    assert [len(p["entries"]) for p in pages] == [10, 10, 5]
    assert [p["hasMore"] for p in pages] == [True, True, False]
    assert pages[-1]["nextCursor"] is None

    returned = [e["gratitude_id"] for p in pages for e in p["entries"]]
    assert returned == list(reversed(created))


def test_limit_bounds(client, auth_headers):
    headers = auth_headers()
    assert client.get(f"{BASE_URL}?limit=51", headers=headers).status_code == 400
    assert client.get(f"{BASE_URL}?limit=0", headers=headers).status_code == 400

    body = client.get(BASE_URL, headers=headers).get_json()
    assert body["data"] == {"entries": [], "hasMore": False, "nextCursor": None}


def test_unknown_cursor_is_rejected(client, auth_headers):
    response = client.get(f"{BASE_URL}?lastEntryId=missing", headers=auth_headers())
    assert response.status_code == 400
    assert response.get_json()["code"] == "INVALID_CURSOR"


def test_update_and_delete(client, auth_headers, gratitude_service):
    headers = auth_headers()
    gratitude_id = gratitude_service.create_entry(STUDENT_ID, "My family")["gratitude_id"]

    response = client.put(f"{BASE_URL}{gratitude_id}", json={"content": "My whole family"}, headers=headers)
    assert response.get_json()["data"]["content"] == "My whole family"

    response = client.put(f"{BASE_URL}{gratitude_id}", json={"content": "Not mine"}, headers=auth_headers(OTHER_STUDENT_ID))
    assert response.status_code == 403

    client.delete(f"{BASE_URL}{gratitude_id}", headers=headers)
    assert client.get(f"{BASE_URL}count", headers=headers).get_json()["data"] == {"count": 0}
    assert client.get(f"{BASE_URL}{gratitude_id}", headers=headers).status_code == 404
