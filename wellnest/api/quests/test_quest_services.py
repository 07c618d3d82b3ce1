# wellnest/api/quests/test_quest_services.py
"""일일 퀘스트 생명주기 서비스 테스트"""

import pytest
from datetime import timedelta

from wellnest.core.database import db
from wellnest.core.errors import AppError
from wellnest.models.food import PetFood, FoodInventory
from wellnest.models.quest import DailyQuest, UserQuest
from wellnest.utils.datetime_utils import DateTimeUtils
from wellnest.conftest import STUDENT_ID, OTHER_STUDENT_ID


@pytest.fixture
def quest_service(services):
    return services['quests']


@pytest.fixture
def pet(services):
    return services['pets'].get_pet_by_owner_id(STUDENT_ID)


@pytest.fixture
def definition(quest_service):
    return quest_service.create_quest_definition({
        "name": "Write in your journal",
        "quest_tag": "well-being",
        "reward_money": 30,
        "reward_experience": 500,
        "hunger_recovery": 10,
    })


@pytest.fixture
def daily_quest(quest_service, definition):
    return quest_service.issue_daily_quest(definition.quest_definition_id)


def _complete(user_quest):
    user_quest.status = "complete"
    db.session.commit()


def test_lazy_instantiation_is_idempotent(quest_service, daily_quest, clock):
    quests = quest_service.get_user_quests_for_the_day(STUDENT_ID)
    assert len(quests) == 1
    assert quests[0].status == "pending"
    assert quests[0].daily_quest.quest_definition.name == "Write in your journal"
    _, end_of_day = DateTimeUtils.day_bounds('UTC')
    assert DateTimeUtils.to_utc(quests[0].expires_at) == end_of_day

    again = quest_service.get_user_quests_for_the_day(STUDENT_ID)
    assert [q.user_quest_id for q in again] == [quests[0].user_quest_id]
    assert UserQuest.query.filter_by(owner_id=STUDENT_ID).count() == 1


def test_scope_and_day_filtering(quest_service, definition, clock):
    """다른 사용자의 개인 퀘스트와 어제 발행된 퀘스트는 보이지 않음"""
    quest_service.issue_daily_quest(definition.quest_definition_id, "personalized", OTHER_STUDENT_ID)
    mine = quest_service.issue_daily_quest(definition.quest_definition_id, "personalized", STUDENT_ID)
    db.session.add(DailyQuest(
        quest_definition_id=definition.quest_definition_id,
        scope="global",
        timestamp=clock.now() - timedelta(days=1),
    ))
    db.session.commit()

    quests = quest_service.get_user_quests_for_the_day(STUDENT_ID)
    assert [q.daily_quest_id for q in quests] == [mine.daily_quest_id]


def test_concurrent_creation_is_treated_as_existing(quest_service, daily_quest, monkeypatch):
    """유니크 제약 충돌 시 다시 조회하여 중복 없이 반환"""
    existing = quest_service.get_user_quests_for_the_day(STUDENT_ID)

    original = quest_service._get_user_quests
    calls = {"count": 0}

    def stale_read(*args):
        calls["count"] += 1
        return [] if calls["count"] == 1 else original(*args)

    monkeypatch.setattr(quest_service, "_get_user_quests", stale_read)
    quests = quest_service.get_user_quests_for_the_day(STUDENT_ID)

    assert [q.user_quest_id for q in quests] == [existing[0].user_quest_id]
    assert UserQuest.query.filter_by(owner_id=STUDENT_ID).count() == 1


def test_partial_conflict_keeps_other_new_quests(quest_service, definition, daily_quest, monkeypatch):
    """일부 퀘스트만 충돌해도 충돌하지 않은 퀘스트는 생성되어 함께 반환"""
    existing = quest_service.get_user_quests_for_the_day(STUDENT_ID)
    later = quest_service.issue_daily_quest(definition.quest_definition_id)

    original = quest_service._get_user_quests
    calls = {"count": 0}

    def stale_read(*args):
        calls["count"] += 1
        return [] if calls["count"] == 1 else original(*args)

    monkeypatch.setattr(quest_service, "_get_user_quests", stale_read)
    quests = quest_service.get_user_quests_for_the_day(STUDENT_ID)

    assert sorted(q.daily_quest_id for q in quests) == sorted([daily_quest.daily_quest_id, later.daily_quest_id])
    assert existing[0].user_quest_id in {q.user_quest_id for q in quests}
    assert all(q.status == "pending" for q in quests)
    assert UserQuest.query.filter_by(owner_id=STUDENT_ID).count() == 2


def test_claim_requires_complete_status(quest_service, daily_quest, pet):
    user_quest = quest_service.get_user_quests_for_the_day(STUDENT_ID)[0]
    with pytest.raises(AppError) as exc_info:
        quest_service.claim_quest(STUDENT_ID, user_quest.user_quest_id)
    assert exc_info.value.code == "QUEST_NOT_COMPLETE"

    user_quest.status = "expired"
    db.session.commit()
    with pytest.raises(AppError) as exc_info:
        quest_service.claim_quest(STUDENT_ID, user_quest.user_quest_id)
    assert exc_info.value.code == "QUEST_EXPIRED"


def test_claim_grants_rewards_exactly_once(quest_service, daily_quest, pet):
    pet.hunger = 95
    db.session.commit()
    user_quest = quest_service.get_user_quests_for_the_day(STUDENT_ID)[0]
    _complete(user_quest)

    result = quest_service.claim_quest(STUDENT_ID, user_quest.user_quest_id)
    assert result["user_quest"].status == "claimed"
    assert result["pet"].coin == 530
    assert result["pet"].experience == 500
    assert result["pet"].level == 3
    assert result["pet"].hunger == 100

    with pytest.raises(AppError) as exc_info:
        quest_service.claim_quest(STUDENT_ID, user_quest.user_quest_id)
    assert exc_info.value.code == "QUEST_ALREADY_CLAIMED"
    assert pet.coin == 530
    assert pet.experience == 500


def test_claim_ownership_and_missing(quest_service, daily_quest, pet):
    user_quest = quest_service.get_user_quests_for_the_day(STUDENT_ID)[0]
    _complete(user_quest)

    with pytest.raises(AppError) as exc_info:
        quest_service.claim_quest(OTHER_STUDENT_ID, user_quest.user_quest_id)
    assert exc_info.value.code == "QUEST_NOT_OWNED"
    assert exc_info.value.status_code == 403

    with pytest.raises(AppError) as exc_info:
        quest_service.claim_quest(STUDENT_ID, "00000000-0000-0000-0000-000000000000")
    assert exc_info.value.code == "QUEST_NOT_FOUND"


def test_claim_food_reward_adds_inventory(quest_service, pet):
    food = PetFood(food_name="Berry", xp_gain=5, hunger_fill_amount=5, food_price=5)
    db.session.add(food)
    db.session.commit()
    definition = quest_service.create_quest_definition({
        "name": "Feed your pet", "quest_tag": "pet-care",
        "reward_type": "food", "reward_food_id": food.food_id,
    })
    quest_service.issue_daily_quest(definition.quest_definition_id)
    user_quest = quest_service.get_user_quests_for_the_day(STUDENT_ID)[0]
    _complete(user_quest)

    result = quest_service.claim_quest(STUDENT_ID, user_quest.user_quest_id)
    assert result["rewards"]["food_id"] == food.food_id
    assert FoodInventory.query.filter_by(owner_id=STUDENT_ID, food_id=food.food_id).one().quantity == 1


def test_claim_without_pet_rolls_back(quest_service, daily_quest):
    user_quest = quest_service.get_user_quests_for_the_day(STUDENT_ID)[0]
    _complete(user_quest)

    with pytest.raises(AppError) as exc_info:
        quest_service.claim_quest(STUDENT_ID, user_quest.user_quest_id)
    assert exc_info.value.code == "PET_NOT_FOUND"
    assert db.session.get(UserQuest, user_quest.user_quest_id).status == "complete"


def test_quest_stats(quest_service, definition, pet):
    for _ in range(3):
        quest_service.issue_daily_quest(definition.quest_definition_id)
    quests = quest_service.get_user_quests_for_the_day(STUDENT_ID)
    _complete(quests[0])
    quests[1].status = "expired"
    db.session.commit()

    assert quest_service.get_quest_stats(STUDENT_ID) == {
        "total": 3, "pending": 1, "complete": 1, "claimed": 0, "expired": 1
    }


def test_admin_definition_rules(quest_service, definition):
    with pytest.raises(AppError) as exc_info:
        quest_service.create_quest_definition({"name": "Write in your journal", "quest_tag": "well-being"})
    assert exc_info.value.code == "DUPLICATE_QUEST_NAME"

    with pytest.raises(AppError) as exc_info:
        quest_service.create_quest_definition({"name": "Food", "quest_tag": "pet-care", "reward_type": "food"})
    assert exc_info.value.code == "INVALID_REWARD"

    with pytest.raises(AppError) as exc_info:
        quest_service.issue_daily_quest(definition.quest_definition_id, "personalized")
    assert exc_info.value.code == "INVALID_SCOPE"


def test_quest_routes(client, auth_headers, daily_quest):
    headers = auth_headers()
    client.get('/api/v1/pets/', headers=headers)

    response = client.get('/api/v1/quests/daily', headers=headers)
    assert response.get_json()["code"] == "QUESTS_RETRIEVED"
    user_quest_id = response.get_json()["data"][0]["user_quest_id"]

    response = client.post('/api/v1/quests/claim', json={"user_quest_id": "not-a-uuid"}, headers=headers)
    assert response.status_code == 400
    assert response.get_json()["code"] == "VALIDATION_ERROR"

    _complete(db.session.get(UserQuest, user_quest_id))
    response = client.post('/api/v1/quests/claim', json={"user_quest_id": user_quest_id}, headers=headers)
    assert response.status_code == 200
    assert response.get_json()["code"] == "QUEST_CLAIMED"

    response = client.get('/api/v1/quests/stats', headers=headers)
    assert response.get_json()["data"]["claimed"] == 1


def test_quest_admin_routes_require_admin_role(client, auth_headers):
    payload = {"name": "Drink water", "quest_tag": "well-being"}
    response = client.post('/api/v1/quests/definitions', json=payload, headers=auth_headers())
    assert response.status_code == 403

    response = client.post('/api/v1/quests/definitions', json=payload, headers=auth_headers("admin-1", "counselor"))
    assert response.status_code == 201
    assert response.get_json()["data"]["reward_money"] == 1
