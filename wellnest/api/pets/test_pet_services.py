# wellnest/api/pets/test_pet_services.py
"""반려동물 성장/행동 서비스 테스트"""

import pytest
from datetime import timedelta

from wellnest.api.pets.services import PetService, MAX_LEVEL
from wellnest.core.database import db
from wellnest.core.errors import AppError
from wellnest.models.pet import PetInteraction
from wellnest.conftest import STUDENT_ID


@pytest.fixture
def pet_service(services):
    return services['pets']


@pytest.fixture
def pet(pet_service):
    return pet_service.get_pet_by_owner_id(STUDENT_ID)


# --- 레벨 계산 ---

def test_required_xp_table():
    """레벨별 누적 필요 경험치"""
    assert PetService.calculate_required_xp(1) == 0
    assert PetService.calculate_required_xp(2) == 150
    assert PetService.calculate_required_xp(3) == 450
    assert PetService.calculate_required_xp(4) == 900


@pytest.mark.parametrize("experience, level, age_stage", [
    (0, 1, "infant"),
    (149, 1, "infant"),
    (150, 2, "infant"),
    (449, 2, "infant"),
    (450, 3, "infant"),
    (17999, 15, "infant"),
    (18000, 16, "teen"),
    (94499, 35, "teen"),
    (94500, 36, "adult"),
    (10 ** 9, MAX_LEVEL, "adult"),
])
def test_level_from_experience(experience, level, age_stage):
    assert PetService.calculate_level_from_xp(experience) == (level, age_stage)


def test_update_pet_level_is_idempotent(pet_service, pet):
    """두 번째 재계산은 아무것도 바꾸지 않음"""
    pet.experience = 450
    pet_service.update_pet_level(pet)
    assert (pet.level, pet.age_stage) == (3, "infant")

    assert pet_service.apply_level(pet) is False
    assert not db.session.is_modified(pet)


# --- 생성 / 조회 ---

def test_lazy_creation_defaults(pet):
    """처음 조회하면 기본값으로 생성"""
    assert pet.name == "Heron"
    assert pet.species == "heron"
    assert (pet.coin, pet.level, pet.experience) == (500, 1, 0)
    assert (pet.energy, pet.hunger, pet.cleanliness, pet.happiness) == (100, 100, 100, 100)
    assert pet.mood == "excited"


def test_create_pet_twice_conflicts(pet_service):
    pet_service.create_pet(STUDENT_ID, "Pip")
    with pytest.raises(AppError) as exc_info:
        pet_service.create_pet(STUDENT_ID, "Pip again")
    assert exc_info.value.code == "PET_EXISTS"
    assert exc_info.value.status_code == 409


def test_update_pet_name_requires_pet(pet_service):
    with pytest.raises(AppError) as exc_info:
        pet_service.update_pet_name("nobody", "Ghost")
    assert exc_info.value.code == "PET_NOT_FOUND"


# --- 행동 ---

def test_pet_the_pet_at_zero_energy(pet_service, pet):
    """에너지 0에서도 쓰다듬기 가능, 에너지는 0 아래로 내려가지 않음"""
    pet.energy = 0
    pet.happiness = 100
    db.session.commit()

    pet = pet_service.pet_the_pet(STUDENT_ID)
    assert pet.energy == 0
    assert pet.coin == 501
    assert pet.happiness == 100
    assert PetInteraction.query.filter_by(pet_id=pet.pet_id, interaction_type="pet").count() == 1


def test_coin_is_capped(pet_service, pet):
    pet.coin = 9995
    db.session.commit()

    pet = pet_service.complete_bounce_minigame(STUDENT_ID)
    assert pet.coin == 9999


def test_bath_requires_energy(pet_service, pet):
    pet.energy = 9
    db.session.commit()
    with pytest.raises(AppError) as exc_info:
        pet_service.complete_bath_minigame(STUDENT_ID)
    assert exc_info.value.code == "INSUFFICIENT_ENERGY"

    pet.energy = 10
    pet.cleanliness = 40
    db.session.commit()
    pet = pet_service.complete_bath_minigame(STUDENT_ID)
    assert (pet.energy, pet.cleanliness, pet.coin) == (0, 100, 508)


def test_bounce_updates_stats(pet_service, pet):
    pet.energy = 15
    pet.happiness = 50
    db.session.commit()

    pet = pet_service.complete_bounce_minigame(STUDENT_ID)
    assert (pet.energy, pet.happiness, pet.cleanliness, pet.coin) == (0, 65, 95, 510)

    with pytest.raises(AppError) as exc_info:
        pet_service.complete_bounce_minigame(STUDENT_ID)
    assert exc_info.value.code == "INSUFFICIENT_ENERGY"


# --- 수면 / 기상 ---

def test_sleep_blocks_actions(pet_service, pet, clock):
    pet = pet_service.sleep_pet(STUDENT_ID)
    assert pet.mood == "sleepy"

    for action in (pet_service.pet_the_pet, pet_service.complete_bath_minigame, pet_service.complete_bounce_minigame):
        with pytest.raises(AppError) as exc_info:
            action(STUDENT_ID)
        assert exc_info.value.code == "PET_SLEEPING"

    with pytest.raises(AppError) as exc_info:
        pet_service.sleep_pet(STUDENT_ID)
    assert exc_info.value.code == "PET_ALREADY_SLEEPING"


def test_wake_before_sleep_completed(pet_service, pet, clock):
    """수면 시간이 남아 있으면 남은 분을 알려줌"""
    pet_service.sleep_pet(STUDENT_ID)

    clock.advance(minutes=30)
    with pytest.raises(AppError) as exc_info:
        pet_service.wake_pet(STUDENT_ID)
    assert exc_info.value.code == "SLEEP_NOT_COMPLETED"
    assert exc_info.value.message == "Pet needs to sleep for 30 more minutes."

    clock.advance(minutes=29, seconds=30)
    with pytest.raises(AppError) as exc_info:
        pet_service.wake_pet(STUDENT_ID)
    assert exc_info.value.message == "Pet needs to sleep for 1 more minute."


def test_wake_exactly_at_sleep_until(pet_service, pet, clock):
    """sleep_until 과 현재 시간이 같으면 깨울 수 있음"""
    pet_service.sleep_pet(STUDENT_ID)
    clock.advance(hours=1)

    pet = pet_service.wake_pet(STUDENT_ID)
    assert pet.sleep_until is None
    assert (pet.energy, pet.coin, pet.hunger, pet.cleanliness) == (100, 505, 80, 90)
    assert pet.mood == "excited"


@pytest.mark.parametrize("hunger, expected_mood", [(30, "sad"), (31, "excited"), (5, "sad")])
def test_wake_mood_follows_resulting_hunger(pet_service, pet, clock, hunger, expected_mood):
    pet.hunger = hunger
    db.session.commit()
    pet_service.sleep_pet(STUDENT_ID)
    clock.advance(hours=2)

    pet = pet_service.wake_pet(STUDENT_ID)
    assert pet.hunger == max(0, hunger - 20)
    assert pet.mood == expected_mood


def test_wake_when_not_sleeping(pet_service, pet):
    with pytest.raises(AppError) as exc_info:
        pet_service.wake_pet(STUDENT_ID)
    assert exc_info.value.code == "PET_NOT_SLEEPING"


# --- 상태 조회 ---

def test_pet_stats_read_model(pet_service, pet, clock):
    pet.experience = 75
    pet.hunger = 73
    db.session.commit()
    pet_service.sleep_pet(STUDENT_ID)
    clock.advance(minutes=20, seconds=10)

    stats = pet_service.get_pet_stats(STUDENT_ID)
    assert stats["level"] == 1
    assert stats["coins"] == 500
    assert stats["stats"]["hunger"] == {"value": 73, "percentage": 73}
    assert stats["stats"]["experience"] == {"value": 75, "percentage": 50, "next_level_xp": 150}
    assert stats["is_sleeping"] is True
    assert stats["sleep_remaining_minutes"] == 40
    assert stats["can_wake_up"] is False

    clock.advance(hours=1)
    stats = pet_service.get_pet_stats(STUDENT_ID)
    assert stats["is_sleeping"] is False
    assert stats["sleep_remaining_minutes"] is None
    assert stats["can_wake_up"] is True


def test_pet_stats_at_max_level(pet_service, pet):
    """최대 레벨에서는 진행률 100, 다음 레벨 요구치는 MAX_LEVEL + 1 기준"""
    pet.experience = 10 ** 9
    pet_service.update_pet_level(pet)

    stats = pet_service.get_pet_stats(STUDENT_ID)
    assert stats["level"] == MAX_LEVEL
    assert stats["stats"]["experience"]["percentage"] == 100
    assert stats["stats"]["experience"]["next_level_xp"] == PetService.calculate_required_xp(MAX_LEVEL + 1) == 191250


def test_recent_interactions_newest_first(pet_service, pet, clock):
    pet_service.pet_the_pet(STUDENT_ID)
    clock.advance(seconds=5)
    pet_service.complete_bath_minigame(STUDENT_ID)

    interactions = pet_service.get_recent_interactions(STUDENT_ID, limit=10)
    assert [i.interaction_type for i in interactions] == ["clean", "pet"]
