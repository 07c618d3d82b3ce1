# wellnest/api/pets/services.py
import logging
from datetime import timedelta
from typing import Dict, Any, Optional, List, Tuple

from sqlalchemy.exc import IntegrityError

from wellnest.core.database import db, transaction
from wellnest.core.errors import AppError
from wellnest.models.pet import Pet, PetInteraction, PetMood, AgeStage, InteractionType
from wellnest.utils.datetime_utils import DateTimeUtils

# 스탯 한계값
COIN_LIMIT = 9999
GAUGE_LIMIT = 100
MAX_LEVEL = 50
BASE_EXP_PER_LEVEL = 100

SLEEP_DURATION = timedelta(hours=1)
BATH_ENERGY_COST = 10
BOUNCE_ENERGY_COST = 15
DEFAULT_PET_NAME = "Heron"


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


class PetService:
    """
    가상 반려동물의 성장(경험치/레벨/나이 단계)과 스탯 변화를 담당하는 서비스 클래스.

    모든 변경 작업은 반려동물 행을 SELECT ... FOR UPDATE 로 잠근 뒤
    전제 조건을 확인하고, 값을 범위 안으로 보정한 다음 한 트랜잭션으로 커밋합니다.
    """
    def __init__(self):
        logging.info("PetService initialized.")

    # ------------------------------------------------------------------
    # 레벨 계산
    # ------------------------------------------------------------------
    @staticmethod
    def calculate_required_xp(level: int) -> int:
        """level 에 도달하기 위해 필요한 누적 경험치. 레벨 1은 0."""
        if level <= 1:
            return 0
        return sum(int(BASE_EXP_PER_LEVEL * i * 1.5) for i in range(1, level))

    @staticmethod
    def calculate_age_stage(level: int) -> str:
        if level <= 15:
            return AgeStage.INFANT.value
        if level <= 35:
            return AgeStage.TEEN.value
        return AgeStage.ADULT.value

    @classmethod
    def calculate_level_from_xp(cls, experience: int) -> Tuple[int, str]:
        """경험치로부터 (레벨, 나이 단계)를 계산합니다."""
        level = 1
        for candidate in range(2, MAX_LEVEL + 1):
            if experience >= cls.calculate_required_xp(candidate):
                level = candidate
            else:
                break
        return level, cls.calculate_age_stage(level)

    def apply_level(self, pet: Pet) -> bool:
        """
        pet.experience 로부터 레벨과 나이 단계를 다시 계산해 객체에 반영합니다.
        변경이 없으면 아무 속성도 건드리지 않고 False 를 반환합니다.
        """
        level, age_stage = self.calculate_level_from_xp(pet.experience or 0)
        if pet.level == level and pet.age_stage == age_stage:
            return False
        if level > (pet.level or 1):
            logging.info(f"Pet {pet.pet_id} leveled up: {pet.level} -> {level}")
        pet.level = level
        pet.age_stage = age_stage
        return True

    def update_pet_level(self, pet: Pet) -> Pet:
        """레벨을 재계산하고, 변경이 있을 때만 저장합니다."""
        if self.apply_level(pet):
            db.session.commit()
        return pet

    # ------------------------------------------------------------------
    # 조회 / 생성
    # ------------------------------------------------------------------
    def find_pet(self, owner_id: str, for_update: bool = False) -> Optional[Pet]:
        query = Pet.query.filter_by(owner_id=owner_id)
        if for_update:
            query = query.with_for_update()
        return query.first()

    def get_pet_by_owner_id(self, owner_id: str) -> Pet:
        """반려동물을 조회하고, 없다면 기본 이름으로 생성합니다."""
        pet = self.find_pet(owner_id)
        if pet:
            return pet

        pet = Pet(owner_id=owner_id, name=DEFAULT_PET_NAME)
        db.session.add(pet)
        try:
            db.session.commit()
            logging.info(f"Pet lazily created for owner {owner_id}")
            return pet
        except IntegrityError:
            # 동시에 들어온 다른 요청이 먼저 생성한 경우
            db.session.rollback()
            logging.warning(f"Pet for owner {owner_id} was created concurrently. Re-fetching.")
            return self.find_pet(owner_id)

    def create_pet(self, owner_id: str, name: str) -> Pet:
        if self.find_pet(owner_id):
            raise AppError(409, "PET_EXISTS", "이미 반려동물이 있습니다.")

        pet = Pet(owner_id=owner_id, name=name)
        db.session.add(pet)
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            raise AppError(409, "PET_EXISTS", "이미 반려동물이 있습니다.")
        logging.info(f"Pet {pet.pet_id} created for owner {owner_id}")
        return pet

    def update_pet_name(self, owner_id: str, name: str) -> Pet:
        with transaction():
            pet = self.lock_pet(owner_id)
            pet.name = name
            pet.last_interaction_at = DateTimeUtils.now()
        return pet

    # ------------------------------------------------------------------
    # 트랜잭션 헬퍼
    # ------------------------------------------------------------------
    def lock_pet(self, owner_id: str, create: bool = False) -> Pet:
        """
        반려동물 행을 잠그고 반환합니다. 호출자는 커밋/롤백 책임을 가집니다.
        create=True 이면 없을 때 지연 생성합니다.
        """
        pet = self.find_pet(owner_id, for_update=True)
        if pet:
            return pet
        if create:
            self.get_pet_by_owner_id(owner_id)
            pet = self.find_pet(owner_id, for_update=True)
            if pet:
                return pet
        raise AppError(404, "PET_NOT_FOUND", "반려동물을 찾을 수 없습니다.")

    @staticmethod
    def ensure_awake(pet: Pet) -> None:
        if pet.sleep_until and DateTimeUtils.to_utc(pet.sleep_until) > DateTimeUtils.now():
            raise AppError(400, "PET_SLEEPING", "반려동물이 자고 있어요. 깨어날 때까지 기다려 주세요.")

    @staticmethod
    def record_interaction(pet: Pet, interaction_type: InteractionType) -> None:
        db.session.add(PetInteraction(pet_id=pet.pet_id, interaction_type=interaction_type.value))

    # ------------------------------------------------------------------
    # 행동
    # ------------------------------------------------------------------
    def pet_the_pet(self, owner_id: str) -> Pet:
        """쓰다듬기: 코인 +1, 행복 +1, 에너지 -1."""
        with transaction():
            pet = self.lock_pet(owner_id, create=True)
            self.ensure_awake(pet)
            pet.coin = clamp(pet.coin + 1, 0, COIN_LIMIT)
            pet.happiness = clamp(pet.happiness + 1, 0, GAUGE_LIMIT)
            pet.energy = clamp(pet.energy - 1, 0, GAUGE_LIMIT)
            pet.last_interaction_at = DateTimeUtils.now()
            self.record_interaction(pet, InteractionType.PET)
        return pet

    def sleep_pet(self, owner_id: str) -> Pet:
        """1시간 동안 재웁니다."""
        with transaction():
            pet = self.lock_pet(owner_id, create=True)
            now = DateTimeUtils.now()
            if pet.sleep_until and DateTimeUtils.to_utc(pet.sleep_until) > now:
                raise AppError(400, "PET_ALREADY_SLEEPING", "반려동물이 이미 자고 있어요.")
            pet.sleep_until = now + SLEEP_DURATION
            pet.mood = PetMood.SLEEPY.value
            pet.last_interaction_at = now
            self.record_interaction(pet, InteractionType.SLEEP)
        logging.info(f"Pet {pet.pet_id} is sleeping until {DateTimeUtils.to_iso_string(pet.sleep_until)}")
        return pet

    def wake_pet(self, owner_id: str) -> Pet:
        """수면 시간이 끝난 반려동물을 깨우고 보상을 지급합니다."""
        with transaction():
            pet = self.lock_pet(owner_id, create=True)
            if pet.sleep_until is None:
                raise AppError(400, "PET_NOT_SLEEPING", "반려동물이 자고 있지 않아요.")

            now = DateTimeUtils.now()
            sleep_until = DateTimeUtils.to_utc(pet.sleep_until)
            if now < sleep_until:
                remaining = DateTimeUtils.remaining_minutes(sleep_until, now)
                unit = "minute" if remaining == 1 else "minutes"
                raise AppError(400, "SLEEP_NOT_COMPLETED", f"Pet needs to sleep for {remaining} more {unit}.")

            pet.sleep_until = None
            pet.energy = GAUGE_LIMIT
            pet.coin = clamp(pet.coin + 5, 0, COIN_LIMIT)
            pet.hunger = clamp(pet.hunger - 20, 0, GAUGE_LIMIT)
            pet.cleanliness = clamp(pet.cleanliness - 10, 0, GAUGE_LIMIT)
            pet.mood = PetMood.SAD.value if pet.hunger <= 10 else PetMood.EXCITED.value
            pet.last_interaction_at = now
        return pet

    def complete_bath_minigame(self, owner_id: str) -> Pet:
        with transaction():
            pet = self.lock_pet(owner_id, create=True)
            self.ensure_awake(pet)
            if pet.energy < BATH_ENERGY_COST:
                raise AppError(400, "INSUFFICIENT_ENERGY", "목욕을 하기에는 에너지가 부족해요.")
            pet.cleanliness = GAUGE_LIMIT
            pet.coin = clamp(pet.coin + 8, 0, COIN_LIMIT)
            pet.energy = clamp(pet.energy - BATH_ENERGY_COST, 0, GAUGE_LIMIT)
            pet.last_interaction_at = DateTimeUtils.now()
            self.record_interaction(pet, InteractionType.CLEAN)
        return pet

    def complete_bounce_minigame(self, owner_id: str) -> Pet:
        with transaction():
            pet = self.lock_pet(owner_id, create=True)
            self.ensure_awake(pet)
            if pet.energy < BOUNCE_ENERGY_COST:
                raise AppError(400, "INSUFFICIENT_ENERGY", "놀이를 하기에는 에너지가 부족해요.")
            pet.coin = clamp(pet.coin + 10, 0, COIN_LIMIT)
            pet.happiness = clamp(pet.happiness + 15, 0, GAUGE_LIMIT)
            pet.energy = clamp(pet.energy - BOUNCE_ENERGY_COST, 0, GAUGE_LIMIT)
            pet.cleanliness = clamp(pet.cleanliness - 5, 0, GAUGE_LIMIT)
            pet.last_interaction_at = DateTimeUtils.now()
            self.record_interaction(pet, InteractionType.PLAY)
        return pet

    # ------------------------------------------------------------------
    # 읽기 모델
    # ------------------------------------------------------------------
    def get_pet_stats(self, owner_id: str) -> Dict[str, Any]:
        pet = self.get_pet_by_owner_id(owner_id)
        now = DateTimeUtils.now()
        sleep_until = DateTimeUtils.to_utc(pet.sleep_until)
        is_sleeping = bool(sleep_until and sleep_until > now)

        def gauge(value: int) -> Dict[str, int]:
            return {"value": value, "percentage": (value * 100) // GAUGE_LIMIT}

        # 최대 레벨에서도 다음 레벨(MAX_LEVEL + 1)의 누적 요구 경험치를 보여줍니다.
        next_level_xp = self.calculate_required_xp(pet.level + 1)
        if pet.level >= MAX_LEVEL:
            xp_percentage = 100
        else:
            current_level_xp = self.calculate_required_xp(pet.level)
            progress = max(0, pet.experience - current_level_xp)
            xp_percentage = min(100, (progress * 100) // (next_level_xp - current_level_xp))

        return {
            "pet": pet,
            "level": pet.level,
            "coins": pet.coin,
            "stats": {
                "hunger": gauge(pet.hunger),
                "energy": gauge(pet.energy),
                "cleanliness": gauge(pet.cleanliness),
                "happiness": gauge(pet.happiness),
                "experience": {
                    "value": pet.experience,
                    "percentage": xp_percentage,
                    "next_level_xp": next_level_xp,
                },
            },
            "is_sleeping": is_sleeping,
            "sleep_remaining_minutes": DateTimeUtils.remaining_minutes(sleep_until, now) if is_sleeping else None,
            "can_wake_up": bool(sleep_until and not is_sleeping),
        }

    def get_recent_interactions(self, owner_id: str, limit: int = 20) -> List[PetInteraction]:
        pet = self.find_pet(owner_id)
        if not pet:
            return []
        return (
            pet.interactions
            .order_by(PetInteraction.timestamp.desc())
            .limit(limit)
            .all()
        )

