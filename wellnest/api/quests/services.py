# wellnest/api/quests/services.py
import logging
from typing import Dict, Any, List, Optional

from sqlalchemy import or_, and_
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError

from wellnest.core.database import db, transaction
from wellnest.core.errors import AppError
from wellnest.models.base import generate_uuid
from wellnest.models.food import PetFood
from wellnest.models.quest import (
    QuestDefinition, DailyQuest, UserQuest, QuestStatus, QuestScope, RewardType
)
from wellnest.api.pets.services import PetService, clamp, COIN_LIMIT, GAUGE_LIMIT
from wellnest.api.food.services import FoodService
from wellnest.utils.datetime_utils import DateTimeUtils

# (owner_id, daily_quest_id) 충돌 행을 건너뛰는 INSERT 를 지원하는 방언
ON_CONFLICT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class QuestService:
    """
    일일 퀘스트의 생명주기를 담당하는 서비스 클래스.

    - 사용자별 퀘스트 인스턴스는 그날 처음 조회할 때 지연 생성됩니다.
    - (owner_id, daily_quest_id) 유니크 제약으로 동시 생성 시 중복을 막고,
      충돌이 나면 '이미 존재함'으로 간주해 다시 조회합니다.
    - 보상 수령은 퀘스트 행과 반려동물 행을 잠근 하나의 트랜잭션에서 처리합니다.
    """
    def __init__(self, pet_service: PetService, food_service: FoodService, timezone: str = 'UTC'):
        self.pet_service = pet_service
        self.food_service = food_service
        self.timezone = timezone
        logging.info("QuestService initialized.")

    # ------------------------------------------------------------------
    # 사용자 퀘스트
    # ------------------------------------------------------------------
    def _get_todays_daily_quests(self, owner_id: str, start, end) -> List[DailyQuest]:
        return (
            DailyQuest.query
            .filter(
                DailyQuest.timestamp >= start,
                DailyQuest.timestamp <= end,
                or_(
                    DailyQuest.scope == QuestScope.GLOBAL.value,
                    and_(
                        DailyQuest.scope == QuestScope.PERSONALIZED.value,
                        DailyQuest.target_user_id == owner_id,
                    ),
                ),
            )
            .order_by(DailyQuest.timestamp.asc())
            .all()
        )

    def _get_user_quests(self, owner_id: str, start, end, daily_quest_ids: List[str]) -> List[UserQuest]:
        return (
            UserQuest.query
            .filter(
                UserQuest.owner_id == owner_id,
                or_(
                    and_(UserQuest.created_at >= start, UserQuest.created_at <= end),
                    UserQuest.daily_quest_id.in_(daily_quest_ids),
                ),
            )
            .order_by(UserQuest.created_at.asc())
            .all()
        )

    def _insert_missing_user_quests(self, owner_id: str, daily_quests: List[DailyQuest], expires_at) -> None:
        """
        아직 인스턴스가 없는 퀘스트를 pending 상태로 생성합니다.
        동시 요청이 먼저 만든 행은 (owner_id, daily_quest_id) 충돌로 건너뛰고, 나머지 행은 그대로 생성합니다.
        """
        now = DateTimeUtils.now()
        rows = [
            {
                "user_quest_id": generate_uuid(),
                "owner_id": owner_id,
                "daily_quest_id": daily_quest.daily_quest_id,
                "status": QuestStatus.PENDING.value,
                "expires_at": expires_at,
                "created_at": now,
            }
            for daily_quest in daily_quests
        ]

        dialect = db.session.get_bind().dialect.name
        if dialect in ON_CONFLICT_INSERTS:
            stmt = ON_CONFLICT_INSERTS[dialect](UserQuest.__table__).on_conflict_do_nothing(
                index_elements=['owner_id', 'daily_quest_id']
            )
            db.session.execute(stmt, rows)
        else:
            for row in rows:
                try:
                    with db.session.begin_nested():
                        db.session.execute(UserQuest.__table__.insert(), row)
                except IntegrityError:
                    logging.warning(
                        f"User quest for daily quest {row['daily_quest_id']} was created concurrently. Skipping."
                    )
        db.session.commit()
        logging.info(f"Ensured {len(rows)} user quest(s) for owner {owner_id}")

    def get_user_quests_for_the_day(self, owner_id: str) -> List[UserQuest]:
        """오늘의 퀘스트 목록을 반환하고, 아직 인스턴스가 없는 퀘스트는 pending 상태로 생성합니다."""
        start, end = DateTimeUtils.day_bounds(self.timezone)
        daily_quests = self._get_todays_daily_quests(owner_id, start, end)
        daily_quest_ids = [dq.daily_quest_id for dq in daily_quests]

        user_quests = self._get_user_quests(owner_id, start, end, daily_quest_ids)
        existing_ids = {uq.daily_quest_id for uq in user_quests}
        missing = [dq for dq in daily_quests if dq.daily_quest_id not in existing_ids]
        if not missing:
            return user_quests
        self._insert_missing_user_quests(owner_id, missing, end)
        return self._get_user_quests(owner_id, start, end, daily_quest_ids)

    def claim_quest(self, owner_id: str, user_quest_id: str) -> Dict[str, Any]:
        """완료된 퀘스트의 보상을 지급하고 claimed 상태로 변경합니다."""
        with transaction():
            user_quest = (
                UserQuest.query
                .filter_by(user_quest_id=user_quest_id)
                .with_for_update(of=UserQuest)
                .first()
            )
            if not user_quest:
                raise AppError(404, "QUEST_NOT_FOUND", "퀘스트를 찾을 수 없습니다.")
            if user_quest.owner_id != owner_id:
                raise AppError(403, "QUEST_NOT_OWNED", "본인의 퀘스트만 보상을 받을 수 있습니다.")
            if user_quest.status == QuestStatus.CLAIMED.value:
                raise AppError(400, "QUEST_ALREADY_CLAIMED", "이미 보상을 받은 퀘스트입니다.")
            if user_quest.status == QuestStatus.EXPIRED.value:
                raise AppError(400, "QUEST_EXPIRED", "만료된 퀘스트입니다.")
            if user_quest.status != QuestStatus.COMPLETE.value:
                raise AppError(400, "QUEST_NOT_COMPLETE", "아직 완료되지 않은 퀘스트입니다.")

            definition = user_quest.daily_quest.quest_definition
            pet = self.pet_service.lock_pet(owner_id)

            pet.coin = clamp(pet.coin + definition.reward_money, 0, COIN_LIMIT)
            pet.experience = pet.experience + definition.reward_experience
            pet.hunger = clamp(pet.hunger + definition.hunger_recovery, 0, GAUGE_LIMIT)
            pet.last_interaction_at = DateTimeUtils.now()
            self.pet_service.apply_level(pet)

            reward_food_id = None
            if definition.reward_type == RewardType.FOOD.value:
                reward_food_id = definition.reward_food_id
                if not reward_food_id or not db.session.get(PetFood, reward_food_id):
                    raise AppError(404, "FOOD_NOT_FOUND", "보상 음식을 찾을 수 없습니다.")
                self.food_service.add_to_inventory(owner_id, reward_food_id, 1)

            user_quest.status = QuestStatus.CLAIMED.value
            rewards = {
                "money": definition.reward_money,
                "experience": definition.reward_experience,
                "hunger_recovery": definition.hunger_recovery,
                "food_id": reward_food_id,
            }

        logging.info(f"User quest {user_quest_id} claimed by owner {owner_id}")
        return {"user_quest": user_quest, "pet": pet, "rewards": rewards}

    def get_quest_stats(self, owner_id: str) -> Dict[str, int]:
        user_quests = self.get_user_quests_for_the_day(owner_id)
        stats = {status.value: 0 for status in QuestStatus}
        for user_quest in user_quests:
            stats[user_quest.status] = stats.get(user_quest.status, 0) + 1
        return {"total": len(user_quests), **stats}

    # ------------------------------------------------------------------
    # 관리자용 퀘스트 관리
    # ------------------------------------------------------------------
    def create_quest_definition(self, data: Dict[str, Any]) -> QuestDefinition:
        reward_type = data.get('reward_type', RewardType.COIN.value)
        reward_food_id = data.get('reward_food_id')
        if reward_type == RewardType.FOOD.value and not reward_food_id:
            raise AppError(400, "INVALID_REWARD", "음식 보상 퀘스트에는 reward_food_id가 필요합니다.")
        if reward_food_id and not db.session.get(PetFood, reward_food_id):
            raise AppError(404, "FOOD_NOT_FOUND", "보상 음식을 찾을 수 없습니다.")

        definition = QuestDefinition(**data)
        db.session.add(definition)
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            raise AppError(409, "DUPLICATE_QUEST_NAME", "같은 이름의 퀘스트가 이미 존재합니다.")
        logging.info(f"Quest definition '{definition.name}' created")
        return definition

    def get_quest_definitions(self, active_only: bool = False) -> List[QuestDefinition]:
        query = QuestDefinition.query
        if active_only:
            query = query.filter_by(is_active=True)
        return query.order_by(QuestDefinition.created_at.desc()).all()

    def issue_daily_quest(self, quest_definition_id: str, scope: str = QuestScope.GLOBAL.value,
                          target_user_id: Optional[str] = None) -> DailyQuest:
        """퀘스트 정의로부터 오늘의 퀘스트를 발행합니다."""
        definition = db.session.get(QuestDefinition, quest_definition_id)
        if not definition:
            raise AppError(404, "QUEST_DEFINITION_NOT_FOUND", "퀘스트 정의를 찾을 수 없습니다.")
        if not definition.is_active:
            raise AppError(400, "QUEST_DEFINITION_INACTIVE", "비활성화된 퀘스트는 발행할 수 없습니다.")
        if scope == QuestScope.PERSONALIZED.value and not target_user_id:
            raise AppError(400, "INVALID_SCOPE", "개인 퀘스트에는 target_user_id가 필요합니다.")

        daily_quest = DailyQuest(
            quest_definition_id=quest_definition_id,
            scope=scope,
            target_user_id=target_user_id if scope == QuestScope.PERSONALIZED.value else None,
        )
        db.session.add(daily_quest)
        db.session.commit()
        logging.info(f"Daily quest {daily_quest.daily_quest_id} issued ({scope})")
        return daily_quest
