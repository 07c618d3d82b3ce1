# wellnest/api/food/services.py
import logging
from typing import List, Dict, Any

from wellnest.core.database import db, transaction
from wellnest.core.errors import AppError
from wellnest.models.food import PetFood, FoodInventory
from wellnest.models.pet import Pet, InteractionType
from wellnest.api.pets.services import PetService, clamp, COIN_LIMIT, GAUGE_LIMIT
from wellnest.utils.datetime_utils import DateTimeUtils

FEED_COIN_REWARD = 2


class FoodService:
    """
    음식 상점(카탈로그/구매)과 음식 인벤토리, 먹이 주기를 담당하는 서비스 클래스.
    반려동물 행 잠금과 레벨 재계산은 PetService 에 위임합니다.
    """
    def __init__(self, pet_service: PetService):
        self.pet_service = pet_service
        logging.info("FoodService initialized.")

    def get_all_food_items(self) -> List[PetFood]:
        return PetFood.query.order_by(PetFood.food_price.asc(), PetFood.food_name.asc()).all()

    def get_food_inventory(self, owner_id: str) -> List[FoodInventory]:
        return (
            FoodInventory.query
            .filter_by(owner_id=owner_id)
            .order_by(FoodInventory.acquired_at.asc())
            .all()
        )

    def add_to_inventory(self, owner_id: str, food_id: str, quantity: int) -> FoodInventory:
        """인벤토리 행을 잠그고 수량을 늘리거나 새로 만듭니다. 호출자가 커밋합니다."""
        inventory = (
            FoodInventory.query
            .filter_by(owner_id=owner_id, food_id=food_id)
            .with_for_update(of=FoodInventory)
            .first()
        )
        if inventory:
            inventory.quantity += quantity
        else:
            inventory = FoodInventory(owner_id=owner_id, food_id=food_id, quantity=quantity)
            db.session.add(inventory)
        return inventory

    def buy_food(self, owner_id: str, food_id: str, quantity: int = 1) -> Dict[str, Any]:
        """코인으로 음식을 구매합니다. 코인 차감과 인벤토리 증가는 하나의 트랜잭션입니다."""
        if quantity is None or quantity <= 0:
            raise AppError(400, "INVALID_QUANTITY", "구매 수량은 1 이상이어야 합니다.")

        with transaction():
            food = db.session.get(PetFood, food_id)
            if not food:
                raise AppError(404, "FOOD_NOT_FOUND", "음식을 찾을 수 없습니다.")

            pet = self.pet_service.lock_pet(owner_id)
            total_cost = food.food_price * quantity
            if pet.coin < total_cost:
                raise AppError(400, "INSUFFICIENT_COINS", f"Need {total_cost} coins but have {pet.coin}")

            pet.coin = clamp(pet.coin - total_cost, 0, COIN_LIMIT)
            inventory = self.add_to_inventory(owner_id, food_id, quantity)

        logging.info(f"User {owner_id} bought {quantity} x {food.food_name} for {total_cost} coins")
        return {"pet": pet, "inventory": inventory, "total_cost": total_cost}

    def feed_pet(self, owner_id: str, food_id: str) -> Pet:
        """
        인벤토리의 음식을 하나 먹입니다.
        배고픔 회복, 경험치 획득(레벨 재계산), 코인 +2 후 인벤토리를 1 줄입니다.
        """
        with transaction():
            pet = self.pet_service.lock_pet(owner_id)
            self.pet_service.ensure_awake(pet)

            food = db.session.get(PetFood, food_id)
            if not food:
                raise AppError(404, "FOOD_NOT_FOUND", "음식을 찾을 수 없습니다.")

            inventory = (
                FoodInventory.query
                .filter_by(owner_id=owner_id, food_id=food_id)
                .with_for_update(of=FoodInventory)
                .first()
            )
            if not inventory:
                raise AppError(404, "FOOD_NOT_IN_INVENTORY", "인벤토리에 해당 음식이 없습니다.")
            if inventory.quantity <= 0:
                raise AppError(400, "INSUFFICIENT_QUANTITY", "음식 수량이 부족합니다.")

            pet.hunger = clamp(pet.hunger + food.hunger_fill_amount, 0, GAUGE_LIMIT)
            pet.experience = pet.experience + food.xp_gain
            pet.coin = clamp(pet.coin + FEED_COIN_REWARD, 0, COIN_LIMIT)
            pet.last_interaction_at = DateTimeUtils.now()
            self.pet_service.apply_level(pet)
            self.pet_service.record_interaction(pet, InteractionType.FEED)

            inventory.quantity -= 1
            if inventory.quantity <= 0:
                db.session.delete(inventory)

        logging.info(f"Pet {pet.pet_id} was fed {food.food_name}")
        return pet
