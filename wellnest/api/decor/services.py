# wellnest/api/decor/services.py
import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError

from wellnest.core.database import db, transaction
from wellnest.core.errors import AppError
from wellnest.models.decor import DecorItem, DecorInventory
from wellnest.api.pets.services import PetService, clamp, COIN_LIMIT


class DecorService:
    """장식 아이템 상점과 장착 상태를 관리하는 서비스 클래스. 타입별로 하나만 장착할 수 있습니다."""
    def __init__(self, pet_service: PetService):
        self.pet_service = pet_service
        logging.info("DecorService initialized.")

    def get_all_decor_items(self, decor_type: Optional[str] = None) -> List[DecorItem]:
        query = DecorItem.query
        if decor_type:
            query = query.filter_by(decor_type=decor_type)
        return query.order_by(DecorItem.decor_price.asc(), DecorItem.decor_name.asc()).all()

    def get_decor_inventory(self, owner_id: str, equipped_only: bool = False) -> List[DecorInventory]:
        query = DecorInventory.query.filter_by(owner_id=owner_id)
        if equipped_only:
            query = query.filter_by(is_equipped=True)
        return query.order_by(DecorInventory.acquired_at.asc()).all()

    def buy_decor(self, owner_id: str, decor_id: str) -> DecorInventory:
        try:
            with transaction():
                decor = db.session.get(DecorItem, decor_id)
                if not decor:
                    raise AppError(404, "DECOR_NOT_FOUND", "장식 아이템을 찾을 수 없습니다.")

                pet = self.pet_service.lock_pet(owner_id)
                if DecorInventory.query.filter_by(owner_id=owner_id, decor_id=decor_id).first():
                    raise AppError(409, "DECOR_ALREADY_OWNED", "이미 보유한 장식 아이템입니다.")
                if pet.coin < decor.decor_price:
                    raise AppError(400, "INSUFFICIENT_COINS", f"Need {decor.decor_price} coins but have {pet.coin}")

                pet.coin = clamp(pet.coin - decor.decor_price, 0, COIN_LIMIT)
                inventory = DecorInventory(owner_id=owner_id, decor_id=decor_id)
                db.session.add(inventory)
        except IntegrityError:
            raise AppError(409, "DECOR_ALREADY_OWNED", "이미 보유한 장식 아이템입니다.")

        logging.info(f"User {owner_id} bought decor {decor_id}")
        return inventory

    def _get_owned_item(self, owner_id: str, inventory_id: str) -> DecorInventory:
        inventory = (
            DecorInventory.query
            .filter_by(inventory_id=inventory_id, owner_id=owner_id)
            .with_for_update(of=DecorInventory)
            .first()
        )
        if not inventory:
            raise AppError(404, "DECOR_NOT_IN_INVENTORY", "인벤토리에 해당 장식 아이템이 없습니다.")
        return inventory

    def equip_decor(self, owner_id: str, inventory_id: str) -> DecorInventory:
        """같은 타입의 다른 장식을 모두 해제한 뒤 선택한 장식을 장착합니다."""
        with transaction():
            inventory = self._get_owned_item(owner_id, inventory_id)
            decor_type = inventory.decor.decor_type

            equipped_same_type = (
                DecorInventory.query
                .join(DecorItem, DecorInventory.decor_id == DecorItem.decor_id)
                .filter(
                    DecorInventory.owner_id == owner_id,
                    DecorInventory.is_equipped.is_(True),
                    DecorItem.decor_type == decor_type,
                    DecorInventory.inventory_id != inventory_id,
                )
                .with_for_update(of=DecorInventory)
                .all()
            )
            for other in equipped_same_type:
                other.is_equipped = False
            inventory.is_equipped = True
        return inventory

    def unequip_decor(self, owner_id: str, inventory_id: str) -> DecorInventory:
        with transaction():
            inventory = self._get_owned_item(owner_id, inventory_id)
            inventory.is_equipped = False
        return inventory
