# wellnest/api/decor/test_decor_services.py
"""장식 아이템 상점 / 장착 서비스 테스트"""

import pytest

from wellnest.core.database import db
from wellnest.core.errors import AppError
from wellnest.models.decor import DecorItem, DecorInventory
from wellnest.conftest import STUDENT_ID, OTHER_STUDENT_ID


@pytest.fixture
def decor_service(services):
    return services['decor']


@pytest.fixture
def pet(services):
    return services['pets'].get_pet_by_owner_id(STUDENT_ID)


@pytest.fixture
def items():
    catalog = [
        DecorItem(decor_name="Cuckoo Clock", decor_type="clock", decor_price=100),
        DecorItem(decor_name="Digital Clock", decor_type="clock", decor_price=50),
        DecorItem(decor_name="Oak Desk", decor_type="desk", decor_price=200),
    ]
    db.session.add_all(catalog)
    db.session.commit()
    return {item.decor_name: item for item in catalog}


def test_catalog_filter_by_type(decor_service, items):
    clocks = decor_service.get_all_decor_items("clock")
    assert [c.decor_name for c in clocks] == ["Digital Clock", "Cuckoo Clock"]
    assert len(decor_service.get_all_decor_items()) == 3


def test_buy_decor_once(decor_service, pet, items):
    inventory = decor_service.buy_decor(STUDENT_ID, items["Oak Desk"].decor_id)
    assert inventory.is_equipped is False
    assert pet.coin == 300

    with pytest.raises(AppError) as exc_info:
        decor_service.buy_decor(STUDENT_ID, items["Oak Desk"].decor_id)
    assert exc_info.value.code == "DECOR_ALREADY_OWNED"
    assert exc_info.value.status_code == 409
    assert pet.coin == 300


def test_buy_decor_errors(decor_service, pet, items):
    with pytest.raises(AppError) as exc_info:
        decor_service.buy_decor(STUDENT_ID, "missing")
    assert exc_info.value.code == "DECOR_NOT_FOUND"

    pet.coin = 10
    db.session.commit()
    with pytest.raises(AppError) as exc_info:
        decor_service.buy_decor(STUDENT_ID, items["Oak Desk"].decor_id)
    assert exc_info.value.code == "INSUFFICIENT_COINS"


def test_equip_keeps_one_item_per_type(decor_service, pet, items):
    """같은 타입은 하나만 장착"""
    cuckoo = decor_service.buy_decor(STUDENT_ID, items["Cuckoo Clock"].decor_id)
    digital = decor_service.buy_decor(STUDENT_ID, items["Digital Clock"].decor_id)
    desk = decor_service.buy_decor(STUDENT_ID, items["Oak Desk"].decor_id)

    decor_service.equip_decor(STUDENT_ID, cuckoo.inventory_id)
    decor_service.equip_decor(STUDENT_ID, desk.inventory_id)
    decor_service.equip_decor(STUDENT_ID, digital.inventory_id)

    equipped = decor_service.get_decor_inventory(STUDENT_ID, equipped_only=True)
    assert sorted(e.decor.decor_name for e in equipped) == ["Digital Clock", "Oak Desk"]

    decor_service.unequip_decor(STUDENT_ID, digital.inventory_id)
    assert db.session.get(DecorInventory, digital.inventory_id).is_equipped is False


def test_equip_requires_ownership(decor_service, pet, items):
    inventory = decor_service.buy_decor(STUDENT_ID, items["Oak Desk"].decor_id)
    with pytest.raises(AppError) as exc_info:
        decor_service.equip_decor(OTHER_STUDENT_ID, inventory.inventory_id)
    assert exc_info.value.code == "DECOR_NOT_IN_INVENTORY"
