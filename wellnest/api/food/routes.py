# wellnest/api/food/routes.py
from flask import Blueprint, request, current_app

from wellnest.api.food.schemas import (
    BuyFoodSchema,
    FeedPetSchema,
    PetFoodResponseSchema,
    FoodInventoryResponseSchema,
    BuyFoodResponseSchema
)
from wellnest.api.pets.schemas import PetResponseSchema
from wellnest.core.errors import api_response
from wellnest.core.security import role_required, current_user_id, STUDENT_ROLES

food_bp = Blueprint('food_bp', __name__)


@food_bp.route('/', methods=['GET'])
@role_required(*STUDENT_ROLES)
def get_food_items():
    """음식 카탈로그 조회 API."""
    foods = current_app.services['food'].get_all_food_items()
    return api_response("FOOD_ITEMS_RETRIEVED", "음식 목록을 조회했습니다.", PetFoodResponseSchema(many=True).dump(foods))


@food_bp.route('/buy', methods=['POST'])
@role_required(*STUDENT_ROLES)
def buy_food():
    validated_data = BuyFoodSchema().load(request.get_json(silent=True) or {})
    result = current_app.services['food'].buy_food(
        current_user_id(), validated_data['food_id'], validated_data['quantity']
    )
    return api_response("FOOD_PURCHASED", "음식을 구매했습니다.", BuyFoodResponseSchema().dump(result), 201)


@food_bp.route('/inventory', methods=['GET'])
@role_required(*STUDENT_ROLES)
def get_food_inventory():
    inventory = current_app.services['food'].get_food_inventory(current_user_id())
    return api_response(
        "FOOD_INVENTORY_RETRIEVED", "음식 인벤토리를 조회했습니다.",
        FoodInventoryResponseSchema(many=True).dump(inventory)
    )


@food_bp.route('/feed', methods=['POST'])
@role_required(*STUDENT_ROLES)
def feed_pet():
    """인벤토리의 음식으로 반려동물에게 먹이를 주는 API."""
    validated_data = FeedPetSchema().load(request.get_json(silent=True) or {})
    pet = current_app.services['food'].feed_pet(current_user_id(), validated_data['food_id'])
    return api_response("PET_FED", "반려동물에게 먹이를 주었어요.", PetResponseSchema().dump(pet))
