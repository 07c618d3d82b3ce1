# wellnest/api/decor/routes.py
from flask import Blueprint, request, current_app

from wellnest.api.decor.schemas import (
    DecorQuerySchema,
    DecorInventoryQuerySchema,
    BuyDecorSchema,
    DecorItemResponseSchema,
    DecorInventoryResponseSchema
)
from wellnest.core.errors import api_response
from wellnest.core.security import role_required, current_user_id, STUDENT_ROLES

decor_bp = Blueprint('decor_bp', __name__)


@decor_bp.route('/', methods=['GET'])
@role_required(*STUDENT_ROLES)
def get_decor_items():
    params = DecorQuerySchema().load(request.args)
    items = current_app.services['decor'].get_all_decor_items(params['decor_type'])
    return api_response("DECOR_ITEMS_RETRIEVED", "장식 아이템 목록을 조회했습니다.", DecorItemResponseSchema(many=True).dump(items))


@decor_bp.route('/buy', methods=['POST'])
@role_required(*STUDENT_ROLES)
def buy_decor():
    validated_data = BuyDecorSchema().load(request.get_json(silent=True) or {})
    inventory = current_app.services['decor'].buy_decor(current_user_id(), validated_data['decor_id'])
    return api_response("DECOR_PURCHASED", "장식 아이템을 구매했습니다.", DecorInventoryResponseSchema().dump(inventory), 201)


@decor_bp.route('/inventory', methods=['GET'])
@role_required(*STUDENT_ROLES)
def get_decor_inventory():
    params = DecorInventoryQuerySchema().load(request.args)
    inventory = current_app.services['decor'].get_decor_inventory(current_user_id(), params['equipped'])
    return api_response(
        "DECOR_INVENTORY_RETRIEVED", "장식 인벤토리를 조회했습니다.",
        DecorInventoryResponseSchema(many=True).dump(inventory)
    )


@decor_bp.route('/inventory/<string:inventory_id>/equip', methods=['POST'])
@role_required(*STUDENT_ROLES)
def equip_decor(inventory_id: str):
    inventory = current_app.services['decor'].equip_decor(current_user_id(), inventory_id)
    return api_response("DECOR_EQUIPPED", "장식 아이템을 장착했습니다.", DecorInventoryResponseSchema().dump(inventory))


@decor_bp.route('/inventory/<string:inventory_id>/unequip', methods=['POST'])
@role_required(*STUDENT_ROLES)
def unequip_decor(inventory_id: str):
    inventory = current_app.services['decor'].unequip_decor(current_user_id(), inventory_id)
    return api_response("DECOR_UNEQUIPPED", "장식 아이템을 해제했습니다.", DecorInventoryResponseSchema().dump(inventory))
