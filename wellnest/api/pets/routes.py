# wellnest/api/pets/routes.py
import logging
from flask import Blueprint, request, current_app

from wellnest.api.pets.schemas import (
    PetCreateSchema,
    PetNameUpdateSchema,
    InteractionsQuerySchema,
    PetResponseSchema,
    PetStatsResponseSchema,
    PetInteractionResponseSchema
)
from wellnest.core.errors import api_response
from wellnest.core.security import role_required, current_user_id, STUDENT_ROLES

pets_bp = Blueprint('pets_bp', __name__)


@pets_bp.route('/', methods=['GET'])
@role_required(*STUDENT_ROLES)
def get_pet_stats():
    """반려동물 상태 조회 API. 반려동물이 없으면 기본값으로 생성합니다."""
    stats = current_app.services['pets'].get_pet_stats(current_user_id())
    return api_response("PET_STATS_RETRIEVED", "반려동물 상태를 조회했습니다.", PetStatsResponseSchema().dump(stats))


@pets_bp.route('/', methods=['POST'])
@role_required(*STUDENT_ROLES)
def create_pet():
    """반려동물 생성 API."""
    user_id = current_user_id()
    validated_data = PetCreateSchema().load(request.get_json(silent=True) or {})
    pet = current_app.services['pets'].create_pet(user_id, validated_data['name'])
    logging.info(f"Pet created via API for user {user_id}")
    return api_response("PET_CREATED", "반려동물이 생성되었습니다.", PetResponseSchema().dump(pet), 201)


@pets_bp.route('/pet', methods=['POST'])
@role_required(*STUDENT_ROLES)
def pet_the_pet():
    pet = current_app.services['pets'].pet_the_pet(current_user_id())
    return api_response("PET_PETTED", "반려동물을 쓰다듬었어요.", PetResponseSchema().dump(pet))


@pets_bp.route('/sleep', methods=['POST'])
@role_required(*STUDENT_ROLES)
def sleep_pet():
    pet = current_app.services['pets'].sleep_pet(current_user_id())
    return api_response("PET_SLEEPING", "반려동물이 잠들었어요.", PetResponseSchema().dump(pet))


@pets_bp.route('/wake', methods=['POST'])
@role_required(*STUDENT_ROLES)
def wake_pet():
    pet = current_app.services['pets'].wake_pet(current_user_id())
    return api_response("PET_AWAKE", "반려동물이 일어났어요.", PetResponseSchema().dump(pet))


@pets_bp.route('/bath', methods=['POST'])
@role_required(*STUDENT_ROLES)
def complete_bath():
    """목욕 미니게임 완료 API."""
    pet = current_app.services['pets'].complete_bath_minigame(current_user_id())
    return api_response("BATH_COMPLETED", "목욕을 마쳤어요.", PetResponseSchema().dump(pet))


@pets_bp.route('/bounce', methods=['POST'])
@role_required(*STUDENT_ROLES)
def complete_bounce():
    """바운스 미니게임 완료 API."""
    pet = current_app.services['pets'].complete_bounce_minigame(current_user_id())
    return api_response("BOUNCE_COMPLETED", "신나게 놀았어요.", PetResponseSchema().dump(pet))


@pets_bp.route('/name', methods=['PATCH'])
@role_required(*STUDENT_ROLES)
def update_pet_name():
    validated_data = PetNameUpdateSchema().load(request.get_json(silent=True) or {})
    pet = current_app.services['pets'].update_pet_name(current_user_id(), validated_data['name'])
    return api_response("PET_NAME_UPDATED", "반려동물 이름이 변경되었습니다.", PetResponseSchema().dump(pet))


@pets_bp.route('/interactions', methods=['GET'])
@role_required(*STUDENT_ROLES)
def get_interactions():
    """최근 상호작용 기록 조회 API."""
    params = InteractionsQuerySchema().load(request.args)
    interactions = current_app.services['pets'].get_recent_interactions(current_user_id(), params['limit'])
    return api_response(
        "PET_INTERACTIONS_RETRIEVED", "상호작용 기록을 조회했습니다.",
        PetInteractionResponseSchema(many=True).dump(interactions)
    )
