# wellnest/api/quests/routes.py
from flask import Blueprint, request, current_app

from wellnest.api.quests.schemas import (
    ClaimQuestSchema,
    QuestDefinitionCreateSchema,
    QuestDefinitionQuerySchema,
    DailyQuestIssueSchema,
    QuestDefinitionResponseSchema,
    DailyQuestResponseSchema,
    UserQuestResponseSchema,
    ClaimQuestResponseSchema,
    QuestStatsResponseSchema
)
from wellnest.core.errors import api_response
from wellnest.core.security import role_required, current_user_id, STUDENT_ROLES, CONTENT_MANAGER_ROLES

quests_bp = Blueprint('quests_bp', __name__)


@quests_bp.route('/daily', methods=['GET'])
@role_required(*STUDENT_ROLES)
def get_daily_quests():
    """오늘의 퀘스트 목록 조회 API. 처음 조회 시 사용자 퀘스트가 생성됩니다."""
    quests = current_app.services['quests'].get_user_quests_for_the_day(current_user_id())
    return api_response("QUESTS_RETRIEVED", "오늘의 퀘스트를 조회했습니다.", UserQuestResponseSchema(many=True).dump(quests))


@quests_bp.route('/claim', methods=['POST'])
@role_required(*STUDENT_ROLES)
def claim_quest():
    """완료한 퀘스트의 보상 수령 API."""
    validated_data = ClaimQuestSchema().load(request.get_json(silent=True) or {})
    result = current_app.services['quests'].claim_quest(current_user_id(), validated_data['user_quest_id'])
    return api_response("QUEST_CLAIMED", "퀘스트 보상을 받았습니다.", ClaimQuestResponseSchema().dump(result))


@quests_bp.route('/stats', methods=['GET'])
@role_required(*STUDENT_ROLES)
def get_quest_stats():
    stats = current_app.services['quests'].get_quest_stats(current_user_id())
    return api_response("QUEST_STATS_RETRIEVED", "퀘스트 통계를 조회했습니다.", QuestStatsResponseSchema().dump(stats))


@quests_bp.route('/definitions', methods=['GET'])
@role_required(*CONTENT_MANAGER_ROLES)
def get_quest_definitions():
    params = QuestDefinitionQuerySchema().load(request.args)
    definitions = current_app.services['quests'].get_quest_definitions(params['active_only'])
    return api_response(
        "QUEST_DEFINITIONS_RETRIEVED", "퀘스트 정의 목록을 조회했습니다.",
        QuestDefinitionResponseSchema(many=True).dump(definitions)
    )


@quests_bp.route('/definitions', methods=['POST'])
@role_required(*CONTENT_MANAGER_ROLES)
def create_quest_definition():
    validated_data = QuestDefinitionCreateSchema().load(request.get_json(silent=True) or {})
    definition = current_app.services['quests'].create_quest_definition(validated_data)
    return api_response(
        "QUEST_DEFINITION_CREATED", "퀘스트 정의가 생성되었습니다.",
        QuestDefinitionResponseSchema().dump(definition), 201
    )


@quests_bp.route('/daily', methods=['POST'])
@role_required(*CONTENT_MANAGER_ROLES)
def issue_daily_quest():
    """오늘의 퀘스트 발행 API (관리자)."""
    validated_data = DailyQuestIssueSchema().load(request.get_json(silent=True) or {})
    daily_quest = current_app.services['quests'].issue_daily_quest(**validated_data)
    return api_response("DAILY_QUEST_ISSUED", "오늘의 퀘스트가 발행되었습니다.", DailyQuestResponseSchema().dump(daily_quest), 201)
