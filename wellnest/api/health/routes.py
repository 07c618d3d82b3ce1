# wellnest/api/health/routes.py
from flask import Blueprint

from wellnest.core.errors import api_response
from wellnest.utils.datetime_utils import DateTimeUtils

health_bp = Blueprint('health_bp', __name__)


@health_bp.route('/health', methods=['GET'])
def health_check():
    """인증 없이 호출 가능한 상태 확인 API."""
    return api_response("HEALTH_OK", "Activities service is running.", {"timestamp": DateTimeUtils.to_iso_string(DateTimeUtils.now())})
