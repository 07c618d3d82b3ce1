# wellnest/__init__.py

# =====================================================================================
# 1. 환경 변수 로드 (가장 먼저 실행)
# =====================================================================================
from dotenv import load_dotenv
load_dotenv()

# =====================================================================================
# 2. 모듈 임포트 (Module Imports)
# =====================================================================================
import os
import logging
from typing import Optional
from flask import Flask, request
from marshmallow import ValidationError
from flask_jwt_extended import JWTManager
from werkzeug.exceptions import HTTPException

# - 설정 / 공통
from wellnest.core.config import config_by_name
from wellnest.core.database import db
from wellnest.core.errors import AppError, error_response
from wellnest.utils.crypto_utils import ContentCipher
import wellnest.models  # noqa: F401  (db.create_all 이 모든 테이블을 인식하도록)

# - API 블루프린트
from wellnest.api.health.routes import health_bp
from wellnest.api.pets.routes import pets_bp
from wellnest.api.food.routes import food_bp
from wellnest.api.decor.routes import decor_bp
from wellnest.api.quests.routes import quests_bp
from wellnest.api.journal.routes import journal_bp
from wellnest.api.gratitude_jar.routes import gratitude_jar_bp
from wellnest.api.mood_check_in.routes import mood_check_in_bp
from wellnest.api.flip_feel.routes import flip_feel_bp
from wellnest.api.badges.routes import badges_bp

# - 서비스 모듈
from wellnest.api.pets.services import PetService
from wellnest.api.food.services import FoodService
from wellnest.api.decor.services import DecorService
from wellnest.api.quests.services import QuestService
from wellnest.api.journal.services import JournalService
from wellnest.api.gratitude_jar.services import GratitudeJarService
from wellnest.api.mood_check_in.services import MoodCheckInService
from wellnest.api.flip_feel.services import FlipFeelService
from wellnest.api.badges.services import BadgeService

API_PREFIX = '/api/v1'


def create_app(config_name: Optional[str] = None):
    """
    Flask 애플리케이션 팩토리 함수.
    """
    # =====================================================================================
    # 3. Flask 앱 생성 및 기본 설정
    # =====================================================================================
    config_name = config_name or os.getenv('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    app.json.ensure_ascii = False

    if not app.debug:
        logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]')

    # =====================================================================================
    # 4. 확장 기능 초기화
    # =====================================================================================
    db.init_app(app)
    jwt = JWTManager(app)

    @jwt.unauthorized_loader
    def handle_missing_token(reason):
        return error_response("UNAUTHORIZED", "인증 토큰이 필요합니다.", 401)

    @jwt.invalid_token_loader
    def handle_invalid_token(reason):
        return error_response("INVALID_TOKEN", "유효하지 않은 토큰입니다.", 401)

    @jwt.expired_token_loader
    def handle_expired_token(jwt_header, jwt_payload):
        return error_response("TOKEN_EXPIRED", "토큰이 만료되었습니다.", 401)

    if app.config.get('AUTO_CREATE_TABLES'):
        with app.app_context():
            db.create_all()

    # =====================================================================================
    # 5. 서비스 인스턴스 생성 및 'app.services'에 저장 (의존성 주입)
    # =====================================================================================
    app.services = {}

    # 5-1. 다른 서비스의 기반이 되는 공용 서비스
    cipher = ContentCipher(app.config['CONTENT_ENCRYPTION_KEY'])
    app.services['pets'] = PetService()

    # 5-2. 다른 서비스를 주입받는 도메인 서비스
    app.services['food'] = FoodService(pet_service=app.services['pets'])
    app.services['decor'] = DecorService(pet_service=app.services['pets'])
    app.services['quests'] = QuestService(
        pet_service=app.services['pets'],
        food_service=app.services['food'],
        timezone=app.config['APP_TIMEZONE']
    )

    # - 활동(activities) 도메인
    app.services['journal'] = JournalService(cipher=cipher)
    app.services['gratitude_jar'] = GratitudeJarService(cipher=cipher)
    app.services['mood_check_in'] = MoodCheckInService(timezone=app.config['APP_TIMEZONE'])
    app.services['flip_feel'] = FlipFeelService()
    app.services['badges'] = BadgeService()

    # =====================================================================================
    # 6. 블루프린트 등록
    # =====================================================================================
    app.register_blueprint(pets_bp, url_prefix=f'{API_PREFIX}/pets')
    app.register_blueprint(food_bp, url_prefix=f'{API_PREFIX}/pets/food')
    app.register_blueprint(decor_bp, url_prefix=f'{API_PREFIX}/pets/decor')
    app.register_blueprint(quests_bp, url_prefix=f'{API_PREFIX}/quests')

    # - activities 도메인 블루프린트 등록
    app.register_blueprint(health_bp, url_prefix=f'{API_PREFIX}/activities')
    app.register_blueprint(journal_bp, url_prefix=f'{API_PREFIX}/activities/mind-mirror')
    app.register_blueprint(gratitude_jar_bp, url_prefix=f'{API_PREFIX}/activities/gratitude-jar')
    app.register_blueprint(mood_check_in_bp, url_prefix=f'{API_PREFIX}/activities/mood-check-in')
    app.register_blueprint(flip_feel_bp, url_prefix=f'{API_PREFIX}/activities/flip-and-feel')
    app.register_blueprint(badges_bp, url_prefix=f'{API_PREFIX}/activities/badges')

    # =====================================================================================
    # 7. 전역 에러 핸들러 설정
    # =====================================================================================
    @app.errorhandler(AppError)
    def handle_app_error(err):
        if err.is_operational:
            return error_response(err.code, err.message, err.status_code)
        logging.error(f"A non-operational error occurred: {err!r}", exc_info=True)
        return error_response("INTERNAL_SERVER_ERROR", "서버 내부에서 예상치 못한 오류가 발생했습니다.", 500)

    @app.errorhandler(ValidationError)
    def handle_marshmallow_validation(err):
        return error_response("VALIDATION_ERROR", "요청 값이 올바르지 않습니다.", 400, {"details": err.messages})

    @app.errorhandler(HTTPException)
    def handle_http_exception(err):
        code = (err.name or "HTTP_ERROR").upper().replace(' ', '_')
        return error_response(code, err.description or err.name, err.code or 500)

    @app.errorhandler(Exception)
    def handle_generic_exception(err):
        # 다른 핸들러에서 처리되지 않은 모든 예외 (복호화 실패, DB 오류 등)
        db.session.rollback()
        logging.error(f"An unhandled exception occurred: {err}", exc_info=True)
        return error_response("INTERNAL_SERVER_ERROR", "서버 내부에서 예상치 못한 오류가 발생했습니다.", 500)

    # =====================================================================================
    # 8. 요청 로깅 및 앱 반환
    # =====================================================================================
    @app.after_request
    def log_request(response):
        logging.info(f"{request.method} {request.path} -> {response.status_code}")
        return response

    logging.info(f"Flask app created for '{config_name}' environment.")

    return app
