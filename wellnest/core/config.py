# wellnest/core/config.py

import os # 환경 변수를 읽기 위해 사용합니다.

class Config:
    """모든 환경 설정의 기반이 되는 공통 설정 클래스입니다."""
    # 외부 인증 서버가 발급한 JWT의 서명을 검증하는 데 사용하는 키입니다.
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY')
    # 토큰의 'role' 클레임에서 사용자의 역할을 읽습니다.
    JWT_ROLE_CLAIM = os.getenv('JWT_ROLE_CLAIM', 'role')

    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL', 'sqlite:///wellnest.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # 일기/감사 일기 본문 암호화(AES-256-GCM)에 사용하는 비밀 값입니다.
    CONTENT_ENCRYPTION_KEY = os.getenv('CONTENT_ENCRYPTION_KEY')
    # '오늘'의 경계(퀘스트 만료, 하루 1회 체크인)를 계산할 서버 타임존입니다.
    APP_TIMEZONE = os.getenv('APP_TIMEZONE', 'UTC')
    # 마이그레이션 도구가 없으므로 개발/테스트에서는 시작 시 테이블을 생성합니다.
    AUTO_CREATE_TABLES = os.getenv('AUTO_CREATE_TABLES', 'false').lower() == 'true'

class DevelopmentConfig(Config):
    """개발 환경을 위한 설정 클래스입니다."""
    DEBUG = True
    AUTO_CREATE_TABLES = True

class TestingConfig(Config):
    """테스트 환경을 위한 설정 클래스입니다."""
    TESTING = True
    DEBUG = False
    # 메모리 DB를 사용해 테스트마다 깨끗한 상태에서 시작합니다.
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    JWT_SECRET_KEY = 'testing-jwt-secret-key-with-enough-length'
    CONTENT_ENCRYPTION_KEY = 'testing-content-encryption-key'
    APP_TIMEZONE = 'UTC'
    AUTO_CREATE_TABLES = True

class ProductionConfig(Config):
    """운영 환경을 위한 설정 클래스입니다. DATABASE_URL은 PostgreSQL을 가리켜야 합니다."""
    DEBUG = False

# FLASK_ENV 값에 따라 create_app에서 설정 클래스를 선택합니다.
config_by_name = dict(
    development=DevelopmentConfig,
    testing=TestingConfig,
    production=ProductionConfig
)
