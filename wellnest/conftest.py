# wellnest/conftest.py
"""
pytest 공용 픽스처

- app: 테스트 설정(메모리 SQLite)으로 생성한 앱. 앱 컨텍스트 안에서 실행됩니다.
- client: Flask 테스트 클라이언트
- auth_headers: 역할별 JWT 헤더를 만드는 함수
- clock: DateTimeUtils.now 를 고정/이동할 수 있는 가짜 시계
"""
from datetime import datetime, timedelta, timezone

import pytest
from flask_jwt_extended import create_access_token

from wellnest import create_app
from wellnest.core.database import db
from wellnest.utils.datetime_utils import DateTimeUtils

STUDENT_ID = "student-1"
OTHER_STUDENT_ID = "student-2"
ADMIN_ID = "admin-1"


class FakeClock:
    def __init__(self, start: datetime):
        self.current = start

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> datetime:
        self.current = self.current + timedelta(**kwargs)
        return self.current


@pytest.fixture
def clock(monkeypatch):
    fake = FakeClock(datetime(2024, 5, 15, 12, 0, 0, tzinfo=timezone.utc))
    monkeypatch.setattr(DateTimeUtils, "now", staticmethod(fake.now))
    return fake


@pytest.fixture
def app(clock):
    app = create_app('testing')
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers(app):
    def _make(user_id: str = STUDENT_ID, role: str = "student"):
        token = create_access_token(identity=user_id, additional_claims={"role": role})
        return {"Authorization": f"Bearer {token}"}
    return _make


@pytest.fixture
def services(app):
    return app.services
