# wellnest/core/security.py
from functools import wraps
from typing import Dict
from flask import g, current_app
from flask_jwt_extended import verify_jwt_in_request, get_jwt, get_jwt_identity

from wellnest.core.errors import AppError

STUDENT_ROLES = ("student",)
CONTENT_MANAGER_ROLES = ("admin", "counselor", "super_admin")


def role_required(*roles: str):
    """
    JWT를 검증하고 토큰의 역할이 허용된 역할 목록에 포함되는지 확인하는 데코레이터.
    검증된 신원은 g.user = {"user_id", "role"} 로 저장됩니다.
    """
    def wrapper(fn):
        @wraps(fn)
        def decorated_function(*args, **kwargs):
            verify_jwt_in_request()

            user_id = get_jwt_identity()
            role = get_jwt().get(current_app.config.get('JWT_ROLE_CLAIM', 'role'))
            if not user_id or not role:
                raise AppError(401, "UNAUTHORIZED", "인증 정보가 올바르지 않습니다.")
            if roles and role not in roles:
                raise AppError(403, "FORBIDDEN", "이 작업을 수행할 권한이 없습니다.")

            g.user = {"user_id": str(user_id), "role": role}
            return fn(*args, **kwargs)
        return decorated_function
    return wrapper


def current_user() -> Dict[str, str]:
    """role_required 로 검증된 현재 요청의 사용자 신원을 반환합니다."""
    user = g.get('user')
    if not user:
        raise AppError(401, "UNAUTHORIZED", "인증이 필요합니다.")
    return user


def current_user_id() -> str:
    return current_user()["user_id"]
