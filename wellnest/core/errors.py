# wellnest/core/errors.py
"""
API 전역에서 사용하는 에러 타입과 응답 봉투(envelope) 헬퍼.

모든 응답은 {success, code, message, data} 형태를 따릅니다.
서비스 계층은 문제를 발견한 지점에서 AppError를 발생시키고,
앱 팩토리에 등록된 에러 핸들러가 이를 응답으로 변환합니다.
"""
from typing import Any, Optional, Tuple
from flask import jsonify, Response


class AppError(Exception):
    """
    HTTP 상태 코드와 기계가 읽을 수 있는 에러 코드를 가진 도메인 에러.

    is_operational=False 인 에러는 예상하지 못한 실패로 간주되어
    클라이언트에는 일반적인 500 응답만 전달됩니다.
    """
    def __init__(self, status_code: int, code: str, message: str, is_operational: bool = True):
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.message = message
        self.is_operational = is_operational

    def __repr__(self):
        return f"AppError({self.status_code}, {self.code!r}, {self.message!r})"


class DecryptionError(Exception):
    """저장된 암호문을 복호화할 수 없을 때 발생합니다."""


def api_response(code: str, message: str, data: Any = None, status: int = 200) -> Tuple[Response, int]:
    """성공 응답 봉투를 생성합니다."""
    return jsonify({
        "success": True,
        "code": code,
        "message": message,
        "data": data,
    }), status


def error_response(code: str, message: str, status: int, data: Optional[Any] = None) -> Tuple[Response, int]:
    """실패 응답 봉투를 생성합니다."""
    return jsonify({
        "success": False,
        "code": code,
        "message": message,
        "data": data,
    }), status
