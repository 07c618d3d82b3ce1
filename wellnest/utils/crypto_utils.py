# wellnest/utils/crypto_utils.py
"""
사용자 작성 텍스트(일기 제목/본문, 감사 일기)를 저장 전에 암호화하는 유틸리티.

AES-256-GCM 인증 암호화를 사용하며, 저장 형식은 16진수 문자열로 이루어진
{"iv": ..., "content": ..., "tag": ...} 딕셔너리입니다.
"""
import logging
import os
import string
from typing import Dict

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from wellnest.core.errors import DecryptionError

logger = logging.getLogger(__name__)

IV_LENGTH = 12
TAG_LENGTH = 16


class ContentCipher:
    """
    설정값(CONTENT_ENCRYPTION_KEY)으로부터 256비트 키를 만들어 사용하는 암호화 헬퍼.

    - 64자리 16진수 문자열이면 그대로 32바이트 키로 사용합니다.
    - 그 외의 문자열은 SHA-256 다이제스트를 키로 사용합니다.
    """
    def __init__(self, secret: str):
        if not secret:
            raise ValueError("CONTENT_ENCRYPTION_KEY가 설정되지 않았습니다.")
        self._aesgcm = AESGCM(self._derive_key(secret))
        logger.info("ContentCipher initialized.")

    @staticmethod
    def _derive_key(secret: str) -> bytes:
        if len(secret) == 64 and all(c in string.hexdigits for c in secret):
            return bytes.fromhex(secret)
        digest = hashes.Hash(hashes.SHA256())
        digest.update(secret.encode('utf-8'))
        return digest.finalize()

    def encrypt(self, plaintext: str) -> Dict[str, str]:
        """평문을 암호화하여 {iv, content, tag} 형태로 반환합니다."""
        iv = os.urandom(IV_LENGTH)
        sealed = self._aesgcm.encrypt(iv, plaintext.encode('utf-8'), None)
        # cryptography는 암호문 뒤에 인증 태그를 붙여서 반환합니다.
        content, tag = sealed[:-TAG_LENGTH], sealed[-TAG_LENGTH:]
        return {"iv": iv.hex(), "content": content.hex(), "tag": tag.hex()}

    def decrypt(self, payload: Dict[str, str]) -> str:
        """{iv, content, tag} 를 복호화합니다. 실패 시 DecryptionError를 발생시킵니다."""
        try:
            iv = bytes.fromhex(payload["iv"])
            sealed = bytes.fromhex(payload["content"]) + bytes.fromhex(payload["tag"])
            return self._aesgcm.decrypt(iv, sealed, None).decode('utf-8')
        except (InvalidTag, KeyError, TypeError, ValueError) as e:
            logger.error(f"Failed to decrypt content: {type(e).__name__}")
            raise DecryptionError("Failed to decrypt content") from e
