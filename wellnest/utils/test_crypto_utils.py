# wellnest/utils/test_crypto_utils.py
"""본문 암호화 유틸리티 테스트"""

import pytest

from wellnest.core.errors import DecryptionError
from wellnest.utils.crypto_utils import ContentCipher


def test_encrypt_produces_hex_fields_without_plaintext():
    """암호문 형식은 {iv, content, tag} 16진수 문자열"""
    cipher = ContentCipher("unit-test-secret")
    payload = cipher.encrypt("오늘은 친구와 산책을 했다.")

    assert set(payload.keys()) == {"iv", "content", "tag"}
    assert len(bytes.fromhex(payload["iv"])) == 12
    assert len(bytes.fromhex(payload["tag"])) == 16
    assert "산책" not in payload["content"]
    assert cipher.decrypt(payload) == "오늘은 친구와 산책을 했다."


def test_same_plaintext_uses_fresh_iv():
    cipher = ContentCipher("unit-test-secret")
    assert cipher.encrypt("hello")["iv"] != cipher.encrypt("hello")["iv"]


def test_hex_key_is_used_directly():
    """64자리 16진수 키와 일반 문자열 키 모두 사용 가능"""
    hex_cipher = ContentCipher("ab" * 32)
    assert hex_cipher.decrypt(hex_cipher.encrypt("grateful")) == "grateful"


def test_tampered_tag_raises_decryption_error():
    """태그가 변조되면 복호화 실패"""
    cipher = ContentCipher("unit-test-secret")
    payload = cipher.encrypt("secret diary")
    payload["tag"] = "00" * 16

    with pytest.raises(DecryptionError):
        cipher.decrypt(payload)


def test_wrong_key_raises_decryption_error():
    payload = ContentCipher("key-one").encrypt("secret diary")
    with pytest.raises(DecryptionError):
        ContentCipher("key-two").decrypt(payload)


def test_missing_key_is_rejected():
    with pytest.raises(ValueError):
        ContentCipher("")
