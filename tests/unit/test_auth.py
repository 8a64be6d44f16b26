"""
Unit Tests for Authentication
Supabase JWT 검증과 데모 사용자 대체 테스트
"""

import time

import jwt
import pytest
from fastapi.security import HTTPAuthorizationCredentials

from app.core.auth import decode_token, get_current_user

SECRET = "unit-test-secret-0123456789abcdef0123"


def _token(payload, secret=SECRET):
    return jwt.encode(payload, secret, algorithm="HS256")


class TestDecodeToken:
    """토큰 디코드"""

    def test_valid(self):
        payload = decode_token(_token({"sub": "u1", "aud": "authenticated"}), secret=SECRET)

        assert payload["sub"] == "u1"

    def test_wrong_secret(self):
        assert decode_token(_token({"sub": "u1"}, secret="other-secret-0123456789abcdef0123"), secret=SECRET) is None

    def test_expired(self):
        assert decode_token(_token({"sub": "u1", "exp": int(time.time()) - 10}), secret=SECRET) is None

    def test_missing_secret(self, monkeypatch):
        from app.core.config import settings

        monkeypatch.setattr(settings, "JWT_SECRET", None)
        assert decode_token(_token({"sub": "u1"})) is None


class TestCurrentUser:
    """요청 사용자 결정"""

    async def test_no_credentials_is_demo_user(self):
        user = await get_current_user(None)

        assert user.id == "demo-user"
        assert user.authenticated is False

    async def test_valid_bearer(self, monkeypatch):
        from app.core.config import settings

        monkeypatch.setattr(settings, "JWT_SECRET", SECRET)
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials=_token({"sub": "u7"}))

        user = await get_current_user(credentials)

        assert user.id == "u7"
        assert user.authenticated is True

    @pytest.mark.parametrize("payload", [{}, {"sub": ""}])
    async def test_token_without_subject(self, monkeypatch, payload):
        from app.core.config import settings

        monkeypatch.setattr(settings, "JWT_SECRET", SECRET)
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials=_token(payload))

        assert (await get_current_user(credentials)).id == "demo-user"
