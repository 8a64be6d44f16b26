"""
Unit Tests for Security Middleware
Rate Limiting, 보안 헤더 테스트
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.core.security import RateLimitMiddleware, SecurityHeadersMiddleware


@pytest.fixture
def limited_client():
    """분당 2회 제한 앱"""
    app = FastAPI()
    app.add_middleware(RateLimitMiddleware, requests_per_minute=2)
    app.add_middleware(SecurityHeadersMiddleware)

    @app.get("/api/ping")
    async def ping():
        return {"ok": True}

    @app.get("/api/health")
    async def health():
        return {"status": "ok"}

    return TestClient(app)


class TestRateLimit:
    """인메모리 Rate Limiting"""

    def test_blocks_after_limit(self, limited_client):
        first = limited_client.get("/api/ping")
        limited_client.get("/api/ping")
        blocked = limited_client.get("/api/ping")

        assert first.headers["X-RateLimit-Remaining"] == "1"
        assert blocked.status_code == 429
        assert blocked.headers["Retry-After"] == "60"

    def test_health_exempt(self, limited_client):
        statuses = [limited_client.get("/api/health").status_code for _ in range(5)]

        assert statuses == [200] * 5


class TestSecurityHeaders:
    """보안 헤더"""

    def test_headers(self, limited_client):
        response = limited_client.get("/api/health")

        assert response.headers["X-Frame-Options"] == "DENY"
        assert "Strict-Transport-Security" not in response.headers
