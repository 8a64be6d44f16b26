"""
CreatorPulse Security Module
보안 헤더, 인메모리 Rate Limiting, 입력 새니타이즈
"""

import time
import logging
from typing import Dict, List, Tuple

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from app.core.config import settings

logger = logging.getLogger(__name__)


# ============================================
# Security Headers Middleware
# ============================================

class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """보안 헤더 추가 미들웨어"""

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Permissions-Policy"] = "geolocation=(), microphone=(), camera=()"

        # HSTS (프로덕션에서만)
        if settings.ENVIRONMENT == "production":
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

        return response


# ============================================
# Rate Limiting
# ============================================

class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    간단한 인메모리 Rate Limiting

    프로덕션에서는 Redis 기반으로 교체 권장
    """

    def __init__(self, app, requests_per_minute: int = 60, exempt_paths: Tuple[str, ...] = ("/api/health",)):
        super().__init__(app)
        self.requests_per_minute = requests_per_minute
        self.exempt_paths = set(exempt_paths)
        self.request_counts: Dict[str, List[Tuple[float, int]]] = {}  # IP -> [(timestamp, count)]
        self.cleanup_interval = 60  # 초
        self.last_cleanup = time.time()

    def _cleanup_old_entries(self):
        """오래된 항목 정리"""
        now = time.time()
        if now - self.last_cleanup < self.cleanup_interval:
            return

        cutoff = now - 60
        for ip in list(self.request_counts.keys()):
            self.request_counts[ip] = [
                (ts, count) for ts, count in self.request_counts[ip]
                if ts > cutoff
            ]
            if not self.request_counts[ip]:
                del self.request_counts[ip]

        self.last_cleanup = now

    def _get_client_ip(self, request: Request) -> str:
        """클라이언트 IP 추출"""
        # X-Forwarded-For 헤더 확인 (프록시/로드밸런서 뒤에 있을 때)
        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            return forwarded.split(",")[0].strip()
        return request.client.host if request.client else "unknown"

    async def dispatch(self, request: Request, call_next) -> Response:
        # 헬스체크, CORS preflight는 제한 대상 아님
        if request.method == "OPTIONS" or request.url.path in self.exempt_paths:
            return await call_next(request)

        self._cleanup_old_entries()

        client_ip = self._get_client_ip(request)
        now = time.time()

        if client_ip not in self.request_counts:
            self.request_counts[client_ip] = []

        # 최근 1분간 요청 수
        recent_requests = sum(
            count for ts, count in self.request_counts[client_ip]
            if ts > now - 60
        )

        if recent_requests >= self.requests_per_minute:
            logger.warning(f"Rate limit exceeded for IP: {client_ip}")
            return Response(
                content='{"error": "Rate limit exceeded", "retry_after": 60}',
                status_code=429,
                media_type="application/json",
                headers={"Retry-After": "60"}
            )

        self.request_counts[client_ip].append((now, 1))

        response = await call_next(request)

        response.headers["X-RateLimit-Limit"] = str(self.requests_per_minute)
        response.headers["X-RateLimit-Remaining"] = str(
            max(0, self.requests_per_minute - recent_requests - 1)
        )

        return response


# ============================================
# Input Validation Helpers
# ============================================

def sanitize_string(value: str, max_length: int = 1000) -> str:
    """문자열 새니타이즈"""
    if not value:
        return ""
    value = value[:max_length]
    # 제어 문자 제거
    value = "".join(c for c in value if c.isprintable() or c in "\n\t")
    return value.strip()


def mask_secret(value: str) -> str:
    """설정값 디버그 출력용 마스킹 (앞 4자 ... 뒤 4자)"""
    if not value:
        return "MISSING"
    if len(value) <= 8:
        return "****"
    return f"{value[:4]}...{value[-4:]}"
