"""
CreatorPulse - Main Application
FastAPI 메인 앱
"""

# 환경변수 로드 (가장 먼저 실행)
from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging
import time

from app.core.config import settings

# 로깅 설정
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# 보안 모듈 임포트
from app.core.security import (
    SecurityHeadersMiddleware,
    RateLimitMiddleware
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    애플리케이션 생명주기 관리

    Startup:
    - 플랫폼 자격증명 설정 여부 확인 (없으면 해당 카드 생략)
    """
    # ============ STARTUP ============
    logger.info(f"🚀 Starting {settings.APP_NAME} v{settings.APP_VERSION}...")

    configured = {
        "tiktok": bool(settings.TIKTOK_CLIENT_KEY and settings.TIKTOK_CLIENT_SECRET),
        "youtube": bool(settings.YOUTUBE_API_KEY),
        "spotify": bool(settings.SPOTIFY_CLIENT_ID and settings.SPOTIFY_CLIENT_SECRET),
    }
    for platform, ok in configured.items():
        if ok:
            logger.info(f"✅ {platform} credentials configured")
        else:
            logger.warning(f"⚠️ {platform} credentials missing (cards will be skipped)")

    if not settings.JWT_SECRET:
        logger.warning(f"⚠️ JWT_SECRET not set, all requests use '{settings.DEMO_USER_ID}'")

    yield

    # ============ SHUTDOWN ============
    logger.info(f"👋 {settings.APP_NAME} stopped")


# FastAPI 앱 생성
app = FastAPI(
    title=settings.APP_NAME,
    description="크리에이터 해시태그/키워드 성과 분석 API",
    version=settings.APP_VERSION,
    lifespan=lifespan
)


# ============================================
# CORS 설정 - 가장 먼저!
# ============================================

ALLOWED_ORIGINS = settings.cors_origins
logger.info(f"🌐 CORS Origins: {ALLOWED_ORIGINS}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=600,
)

# Rate Limiting 미들웨어
if settings.RATE_LIMIT_ENABLED:
    app.add_middleware(RateLimitMiddleware, requests_per_minute=settings.RATE_LIMIT_PER_MINUTE)

# 보안 헤더 미들웨어
app.add_middleware(SecurityHeadersMiddleware)


# 요청 로깅 미들웨어
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """요청/응답 로깅"""
    start_time = time.time()

    logger.info(f"📥 {request.method} {request.url.path}")

    try:
        response = await call_next(request)
    except Exception as e:
        logger.error(f"❌ Request error: {e}", exc_info=True)
        raise

    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)

    logger.info(
        f"📤 {request.method} {request.url.path} | "
        f"Status: {response.status_code} | "
        f"Time: {process_time:.3f}s"
    )

    return response


# 에러 핸들러
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """전역 에러 핸들러"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)

    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal Server Error",
            "message": str(exc) if settings.DEBUG else "Unexpected error",
            "path": request.url.path
        }
    )


# ============================================
# API 라우터 등록
# ============================================
from app.api.v1 import router as api_router

app.include_router(api_router)


# 헬스체크
@app.get("/api/health", tags=["System"])
async def health():
    """헬스체크"""
    return {"status": "ok", "app": settings.APP_NAME}


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting server on {settings.APP_HOST}:{settings.APP_PORT}")

    uvicorn.run(
        "app.main:app",
        host=settings.APP_HOST,
        port=settings.APP_PORT,
        reload=settings.APP_RELOAD,
        log_level=settings.LOG_LEVEL.lower()
    )
