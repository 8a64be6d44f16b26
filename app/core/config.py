"""
전역 설정 관리
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """애플리케이션 전역 설정"""

    # ============================================
    # Application Settings
    # ============================================
    APP_NAME: str = "CreatorPulse"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # ============================================
    # Server Settings
    # ============================================
    APP_HOST: str = "0.0.0.0"
    APP_PORT: int = 4000
    APP_RELOAD: bool = True

    # ============================================
    # Auth (Supabase JWT)
    # ============================================
    JWT_SECRET: Optional[str] = None
    JWT_ALGORITHM: str = "HS256"
    DEMO_USER_ID: str = "demo-user"

    # ============================================
    # TikTok
    # ============================================
    TIKTOK_CLIENT_KEY: Optional[str] = None
    TIKTOK_CLIENT_SECRET: Optional[str] = None
    TIKTOK_REDIRECT_URI: Optional[str] = None
    TIKTOK_BRAND_TAG: str = "#velvetorionx"
    OAUTH_STATE_TTL: int = 600  # 10분

    # ============================================
    # YouTube / Spotify
    # ============================================
    YOUTUBE_API_KEY: Optional[str] = None
    SPOTIFY_CLIENT_ID: Optional[str] = None
    SPOTIFY_CLIENT_SECRET: Optional[str] = None
    SPOTIFY_MARKET: str = "DE"

    # ============================================
    # Label Performance
    # ============================================
    LIFT_FLOOR: float = 0.1
    SUMMARY_TOP_N: int = 8
    HASHTAG_TOP_N: int = 30
    KEYWORD_TOP_N: int = 50
    YOUTUBE_MAX_VIDEOS: int = 30
    TIKTOK_MAX_VIDEOS: int = 20

    # ============================================
    # HTTP Client
    # ============================================
    HTTP_TIMEOUT: float = 15.0

    # ============================================
    # Rate Limiting
    # ============================================
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_PER_MINUTE: int = 60

    # ============================================
    # CORS Settings
    # ============================================
    FRONTEND_ORIGIN: str = "http://localhost:5173"
    CORS_ORIGINS: str = ""
    CORS_ALLOW_CREDENTIALS: bool = True

    @property
    def cors_origins(self) -> list:
        """CORS 허용 Origin 목록 (FRONTEND_ORIGIN 항상 포함)"""
        origins = [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]
        if self.FRONTEND_ORIGIN and self.FRONTEND_ORIGIN not in origins:
            origins.append(self.FRONTEND_ORIGIN)
        return origins

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "allow"  # 추가 환경변수 허용


# 싱글톤 인스턴스
settings = Settings()
