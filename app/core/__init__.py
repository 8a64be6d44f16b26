"""
CreatorPulse - Core Package
코어 레이어: 설정, 인증, 보안 미들웨어

Usage:
    from app.core import settings, get_current_user_id
"""

# Settings
from app.core.config import settings, Settings

# Auth
from app.core.auth import (
    CurrentUser,
    decode_token,
    get_current_user,
    get_current_user_id,
)

__all__ = [
    "settings",
    "Settings",
    "CurrentUser",
    "decode_token",
    "get_current_user",
    "get_current_user_id",
]
