"""
Authentication
Supabase JWT(Bearer)로 현재 사용자 식별

토큰이 없거나, 시크릿이 설정되지 않았거나, 검증에 실패하면
데모 사용자(demo-user)로 처리한다.
"""

from typing import Optional
from pydantic import BaseModel
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
import jwt
import logging

from app.core.config import settings

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


# ============================================
# User Model
# ============================================

class CurrentUser(BaseModel):
    """요청 사용자"""
    id: str
    authenticated: bool = False


# ============================================
# Token
# ============================================

def decode_token(token: str, secret: Optional[str] = None) -> Optional[dict]:
    """JWT 토큰 디코드. 실패 시 None"""
    secret = secret or settings.JWT_SECRET
    if not token or not secret:
        return None
    try:
        return jwt.decode(
            token,
            secret,
            algorithms=[settings.JWT_ALGORITHM],
            options={"verify_aud": False},
        )
    except jwt.ExpiredSignatureError:
        logger.warning("Token expired")
        return None
    except jwt.InvalidTokenError as e:
        logger.warning(f"Invalid token: {e}")
        return None


# ============================================
# FastAPI Dependencies
# ============================================

async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> CurrentUser:
    """현재 사용자 (인증 실패 시 데모 사용자)"""
    if not credentials:
        return CurrentUser(id=settings.DEMO_USER_ID)

    payload = decode_token(credentials.credentials)
    if not payload or not payload.get("sub"):
        return CurrentUser(id=settings.DEMO_USER_ID)

    return CurrentUser(id=str(payload["sub"]), authenticated=True)


async def get_current_user_id(user: CurrentUser = Depends(get_current_user)) -> str:
    """현재 사용자 ID"""
    return user.id
