"""
TikTok OAuth API
인가 URL 발급, 콜백 처리(토큰 저장), 설정 디버그
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import RedirectResponse
from typing import Optional
from urllib.parse import quote
import httpx
import logging

from app.core.auth import get_current_user_id
from app.core.config import settings
from app.core.security import mask_secret
from app.data_pipeline.domain.models import PlatformType
from app.services.platform import tiktok
from app.services.platform.accounts import (
    AccountStatus,
    get_account_registry,
    token_expiry,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth/tiktok")


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


def _error_redirect(error: str, description: str = "") -> RedirectResponse:
    origin = _clean(settings.FRONTEND_ORIGIN)
    return RedirectResponse(
        f"{origin}?tiktok_error={quote(error)}&tiktok_desc={quote(description)}"
    )


@router.get("/debug")
async def tiktok_debug():
    """설정 상태 확인 (시크릿 미노출)"""
    redirect_uri = _clean(settings.TIKTOK_REDIRECT_URI)
    return {
        "clientKey": mask_secret(_clean(settings.TIKTOK_CLIENT_KEY)),
        "clientSecretSet": bool(_clean(settings.TIKTOK_CLIENT_SECRET)),
        "redirectUri": redirect_uri or "MISSING",
        "redirectUriLength": len(redirect_uri),
        "frontendOrigin": _clean(settings.FRONTEND_ORIGIN) or "MISSING",
        "stateTtlSeconds": settings.OAUTH_STATE_TTL,
    }


@router.get("/url")
async def tiktok_auth_url(user_id: str = Depends(get_current_user_id)):
    """TikTok 인가 페이지 URL 반환"""
    client_key = _clean(settings.TIKTOK_CLIENT_KEY)
    redirect_uri = _clean(settings.TIKTOK_REDIRECT_URI)
    if not client_key or not redirect_uri:
        raise HTTPException(status_code=400, detail="TikTok auth not configured")

    result = tiktok.get_auth_url(client_key, redirect_uri, user_id)
    if not result:
        raise HTTPException(status_code=500, detail="Failed to build auth URL")
    return {"url": result["url"]}


@router.get("/callback")
async def tiktok_callback(
    code: Optional[str] = Query(None),
    state: Optional[str] = Query(None),
    error: Optional[str] = Query(None),
    error_description: Optional[str] = Query(None),
):
    """
    TikTok 인가 콜백

    코드를 토큰으로 교환해 계정 레지스트리에 저장한 뒤 프론트엔드로 리다이렉트.
    """
    origin = _clean(settings.FRONTEND_ORIGIN)

    if error:
        logger.error(f"TikTok OAuth error (from redirect): {error} {error_description or ''}")
        return _error_redirect(error, error_description or "")

    user_id = tiktok.consume_state(state)
    if not user_id:
        return RedirectResponse(f"{origin}?tiktok_error=state")

    client_key = _clean(settings.TIKTOK_CLIENT_KEY)
    client_secret = _clean(settings.TIKTOK_CLIENT_SECRET)
    redirect_uri = _clean(settings.TIKTOK_REDIRECT_URI)
    if not code or not client_key or not client_secret or not redirect_uri:
        return _error_redirect("callback")

    try:
        token_data = await tiktok.exchange_code_for_token(code, client_key, client_secret, redirect_uri)
        if not token_data:
            logger.error("TikTok token exchange failed")
            return _error_redirect("callback")

        user_info = await tiktok.fetch_user_info(token_data["access_token"])
    except httpx.HTTPStatusError as e:
        detail = e.response.text[:200]
        logger.error(f"TikTok callback error: status={e.response.status_code} body={detail}")
        error_code = "client_key" if "invalid_client" in detail else "callback"
        return _error_redirect(error_code, str(e))
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"TikTok callback error: {e}")
        return _error_redirect("callback", str(e))

    handle = (user_info or {}).get("username") or "tiktok-user"
    get_account_registry().upsert(
        user_id,
        PlatformType.TIKTOK,
        handle,
        AccountStatus.CONNECTED,
        access_token=token_data["access_token"],
        refresh_token=token_data.get("refresh_token"),
        token_expires_at=token_expiry(token_data.get("expires_in")),
    )

    return RedirectResponse(f"{origin}?tiktok=connected")
