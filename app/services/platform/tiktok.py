"""
TikTok Service
TikTok OAuth (Login Kit v2) + Display API 클라이언트

Features:
- 인가 URL 생성 / state 검증 (TTL 저장소)
- 코드 -> 토큰 교환, 토큰 갱신
- 사용자 정보, 비디오 목록 조회
"""

from typing import Any, Dict, List, Optional
from urllib.parse import urlencode
import httpx
import logging

from app.core.config import settings
from app.data_pipeline.adapters import TikTokAdapter
from app.data_pipeline.domain.models import ContentItem
from app.services.shared.state_store import ExpiringStateStore

logger = logging.getLogger(__name__)

AUTH_URL = "https://www.tiktok.com/v2/auth/authorize/"
TOKEN_URL = "https://open.tiktokapis.com/v2/oauth/token/"
USER_INFO_URL = "https://open.tiktokapis.com/v2/user/info/"
VIDEO_LIST_URL = "https://open.tiktokapis.com/v2/video/list/"

SCOPES = "user.info.basic,user.info.profile,user.info.stats,video.list"
USER_FIELDS = "username,display_name,follower_count,following_count,likes_count,video_count"
VIDEO_FIELDS = "id,title,video_description,view_count,like_count,create_time,share_url"

# state -> user_id
_state_store = ExpiringStateStore(ttl_seconds=settings.OAUTH_STATE_TTL)


def get_state_store() -> ExpiringStateStore:
    """OAuth state 저장소"""
    return _state_store


def _http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT)


def _to_int(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


# ============================================
# OAuth
# ============================================

def get_auth_url(
    client_key: Optional[str],
    redirect_uri: Optional[str],
    user_id: Optional[str],
) -> Optional[Dict[str, str]]:
    """
    TikTok 인가 URL 생성 및 state 저장

    Returns:
        {"url": ..., "state": ...} 또는 설정 누락 시 None
    """
    if not client_key or not redirect_uri or not user_id:
        return None

    state = _state_store.issue(user_id)
    params = urlencode({
        "client_key": client_key,
        "scope": SCOPES,
        "response_type": "code",
        "redirect_uri": redirect_uri,
        "state": state,
    })
    return {"url": f"{AUTH_URL}?{params}", "state": state}


def consume_state(state: Optional[str]) -> Optional[str]:
    """state에 해당하는 user_id 반환 후 삭제. 없거나 만료면 None"""
    return _state_store.consume(state)


async def _post_token(form: Dict[str, str]) -> Optional[Dict[str, Any]]:
    async with _http_client() as client:
        response = await client.post(
            TOKEN_URL,
            data=form,
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )
        response.raise_for_status()
        data = response.json()

    if not data.get("access_token"):
        logger.warning(f"TikTok token response without access_token: {data.get('error')}")
        return None
    return data


async def exchange_code_for_token(
    code: Optional[str],
    client_key: Optional[str],
    client_secret: Optional[str],
    redirect_uri: Optional[str],
) -> Optional[Dict[str, Any]]:
    """인가 코드를 access_token / refresh_token으로 교환"""
    if not code or not client_key or not client_secret or not redirect_uri:
        return None

    data = await _post_token({
        "client_key": client_key,
        "client_secret": client_secret,
        "code": code,
        "grant_type": "authorization_code",
        "redirect_uri": redirect_uri,
    })
    if not data:
        return None
    return {
        "access_token": data["access_token"],
        "refresh_token": data.get("refresh_token"),
        "expires_in": data.get("expires_in"),
        "open_id": data.get("open_id"),
    }


async def refresh_access_token(
    refresh_token: Optional[str],
    client_key: Optional[str],
    client_secret: Optional[str],
) -> Optional[Dict[str, Any]]:
    """토큰 갱신. refresh_token이 응답에 없으면 기존 값 유지"""
    if not refresh_token or not client_key or not client_secret:
        return None

    data = await _post_token({
        "client_key": client_key,
        "client_secret": client_secret,
        "grant_type": "refresh_token",
        "refresh_token": refresh_token,
    })
    if not data:
        return None
    return {
        "access_token": data["access_token"],
        "refresh_token": data.get("refresh_token") or refresh_token,
        "expires_in": data.get("expires_in"),
    }


# ============================================
# Display API
# ============================================

async def fetch_user_info(access_token: Optional[str]) -> Optional[Dict[str, Any]]:
    """사용자 정보 (username, follower_count 등)"""
    if not access_token:
        return None

    async with _http_client() as client:
        response = await client.get(
            USER_INFO_URL,
            params={"fields": USER_FIELDS},
            headers={"Authorization": f"Bearer {access_token}"},
        )
        response.raise_for_status()
        user = (response.json().get("data") or {}).get("user")

    if not user:
        return None
    return {
        "username": user.get("username") or "",
        "display_name": user.get("display_name") or "",
        "follower_count": _to_int(user.get("follower_count")),
        "following_count": _to_int(user.get("following_count")),
        "likes_count": _to_int(user.get("likes_count")),
        "video_count": _to_int(user.get("video_count")),
    }


async def fetch_video_list(
    access_token: Optional[str],
    max_count: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """최근 비디오 목록 (title, video_description, view_count ...)"""
    if not access_token:
        return []

    async with _http_client() as client:
        response = await client.post(
            VIDEO_LIST_URL,
            params={"fields": VIDEO_FIELDS},
            json={"max_count": min(max_count or settings.TIKTOK_MAX_VIDEOS, 20)},
            headers={"Authorization": f"Bearer {access_token}"},
        )
        response.raise_for_status()
        data = response.json().get("data") or {}

    videos = data.get("videos")
    return videos if isinstance(videos, list) else []


async def fetch_content_items(access_token: Optional[str]) -> List[ContentItem]:
    """
    비디오 목록을 ContentItem으로 변환

    업스트림 실패는 로그만 남기고 빈 리스트를 반환한다.
    """
    try:
        videos = await fetch_video_list(access_token)
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"TikTok video list failed: {e}")
        return []
    return TikTokAdapter().parse_many(videos)
