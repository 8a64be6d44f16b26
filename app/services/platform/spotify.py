"""
Spotify Service
Spotify Web API 클라이언트 (Client Credentials)
"""

from typing import Any, Dict, List, Optional
import re
import httpx
import logging

from app.core.config import settings

logger = logging.getLogger(__name__)

TOKEN_URL = "https://accounts.spotify.com/api/token"
API_BASE = "https://api.spotify.com/v1"

ARTIST_URL_PATTERN = re.compile(r"artist/([a-zA-Z0-9]+)")


def extract_artist_id(raw: Optional[str]) -> str:
    """
    handle에서 아티스트 ID 추출

    - 전체 URL: https://open.spotify.com/artist/29Hv3V1dVlsGzLZCzNVWNZ?si=...
    - ID만: 29Hv3V1dVlsGzLZCzNVWNZ
    """
    if not raw or not isinstance(raw, str):
        return ""
    value = raw.strip()
    if "open.spotify.com/artist/" in value:
        match = ARTIST_URL_PATTERN.search(value)
        return match.group(1) if match else ""
    return value.split("?")[0].strip()


async def _client_credentials_token(
    client: httpx.AsyncClient,
    client_id: str,
    client_secret: str,
) -> Optional[str]:
    response = await client.post(
        TOKEN_URL,
        data={"grant_type": "client_credentials"},
        auth=(client_id, client_secret),
    )
    response.raise_for_status()
    return response.json().get("access_token")


async def fetch_artist_stats(
    raw_handle: Optional[str],
    client_id: Optional[str],
    client_secret: Optional[str],
) -> Optional[Dict[str, Any]]:
    """
    아티스트 공개 통계

    Returns:
        {id, name, followers, popularity} 또는 None
    """
    artist_id = extract_artist_id(raw_handle)
    if not artist_id or not client_id or not client_secret:
        return None

    async with httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT) as client:
        token = await _client_credentials_token(client, client_id, client_secret)
        if not token:
            return None

        response = await client.get(
            f"{API_BASE}/artists/{artist_id}",
            headers={"Authorization": f"Bearer {token}"},
        )
        response.raise_for_status()
        data = response.json()

    if not data:
        return None
    return {
        "id": data.get("id") or artist_id,
        "name": data.get("name") or raw_handle,
        "followers": int((data.get("followers") or {}).get("total") or 0),
        "popularity": int(data.get("popularity") or 0),
    }


async def fetch_artist_top_tracks(
    raw_handle: Optional[str],
    client_id: Optional[str],
    client_secret: Optional[str],
    market: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """
    아티스트 인기 트랙

    Returns:
        [{id, name, popularity, preview_url}, ...]
    """
    artist_id = extract_artist_id(raw_handle)
    if not artist_id or not client_id or not client_secret:
        return []

    async with httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT) as client:
        token = await _client_credentials_token(client, client_id, client_secret)
        if not token:
            return []

        response = await client.get(
            f"{API_BASE}/artists/{artist_id}/top-tracks",
            params={"market": market or settings.SPOTIFY_MARKET},
            headers={"Authorization": f"Bearer {token}"},
        )
        response.raise_for_status()
        tracks = response.json().get("tracks") or []

    return [
        {
            "id": track.get("id"),
            "name": track.get("name") or "",
            "popularity": int(track.get("popularity") or 0),
            "preview_url": track.get("preview_url"),
        }
        for track in tracks
    ]
