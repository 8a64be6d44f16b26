"""
YouTube Service
YouTube Data API v3 클라이언트 (API 키 기반)
"""

from typing import Any, Dict, List, Optional
from urllib.parse import urlparse
import httpx
import logging

from app.core.config import settings
from app.data_pipeline.adapters import YouTubeAdapter
from app.data_pipeline.domain.models import ContentItem

logger = logging.getLogger(__name__)

API_BASE = "https://www.googleapis.com/youtube/v3"


def _http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(base_url=API_BASE, timeout=settings.HTTP_TIMEOUT)


def _to_int(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def normalise_handle(raw: Optional[str]) -> str:
    """
    채널 handle 정규화

    "https://www.youtube.com/@name", "@name", "name" -> "name"
    """
    if not raw:
        return ""
    handle = raw.strip()

    # 전체 URL이 붙여넣어진 경우 경로의 @handle 사용
    if "youtube.com" in handle:
        parsed = urlparse(handle if "://" in handle else f"https://{handle}")
        path = parsed.path.lstrip("/")
        if path.startswith("@"):
            handle = path.split("/")[0]

    if handle.startswith("https://"):
        handle = handle[len("https://"):]
    if handle.startswith("@"):
        handle = handle[1:]
    return handle


async def fetch_channel_stats_by_handle(
    raw_handle: Optional[str],
    api_key: Optional[str],
) -> Optional[Dict[str, Any]]:
    """
    handle로 채널 통계 조회

    1) channels.list?forHandle 우선
    2) 실패 시 search.list로 채널 ID를 찾아 channels.list?id

    Returns:
        {id, title, subscribers, views, videos} 또는 None
    """
    handle = normalise_handle(raw_handle)
    if not api_key or not handle:
        return None

    async with _http_client() as client:
        channel = None
        try:
            response = await client.get("/channels", params={
                "part": "statistics,snippet",
                "forHandle": handle,
                "key": api_key,
            })
            response.raise_for_status()
            items = response.json().get("items") or []
            channel = items[0] if items else None
        except httpx.HTTPStatusError as e:
            logger.debug(f"forHandle lookup failed for {handle}: {e}")

        if not channel:
            response = await client.get("/search", params={
                "part": "snippet",
                "q": handle,
                "type": "channel",
                "maxResults": 1,
                "key": api_key,
            })
            response.raise_for_status()
            results = response.json().get("items") or []
            if not results:
                return None

            first = results[0]
            channel_id = (first.get("snippet") or {}).get("channelId") or (first.get("id") or {}).get("channelId")
            if not channel_id:
                return None

            response = await client.get("/channels", params={
                "part": "statistics,snippet",
                "id": channel_id,
                "key": api_key,
            })
            response.raise_for_status()
            items = response.json().get("items") or []
            channel = items[0] if items else None

    if not channel:
        return None

    stats = channel.get("statistics") or {}
    return {
        "id": channel.get("id"),
        "title": (channel.get("snippet") or {}).get("title") or handle,
        "subscribers": _to_int(stats.get("subscriberCount")),
        "views": _to_int(stats.get("viewCount")),
        "videos": _to_int(stats.get("videoCount")),
    }


async def fetch_channel_videos_with_tags(
    channel_id: Optional[str],
    api_key: Optional[str],
    max_results: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """
    채널 최근 영상 + 태그 조회

    Returns:
        [{id, title, description, tags, viewCount, publishedAt}, ...]
    """
    if not api_key or not channel_id:
        return []
    max_results = min(max_results or settings.YOUTUBE_MAX_VIDEOS, 50)

    async with _http_client() as client:
        # 1) 업로드 재생목록
        response = await client.get("/channels", params={
            "part": "contentDetails",
            "id": channel_id,
            "key": api_key,
        })
        response.raise_for_status()
        items = response.json().get("items") or []
        playlist_id = (
            ((items[0].get("contentDetails") or {}).get("relatedPlaylists") or {}).get("uploads")
            if items else None
        )
        if not playlist_id:
            return []

        # 2) 최근 영상 ID
        response = await client.get("/playlistItems", params={
            "part": "contentDetails",
            "playlistId": playlist_id,
            "maxResults": max_results,
            "key": api_key,
        })
        response.raise_for_status()
        video_ids = [
            (item.get("contentDetails") or {}).get("videoId")
            for item in response.json().get("items") or []
        ]
        video_ids = [video_id for video_id in video_ids if video_id]
        if not video_ids:
            return []

        # 3) 태그 + 통계
        response = await client.get("/videos", params={
            "part": "snippet,statistics",
            "id": ",".join(video_ids),
            "key": api_key,
        })
        response.raise_for_status()
        videos = response.json().get("items") or []

    result = []
    for video in videos:
        snippet = video.get("snippet") or {}
        statistics = video.get("statistics") or {}
        result.append({
            "id": video.get("id"),
            "title": snippet.get("title") or "",
            "description": snippet.get("description") or "",
            "tags": snippet.get("tags") or [],
            "viewCount": _to_int(statistics.get("viewCount")),
            "publishedAt": snippet.get("publishedAt"),
        })
    return result


async def fetch_content_items(
    channel_id: Optional[str],
    api_key: Optional[str],
) -> List[ContentItem]:
    """
    채널 영상을 ContentItem으로 변환

    업스트림 실패는 로그만 남기고 빈 리스트를 반환한다.
    """
    try:
        videos = await fetch_channel_videos_with_tags(channel_id, api_key)
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"YouTube video fetch failed: {e}")
        return []
    return YouTubeAdapter().parse_many(videos)
