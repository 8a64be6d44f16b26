"""
YouTube Adapter
YouTube Data API v3 (videos.list) 결과를 공통 포맷으로 변환

실제 데이터 형식:
{
    "id": "g1Ll9OlFwEQ",
    "snippet": {
        "title": "Studio Vlog #3",
        "description": "...",
        "tags": ["Vlog", "studio", "kpop"],
        "publishedAt": "2022-08-22T15:26:13Z"
    },
    "statistics": {"viewCount": "11974", "likeCount": "154"}
}

서비스 레이어에서 평탄화된 {id, title, tags, viewCount, publishedAt} 형식도 허용한다.
"""
from typing import Dict, Any
from .base import BaseContentAdapter
from ..domain.models import ContentItem, PlatformType


class YouTubeAdapter(BaseContentAdapter):
    """YouTube 플랫폼 어댑터"""

    def __init__(self):
        super().__init__(PlatformType.YOUTUBE)

    def validate_raw_data(self, raw_data: Dict[str, Any]) -> bool:
        """YouTube 데이터 유효성 검증"""
        required_fields = ["id"]
        return all(field in raw_data for field in required_fields)

    def parse_content(self, raw_data: Dict[str, Any]) -> ContentItem:
        """YouTube 비디오 정보 파싱"""
        snippet = raw_data.get("snippet")
        statistics = raw_data.get("statistics")

        if isinstance(snippet, dict):
            title = snippet.get("title") or ""
            description = snippet.get("description") or ""
            tags = snippet.get("tags")
            published_at = snippet.get("publishedAt")
        else:
            title = raw_data.get("title") or ""
            description = raw_data.get("description") or ""
            tags = raw_data.get("tags")
            published_at = raw_data.get("publishedAt")

        if isinstance(statistics, dict):
            view_count = statistics.get("viewCount")
        else:
            view_count = raw_data.get("viewCount")

        return ContentItem(
            content_id=str(raw_data.get("id") or ""),
            platform=self.platform,
            view_count=view_count,
            title=title,
            labels=list(tags) if isinstance(tags, (list, tuple)) else [],
            published_at=published_at,
            metadata={
                "description": description,
            },
        )
