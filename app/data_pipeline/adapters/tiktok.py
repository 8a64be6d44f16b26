"""
TikTok Adapter
TikTok Display API v2 (video/list) 결과를 공통 포맷으로 변환

실제 데이터 형식:
{
    "id": "7370520570070338859",
    "title": "Certified",
    "video_description": "Certified #fyp #kpopdance",
    "view_count": 27500000,
    "like_count": 3100000,
    "create_time": 1716083058,
    "share_url": "https://www.tiktok.com/@user/video/7370520570070338859"
}

서비스 레이어에서 이미 매핑된 {title, description, view_count} 형식도 허용한다.
"""
from typing import Dict, Any
from datetime import datetime, timezone
from .base import BaseContentAdapter
from ..domain.models import ContentItem, PlatformType


class TikTokAdapter(BaseContentAdapter):
    """TikTok 플랫폼 어댑터"""

    def __init__(self):
        super().__init__(PlatformType.TIKTOK)

    def validate_raw_data(self, raw_data: Dict[str, Any]) -> bool:
        """TikTok 데이터 유효성 검증"""
        # 캡션 또는 조회수 필드 중 하나는 있어야 함
        text_fields = ("title", "video_description", "description")
        has_text = any(field in raw_data for field in text_fields)
        return has_text or "view_count" in raw_data

    def _published_at(self, raw_data: Dict[str, Any]):
        create_time = raw_data.get("create_time")
        if isinstance(create_time, (int, float)) and not isinstance(create_time, bool):
            try:
                return datetime.fromtimestamp(create_time, tz=timezone.utc).isoformat()
            except (OverflowError, OSError, ValueError):
                return None
        return None

    def parse_content(self, raw_data: Dict[str, Any]) -> ContentItem:
        """TikTok 비디오 정보 파싱"""
        title = raw_data.get("title") or ""
        description = raw_data.get("video_description")
        if description is None:
            description = raw_data.get("description")
        description = description or ""

        return ContentItem(
            content_id=str(raw_data.get("id") or ""),
            platform=self.platform,
            view_count=raw_data.get("view_count"),
            title=title,
            # 해시태그는 제목과 설명 양쪽에서 추출
            caption_text=description,
            published_at=self._published_at(raw_data),
            metadata={
                "like_count": raw_data.get("like_count"),
                "share_url": raw_data.get("share_url"),
            },
        )
