"""
CreatorPulse - Content Data Pipeline
플랫폼 원시 응답 -> ContentItem 변환

Usage:
    from app.data_pipeline import TikTokAdapter

    items = TikTokAdapter().parse_many(raw_videos)
"""

# Domain Models
from .domain.models import (
    PlatformType,
    LabelMode,
    ContentItem,
    LabelStat,
    RankedRecord,
    LabelPerformance,
)

# Adapters
from .adapters import (
    BaseContentAdapter,
    YouTubeAdapter,
    TikTokAdapter,
)

__all__ = [
    "PlatformType",
    "LabelMode",
    "ContentItem",
    "LabelStat",
    "RankedRecord",
    "LabelPerformance",
    "BaseContentAdapter",
    "YouTubeAdapter",
    "TikTokAdapter",
]
