"""Platform Content Adapters"""
from .base import BaseContentAdapter
from .youtube import YouTubeAdapter
from .tiktok import TikTokAdapter

__all__ = [
    "BaseContentAdapter",
    "YouTubeAdapter",
    "TikTokAdapter",
]
