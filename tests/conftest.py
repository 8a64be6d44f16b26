"""
Pytest Configuration and Fixtures
CreatorPulse 테스트 공통 설정

Features:
- 공통 fixture 정의
- 인메모리 저장소 초기화
- FastAPI TestClient 제공
"""

import pytest
from typing import Dict, Any, List

from app.data_pipeline.domain.models import ContentItem, PlatformType


# ============================================================
# Content Fixtures
# ============================================================

@pytest.fixture
def tiktok_items() -> List[ContentItem]:
    """테스트용 TikTok 비디오"""
    return [
        ContentItem(
            content_id="v1",
            platform=PlatformType.TIKTOK,
            view_count=1000,
            title="Dance practice",
            caption_text="New choreo #kpop #dance #kpop",
        ),
        ContentItem(
            content_id="v2",
            platform=PlatformType.TIKTOK,
            view_count=3000,
            title="Studio day #studio",
            caption_text="#kpop #fyp",
        ),
        ContentItem(
            content_id="v3",
            platform=PlatformType.TIKTOK,
            view_count=200,
            title="Outfit check",
            caption_text="#outfit",
        ),
        ContentItem(
            content_id="v4",
            platform=PlatformType.TIKTOK,
            view_count=0,
            title="Draft",
            caption_text="#kpop",
        ),
    ]


@pytest.fixture
def youtube_items() -> List[ContentItem]:
    """테스트용 YouTube 영상"""
    return [
        ContentItem(
            content_id="y1",
            platform=PlatformType.YOUTUBE,
            view_count="5000",
            title="Studio Vlog #1",
            labels=["Vlog", "studio", "vlog"],
        ),
        ContentItem(
            content_id="y2",
            platform=PlatformType.YOUTUBE,
            view_count="1000",
            title="Cover",
            labels=["Cover", " kpop "],
        ),
        ContentItem(
            content_id="y3",
            platform=PlatformType.YOUTUBE,
            view_count=None,
            title="Teaser",
            labels=["teaser"],
        ),
    ]


@pytest.fixture
def raw_tiktok_videos() -> List[Dict[str, Any]]:
    """TikTok video/list 원시 응답 항목"""
    return [
        {
            "id": "7370520570070338859",
            "title": "Certified",
            "video_description": "Certified #fyp #kpopdance",
            "view_count": 27500,
            "like_count": 3100,
            "create_time": 1716083058,
            "share_url": "https://www.tiktok.com/@user/video/7370520570070338859",
        },
        {
            "id": "7370520570070338860",
            "title": "Part 2",
            "video_description": "#kpopdance",
            "view_count": 2500,
        },
    ]


# ============================================================
# State Fixtures
# ============================================================

@pytest.fixture(autouse=True)
def reset_account_registry():
    """테스트마다 계정 레지스트리 초기화"""
    from app.services.platform.accounts import get_account_registry

    registry = get_account_registry()
    registry.clear()
    yield registry
    registry.clear()


@pytest.fixture
def client():
    """FastAPI TestClient (Rate Limit 미들웨어 포함)"""
    from fastapi.testclient import TestClient
    from app.main import app

    with TestClient(app) as test_client:
        yield test_client
