"""
Platforms API
연결된 플랫폼의 요약 카드와 해시태그/키워드 성과 인텔 엔드포인트

업스트림 API 실패는 빈 결과로 처리하며 5xx로 전파하지 않는다.
"""

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from typing import Optional, List, Dict, Any, Tuple
from pydantic import BaseModel, Field
import httpx
import logging

from app.core.auth import get_current_user_id
from app.core.config import settings
from app.data_pipeline.domain.models import ContentItem, LabelMode, PlatformType
from app.services.analysis.label_performance import (
    LabelPerformanceConfig,
    compute_label_performance,
)
from app.services.analysis.milestones import evaluate_milestones
from app.services.analysis.recommendation import build_recommendation
from app.services.platform import spotify, summary, tiktok, youtube
from app.services.platform.accounts import get_account_registry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/platforms")

UPSTREAM_ERRORS = (httpx.HTTPError, ValueError)


# ============================================================
# Response Models
# ============================================================

class HashtagIntel(BaseModel):
    """해시태그 성과"""
    tag: str
    lift: float
    uses: int
    totalViews: int
    averageViews: int


class KeywordIntel(BaseModel):
    """키워드 성과"""
    keyword: str
    lift: float
    uses: int
    totalViews: int
    averageViews: int


class Recommendation(BaseModel):
    """추천 태그 세트"""
    tags: List[str] = []
    explanation: str = ""


class TikTokHashtagIntelResponse(BaseModel):
    """TikTok 해시태그 인텔 응답"""
    brandTag: str
    hashtags: List[HashtagIntel] = []
    overallAverageViews: float = 0
    recommendation: Recommendation


class YouTubeKeywordIntelResponse(BaseModel):
    """YouTube 키워드 인텔 응답"""
    keywords: List[KeywordIntel] = []
    overallAverageViews: float = 0
    recommendation: Recommendation


class AnalyzeRequest(BaseModel):
    """콘텐츠 목록 직접 분석 요청"""
    items: List[Dict[str, Any]] = Field(default_factory=list)
    topN: Optional[int] = Field(None, ge=1, le=100, description="최대 라벨 수")


# ============================================================
# Data Loading
# ============================================================

def _config() -> LabelPerformanceConfig:
    return LabelPerformanceConfig.from_settings()


async def _load_tiktok(user_id: str) -> Tuple[Optional[Dict[str, Any]], Optional[str], str]:
    """
    TikTok 사용자 정보 조회 (실패 시 refresh_token으로 1회 갱신)

    Returns:
        (user_info, 유효한 access_token, 저장된 handle)
    """
    registry = get_account_registry()
    account = registry.get(user_id, PlatformType.TIKTOK)
    if account is None or not account.access_token:
        return None, None, account.handle if account else ""

    access_token = account.access_token
    user_info = None
    try:
        user_info = await tiktok.fetch_user_info(access_token)
    except UPSTREAM_ERRORS as e:
        logger.error(f"TikTok API error: {e}")

    if user_info is None and account.refresh_token and settings.TIKTOK_CLIENT_KEY and settings.TIKTOK_CLIENT_SECRET:
        try:
            refreshed = await tiktok.refresh_access_token(
                account.refresh_token,
                settings.TIKTOK_CLIENT_KEY,
                settings.TIKTOK_CLIENT_SECRET,
            )
            if refreshed:
                registry.update_tokens(
                    user_id,
                    PlatformType.TIKTOK,
                    refreshed["access_token"],
                    refreshed.get("refresh_token"),
                    refreshed.get("expires_in"),
                )
                access_token = refreshed["access_token"]
                user_info = await tiktok.fetch_user_info(access_token)
        except UPSTREAM_ERRORS as e:
            logger.error(f"TikTok token refresh failed: {e}")

    if user_info is None:
        return None, None, account.handle
    return user_info, access_token, account.handle


async def _load_youtube(user_id: str, with_videos: bool = True) -> Tuple[Optional[Dict[str, Any]], List[ContentItem], str]:
    """
    YouTube 채널 통계 + 최근 영상 조회

    Returns:
        (channel, ContentItem 리스트, 저장된 handle)
    """
    account = get_account_registry().get(user_id, PlatformType.YOUTUBE)
    handle = account.handle if account else ""
    api_key = settings.YOUTUBE_API_KEY
    if not api_key or not handle:
        return None, [], handle

    try:
        channel = await youtube.fetch_channel_stats_by_handle(handle, api_key)
    except UPSTREAM_ERRORS as e:
        logger.error(f"YouTube API error: {e}")
        return None, [], handle

    if not channel:
        logger.warning(f"YouTube API: no channel found for handle: {handle}")
        return None, [], handle

    items = []
    if with_videos:
        items = await youtube.fetch_content_items(channel.get("id"), api_key)
    return channel, items, handle


async def _load_spotify(user_id: str) -> Optional[Dict[str, Any]]:
    """Spotify 아티스트 카드"""
    account = get_account_registry().get(user_id, PlatformType.SPOTIFY)
    client_id = settings.SPOTIFY_CLIENT_ID
    client_secret = settings.SPOTIFY_CLIENT_SECRET
    if account is None or not account.handle or not client_id or not client_secret:
        return None

    try:
        artist = await spotify.fetch_artist_stats(account.handle, client_id, client_secret)
        if not artist:
            logger.warning(f"Spotify API: no artist found for handle: {account.handle}")
            return None
        tracks = await spotify.fetch_artist_top_tracks(account.handle, client_id, client_secret)
    except UPSTREAM_ERRORS as e:
        logger.error(f"Spotify API error: {e}")
        return None

    return summary.build_spotify_card(artist, account.handle, tracks)


# ============================================================
# API Endpoints
# ============================================================

@router.get("/summary")
async def get_platform_summary(user_id: str = Depends(get_current_user_id)):
    """
    연결된 플랫폼 요약 카드

    실데이터가 있는 플랫폼만 반환한다 (데모/하드코딩 값 없음).

    Returns:
        {"platforms": [...], "milestones": {...}}
    """
    config = _config()
    platforms = []

    user_info, access_token, tiktok_handle = await _load_tiktok(user_id)
    if user_info:
        videos = await tiktok.fetch_content_items(access_token)
        platforms.append(summary.build_tiktok_card(user_info, videos, tiktok_handle, config))

    channel, youtube_items, youtube_handle = await _load_youtube(user_id)
    if channel:
        platforms.append(summary.build_youtube_card(channel, youtube_handle, youtube_items, config))

    spotify_card = await _load_spotify(user_id)
    if spotify_card:
        platforms.append(spotify_card)

    return {
        "platforms": platforms,
        "milestones": evaluate_milestones(platforms).to_dict(),
    }


@router.get("/tiktok/hashtags", response_model=TikTokHashtagIntelResponse)
async def get_tiktok_hashtag_intel(
    top_n: Optional[int] = Query(None, ge=1, le=100, description="최대 해시태그 수"),
    user_id: str = Depends(get_current_user_id),
):
    """
    TikTok 해시태그 성과

    본인 비디오 캡션의 해시태그별 평균 조회수를 전체 평균과 비교한 lift.
    """
    config = _config()
    items: List[ContentItem] = []

    _, access_token, _ = await _load_tiktok(user_id)
    if access_token:
        items = await tiktok.fetch_content_items(access_token)

    result = compute_label_performance(items, LabelMode.HASHTAG, top_n or config.hashtag_top_n, config)
    brand_tag = settings.TIKTOK_BRAND_TAG
    recommendation = build_recommendation(result.labels, PlatformType.TIKTOK, brand_tag=brand_tag)

    return {
        "brandTag": brand_tag,
        "hashtags": [
            {
                "tag": record.label,
                "lift": record.lift,
                "uses": record.usage_count,
                "totalViews": record.total_views,
                "averageViews": record.average_views,
            }
            for record in result.labels
        ],
        "overallAverageViews": result.overall_average_views,
        "recommendation": {
            "tags": recommendation.tags,
            "explanation": recommendation.explanation,
        },
    }


@router.get("/youtube/keywords", response_model=YouTubeKeywordIntelResponse)
async def get_youtube_keyword_intel(
    top_n: Optional[int] = Query(None, ge=1, le=100, description="최대 키워드 수"),
    user_id: str = Depends(get_current_user_id),
):
    """
    YouTube 키워드 성과

    본인 영상 태그(소문자 정규화)별 평균 조회수를 전체 평균과 비교한 lift.
    """
    config = _config()
    _, items, _ = await _load_youtube(user_id)

    result = compute_label_performance(items, LabelMode.KEYWORD, top_n or config.keyword_top_n, config)
    recommendation = build_recommendation(result.labels, PlatformType.YOUTUBE)

    return {
        "keywords": [
            {
                "keyword": record.label,
                "lift": record.lift,
                "uses": record.usage_count,
                "totalViews": record.total_views,
                "averageViews": record.average_views,
            }
            for record in result.labels
        ],
        "overallAverageViews": result.overall_average_views,
        "recommendation": {
            "tags": recommendation.tags,
            "explanation": recommendation.explanation,
        },
    }


@router.post("/{mode}/analyze")
async def analyze_content(mode: LabelMode, request: AnalyzeRequest = Body(...)):
    """
    업로드된 콘텐츠 목록 직접 분석 (업스트림 조회 없음)

    Args:
        mode: hashtag / keyword
        request: {"items": [...], "topN": 10}

    Returns:
        {"mode", "labels", "overallAverageViews", "recommendation"}
    """
    config = _config()
    try:
        result = compute_label_performance(
            request.items,
            mode,
            request.topN or config.default_top_n(mode),
            config,
        )
    except (TypeError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))

    platform = PlatformType.TIKTOK if mode == LabelMode.HASHTAG else PlatformType.YOUTUBE
    brand_tag = settings.TIKTOK_BRAND_TAG if platform == PlatformType.TIKTOK else None
    recommendation = build_recommendation(result.labels, platform, brand_tag=brand_tag)

    return {
        "mode": mode.value,
        **result.to_dict(enriched=True),
        "recommendation": recommendation.to_dict(),
    }
