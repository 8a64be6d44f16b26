"""
Platform Summary Cards
플랫폼별 실데이터로 대시보드 요약 카드 생성 (순수 함수)

수익/참여율은 공개 통계 기반의 단순 추정치이다.
"""

from typing import Any, Dict, List, Optional, Sequence

from app.data_pipeline.domain.models import ContentItem, LabelMode
from app.services.analysis.label_performance import (
    LabelPerformanceConfig,
    summarize_labels,
)
from app.services.analysis.numeric import coerce_view_count, is_finite, round_half_up

TOP_POST_TITLE_LIMIT = 30

ENGAGEMENT_TRENDS = {
    "TikTok": [3.2, 3.8, 4.4, 4.1, 4.9, 5.3, 4.7],
    "YouTube": [2.8, 3.1, 3.6, 3.9, 4.2, 4.5, 4.9],
    "Spotify": [3.0, 3.2, 3.6, 3.9, 4.4, 4.7, 4.3],
}


def _views(item: ContentItem) -> float:
    views = coerce_view_count(item.view_count)
    return views if is_finite(views) else 0.0


def _truncate(text: str, limit: int = TOP_POST_TITLE_LIMIT) -> str:
    return f"{text[:limit]}…" if len(text) > limit else text


def _card(
    platform: str,
    handle: str,
    metrics: Dict[str, Any],
    hashtags: List[Dict[str, Any]],
) -> Dict[str, Any]:
    return {
        "platform": platform,
        "handle": handle,
        "live": True,
        "metrics": {
            "revenueChange": 0,
            "engagementChange": 0,
            **metrics,
        },
        "hashtags": hashtags,
        "engagementTrend": list(ENGAGEMENT_TRENDS.get(platform, [])),
    }


# ============================================================
# TikTok
# ============================================================

def build_tiktok_card(
    user_info: Dict[str, Any],
    videos: Sequence[ContentItem] = (),
    fallback_handle: str = "",
    config: Optional[LabelPerformanceConfig] = None,
) -> Dict[str, Any]:
    """
    TikTok 요약 카드

    Args:
        user_info: fetch_user_info 결과
        videos: 최근 비디오 ContentItem 목록
        fallback_handle: 저장된 계정 handle
        config: 라벨 성과 설정 (요약 top N, lift 하한)
    """
    username = user_info.get("username") or ""
    display_name = user_info.get("display_name") or ""
    followers = user_info.get("follower_count") or 0
    likes = user_info.get("likes_count") or 0
    video_count = user_info.get("video_count") or 0

    approx_revenue = round_half_up(followers / 1000 * 4 + likes / 5000)
    if video_count and likes:
        engagement = min(likes / (video_count * 100) * 10, 15)
    else:
        engagement = 2.5

    videos = list(videos)
    top_video = None
    for video in videos:
        if top_video is None or _views(video) > _views(top_video):
            top_video = video

    if top_video is not None:
        top_post_views = round_half_up(_views(top_video))
        if top_video.title:
            top_post_label = f'Live · "{_truncate(top_video.title)}"'
        else:
            top_post_label = f"Live · Top post ({display_name or username})"
    else:
        if video_count > 0:
            top_post_views = round_half_up(likes / max(video_count, 1))
        else:
            top_post_views = followers
        top_post_label = f'Live · "{display_name or username}"'

    hashtags = summarize_labels(videos, LabelMode.HASHTAG, config=config)
    if not hashtags:
        hashtags = [
            {"tag": "#followers", "lift": max(followers / 1000, 0.1)},
            {"tag": "#likes", "lift": max(likes / 10000, 0.1)},
            {"tag": "#videos", "lift": max(video_count / 20, 0.1)},
            {"tag": "#tiktokgrowth", "lift": 1.5},
        ]

    return _card(
        "TikTok",
        username or fallback_handle.lstrip("@") or display_name,
        {
            "revenue": max(approx_revenue, 0),
            "engagement": round_half_up(engagement, 1),
            "topPostViews": top_post_views,
            "topPostLabel": top_post_label,
            "followerCount": followers,
        },
        hashtags,
    )


# ============================================================
# YouTube
# ============================================================

def build_youtube_card(
    channel: Dict[str, Any],
    handle: str = "",
    videos: Sequence[ContentItem] = (),
    config: Optional[LabelPerformanceConfig] = None,
) -> Dict[str, Any]:
    """
    YouTube 요약 카드

    영상 태그가 있으면 학습된 키워드 성과를, 없으면 채널 통계 기반 태그를 사용한다.
    """
    subscribers = channel.get("subscribers") or 0
    views = channel.get("views") or 0
    video_count = channel.get("videos") or 0
    title = channel.get("title") or ""

    approx_revenue = views / 1000 * 3
    engagement = subscribers / video_count * 0.1 if subscribers and video_count else 2.5

    hashtags = summarize_labels(list(videos), LabelMode.KEYWORD, config=config)
    if not hashtags:
        hashtags = [
            {"tag": "#subscribers", "lift": max(subscribers / 1000, 0.1)},
            {"tag": "#views", "lift": max(views / 100000, 0.1)},
            {"tag": "#videos", "lift": max(video_count / 50, 0.1)},
            {"tag": "#youtubegrowth", "lift": 1.5},
        ]

    return _card(
        "YouTube",
        handle.lstrip("@"),
        {
            "revenue": round_half_up(approx_revenue),
            "engagement": round_half_up(engagement, 1),
            "topPostViews": views,
            "topPostLabel": f'Total channel views · "{title}"',
            "subscriberCount": subscribers,
        },
        hashtags,
    )


# ============================================================
# Spotify
# ============================================================

def build_spotify_card(
    artist: Dict[str, Any],
    handle: str = "",
    top_tracks: Sequence[Dict[str, Any]] = (),
) -> Dict[str, Any]:
    """Spotify 요약 카드"""
    name = artist.get("name") or ""
    followers = artist.get("followers") or 0
    popularity = artist.get("popularity") or 0

    approx_revenue = round_half_up(followers / 1000 * 2 + popularity / 10)
    top_track_popularity = max(
        (track.get("popularity") or 0 for track in top_tracks), default=0
    )

    return _card(
        "Spotify",
        name or handle.lstrip("@"),
        {
            "revenue": max(approx_revenue, 0),
            "engagement": min(popularity / 10, 10),
            "topPostViews": followers,
            "topPostLabel": f'Total followers · "{name}"',
            "topTrackPopularity": top_track_popularity,
        },
        [
            {"tag": "#followers", "lift": max(followers / 1000, 0.1)},
            {"tag": "#popularity", "lift": max(popularity / 25, 0.1)},
            {"tag": "#artist", "lift": 1.5},
            {"tag": "#listentothis", "lift": 1.6},
        ],
    )
