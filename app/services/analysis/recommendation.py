"""
Hashtag Recommendation Builder
랭킹 결과를 5슬롯 해시태그 추천으로 변환

TikTok:  브랜드 태그 1 + 상위 성과 태그 2 + 트렌드 슬롯
YouTube: 상위 성과 키워드 3 + 트렌드 슬롯
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from app.data_pipeline.domain.models import PlatformType, RankedRecord

DEFAULT_BRAND_TAG = "#velvetorionx"
MAX_TAGS = 5

TREND_POOL: Dict[PlatformType, List[str]] = {
    PlatformType.TIKTOK: [
        "#fyp",
        "#shorts",
        "#kpop",
        "#kpopdance",
        "#outfitinspo",
        "#smallcreator",
        "#pov",
    ],
    PlatformType.YOUTUBE: [
        "#shorts",
        "#kpop",
        "#kpopdance",
        "#outfitinspo",
        "#originalsong",
        "#studiovlog",
    ],
}

TOP_PERFORMERS = {
    PlatformType.TIKTOK: 2,
    PlatformType.YOUTUBE: 3,
}

EXPLANATIONS = {
    PlatformType.TIKTOK: (
        "1 brand + 2 of your top performers + trend/experiment slots. "
        "Swap trend tags based on today's video."
    ),
    PlatformType.YOUTUBE: (
        "Mix your best-performing video tags with a couple of current trend tags "
        "when you write title/description."
    ),
}


@dataclass
class HashtagRecommendation:
    """해시태그 추천 결과"""
    platform: PlatformType
    tags: List[str] = field(default_factory=list)
    explanation: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "platform": self.platform.value,
            "tags": list(self.tags),
            "explanation": self.explanation,
        }


def _record_label(record: Union[RankedRecord, Mapping]) -> str:
    if isinstance(record, RankedRecord):
        return record.label
    return record.get("label") or record.get("tag") or record.get("keyword") or ""


def _record_lift(record: Union[RankedRecord, Mapping]) -> float:
    if isinstance(record, RankedRecord):
        return record.lift
    try:
        return float(record.get("lift") or 0)
    except (TypeError, ValueError):
        return 0.0


def build_recommendation(
    records: Sequence[Union[RankedRecord, Mapping]],
    platform: PlatformType,
    brand_tag: Optional[str] = None,
    trend_pool: Optional[Sequence[str]] = None,
    max_tags: int = MAX_TAGS,
) -> HashtagRecommendation:
    """
    추천 태그 세트 생성

    Args:
        records: 랭킹 레코드 (RankedRecord 또는 {label|tag|keyword, lift} 딕셔너리)
        platform: tiktok / youtube
        brand_tag: 첫 슬롯에 고정할 브랜드 태그 (TikTok은 미지정 시 기본값)
        trend_pool: 트렌드 태그 풀 (미지정 시 플랫폼 기본 풀)
        max_tags: 최대 태그 수

    Returns:
        HashtagRecommendation
    """
    platform = PlatformType(platform)
    if brand_tag is None and platform == PlatformType.TIKTOK:
        brand_tag = DEFAULT_BRAND_TAG
    pool = list(trend_pool) if trend_pool is not None else TREND_POOL.get(platform, [])

    chosen: List[str] = []
    seen = set()

    def take(tag: str) -> bool:
        key = tag.lower()
        if not tag or key in seen or len(chosen) >= max_tags:
            return False
        seen.add(key)
        chosen.append(tag)
        return True

    if brand_tag:
        take(brand_tag)

    # lift 내림차순 (동률은 랭킹 순서 유지)
    ordered = sorted(records, key=lambda r: -_record_lift(r))
    performers = TOP_PERFORMERS.get(platform, 2)
    picked = 0
    for record in ordered:
        if picked >= performers:
            break
        if take(_record_label(record)):
            picked += 1

    for tag in pool:
        if len(chosen) >= max_tags:
            break
        take(tag)

    return HashtagRecommendation(
        platform=platform,
        tags=chosen,
        explanation=EXPLANATIONS.get(platform, ""),
    )
