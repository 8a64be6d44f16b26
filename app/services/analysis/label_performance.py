"""
Label Performance Engine
크리에이터 본인 콘텐츠 이력에서 해시태그/키워드별 성과(lift)를 계산

Pipeline:
    ContentItem 리스트
      -> 기준선 (전체 평균 조회수)
      -> 집계 (라벨별 총 조회수 / 사용 횟수, 게시물당 1회)
      -> 랭킹 (총 조회수 desc, 사용 횟수 desc, top N)
      -> 점수화 (라벨 평균 / 전체 평균, 하한 적용)

모든 호출은 새 매핑을 만들어 계산하며 공유 상태가 없다.
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union

from app.data_pipeline.domain.models import (
    ContentItem,
    LabelMode,
    LabelPerformance,
    LabelStat,
    RankedRecord,
)
from app.services.analysis.extractors import get_extractor
from app.services.analysis.numeric import (
    coerce_view_count,
    is_finite,
    round_half_up,
    safe_ratio,
)

logger = logging.getLogger(__name__)

ItemLike = Union[ContentItem, Mapping]


# ============================================================
# Configuration
# ============================================================

@dataclass
class LabelPerformanceConfig:
    """라벨 성과 분석 설정"""
    lift_floor: float = 0.1
    hashtag_top_n: int = 30   # TikTok 해시태그 인텔
    keyword_top_n: int = 50   # YouTube 키워드 인텔
    summary_top_n: int = 8    # 요약 카드
    lift_digits: int = 2

    @classmethod
    def from_settings(cls) -> 'LabelPerformanceConfig':
        """전역 설정에서 로드"""
        from app.core.config import settings

        return cls(
            lift_floor=settings.LIFT_FLOOR,
            hashtag_top_n=settings.HASHTAG_TOP_N,
            keyword_top_n=settings.KEYWORD_TOP_N,
            summary_top_n=settings.SUMMARY_TOP_N,
        )

    def default_top_n(self, mode: LabelMode) -> int:
        if LabelMode(mode) == LabelMode.KEYWORD:
            return self.keyword_top_n
        return self.hashtag_top_n


# ============================================================
# Input Normalization
# ============================================================

def _normalize_items(items: Any) -> List[ContentItem]:
    """
    입력을 ContentItem 리스트로 변환

    시퀀스가 아니면 (None, str, dict, 숫자 등) 호출 계약 위반이므로 TypeError.
    """
    if isinstance(items, (str, bytes)) or not isinstance(items, Sequence):
        raise TypeError(
            f"items must be a sequence of content items, got {type(items).__name__}"
        )

    normalized = []
    for item in items:
        if isinstance(item, ContentItem):
            normalized.append(item)
        elif isinstance(item, Mapping):
            normalized.append(ContentItem.from_dict(dict(item)))
        else:
            raise TypeError(
                f"content item must be a ContentItem or mapping, got {type(item).__name__}"
            )
    return normalized


# ============================================================
# Pipeline Stages
# ============================================================

def compute_overall_average(items: Sequence[ContentItem]) -> Tuple[float, int]:
    """
    전체 평균 조회수 (기준선)

    유한하고 0 이상인 조회수를 가진 게시물만 분모에 포함한다.
    0회 게시물도 분모에 들어간다.

    Returns:
        (전체 평균, 기준선에 포함된 게시물 수)
    """
    total = 0.0
    count = 0
    for item in items:
        views = coerce_view_count(item.view_count)
        if not is_finite(views) or views < 0:
            continue
        total += views
        count += 1

    if count == 0:
        return 0.0, 0
    return total / count, count


def aggregate_label_stats(
    items: Sequence[ContentItem],
    mode: LabelMode = LabelMode.HASHTAG,
) -> Dict[str, LabelStat]:
    """
    라벨별 집계

    조회수가 유한하고 0보다 큰 게시물만 집계에 기여한다.
    한 게시물 안에서 반복된 라벨은 사용 횟수/조회수 모두 1회만 반영.

    Returns:
        라벨 -> LabelStat (첫 등장 순서 유지)
    """
    extract = get_extractor(mode)
    stats: Dict[str, LabelStat] = {}

    for item in items:
        views = coerce_view_count(item.view_count)
        if not is_finite(views) or views <= 0:
            continue

        for label in extract(item):
            stat = stats.get(label)
            if stat is None:
                stat = stats[label] = LabelStat(label=label)
            stat.add(views)

    return stats


def rank_label_stats(stats: Sequence[LabelStat], top_n: int) -> List[LabelStat]:
    """
    총 조회수 desc, 사용 횟수 desc 정렬 후 상위 top_n

    안정 정렬이므로 두 키가 모두 같으면 입력 순서를 유지한다.
    """
    ranked = sorted(stats, key=lambda s: (-s.total_views, -s.usage_count))
    return ranked[:top_n]


def compute_lift(
    average_views: float,
    overall_average_views: float,
    floor: float = 0.1,
) -> float:
    """
    라벨 평균 / 전체 평균 비율

    유한하지 않거나 0 이하인 비율, 그리고 하한보다 작은 비율은 모두 floor로 올린다.
    """
    raw_lift = safe_ratio(average_views, overall_average_views)
    lift = raw_lift if is_finite(raw_lift) and raw_lift > 0 else floor
    return max(lift, floor)


def score_label(
    stat: LabelStat,
    overall_average_views: float,
    config: LabelPerformanceConfig,
) -> RankedRecord:
    """LabelStat -> RankedRecord"""
    lift = compute_lift(stat.average_views, overall_average_views, config.lift_floor)
    return RankedRecord(
        label=stat.label,
        lift=round_half_up(lift, config.lift_digits),
        usage_count=stat.usage_count,
        total_views=round_half_up(stat.total_views),
        average_views=round_half_up(stat.average_views),
    )


# ============================================================
# Entry Point
# ============================================================

def compute_label_performance(
    items: Sequence[ItemLike],
    mode: LabelMode = LabelMode.HASHTAG,
    top_n: Optional[int] = None,
    config: Optional[LabelPerformanceConfig] = None,
) -> LabelPerformance:
    """
    라벨 성과 계산

    Args:
        items: ContentItem 또는 딕셔너리 시퀀스
        mode: hashtag (TikTok) / keyword (YouTube)
        top_n: 최대 반환 개수 (None이면 모드별 기본값)
        config: 분석 설정

    Returns:
        LabelPerformance (labels, overall_average_views)

    Raises:
        TypeError: items가 시퀀스가 아닐 때
        ValueError: top_n < 1 이거나 지원하지 않는 mode
    """
    mode = LabelMode(mode)
    config = config or LabelPerformanceConfig()
    if top_n is None:
        top_n = config.default_top_n(mode)
    if isinstance(top_n, bool) or not isinstance(top_n, int) or top_n < 1:
        raise ValueError(f"top_n must be a positive integer, got {top_n!r}")

    content_items = _normalize_items(items)

    overall_average, qualifying = compute_overall_average(content_items)
    # 조회수 합이 float 범위를 넘으면 (inf) 기준선 없음과 동일하게 처리
    if qualifying == 0 or not overall_average or not is_finite(overall_average):
        logger.debug(
            f"Label performance ({mode.value}): zero baseline, "
            f"{len(content_items)} items"
        )
        return LabelPerformance(labels=[], overall_average_views=0.0, mode=mode)

    stats = aggregate_label_stats(content_items, mode)
    ranked = rank_label_stats(list(stats.values()), top_n)
    records = [score_label(stat, overall_average, config) for stat in ranked]

    logger.debug(
        f"Label performance ({mode.value}): {len(content_items)} items, "
        f"{len(stats)} labels, baseline={overall_average:.2f}, returned={len(records)}"
    )

    return LabelPerformance(
        labels=records,
        overall_average_views=round_half_up(overall_average, 2),
        mode=mode,
    )


def compute_hashtag_performance(
    items: Sequence[ItemLike],
    top_n: Optional[int] = None,
    config: Optional[LabelPerformanceConfig] = None,
) -> LabelPerformance:
    """TikTok 해시태그 인텔 (기본 top 30)"""
    return compute_label_performance(items, LabelMode.HASHTAG, top_n, config)


def compute_keyword_performance(
    items: Sequence[ItemLike],
    top_n: Optional[int] = None,
    config: Optional[LabelPerformanceConfig] = None,
) -> LabelPerformance:
    """YouTube 키워드 인텔 (기본 top 50)"""
    return compute_label_performance(items, LabelMode.KEYWORD, top_n, config)


def summarize_labels(
    items: Sequence[ItemLike],
    mode: LabelMode = LabelMode.HASHTAG,
    top_n: Optional[int] = None,
    config: Optional[LabelPerformanceConfig] = None,
) -> List[Dict[str, Any]]:
    """
    요약 카드용 최소 레코드

    Returns:
        [{"tag": ..., "lift": ...}, ...]
    """
    config = config or LabelPerformanceConfig()
    result = compute_label_performance(
        items, mode, config.summary_top_n if top_n is None else top_n, config
    )
    return [{"tag": record.label, "lift": record.lift} for record in result.labels]
