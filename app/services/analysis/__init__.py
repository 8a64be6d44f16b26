"""
Analysis 패키지
- label_performance: 해시태그/키워드 성과(lift) 엔진
- recommendation: 5슬롯 해시태그 추천
- milestones: 성장 마일스톤
"""

from app.services.analysis.extractors import (
    HASHTAG_PATTERN,
    extract_hashtags,
    extract_keywords,
    get_extractor,
)
from app.services.analysis.label_performance import (
    LabelPerformanceConfig,
    aggregate_label_stats,
    compute_hashtag_performance,
    compute_keyword_performance,
    compute_label_performance,
    compute_lift,
    compute_overall_average,
    rank_label_stats,
    score_label,
    summarize_labels,
)
from app.services.analysis.recommendation import (
    HashtagRecommendation,
    build_recommendation,
)
from app.services.analysis.milestones import (
    MilestoneReport,
    evaluate_milestones,
)

__all__ = [
    "HASHTAG_PATTERN",
    "extract_hashtags",
    "extract_keywords",
    "get_extractor",
    "LabelPerformanceConfig",
    "aggregate_label_stats",
    "compute_hashtag_performance",
    "compute_keyword_performance",
    "compute_label_performance",
    "compute_lift",
    "compute_overall_average",
    "rank_label_stats",
    "score_label",
    "summarize_labels",
    "HashtagRecommendation",
    "build_recommendation",
    "MilestoneReport",
    "evaluate_milestones",
]
