"""
Unit Tests for Hashtag Recommendation
5슬롯 추천 조합 테스트

Run: pytest tests/unit/test_recommendation.py -v
"""

from app.data_pipeline.domain.models import PlatformType, RankedRecord
from app.services.analysis.recommendation import (
    DEFAULT_BRAND_TAG,
    MAX_TAGS,
    TREND_POOL,
    build_recommendation,
)


def _records(*pairs):
    return [RankedRecord(label=label, lift=lift) for label, lift in pairs]


class TestTikTokRecommendation:
    """TikTok: 브랜드 1 + 상위 2 + 트렌드"""

    def test_brand_first_then_top_lift(self):
        records = _records(("#kpop", 1.9), ("#VelvetOrionX", 3.0), ("#studio", 2.86), ("#dance", 0.95))

        rec = build_recommendation(records, PlatformType.TIKTOK)

        assert rec.tags == [DEFAULT_BRAND_TAG, "#studio", "#kpop", "#fyp", "#shorts"]
        assert len(rec.tags) == MAX_TAGS

    def test_empty_records_fill_from_trends(self):
        rec = build_recommendation([], PlatformType.TIKTOK)

        assert rec.tags[0] == DEFAULT_BRAND_TAG
        assert rec.tags[1:] == TREND_POOL[PlatformType.TIKTOK][:4]

    def test_trend_duplicates_skipped(self):
        records = _records(("#fyp", 5.0), ("#shorts", 4.0))

        rec = build_recommendation(records, PlatformType.TIKTOK)

        assert rec.tags == [DEFAULT_BRAND_TAG, "#fyp", "#shorts", "#kpop", "#kpopdance"]
        assert len(set(rec.tags)) == len(rec.tags)

    def test_custom_brand_and_pool(self):
        records = [{"tag": "#a", "lift": 1.2}, {"tag": "#b", "lift": 2.0}]

        rec = build_recommendation(
            records, PlatformType.TIKTOK, brand_tag="#mine", trend_pool=["#t1"],
        )

        assert rec.tags == ["#mine", "#b", "#a", "#t1"]

    def test_to_dict(self):
        rec = build_recommendation([], PlatformType.TIKTOK)
        data = rec.to_dict()

        assert data["platform"] == "tiktok"
        assert data["tags"] == rec.tags
        assert "brand" in data["explanation"]


class TestYouTubeRecommendation:
    """YouTube: 상위 3 + 트렌드, 브랜드 태그 없음"""

    def test_top_three_then_trends(self):
        records = _records(("vlog", 2.5), ("studio", 2.5), ("cover", 0.5), ("kpop", 0.5))

        rec = build_recommendation(records, PlatformType.YOUTUBE)

        assert rec.tags == ["vlog", "studio", "cover", "#shorts", "#kpop"]

    def test_never_exceeds_max(self):
        records = _records(*[(f"k{i}", float(i)) for i in range(10)])

        rec = build_recommendation(records, "youtube")

        assert len(rec.tags) == MAX_TAGS
        assert rec.tags[:3] == ["k9", "k8", "k7"]
