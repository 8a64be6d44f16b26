"""
Momentum Milestones
수익화 이전 단계의 성장 마일스톤 판정
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Sequence

Card = Mapping[str, Any]


def _metric(card: Card, key: str) -> float:
    value = (card.get("metrics") or {}).get(key)
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0.0


def _hashtags(card: Card) -> list:
    hashtags = card.get("hashtags")
    return hashtags if isinstance(hashtags, list) else []


def _max_lift(card: Card) -> float:
    lifts = []
    for tag in _hashtags(card):
        try:
            lifts.append(float(tag.get("lift") or 0))
        except (TypeError, ValueError, AttributeError):
            continue
    return max(lifts, default=0.0)


@dataclass(frozen=True)
class Milestone:
    """마일스톤 정의"""
    id: str
    platform: str
    label: str
    check: Callable[[Card], bool]

    def is_reached(self, cards: Sequence[Card]) -> bool:
        return any(
            card.get("platform") == self.platform and self.check(card)
            for card in cards
        )


MILESTONES: List[Milestone] = [
    Milestone("tiktok-1k", "TikTok", "1K followers",
              lambda c: _metric(c, "followerCount") >= 1000),
    Milestone("tiktok-10k-views", "TikTok", "Top video 10K+ views",
              lambda c: _metric(c, "topPostViews") >= 10000),
    Milestone("tiktok-2x-hashtag", "TikTok", "A hashtag with 2×+ lift",
              lambda c: _max_lift(c) >= 2),
    Milestone("yt-100-subs", "YouTube", "100 subscribers",
              lambda c: _metric(c, "subscriberCount") >= 100),
    Milestone("yt-5k-views", "YouTube", "5K+ channel views",
              lambda c: _metric(c, "topPostViews") >= 5000),
    Milestone("yt-top-tags", "YouTube", "3+ top-performing tags",
              lambda c: len(_hashtags(c)) >= 3),
    Milestone("spotify-top-50", "Spotify", "Top track 50+ popularity",
              lambda c: _metric(c, "topTrackPopularity") >= 50),
    Milestone("spotify-catalog", "Spotify", "Music in catalog",
              lambda c: len(_hashtags(c)) > 0),
]


@dataclass
class MilestoneReport:
    """마일스톤 판정 결과"""
    items: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def achieved(self) -> int:
        return sum(1 for item in self.items if item["done"])

    @property
    def total(self) -> int:
        return len(self.items)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "achieved": self.achieved,
            "total": self.total,
            "items": self.items,
        }


def evaluate_milestones(cards: Sequence[Card]) -> MilestoneReport:
    """
    플랫폼 카드 목록에 대해 마일스톤 달성 여부 계산

    Args:
        cards: summary 빌더가 만든 플랫폼 카드 리스트

    Returns:
        MilestoneReport
    """
    return MilestoneReport(items=[
        {
            "id": milestone.id,
            "label": milestone.label,
            "platform": milestone.platform,
            "done": milestone.is_reached(cards),
        }
        for milestone in MILESTONES
    ])
