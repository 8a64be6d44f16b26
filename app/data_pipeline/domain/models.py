"""
크리에이터 콘텐츠 데이터 모델
플랫폼별 원시 응답을 라벨 성과 분석에 필요한 공통 DTO로 추상화
"""
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List
from enum import Enum


class PlatformType(str, Enum):
    """플랫폼 타입"""
    TIKTOK = "tiktok"
    YOUTUBE = "youtube"
    SPOTIFY = "spotify"


class LabelMode(str, Enum):
    """라벨 추출 모드"""
    HASHTAG = "hashtag"   # 캡션 텍스트의 #토큰 (대소문자 구분)
    KEYWORD = "keyword"   # 영상 태그 목록 (소문자 정규화)


@dataclass
class ContentItem:
    """
    게시물/영상 한 건

    view_count는 업스트림 값 그대로 보관하고 (None, 문자열, NaN 가능)
    숫자 변환은 분석 단계에서 수행한다.
    """
    content_id: str = ""
    platform: Optional[PlatformType] = None
    view_count: Any = None
    title: str = ""
    caption_text: Optional[str] = None  # TikTok: 제목 + 설명
    labels: List[Any] = field(default_factory=list)  # YouTube: 원시 태그
    published_at: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self, include_metadata: bool = True) -> Dict[str, Any]:
        """ContentItem을 딕셔너리로 변환"""
        result = {
            "content_id": self.content_id,
            "platform": self.platform.value if self.platform else None,
            "view_count": self.view_count,
            "title": self.title,
            "caption_text": self.caption_text,
            "labels": list(self.labels),
            "published_at": self.published_at,
        }
        if include_metadata:
            result["metadata"] = self.metadata
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ContentItem':
        """
        딕셔너리에서 ContentItem 생성

        snake_case 키와 camelCase 키(viewCount, captionText, tags)를 모두 허용한다.

        Args:
            data: 콘텐츠 데이터 딕셔너리

        Returns:
            ContentItem 인스턴스
        """
        if "view_count" in data:
            view_count = data["view_count"]
        else:
            view_count = data.get("viewCount")

        caption = data.get("caption_text")
        if caption is None:
            caption = data.get("captionText")

        labels = data.get("labels")
        if labels is None:
            labels = data.get("tags")

        platform = data.get("platform")
        try:
            platform = PlatformType(platform) if platform else None
        except ValueError:
            platform = None

        return cls(
            content_id=str(data.get("content_id") or data.get("id") or ""),
            platform=platform,
            view_count=view_count,
            title=data.get("title") or "",
            caption_text=caption,
            labels=list(labels) if isinstance(labels, (list, tuple)) else [],
            published_at=data.get("published_at") or data.get("publishedAt"),
            metadata=data.get("metadata") or {},
        )


@dataclass
class LabelStat:
    """라벨별 집계값 (집계 1회 동안만 사용)"""
    label: str
    total_views: float = 0.0
    usage_count: int = 0

    @property
    def average_views(self) -> float:
        """라벨 사용 게시물의 평균 조회수"""
        return self.total_views / self.usage_count if self.usage_count > 0 else 0.0

    def add(self, views: float) -> None:
        self.total_views += views
        self.usage_count += 1


@dataclass(frozen=True)
class RankedRecord:
    """랭킹 결과 한 건"""
    label: str
    lift: float
    usage_count: int = 0
    total_views: int = 0
    average_views: int = 0

    def to_dict(self, enriched: bool = True) -> Dict[str, Any]:
        """
        RankedRecord를 딕셔너리로 변환

        Args:
            enriched: False면 요약 카드용 {label, lift}만 반환

        Returns:
            딕셔너리 형태의 랭킹 레코드
        """
        result = {
            "label": self.label,
            "lift": self.lift,
        }
        if enriched:
            result.update({
                "usageCount": self.usage_count,
                "totalViews": self.total_views,
                "averageViews": self.average_views,
            })
        return result


@dataclass
class LabelPerformance:
    """라벨 성과 분석 결과"""
    labels: List[RankedRecord] = field(default_factory=list)
    overall_average_views: float = 0.0
    mode: LabelMode = LabelMode.HASHTAG

    @property
    def is_empty(self) -> bool:
        return not self.labels

    def to_dict(self, enriched: bool = True) -> Dict[str, Any]:
        """LabelPerformance를 딕셔너리로 변환"""
        return {
            "labels": [record.to_dict(enriched=enriched) for record in self.labels],
            "overallAverageViews": self.overall_average_views,
        }
