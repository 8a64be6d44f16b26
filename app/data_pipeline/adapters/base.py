"""
Base Content Adapter
모든 플랫폼 어댑터의 추상 클래스
"""
from abc import ABC, abstractmethod
from typing import List, Dict, Any, Iterable, Optional
import logging

from ..domain.models import ContentItem, PlatformType

logger = logging.getLogger(__name__)


class BaseContentAdapter(ABC):
    """플랫폼 어댑터 베이스 클래스"""

    def __init__(self, platform: PlatformType):
        self.platform = platform

    @abstractmethod
    def parse_content(self, raw_data: Dict[str, Any]) -> ContentItem:
        """원시 데이터에서 ContentItem 추출"""
        pass

    @abstractmethod
    def validate_raw_data(self, raw_data: Dict[str, Any]) -> bool:
        """원시 데이터 유효성 검증"""
        pass

    def transform(self, raw_data: Dict[str, Any]) -> ContentItem:
        """
        원시 데이터를 ContentItem으로 변환

        Raises:
            ValueError: 유효하지 않은 원시 데이터
        """
        if not isinstance(raw_data, dict) or not self.validate_raw_data(raw_data):
            raise ValueError(f"Invalid raw data for platform {self.platform.value}")
        return self.parse_content(raw_data)

    def parse_many(self, raw_items: Optional[Iterable[Dict[str, Any]]]) -> List[ContentItem]:
        """
        원시 데이터 목록 변환 (유효하지 않은 항목은 건너뜀)

        Args:
            raw_items: 업스트림 응답 항목 목록 (None이면 빈 리스트)

        Returns:
            ContentItem 리스트
        """
        items = []
        skipped = 0
        for raw in raw_items or []:
            try:
                items.append(self.transform(raw))
            except ValueError as e:
                skipped += 1
                logger.debug(f"Skipping {self.platform.value} item: {e}")

        if skipped:
            logger.info(f"{self.platform.value}: skipped {skipped} invalid items")
        return items
