"""
Label Extractors
게시물 한 건에서 라벨 후보(해시태그/키워드)를 추출

- TikTok: 제목 + 캡션 텍스트에서 #토큰 추출 (대소문자 유지)
- YouTube: 영상 태그 목록 정규화 (소문자)
"""

import re
from typing import Callable, Iterable, List

from app.data_pipeline.domain.models import ContentItem, LabelMode

# '#' 뒤에 유니코드 문자/숫자/밑줄이 1개 이상
HASHTAG_PATTERN = re.compile(r"#\w+")


def _unique(values: Iterable[str]) -> List[str]:
    """첫 등장 순서를 유지하며 중복 제거"""
    seen = set()
    result = []
    for value in values:
        if value in seen:
            continue
        seen.add(value)
        result.append(value)
    return result


def _item_text(item: ContentItem) -> str:
    return f"{item.title or ''} {item.caption_text or ''}"


def extract_hashtags(item: ContentItem) -> List[str]:
    """
    캡션 텍스트에서 해시태그 추출

    같은 게시물 안에서 반복된 태그는 한 번만 반환한다 (대소문자 구분).

    Args:
        item: 콘텐츠

    Returns:
        '#'으로 시작하는 해시태그 리스트
    """
    matches = (match.strip() for match in HASHTAG_PATTERN.findall(_item_text(item)))
    tags = []
    for tag in _unique(m for m in matches if m):
        tags.append(tag if tag.startswith("#") else f"#{tag}")
    # 재접두 후 동일해진 태그 제거
    return _unique(tags)


def extract_keywords(item: ContentItem) -> List[str]:
    """
    영상 태그 목록을 키워드로 정규화

    None/빈 값은 버리고, 문자열화 + strip + 소문자 변환 후 중복 제거.
    """
    keywords = []
    for raw in item.labels or []:
        if raw is None:
            continue
        keyword = str(raw).strip().lower()
        if keyword:
            keywords.append(keyword)
    return _unique(keywords)


_EXTRACTORS = {
    LabelMode.HASHTAG: extract_hashtags,
    LabelMode.KEYWORD: extract_keywords,
}


def get_extractor(mode: LabelMode) -> Callable[[ContentItem], List[str]]:
    """모드별 추출 함수 반환"""
    try:
        return _EXTRACTORS[LabelMode(mode)]
    except (KeyError, ValueError):
        raise ValueError(f"Unsupported label mode: {mode!r}")
