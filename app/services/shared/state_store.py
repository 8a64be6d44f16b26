"""
Expiring State Store
OAuth state 토큰 등 단기 값을 TTL 기반으로 보관하는 인메모리 저장소

모든 접근 시 만료 항목을 정리(prune)한다.
단일 프로세스 전용이며 다중 인스턴스 배포에서는 Redis 등으로 교체해야 한다.
"""

import secrets
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional
import logging

logger = logging.getLogger(__name__)


@dataclass
class StateEntry:
    """저장 항목"""
    value: Any
    created_at: float


class ExpiringStateStore:
    """
    TTL 만료 맵

    Usage:
        store = ExpiringStateStore(ttl_seconds=600)
        token = store.issue({"user_id": "u1"})
        store.consume(token)  # -> {"user_id": "u1"}, 이후 None
    """

    def __init__(
        self,
        ttl_seconds: float = 600,
        clock: Callable[[], float] = time.monotonic,
        token_bytes: int = 24,
    ):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._token_bytes = token_bytes
        self._entries: Dict[str, StateEntry] = {}
        self._lock = threading.Lock()

    def _is_expired(self, entry: StateEntry, now: float) -> bool:
        return now - entry.created_at > self.ttl_seconds

    def _prune_locked(self, now: float) -> int:
        expired = [key for key, entry in self._entries.items() if self._is_expired(entry, now)]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def prune(self) -> int:
        """만료 항목 정리, 삭제 개수 반환"""
        with self._lock:
            removed = self._prune_locked(self._clock())
        if removed:
            logger.debug(f"Pruned {removed} expired state entries")
        return removed

    def put(self, key: str, value: Any) -> None:
        with self._lock:
            now = self._clock()
            self._prune_locked(now)
            self._entries[key] = StateEntry(value=value, created_at=now)

    def issue(self, value: Any) -> str:
        """새 불투명 토큰 발급 후 저장"""
        token = secrets.token_hex(self._token_bytes)
        self.put(token, value)
        return token

    def get(self, key: Optional[str]) -> Any:
        """값 조회 (삭제하지 않음). 없거나 만료면 None"""
        if not key:
            return None
        with self._lock:
            self._prune_locked(self._clock())
            entry = self._entries.get(key)
            return entry.value if entry else None

    def consume(self, key: Optional[str]) -> Any:
        """값 조회 후 삭제 (1회용). 없거나 만료면 None"""
        if not key:
            return None
        with self._lock:
            now = self._clock()
            self._prune_locked(now)
            entry = self._entries.pop(key, None)
            if entry is None or self._is_expired(entry, now):
                return None
            return entry.value

    def __len__(self) -> int:
        with self._lock:
            self._prune_locked(self._clock())
            return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None
