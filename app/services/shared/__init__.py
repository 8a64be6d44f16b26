"""
공통 서비스 패키지
- 인메모리 TTL 저장소 (OAuth state)
"""

from app.services.shared.state_store import (
    ExpiringStateStore,
    StateEntry,
)

__all__ = [
    "ExpiringStateStore",
    "StateEntry",
]
