"""
Account Registry
사용자별 연결 계정 (플랫폼, handle, OAuth 토큰) 인메모리 저장소

영속 저장소가 없는 로컬/데모 환경용이며 프로세스 재시작 시 초기화된다.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple
import threading
import logging

from app.data_pipeline.domain.models import PlatformType

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_TTL = 86400  # expires_in 누락 시 24시간


class AccountStatus(str, Enum):
    """계정 연결 상태"""
    DEMO = "demo"
    CONNECTED = "connected"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class PlatformAccount:
    """연결된 플랫폼 계정"""
    user_id: str
    platform: PlatformType
    handle: str
    status: AccountStatus = AccountStatus.DEMO
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    token_expires_at: Optional[datetime] = None
    updated_at: datetime = field(default_factory=_utcnow)

    @property
    def id(self) -> str:
        return f"{self.user_id}-{self.platform.value}"

    def to_public_dict(self) -> Dict[str, Any]:
        """토큰을 제외한 공개 필드"""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "platform": self.platform.value,
            "handle": self.handle,
            "status": self.status.value,
            "token_expires_at": self.token_expires_at.isoformat() if self.token_expires_at else None,
            "updated_at": self.updated_at.isoformat(),
        }


class AccountRegistry:
    """사용자 + 플랫폼 단위 계정 저장소 (thread-safe)"""

    def __init__(self):
        self._accounts: Dict[Tuple[str, PlatformType], PlatformAccount] = {}
        self._lock = threading.Lock()

    def upsert(
        self,
        user_id: str,
        platform: PlatformType,
        handle: str,
        status: AccountStatus = AccountStatus.DEMO,
        **tokens: Any,
    ) -> PlatformAccount:
        """계정 추가 또는 갱신 (user_id, platform 기준)"""
        platform = PlatformType(platform)
        account = PlatformAccount(
            user_id=user_id,
            platform=platform,
            handle=handle,
            status=AccountStatus(status),
            access_token=tokens.get("access_token"),
            refresh_token=tokens.get("refresh_token"),
            token_expires_at=tokens.get("token_expires_at"),
        )
        with self._lock:
            self._accounts[(user_id, platform)] = account
        logger.info(f"Account upserted: {account.id} ({account.status.value})")
        return account

    def get(self, user_id: str, platform: PlatformType) -> Optional[PlatformAccount]:
        with self._lock:
            return self._accounts.get((user_id, PlatformType(platform)))

    def list_for_user(self, user_id: str) -> List[PlatformAccount]:
        with self._lock:
            return [a for (uid, _), a in self._accounts.items() if uid == user_id]

    def update_tokens(
        self,
        user_id: str,
        platform: PlatformType,
        access_token: str,
        refresh_token: Optional[str] = None,
        expires_in: Optional[int] = None,
    ) -> Optional[PlatformAccount]:
        """토큰 갱신 결과 반영"""
        with self._lock:
            account = self._accounts.get((user_id, PlatformType(platform)))
            if account is None:
                return None
            account.access_token = access_token
            if refresh_token:
                account.refresh_token = refresh_token
            account.token_expires_at = token_expiry(expires_in)
            account.updated_at = _utcnow()
            return account

    def remove(self, user_id: str, platform: PlatformType) -> bool:
        with self._lock:
            return self._accounts.pop((user_id, PlatformType(platform)), None) is not None

    def clear(self) -> None:
        with self._lock:
            self._accounts.clear()


def token_expiry(expires_in: Optional[int]) -> datetime:
    """expires_in(초) -> 만료 시각"""
    return _utcnow() + timedelta(seconds=expires_in or DEFAULT_TOKEN_TTL)


# 싱글톤 인스턴스
_registry = AccountRegistry()


def get_account_registry() -> AccountRegistry:
    """계정 레지스트리 싱글톤"""
    return _registry
