"""
Accounts API
사용자 연결 계정 조회 / 등록
"""

from fastapi import APIRouter, Depends, HTTPException
from typing import Optional
from pydantic import BaseModel
import logging

from app.core.auth import get_current_user_id
from app.core.security import sanitize_string
from app.data_pipeline.domain.models import PlatformType
from app.services.platform.accounts import AccountStatus, get_account_registry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/accounts")


class AccountRequest(BaseModel):
    """계정 등록 요청"""
    platform: Optional[str] = None
    handle: Optional[str] = None
    mode: str = "demo"


@router.get("")
async def list_accounts(user_id: str = Depends(get_current_user_id)):
    """현재 사용자의 연결 계정 목록"""
    accounts = get_account_registry().list_for_user(user_id)
    return {"accounts": [account.to_public_dict() for account in accounts]}


@router.post("", status_code=201)
async def save_account(
    request: AccountRequest,
    user_id: str = Depends(get_current_user_id),
):
    """
    계정 추가 또는 갱신

    handle 기반 연결 (YouTube / Spotify, TikTok 데모 모드).
    TikTok 실계정 연결은 /auth/tiktok OAuth 흐름을 사용한다.
    """
    handle = sanitize_string(request.handle or "", max_length=200)
    if not request.platform or not handle:
        raise HTTPException(status_code=400, detail="platform and handle are required")

    try:
        platform = PlatformType(request.platform.strip().lower())
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Unsupported platform: {request.platform}")

    status = AccountStatus.DEMO if request.mode == "demo" else AccountStatus.CONNECTED
    account = get_account_registry().upsert(user_id, platform, handle, status)
    return {"account": account.to_public_dict()}
