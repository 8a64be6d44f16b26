"""
API v1
"""
from fastapi import APIRouter

router = APIRouter(prefix="/api")

# Sub-routers
from app.api.v1 import accounts, auth_tiktok, platforms, simulator

router.include_router(accounts.router, tags=["Accounts"])
router.include_router(auth_tiktok.router, tags=["TikTok Auth"])
router.include_router(platforms.router, tags=["Platforms"])
router.include_router(simulator.router, tags=["Simulator"])
