"""
Simulator API
광고비 추가 투입 시 매출 예측
"""

from fastapi import APIRouter
from typing import Optional
from pydantic import BaseModel, Field

from app.services.platform.simulator import DEFAULT_HISTORICAL_ROAS, simulate_ad_spend

router = APIRouter(prefix="/simulator")


class SimulationRequest(BaseModel):
    """시뮬레이션 요청"""
    baseRevenue: float = Field(0, ge=0)
    baseAdSpend: float = Field(0, ge=0)
    extraSpend: float = Field(0, ge=0)
    historicalRoas: Optional[float] = DEFAULT_HISTORICAL_ROAS


class SimulationResponse(BaseModel):
    """시뮬레이션 응답"""
    projectedRevenue: float
    projectedLift: float
    effectiveRoas: float


@router.post("", response_model=SimulationResponse)
async def run_simulation(request: SimulationRequest):
    """선형 ROAS 기반 예측"""
    result = simulate_ad_spend(
        request.baseRevenue,
        request.baseAdSpend,
        request.extraSpend,
        request.historicalRoas,
    )
    return result.to_dict()
