"""
Ad Spend Simulator
과거 ROAS 기반 단순 선형 매출 예측
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

DEFAULT_HISTORICAL_ROAS = 3.5
ROAS_DISCOUNT = 0.7   # 추가 지출은 과거 ROAS보다 효율이 낮다고 가정
MIN_ROAS = 0.8


@dataclass(frozen=True)
class SimulationResult:
    """시뮬레이션 결과"""
    projected_revenue: float
    projected_lift: float
    effective_roas: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "projectedRevenue": self.projected_revenue,
            "projectedLift": self.projected_lift,
            "effectiveRoas": self.effective_roas,
        }


def simulate_ad_spend(
    base_revenue: float,
    base_ad_spend: float,
    extra_spend: float,
    historical_roas: Optional[float] = DEFAULT_HISTORICAL_ROAS,
) -> SimulationResult:
    """
    추가 광고비 투입 효과 예측

    historical_roas가 0/None이면 base_revenue / base_ad_spend로 추정한다.
    """
    roas = historical_roas or base_revenue / max(base_ad_spend, 1)
    projected_lift = extra_spend * max(roas * ROAS_DISCOUNT, MIN_ROAS)
    projected_revenue = base_revenue + projected_lift
    return SimulationResult(
        projected_revenue=projected_revenue,
        projected_lift=projected_lift,
        effective_roas=projected_revenue / max(base_ad_spend + extra_spend, 1),
    )
