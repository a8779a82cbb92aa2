# app/routers/plan.py
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, model_validator
from pydantic_core import PydanticCustomError

from app.deps.engines import get_ticker_engine
from app.planner.allocation import AllocationResult
from app.planner.engine import PortfolioProjection, ProjectionEngine, risk_tier_from_score
from app.planner.projection import MonthlyContributionResult
from app.planner.rates import percent_to_decimal

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/plan", tags=["plan"])


class PlanRequest(BaseModel):
    amount: float = Field(..., gt=0, strict=True, allow_inf_nan=False)
    riskScore: int = Field(..., ge=1, le=10, strict=True)

    # Monthly plan: all three or none
    monthlyContribution: Optional[float] = Field(None, gt=0, strict=True, allow_inf_nan=False)
    expectedReturn: Optional[float] = Field(None, ge=0, le=100, strict=True, allow_inf_nan=False)
    timeHorizon: Optional[int] = Field(None, ge=1, le=50, strict=True)

    @model_validator(mode="after")
    def check_monthly_plan_complete(self) -> "PlanRequest":
        provided = [
            v is not None
            for v in (self.monthlyContribution, self.expectedReturn, self.timeHorizon)
        ]
        if any(provided) and not all(provided):
            raise PydanticCustomError(
                "incomplete_monthly_plan",
                "monthlyContribution, expectedReturn and timeHorizon must be provided together",
            )
        return self

    @property
    def has_monthly_plan(self) -> bool:
        return self.monthlyContribution is not None


def _allocation_to_dict(a: AllocationResult) -> Dict[str, Any]:
    return {
        "ticker": a.label,
        "percentage": a.weight,
        "dollarAmount": a.dollar_amount,
    }


def _monthly_to_dict(m: MonthlyContributionResult) -> Dict[str, Any]:
    return {
        "finalValue": m.final_value,
        "totalContributions": m.total_contributions,
        "totalGrowth": m.total_growth,
        "yearlyProjections": [
            {
                "year": p.year,
                "value": p.value,
                "contributions": p.contributions,
                "growth": p.growth,
            }
            for p in m.yearly_projections
        ],
    }


def plan_to_dict(
    projection: PortfolioProjection,
    monthly: Optional[MonthlyContributionResult] = None,
) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "allocations": [_allocation_to_dict(a) for a in projection.initial_allocations],
        "expectedReturns": {str(p.year): p.total_value for p in projection.projections},
    }
    if monthly is not None:
        out["monthlyContribution"] = _monthly_to_dict(monthly)
    return out


@router.post("")
def create_plan(
    req: PlanRequest,
    engine: ProjectionEngine = Depends(get_ticker_engine),
):
    tier = risk_tier_from_score(req.riskScore)

    # 1) Allocation + weighted-rate projections (always all horizons)
    projection = engine.project(req.amount, tier)

    # 2) Monthly contributions use the caller's rate, not the weighted one
    monthly = None
    if req.has_monthly_plan:
        monthly = engine.with_contributions(
            req.amount,
            req.monthlyContribution,
            percent_to_decimal(req.expectedReturn),
            req.timeHorizon,
        )

    logger.info(
        f"Plan computed: tier={tier} weightedRate={projection.annual_rate:.4f} "
        f"monthly={'yes' if monthly else 'no'}"
    )
    return plan_to_dict(projection, monthly)
