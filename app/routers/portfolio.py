# app/routers/portfolio.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Literal, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, field_validator

from app.deps.engines import get_category_engine
from app.planner.allocation import AllocationResult
from app.planner.engine import CategoryTier, PortfolioProjection, ProjectionEngine

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/portfolio", tags=["portfolio"])


class PortfolioRequest(BaseModel):
    investmentAmount: float = Field(..., gt=0, strict=True, allow_inf_nan=False)
    riskLevel: CategoryTier
    # Percentage, may be negative; falls back to the tier default when omitted
    expectedReturn: Optional[float] = Field(None, strict=True, allow_inf_nan=False)
    timeline: Literal[1, 2, 5, 10]
    # Shown back to the UI only; not used in the math
    preferredSectors: Optional[List[str]] = None

    @field_validator("timeline", mode="before")
    @classmethod
    def reject_bool_timeline(cls, v: Any) -> Any:
        # Literal matching would otherwise take true as 1
        if isinstance(v, bool):
            raise ValueError("timeline must be one of 1, 2, 5, 10")
        return v


def _allocation_to_dict(a: AllocationResult) -> Dict[str, Any]:
    return {
        "category": a.label,
        "percentage": a.weight,
        "dollarAmount": a.dollar_amount,
    }


def portfolio_to_dict(
    projection: PortfolioProjection,
    expected_return_pct: float,
    preferred_sectors: List[str],
) -> Dict[str, Any]:
    return {
        "initialAllocations": [_allocation_to_dict(a) for a in projection.initial_allocations],
        "yearlyProjections": [
            {
                "year": p.year,
                "totalValue": p.total_value,
                "allocations": [_allocation_to_dict(a) for a in p.allocations],
            }
            for p in projection.projections
        ],
        "expectedReturn": expected_return_pct,
        "preferredSectors": preferred_sectors,
    }


@router.post("/calculate")
def calculate_portfolio(
    req: PortfolioRequest,
    engine: ProjectionEngine = Depends(get_category_engine),
):
    projection = engine.project(
        req.investmentAmount,
        req.riskLevel,
        timeline=req.timeline,
        override_pct=req.expectedReturn,
    )

    if req.expectedReturn is not None:
        applied_pct = req.expectedReturn
    else:
        applied_pct = round(projection.annual_rate * 100, 6)

    logger.info(
        f"Portfolio computed: tier={req.riskLevel} rate={projection.annual_rate:.4f} "
        f"timeline={req.timeline} points={len(projection.projections)}"
    )
    return portfolio_to_dict(projection, applied_pct, req.preferredSectors or [])
