from typing import Any, Literal, Optional, Sequence, Tuple, Union
from dataclasses import dataclass

from .allocation import AllocationEntry, AllocationResult, AllocationTable, allocate, check_amount
from .assumptions import (
    CATEGORY_WEIGHTS_BY_RISK,
    DEFAULT_RETURN_BY_RISK,
    EXPECTED_RETURN_BY_TICKER,
    PROJECTION_HORIZONS,
    RISK_SCORE_BANDS,
    TICKER_WEIGHTS_BY_RISK,
)
from .errors import InvalidRiskScoreError
from .projection import (
    MonthlyContributionResult,
    ProjectionPoint,
    fixed_horizon_projections,
    with_contributions,
)
from .rates import FlatRateModel, PerLabelRateModel


TickerTier = Literal["low", "moderate", "high"]
CategoryTier = Literal["Low", "Moderate", "High"]

RateModel = Union[PerLabelRateModel, FlatRateModel]


@dataclass(frozen=True)
class PortfolioProjection:
    tier: str
    annual_rate: float
    initial_allocations: Tuple[AllocationResult, ...]
    projections: Tuple[ProjectionPoint, ...]


# ---------- Risk score ----------

def risk_tier_from_score(score: Any) -> TickerTier:
    """1-3 = low, 4-7 = moderate, 8-10 = high."""
    if not isinstance(score, bool) and isinstance(score, int) and score >= 1:
        for upper, tier in RISK_SCORE_BANDS:
            if score <= upper:
                return tier
    raise InvalidRiskScoreError(
        "Risk score must be an integer between 1 and 10",
        field="riskScore",
        value=score,
    )


# ---------- Engine ----------

class ProjectionEngine:
    """Allocation table + rate model -> allocations and growth projections.

    clamp_to_timeline drops horizons beyond the caller's timeline; without it
    every horizon is returned and the timeline is ignored.
    """

    def __init__(
        self,
        table: AllocationTable,
        rate_model: RateModel,
        horizons: Sequence[int] = PROJECTION_HORIZONS,
        clamp_to_timeline: bool = False,
        name: str = "engine",
    ):
        self.table = table
        self.rate_model = rate_model
        self.horizons = tuple(horizons)
        self.clamp_to_timeline = clamp_to_timeline
        self.name = name

    @property
    def tiers(self) -> Tuple[str, ...]:
        return self.table.tiers

    def allocate(self, amount: Any, tier: Any) -> Tuple[AllocationResult, ...]:
        return allocate(self.table, amount, tier)

    def annual_rate(
        self,
        tier: Any,
        allocations: Optional[Sequence[AllocationEntry]] = None,
        override_pct: Optional[float] = None,
    ) -> float:
        if allocations is None:
            allocations = self.table.entries(tier)
        return self.rate_model.annual_rate(tier, allocations, override_pct=override_pct)

    def project(
        self,
        amount: Any,
        tier: Any,
        timeline: Optional[int] = None,
        override_pct: Optional[float] = None,
    ) -> PortfolioProjection:
        amount = check_amount(amount)
        entries = self.table.entries(tier)
        rate = self.annual_rate(tier, entries, override_pct=override_pct)
        projections = fixed_horizon_projections(
            amount,
            rate,
            entries,
            self.horizons,
            timeline=timeline if self.clamp_to_timeline else None,
        )
        return PortfolioProjection(
            tier=tier,
            annual_rate=rate,
            initial_allocations=allocate(self.table, amount, tier),
            projections=projections,
        )

    def with_contributions(
        self,
        principal: float,
        monthly_contribution: float,
        annual_rate: float,
        years: int,
    ) -> MonthlyContributionResult:
        return with_contributions(principal, monthly_contribution, annual_rate, years)


def build_ticker_engine() -> ProjectionEngine:
    return ProjectionEngine(
        table=AllocationTable(TICKER_WEIGHTS_BY_RISK, name="ticker"),
        rate_model=PerLabelRateModel(EXPECTED_RETURN_BY_TICKER),
        clamp_to_timeline=False,
        name="ticker",
    )


def build_category_engine() -> ProjectionEngine:
    return ProjectionEngine(
        table=AllocationTable(CATEGORY_WEIGHTS_BY_RISK, name="category"),
        rate_model=FlatRateModel(DEFAULT_RETURN_BY_RISK),
        clamp_to_timeline=True,
        name="category",
    )
