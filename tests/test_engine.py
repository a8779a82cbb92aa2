"""Tests for the parameterised projection engine and risk score mapping."""

import pytest

from app.planner.allocation import AllocationTable
from app.planner.engine import (
    ProjectionEngine,
    build_category_engine,
    build_ticker_engine,
    risk_tier_from_score,
)
from app.planner.errors import (
    InvalidAmountError,
    InvalidRiskScoreError,
    MissingReturnRateError,
    UnknownRiskTierError,
)
from app.planner.rates import FlatRateModel, PerLabelRateModel


# ============================================================================
# risk_tier_from_score
# ============================================================================


@pytest.mark.parametrize(
    "score,tier",
    [(1, "low"), (3, "low"), (4, "moderate"), (7, "moderate"), (8, "high"), (10, "high")],
)
def test_risk_score_boundaries(score, tier):
    assert risk_tier_from_score(score) == tier


@pytest.mark.parametrize("score", [0, 11, -3, 5.0, "5", True, None])
def test_risk_score_rejects_invalid(score):
    with pytest.raises(InvalidRiskScoreError) as excinfo:
        risk_tier_from_score(score)
    assert excinfo.value.code == "invalid_risk_score"
    assert excinfo.value.field == "riskScore"


# ============================================================================
# Ticker engine
# ============================================================================


def test_ticker_engine_projects_all_horizons():
    engine = build_ticker_engine()
    result = engine.project(10_000, "moderate")
    assert result.annual_rate == pytest.approx(0.095)
    assert [p.year for p in result.projections] == [1, 2, 5, 10]
    assert result.projections[0].total_value == pytest.approx(10_950.0)
    assert result.projections[3].total_value == pytest.approx(10_000 * 1.095**10)


def test_ticker_engine_ignores_timeline():
    engine = build_ticker_engine()
    result = engine.project(10_000, "low", timeline=1)
    assert [p.year for p in result.projections] == [1, 2, 5, 10]


def test_ticker_engine_initial_allocations():
    engine = build_ticker_engine()
    result = engine.project(1000, "high")
    assert [(a.label, a.dollar_amount) for a in result.initial_allocations] == [
        ("QQQ", pytest.approx(500.0)),
        ("ARKK", pytest.approx(300.0)),
        ("VOO", pytest.approx(200.0)),
    ]


def test_engine_with_contributions_delegates():
    engine = build_ticker_engine()
    result = engine.with_contributions(10_000, 500, 0.07, 10)
    assert result.total_contributions == 70_000
    assert len(result.yearly_projections) == 10


# ============================================================================
# Category engine
# ============================================================================


def test_category_engine_clamps_to_timeline():
    engine = build_category_engine()
    result = engine.project(10_000, "Moderate", timeline=5)
    assert [p.year for p in result.projections] == [1, 2, 5]
    assert result.annual_rate == 0.07


def test_category_engine_without_timeline_returns_all():
    engine = build_category_engine()
    result = engine.project(10_000, "Low")
    assert [p.year for p in result.projections] == [1, 2, 5, 10]


def test_category_override_changes_rate_not_weights():
    engine = build_category_engine()
    result = engine.project(10_000, "High", timeline=10, override_pct=20)
    assert result.annual_rate == pytest.approx(0.20)
    for p in result.projections:
        assert p.total_value == pytest.approx(10_000 * 1.2**p.year)
        assert [a.weight for a in p.allocations] == [0.45, 0.35, 0.20]


def test_category_engine_unknown_tier():
    engine = build_category_engine()
    with pytest.raises(UnknownRiskTierError):
        engine.project(10_000, "moderate", timeline=10)


def test_engine_rejects_bad_amount():
    engine = build_category_engine()
    with pytest.raises(InvalidAmountError):
        engine.project(0, "Low", timeline=10)


def test_project_is_idempotent():
    engine = build_ticker_engine()
    assert engine.project(4321.5, "high") == engine.project(4321.5, "high")


# ============================================================================
# Injected tables
# ============================================================================


def test_engine_uses_injected_tables():
    engine = ProjectionEngine(
        table=AllocationTable({"only": (("AAA", 0.5), ("BBB", 0.5))}),
        rate_model=PerLabelRateModel({"AAA": 0.10, "BBB": 0.0}),
        horizons=(3,),
    )
    result = engine.project(1000, "only")
    assert engine.tiers == ("only",)
    assert result.annual_rate == pytest.approx(0.05)
    assert [p.year for p in result.projections] == [3]
    assert result.projections[0].total_value == pytest.approx(1000 * 1.05**3)


def test_engine_missing_rate_for_label():
    engine = ProjectionEngine(
        table=AllocationTable({"low": (("AAA", 0.5), ("ZZZ", 0.5))}),
        rate_model=PerLabelRateModel({"AAA": 0.10}),
    )
    with pytest.raises(MissingReturnRateError, match="ZZZ"):
        engine.project(1000, "low")


def test_flat_engine_tier_missing_from_rates():
    engine = ProjectionEngine(
        table=AllocationTable({"Low": (("Bonds", 1.0),), "Mid": (("Stocks", 1.0),)}),
        rate_model=FlatRateModel({"Low": 0.03}),
        clamp_to_timeline=True,
    )
    with pytest.raises(UnknownRiskTierError):
        engine.project(1000, "Mid", timeline=10)
    assert engine.project(1000, "Mid", timeline=10, override_pct=5).annual_rate == pytest.approx(0.05)
