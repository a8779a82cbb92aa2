# app/planner/projection.py
"""Compound growth and monthly-contribution projections.

Every point is computed from the original principal and rate, never from a
previous point, so each year can be checked on its own.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from .allocation import AllocationEntry, AllocationResult, expand
from .errors import DomainArgumentError


@dataclass(frozen=True)
class ProjectionPoint:
    year: int
    total_value: float
    allocations: Tuple[AllocationResult, ...]


@dataclass(frozen=True)
class YearlyContributionPoint:
    year: int
    value: float
    contributions: float
    growth: float


@dataclass(frozen=True)
class MonthlyContributionResult:
    final_value: float
    total_contributions: float
    total_growth: float
    yearly_projections: Tuple[YearlyContributionPoint, ...]


def _require_non_negative(value: float, argument: str, label: str) -> None:
    if value < 0:
        raise DomainArgumentError(f"{label} must be non-negative", argument=argument)


def future_value(principal: float, annual_rate: float, years: float) -> float:
    """FV = principal * (1 + annual_rate) ** years"""
    _require_non_negative(principal, "principal", "Principal")
    _require_non_negative(years, "years", "Years")
    if years == 0:
        return principal
    return principal * (1.0 + annual_rate) ** years


def fixed_horizon_projections(
    principal: float,
    annual_rate: float,
    entries: Sequence[AllocationEntry],
    horizons: Iterable[int],
    timeline: Optional[int] = None,
) -> Tuple[ProjectionPoint, ...]:
    points: List[ProjectionPoint] = []
    for year in horizons:
        if timeline is not None and year > timeline:
            continue
        total = future_value(principal, annual_rate, year)
        points.append(ProjectionPoint(year=year, total_value=total, allocations=expand(entries, total)))
    return tuple(points)


def _annuity_future_value(monthly_contribution: float, monthly_rate: float, months: int) -> float:
    # Exactly zero only; the formula's limit as rate -> 0 is the plain sum.
    if monthly_rate == 0.0:
        return monthly_contribution * months
    return monthly_contribution * (((1.0 + monthly_rate) ** months - 1.0) / monthly_rate)


def _value_after_months(
    principal: float,
    monthly_contribution: float,
    monthly_rate: float,
    months: int,
) -> Tuple[float, float]:
    principal_fv = principal * (1.0 + monthly_rate) ** months
    value = principal_fv + _annuity_future_value(monthly_contribution, monthly_rate, months)
    contributions = principal + monthly_contribution * months
    return value, contributions


def with_contributions(
    principal: float,
    monthly_contribution: float,
    annual_rate: float,
    years: int,
) -> MonthlyContributionResult:
    """
    FV = P * (1 + r)^n + PMT * ((1 + r)^n - 1) / r
    with r = annual_rate / 12 and n = years * 12.
    Growth is value minus money put in and may be negative.
    """
    _require_non_negative(principal, "principal", "Principal")
    _require_non_negative(monthly_contribution, "monthly_contribution", "Monthly contribution")
    _require_non_negative(years, "years", "Years")

    monthly_rate = annual_rate / 12.0
    total_months = years * 12

    final_value, total_contributions = _value_after_months(
        principal, monthly_contribution, monthly_rate, total_months
    )

    yearly: List[YearlyContributionPoint] = []
    for year in range(1, int(years) + 1):
        value, contributions = _value_after_months(
            principal, monthly_contribution, monthly_rate, year * 12
        )
        yearly.append(
            YearlyContributionPoint(
                year=year,
                value=value,
                contributions=contributions,
                growth=value - contributions,
            )
        )

    return MonthlyContributionResult(
        final_value=final_value,
        total_contributions=total_contributions,
        total_growth=final_value - total_contributions,
        yearly_projections=tuple(yearly),
    )
