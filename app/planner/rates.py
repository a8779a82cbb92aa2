# app/planner/rates.py
from __future__ import annotations

from types import MappingProxyType
from typing import Any, Iterable, Literal, Mapping, Optional, Protocol

from .errors import MissingReturnRateError, UnknownRiskTierError

RateModelKind = Literal["per_label", "flat"]


class Weighted(Protocol):
    label: str
    weight: float


def percent_to_decimal(pct: float) -> float:
    return pct / 100.0


class PerLabelRateModel:
    """Expected annual return per allocation label.

    The portfolio rate is the weight-average of the label rates; tier and
    caller overrides play no part.
    """

    kind: RateModelKind = "per_label"

    def __init__(self, rates: Mapping[str, float]):
        self._rates = MappingProxyType({label: float(r) for label, r in rates.items()})

    def rate_for(self, label: str) -> float:
        try:
            return self._rates[label]
        except KeyError:
            raise MissingReturnRateError(label) from None

    def weighted_rate(self, allocations: Iterable[Weighted]) -> float:
        total = 0.0
        for a in allocations:
            total += a.weight * self.rate_for(a.label)
        return total

    def annual_rate(
        self,
        tier: Any,
        allocations: Iterable[Weighted],
        override_pct: Optional[float] = None,
    ) -> float:
        return self.weighted_rate(allocations)


class FlatRateModel:
    """One default annual return per tier, replaceable by a caller percentage."""

    kind: RateModelKind = "flat"

    def __init__(self, defaults: Mapping[str, float]):
        self._defaults = MappingProxyType({tier: float(r) for tier, r in defaults.items()})

    def default_for(self, tier: Any) -> float:
        try:
            return self._defaults[tier]
        except (KeyError, TypeError):
            raise UnknownRiskTierError(tier, tuple(self._defaults)) from None

    def annual_rate(
        self,
        tier: Any,
        allocations: Iterable[Weighted] = (),
        override_pct: Optional[float] = None,
    ) -> float:
        if override_pct is not None:
            return percent_to_decimal(override_pct)
        return self.default_for(tier)
