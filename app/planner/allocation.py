# app/planner/allocation.py
from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from types import MappingProxyType
from typing import Any, Iterable, List, Mapping, Tuple

from .errors import ConfigurationError, InvalidAmountError, UnknownRiskTierError

WEIGHT_TOLERANCE = 1e-9


@dataclass(frozen=True)
class AllocationEntry:
    label: str
    weight: float


@dataclass(frozen=True)
class AllocationResult:
    label: str
    weight: float
    dollar_amount: float


def _is_real(v: Any) -> bool:
    return isinstance(v, Real) and not isinstance(v, bool)


def check_amount(amount: Any, field: str = "amount") -> float:
    if not _is_real(amount):
        raise InvalidAmountError("Amount must be a positive number", field=field, value=amount)
    amount = float(amount)
    if not math.isfinite(amount) or amount <= 0:
        raise InvalidAmountError("Amount must be a positive number", field=field, value=amount)
    return amount


class AllocationTable:
    """Tier -> ordered allocation entries. Immutable once built.

    Every tier must carry weights in (0, 1] that sum to 1.0 within
    WEIGHT_TOLERANCE, otherwise the table is rejected at construction.
    """

    def __init__(self, weights_by_tier: Mapping[str, Iterable[Tuple[str, float]]], name: str = "allocation"):
        self.name = name
        built = {}
        for tier, pairs in weights_by_tier.items():
            entries = tuple(AllocationEntry(label=label, weight=float(weight)) for label, weight in pairs)
            if not entries:
                raise ConfigurationError(f"{name} table: tier {tier!r} has no entries")
            for e in entries:
                if not (0.0 < e.weight <= 1.0):
                    raise ConfigurationError(
                        f"{name} table: weight for {e.label} in tier {tier!r} must be in (0, 1], got {e.weight}"
                    )
            total = math.fsum(e.weight for e in entries)
            if abs(total - 1.0) > WEIGHT_TOLERANCE:
                raise ConfigurationError(
                    f"{name} table: weights for tier {tier!r} sum to {total}, expected 1.0"
                )
            built[tier] = entries
        self._entries = MappingProxyType(built)

    @property
    def tiers(self) -> Tuple[str, ...]:
        return tuple(self._entries.keys())

    @property
    def labels(self) -> Tuple[str, ...]:
        seen: List[str] = []
        for entries in self._entries.values():
            for e in entries:
                if e.label not in seen:
                    seen.append(e.label)
        return tuple(seen)

    def entries(self, tier: Any) -> Tuple[AllocationEntry, ...]:
        try:
            return self._entries[tier]
        except (KeyError, TypeError):
            raise UnknownRiskTierError(tier, self.tiers) from None

    def __contains__(self, tier: Any) -> bool:
        try:
            return tier in self._entries
        except TypeError:
            return False


def expand(entries: Iterable[AllocationEntry], total: float) -> Tuple[AllocationResult, ...]:
    """Scale entry weights against a dollar total, keeping table order."""
    return tuple(
        AllocationResult(label=e.label, weight=e.weight, dollar_amount=total * e.weight)
        for e in entries
    )


def allocate(table: AllocationTable, amount: Any, tier: Any) -> Tuple[AllocationResult, ...]:
    amount = check_amount(amount)
    return expand(table.entries(tier), amount)
