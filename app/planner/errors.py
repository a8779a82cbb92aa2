# app/planner/errors.py
"""Exceptions raised by the planner engine.

Input-validation errors map to 400 responses, configuration and
domain-argument errors map to 500 responses. The engine raises these and
never catches them; translation happens in the request handlers.
"""
from __future__ import annotations

from typing import Any, Optional


class PlannerError(Exception):
    """Base exception for all planner errors."""

    pass


# ---------- Input validation (400) ----------

class InputValidationError(PlannerError, ValueError):
    """Raised when caller input is missing, wrongly typed or out of range."""

    code = "invalid_request"

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        super().__init__(message)
        self.message = message
        self.field = field
        self.value = value


class InvalidAmountError(InputValidationError):
    code = "invalid_amount"


class InvalidRiskScoreError(InputValidationError):
    code = "invalid_risk_score"


# ---------- Configuration consistency (500) ----------

class ConfigurationError(PlannerError):
    """Raised when the static tables disagree with each other or with a request.

    Examples:
    - An allocation label with no expected return
    - A tier that is not in the allocation table
    - A tier whose weights do not sum to 1.0
    """

    pass


class UnknownRiskTierError(ConfigurationError):
    def __init__(self, tier: Any, known: Optional[tuple] = None):
        known_txt = f" Must be one of {list(known)}." if known else ""
        super().__init__(f"Unknown risk tier: {tier!r}.{known_txt}")
        self.tier = tier
        self.known = known


class MissingReturnRateError(ConfigurationError):
    def __init__(self, label: str):
        super().__init__(f"Missing return rate for label: {label}")
        self.label = label


# ---------- Engine preconditions (500) ----------

class DomainArgumentError(PlannerError, ValueError):
    """Raised when a projection formula gets an argument outside its domain."""

    def __init__(self, message: str, argument: Optional[str] = None):
        super().__init__(message)
        self.argument = argument
