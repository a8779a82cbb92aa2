# app/planner/assumptions.py
from types import MappingProxyType

# Read-only after import. Engines take these at construction time.

PROJECTION_HORIZONS = (1, 2, 5, 10)

# Ticker level (plan endpoint)
TICKER_WEIGHTS_BY_RISK = MappingProxyType({
    "low": (
        ("SCHD", 0.60),
        ("BND", 0.20),
        ("VOO", 0.20),
    ),
    "moderate": (
        ("VOO", 0.40),
        ("QQQ", 0.30),
        ("SCHD", 0.20),
        ("VXUS", 0.10),
    ),
    "high": (
        ("QQQ", 0.50),
        ("ARKK", 0.30),
        ("VOO", 0.20),
    ),
})

EXPECTED_RETURN_BY_TICKER = MappingProxyType({
    "VOO": 0.09,
    "QQQ": 0.12,
    "SCHD": 0.08,
    "BND": 0.04,
    "VXUS": 0.07,
    "ARKK": 0.15,
})

# riskScore 1-10 -> ticker tier, inclusive upper bounds
RISK_SCORE_BANDS = (
    (3, "low"),
    (7, "moderate"),
    (10, "high"),
)

# Category level (portfolio endpoint)
CATEGORY_WEIGHTS_BY_RISK = MappingProxyType({
    "Low": (
        ("Bonds", 0.60),
        ("Index Funds", 0.40),
    ),
    "Moderate": (
        ("Index Funds", 0.40),
        ("Tech Stocks", 0.35),
        ("Value Stocks", 0.25),
    ),
    "High": (
        ("Tech Stocks", 0.45),
        ("Growth Stocks", 0.35),
        ("Emerging Markets", 0.20),
    ),
})

DEFAULT_RETURN_BY_RISK = MappingProxyType({
    "Low": 0.04,
    "Moderate": 0.07,
    "High": 0.12,
})
