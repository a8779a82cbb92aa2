from app.planner.engine import ProjectionEngine, build_category_engine, build_ticker_engine

# Built once at import; both are read-only after construction.
_ticker_engine = build_ticker_engine()
_category_engine = build_category_engine()


def get_ticker_engine() -> ProjectionEngine:
    """Ticker-level engine for /api/plan."""
    return _ticker_engine


def get_category_engine() -> ProjectionEngine:
    """Category-level engine for /api/portfolio."""
    return _category_engine
