"""earningsdate — consensus earnings dates from unreliable public sources.

Polls several quote pages concurrently, reconciles their answers into one
last-trading-session estimate, and schedules option trades around it.

Quick start::

    from earningsdate import create_planner_from_env, load_backtests
    planner = create_planner_from_env()
    plans = planner.plan(load_backtests("backtests.csv"))
"""

from __future__ import annotations

import os

from earningsdate.backtest import (
    get_best_test,
    get_best_test_per_strategy,
    group_by_symbol,
    load_backtests,
)
from earningsdate.cache import ConsensusCache
from earningsdate.calendar import (
    closest_trading_day,
    is_trading_day,
    next_trading_day,
    prev_trading_day,
    trading_days_before,
)
from earningsdate.config import DEFAULT_SOURCES, EarningsDateConfig, SourceType
from earningsdate.consensus import best_earnings_guess
from earningsdate.errors import EarningsDateError, EarningsDateErrorCode
from earningsdate.fetcher import BASELINE_SOURCE, fetch_estimates
from earningsdate.models.backtest import BacktestResult
from earningsdate.models.consensus import ConsensusResult
from earningsdate.models.earnings import AnnounceTime, EarningsEstimate, SourcedEstimate
from earningsdate.models.plan import PlanStatus, SymbolPlan, TradePlan
from earningsdate.planner import EarningsPlanner
from earningsdate.report import plans_to_frame
from earningsdate.strategy import Strategy

__version__ = "0.1.0"

__all__ = [
    # Planner
    "EarningsPlanner",
    "create_planner_from_env",
    # Config
    "EarningsDateConfig",
    "SourceType",
    "DEFAULT_SOURCES",
    # Errors
    "EarningsDateError",
    "EarningsDateErrorCode",
    # Models
    "AnnounceTime",
    "EarningsEstimate",
    "SourcedEstimate",
    "ConsensusResult",
    "BacktestResult",
    "PlanStatus",
    "SymbolPlan",
    "TradePlan",
    "Strategy",
    # Calendar
    "closest_trading_day",
    "is_trading_day",
    "next_trading_day",
    "prev_trading_day",
    "trading_days_before",
    # Core
    "BASELINE_SOURCE",
    "fetch_estimates",
    "best_earnings_guess",
    "ConsensusCache",
    # Backtests
    "load_backtests",
    "group_by_symbol",
    "get_best_test",
    "get_best_test_per_strategy",
    "plans_to_frame",
]


def create_planner_from_env() -> EarningsPlanner:
    """Zero-config factory — reads sources and settings from env vars.

    Environment variables:
        EARNINGS_SOURCES: Comma-separated source list
            (default: "bloomberg,finviz,yahoo,zacks").
        EARNINGS_CACHE_PATH: Consensus cache file (default: "data/earnings_cache.json").
        EARNINGS_REQUEST_TIMEOUT: Per-request timeout in seconds (default: 10).
        FINNHUB_API_KEY: Finnhub.io API key, needed when "finnhub" is listed.
    """
    default_sources = ",".join(st.value for st in DEFAULT_SOURCES)
    source_str = os.getenv("EARNINGS_SOURCES", default_sources)
    source_types = [
        SourceType(name.strip().lower())
        for name in source_str.split(",")
        if name.strip()
    ]

    config = EarningsDateConfig(
        sources=source_types,
        cache_path=os.getenv("EARNINGS_CACHE_PATH", "data/earnings_cache.json"),
        request_timeout=float(os.getenv("EARNINGS_REQUEST_TIMEOUT", "10")),
        finnhub_api_key=os.getenv("FINNHUB_API_KEY"),
    )

    return EarningsPlanner(config)
