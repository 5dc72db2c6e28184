"""Shared fixtures for earningsdate tests."""

from __future__ import annotations

import sys
from datetime import date
from pathlib import Path

import pytest

# Ensure src/ is on the path for editable-style imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from earningsdate.models.backtest import BacktestResult
from earningsdate.models.earnings import AnnounceTime, EarningsEstimate, SourcedEstimate
from earningsdate.sources.mock import MockSource
from earningsdate.strategy import Strategy

# January 2024: the 15th is a Monday
MONDAY = date(2024, 1, 15)


def sourced(
    source: str,
    d: date,
    time: AnnounceTime = AnnounceTime.AFTER_MARKET,
) -> SourcedEstimate:
    return SourcedEstimate(estimate=EarningsEstimate(date=d, time=time), source=source)


def make_test(
    symbol: str = "AAPL",
    strategy: Strategy = Strategy.CALL_3D_PREEARNINGS,
    avg_trade_return: float = 10.0,
    next_earnings: date = date(2024, 1, 25),
) -> BacktestResult:
    return BacktestResult(
        symbol=symbol,
        strategy=strategy,
        wins=6,
        losses=2,
        win_rate=75.0,
        avg_trade_return=avg_trade_return,
        total_return=avg_trade_return * 8,
        backtest_len=2,
        next_earnings=EarningsEstimate(date=next_earnings, time=AnnounceTime.UNKNOWN),
    )


@pytest.fixture
def today() -> date:
    return MONDAY


@pytest.fixture
def mock_source() -> MockSource:
    return MockSource()
