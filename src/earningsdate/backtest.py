"""Backtest CSV ingestion and best-test selection."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

import pandas as pd

from earningsdate.errors import EarningsDateError, EarningsDateErrorCode
from earningsdate.models.backtest import BacktestResult
from earningsdate.strategy import Strategy

logger = logging.getLogger(__name__)

BACKTEST_COLUMNS = (
    "symbol",
    "wins",
    "losses",
    "win_rate",
    "avg_trade_return",
    "total_return",
    "backtest_len",
    "next_earnings",
    "strategy",
)


def load_backtests(path: Path | str) -> list[BacktestResult]:
    """Read backtest rows from a CSV file.

    Malformed rows are logged and skipped. A missing or unreadable file is
    not recoverable and propagates.

    Raises:
        EarningsDateError: With code ``MISSING_COLUMNS`` when the header
            lacks any of ``BACKTEST_COLUMNS``.
    """
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    df.columns = [str(c).strip().lower() for c in df.columns]
    missing = [c for c in BACKTEST_COLUMNS if c not in df.columns]
    if missing:
        raise EarningsDateError(
            f"{path} is missing columns: {', '.join(missing)}",
            code=EarningsDateErrorCode.MISSING_COLUMNS,
        )

    results: list[BacktestResult] = []
    for line, row in enumerate(df.to_dict(orient="records"), start=2):
        try:
            results.append(BacktestResult.from_row(row))
        except EarningsDateError as exc:
            logger.warning("%s line %d skipped: %s", path, line, exc)
    logger.info("Read %d backtests from %s", len(results), path)
    return results


def group_by_symbol(results: Sequence[BacktestResult]) -> dict[str, list[BacktestResult]]:
    """Group backtests by symbol, keeping first-seen symbol order."""
    grouped: dict[str, list[BacktestResult]] = {}
    for result in results:
        grouped.setdefault(result.symbol, []).append(result)
    return grouped


def get_best_test(results: Sequence[BacktestResult]) -> int:
    """Index of the test with the highest average trade return.

    Win rates across strategies are usually close enough that the average
    return already reflects them. The first entry wins ties.
    """
    if not results:
        raise ValueError("get_best_test requires at least one result")
    best = 0
    for i, result in enumerate(results):
        if result.sort_key > results[best].sort_key:
            best = i
    return best


def get_best_test_per_strategy(results: Sequence[BacktestResult]) -> dict[Strategy, int]:
    """Index of the best test for every strategy present in ``results``."""
    best: dict[Strategy, int] = {}
    for i, result in enumerate(results):
        current = best.get(result.strategy)
        if current is None or result.sort_key > results[current].sort_key:
            best[result.strategy] = i
    return best
