"""Flatten symbol plans into a report table."""

from __future__ import annotations

from typing import Sequence

import pandas as pd

from earningsdate.models.earnings import SourcedEstimate
from earningsdate.models.plan import SymbolPlan

REPORT_COLUMNS = [
    "symbol",
    "status",
    "strategy",
    "open_date",
    "close_date",
    "last_session",
    "concurrences",
    "close_disagreements",
    "far_disagreements",
    "win_rate",
    "avg_trade_return",
    "total_return",
    "best",
    "cached",
]


def format_sources(estimates: Sequence[SourcedEstimate]) -> str:
    """``"Yahoo 2024-01-25, Zacks 2024-01-25 AMC"`` style summary."""
    return ", ".join(f"{e.source} {e.estimate}" for e in estimates)


def plans_to_frame(plans: Sequence[SymbolPlan]) -> pd.DataFrame:
    """One row per symbol/strategy; symbols without consensus get one flagged row."""
    records: list[dict] = []
    for plan in plans:
        if plan.consensus is None:
            records.append({
                "symbol": plan.symbol,
                "status": plan.status.value,
                "strategy": plan.best_test.strategy.abbreviation,
                "win_rate": plan.best_test.win_rate,
                "avg_trade_return": plan.best_test.avg_trade_return,
                "total_return": plan.best_test.total_return,
                "best": True,
                "cached": False,
            })
            continue

        status = "no_sources" if plan.no_sources else plan.status.value
        for trade in plan.trades:
            records.append({
                "symbol": plan.symbol,
                "status": status,
                "strategy": trade.strategy.abbreviation,
                "open_date": trade.open_date,
                "close_date": trade.close_date,
                "last_session": plan.consensus.last_session,
                "concurrences": format_sources(plan.consensus.concurrences),
                "close_disagreements": format_sources(plan.consensus.close_disagreements),
                "far_disagreements": format_sources(plan.consensus.far_disagreements),
                "win_rate": trade.test.win_rate,
                "avg_trade_return": trade.test.avg_trade_return,
                "total_return": trade.test.total_return,
                "best": trade.test == plan.best_test,
                "cached": plan.from_cache,
            })

    return pd.DataFrame(records, columns=REPORT_COLUMNS)
