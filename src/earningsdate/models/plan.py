"""Per-symbol trade plan data models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

from earningsdate.models.backtest import BacktestResult
from earningsdate.models.consensus import ConsensusResult
from earningsdate.strategy import Strategy


class PlanStatus(Enum):
    """Outcome of planning one symbol."""

    OK = "ok"
    NO_CONSENSUS = "no_consensus"


@dataclass(frozen=True)
class TradePlan:
    """Entry and exit dates for one strategy around the consensus date."""

    strategy: Strategy
    test: BacktestResult
    open_date: date
    close_date: date


@dataclass(frozen=True)
class SymbolPlan:
    """Everything computed for one symbol in one run.

    Attributes:
        symbol: Ticker symbol.
        status: OK, or NO_CONSENSUS when no date could be agreed on.
        consensus: Consensus result, None when status is NO_CONSENSUS.
        best_test: Backtest with the highest average trade return.
        trades: One plan per strategy, best test of each strategy.
        from_cache: True when the consensus came from the cache.
        scraped_sources: Sources that returned a date this run (0 if cached).
    """

    symbol: str
    status: PlanStatus
    consensus: ConsensusResult | None
    best_test: BacktestResult
    trades: tuple[TradePlan, ...] = ()
    from_cache: bool = False
    scraped_sources: int = 0

    @property
    def no_sources(self) -> bool:
        """True when every scraped source failed and only the baseline voted."""
        return not self.from_cache and self.scraped_sources == 0
