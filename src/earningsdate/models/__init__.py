"""Earnings date models."""

from earningsdate.models.earnings import AnnounceTime, EarningsEstimate, SourcedEstimate
from earningsdate.models.consensus import ConsensusResult
from earningsdate.models.backtest import BacktestResult
from earningsdate.models.plan import PlanStatus, SymbolPlan, TradePlan

__all__ = [
    "AnnounceTime",
    "EarningsEstimate",
    "SourcedEstimate",
    "ConsensusResult",
    "BacktestResult",
    "PlanStatus",
    "SymbolPlan",
    "TradePlan",
]
