"""EarningsPlanner — cache -> concurrent sources -> consensus -> schedule."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Sequence

from earningsdate.backtest import get_best_test, get_best_test_per_strategy, group_by_symbol
from earningsdate.cache import ConsensusCache
from earningsdate.config import EarningsDateConfig, SourceType
from earningsdate.consensus import best_earnings_guess
from earningsdate.fetcher import BASELINE_SOURCE, fetch_estimates
from earningsdate.models.backtest import BacktestResult
from earningsdate.models.earnings import SourcedEstimate
from earningsdate.models.plan import PlanStatus, SymbolPlan, TradePlan
from earningsdate.sources import build_session, create_source
from earningsdate.sources.base import BaseEarningsSource

logger = logging.getLogger(__name__)


class EarningsPlanner:
    """Turns backtest rows into dated trade plans, one symbol at a time.

    Usage::

        from earningsdate import create_planner_from_env
        planner = create_planner_from_env()
        plans = planner.plan(load_backtests("backtests.csv"))
    """

    def __init__(
        self,
        config: EarningsDateConfig,
        sources: Sequence[BaseEarningsSource] | None = None,
        cache: ConsensusCache | None = None,
    ) -> None:
        self.config = config

        if sources is None:
            session = build_session(config.user_agent)
            built: list[BaseEarningsSource] = []
            for st in config.sources:
                kwargs: dict[str, Any] = {}
                if st is SourceType.FINNHUB:
                    kwargs["api_key"] = config.finnhub_api_key
                elif st is not SourceType.MOCK:
                    kwargs["session"] = session
                    kwargs["timeout"] = config.request_timeout
                built.append(create_source(st, **kwargs))
            sources = built
        self.sources: list[BaseEarningsSource] = list(sources)

        self.cache = cache if cache is not None else ConsensusCache(config.cache_path)

    # ------------------------------------------------------------ per symbol

    def plan_symbol(
        self,
        symbol: str,
        tests: Sequence[BacktestResult],
        today: date | None = None,
    ) -> SymbolPlan:
        """Consensus and trade dates for one symbol.

        Fresh cached results are reused; otherwise every source is queried
        and the backtest's own next-earnings claim is added as the baseline.
        """
        if today is None:
            today = date.today()
        best_test = tests[get_best_test(tests)]

        consensus = self.cache.get_fresh(symbol, today) if self.config.use_cache else None
        from_cache = consensus is not None
        scraped = 0

        if consensus is None:
            estimates = fetch_estimates(symbol, self.sources, self.config.max_workers)
            scraped = len(estimates)
            if self.sources and not estimates:
                logger.warning("%s: no source returned a date, using baseline only", symbol)
            estimates.append(SourcedEstimate(estimate=tests[0].next_earnings, source=BASELINE_SOURCE))
            consensus = best_earnings_guess(estimates, today)
            if consensus is not None:
                self.cache.set(symbol, consensus)
        else:
            logger.info("%s: using cached consensus %s", symbol, consensus.last_session)

        if consensus is None:
            logger.warning("%s: no consensus on an upcoming earnings date", symbol)
            return SymbolPlan(
                symbol=symbol,
                status=PlanStatus.NO_CONSENSUS,
                consensus=None,
                best_test=best_test,
                scraped_sources=scraped,
            )

        trades = []
        for strategy, index in get_best_test_per_strategy(tests).items():
            trades.append(TradePlan(
                strategy=strategy,
                test=tests[index],
                open_date=strategy.open_date(consensus.last_session),
                close_date=strategy.close_date(consensus.last_session),
            ))

        return SymbolPlan(
            symbol=symbol,
            status=PlanStatus.OK,
            consensus=consensus,
            best_test=best_test,
            trades=tuple(trades),
            from_cache=from_cache,
            scraped_sources=scraped,
        )

    # ------------------------------------------------------------------ run

    def plan(
        self,
        backtests: Sequence[BacktestResult],
        today: date | None = None,
    ) -> list[SymbolPlan]:
        """Plan every symbol sequentially, then persist the cache once."""
        if today is None:
            today = date.today()

        # Loaded even when reuse is off so the rewrite keeps other symbols
        self.cache.load()

        plans: list[SymbolPlan] = []
        for symbol, tests in group_by_symbol(backtests).items():
            logger.info("Processing symbol %s", symbol)
            plans.append(self.plan_symbol(symbol, tests, today))

        self.cache.save()
        return plans
