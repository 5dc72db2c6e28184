"""Tests for EarningsPlanner — cache reuse, baseline, flagging."""

from __future__ import annotations

import json
from datetime import date

import pytest

from earningsdate.cache import ConsensusCache
from earningsdate.config import EarningsDateConfig, SourceType
from earningsdate.fetcher import BASELINE_SOURCE
from earningsdate.models.consensus import ConsensusResult
from earningsdate.models.earnings import AnnounceTime, EarningsEstimate
from earningsdate.models.plan import PlanStatus
from earningsdate.planner import EarningsPlanner
from earningsdate.report import plans_to_frame
from earningsdate.sources.mock import MockSource
from earningsdate.strategy import Strategy

from conftest import make_test, sourced

AMC = AnnounceTime.AFTER_MARKET


def _planner(tmp_path, sources, use_cache=True):
    config = EarningsDateConfig(
        sources=[SourceType.MOCK],
        cache_path=str(tmp_path / "earnings.json"),
        use_cache=use_cache,
    )
    return EarningsPlanner(config, sources=sources)


@pytest.fixture
def sources():
    zacks = MockSource("Zacks")
    yahoo = MockSource("Yahoo")
    finviz = MockSource("FinViz")
    for source in (zacks, yahoo):
        source.set_estimate("AAPL", EarningsEstimate(date(2024, 1, 25), AMC))
    finviz.set_estimate("AAPL", EarningsEstimate(date(2024, 1, 26), AMC))
    return [zacks, yahoo, finviz]


class TestPlanSymbol:
    def test_consensus_and_trades(self, tmp_path, sources, today) -> None:
        tests = [
            make_test(strategy=Strategy.CALL_3D_PREEARNINGS, avg_trade_return=5),
            make_test(strategy=Strategy.CALL_3D_PREEARNINGS, avg_trade_return=9),
            make_test(strategy=Strategy.IRON_CONDOR_1W_POSTEARNINGS, avg_trade_return=12),
        ]
        plan = _planner(tmp_path, sources).plan_symbol("AAPL", tests, today)

        assert plan.status is PlanStatus.OK
        assert plan.consensus.last_session == date(2024, 1, 25)
        assert plan.best_test is tests[2]
        assert plan.scraped_sources == 3
        assert not plan.from_cache
        assert not plan.no_sources

        concurring = {e.source for e in plan.consensus.concurrences}
        assert concurring == {"Zacks", "Yahoo", BASELINE_SOURCE}
        assert [e.source for e in plan.consensus.close_disagreements] == ["FinViz"]

        trades = {t.strategy: t for t in plan.trades}
        assert set(trades) == {Strategy.CALL_3D_PREEARNINGS, Strategy.IRON_CONDOR_1W_POSTEARNINGS}
        call = trades[Strategy.CALL_3D_PREEARNINGS]
        assert call.test is tests[1]
        assert call.open_date == date(2024, 1, 22)
        assert call.close_date == date(2024, 1, 25)
        condor = trades[Strategy.IRON_CONDOR_1W_POSTEARNINGS]
        assert condor.open_date == date(2024, 1, 26)
        assert condor.close_date == date(2024, 2, 2)

    def test_baseline_only_is_flagged(self, tmp_path, today) -> None:
        failing = MockSource("Zacks")
        failing.set_error("AAPL")
        plan = _planner(tmp_path, [failing]).plan_symbol(
            "AAPL", [make_test(next_earnings=date(2024, 1, 24))], today,
        )

        assert plan.status is PlanStatus.OK
        assert plan.no_sources
        assert [e.source for e in plan.consensus.concurrences] == [BASELINE_SOURCE]

    def test_no_consensus(self, tmp_path, today) -> None:
        planner = _planner(tmp_path, [MockSource("Zacks")])
        plan = planner.plan_symbol("AAPL", [make_test(next_earnings=date(2023, 10, 26))], today)

        assert plan.status is PlanStatus.NO_CONSENSUS
        assert plan.consensus is None
        assert plan.trades == ()
        assert "AAPL" not in planner.cache

    def test_fresh_cache_skips_sources(self, tmp_path, today) -> None:
        source = MockSource("Zacks")
        planner = _planner(tmp_path, [source])
        cached = ConsensusResult(last_session=date(2024, 1, 30), concurrences=(sourced("Yahoo", date(2024, 1, 30)),))
        planner.cache.set("AAPL", cached)

        plan = planner.plan_symbol("AAPL", [make_test()], today)

        assert source.calls == []
        assert plan.from_cache
        assert not plan.no_sources
        assert plan.consensus == cached

    def test_stale_cache_refetches(self, tmp_path, sources, today) -> None:
        planner = _planner(tmp_path, sources)
        planner.cache.set("AAPL", ConsensusResult(last_session=date(2023, 10, 26)))

        plan = planner.plan_symbol("AAPL", [make_test()], today)

        assert sources[0].calls == ["AAPL"]
        assert not plan.from_cache
        assert planner.cache.get("AAPL").last_session == date(2024, 1, 25)

    def test_cache_reuse_disabled(self, tmp_path, sources, today) -> None:
        planner = _planner(tmp_path, sources, use_cache=False)
        planner.cache.set("AAPL", ConsensusResult(last_session=date(2024, 1, 30)))

        plan = planner.plan_symbol("AAPL", [make_test()], today)

        assert not plan.from_cache
        assert plan.consensus.last_session == date(2024, 1, 25)


class TestPlan:
    def test_processes_every_symbol_and_writes_cache(self, tmp_path, sources, today) -> None:
        backtests = [
            make_test("AAPL"),
            make_test("MSFT", next_earnings=date(2024, 1, 30)),
            make_test("OLD", next_earnings=date(2023, 11, 2)),
        ]
        plans = _planner(tmp_path, sources).plan(backtests, today)

        assert [p.symbol for p in plans] == ["AAPL", "MSFT", "OLD"]
        assert [p.status for p in plans] == [PlanStatus.OK, PlanStatus.OK, PlanStatus.NO_CONSENSUS]
        # MSFT: every mock source is empty; the lone fuzzy baseline ties
        # across three sessions and the earliest wins
        assert plans[1].no_sources
        assert plans[1].consensus.last_session == date(2024, 1, 29)

        saved = json.loads((tmp_path / "earnings.json").read_text(encoding="utf-8"))
        assert set(saved) == {"AAPL", "MSFT"}

    def test_keeps_other_cached_symbols(self, tmp_path, sources, today) -> None:
        path = tmp_path / "earnings.json"
        other = ConsensusCache(path)
        other.set("TSLA", ConsensusResult(last_session=date(2024, 1, 24)))
        other.save()

        _planner(tmp_path, sources, use_cache=False).plan([make_test("AAPL")], today)

        assert set(json.loads(path.read_text(encoding="utf-8"))) == {"AAPL", "TSLA"}

    def test_builds_sources_from_config(self, tmp_path) -> None:
        config = EarningsDateConfig(
            sources=[SourceType.MOCK, SourceType.ZACKS],
            cache_path=str(tmp_path / "earnings.json"),
            request_timeout=2.5,
        )
        planner = EarningsPlanner(config)
        assert isinstance(planner.sources[0], MockSource)
        assert planner.sources[1].name == "Zacks"
        assert planner.sources[1].timeout == 2.5


class TestReport:
    def test_rows_per_strategy_and_flags(self, tmp_path, sources, today) -> None:
        backtests = [
            make_test("AAPL", strategy=Strategy.CALL_3D_PREEARNINGS, avg_trade_return=4),
            make_test("AAPL", strategy=Strategy.CALL_7D_PREEARNINGS, avg_trade_return=6),
            make_test("OLD", next_earnings=date(2023, 11, 2)),
        ]
        df = plans_to_frame(_planner(tmp_path, sources).plan(backtests, today))

        assert list(df["symbol"]) == ["AAPL", "AAPL", "OLD"]
        assert list(df["strategy"]) == ["C3D", "C7D", "C3D"]
        assert list(df["status"]) == ["ok", "ok", "no_consensus"]
        assert list(df["best"]) == [False, True, True]
        aapl = df[df["symbol"] == "AAPL"].iloc[0]
        assert aapl["open_date"] == date(2024, 1, 22)
        assert "Zacks 2024-01-25 AMC" in aapl["concurrences"]
        assert aapl["close_disagreements"] == "FinViz 2024-01-26 AMC"

    def test_empty(self) -> None:
        df = plans_to_frame([])
        assert df.empty
        assert "last_session" in df.columns
