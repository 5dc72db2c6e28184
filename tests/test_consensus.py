"""Tests for the consensus engine."""

from __future__ import annotations

import random
from datetime import date, timedelta

from earningsdate.consensus import best_earnings_guess, group_by_session
from earningsdate.fetcher import BASELINE_SOURCE
from earningsdate.models.earnings import AnnounceTime

from conftest import MONDAY, sourced

AMC = AnnounceTime.AFTER_MARKET
BMO = AnnounceTime.BEFORE_MARKET
UNKNOWN = AnnounceTime.UNKNOWN


def _names(estimates):
    return [e.source for e in estimates]


def _assert_partition(result, estimates):
    groups = [
        set(_names(result.concurrences)),
        set(_names(result.close_disagreements)),
        set(_names(result.far_disagreements)),
    ]
    assert not groups[0] & groups[1]
    assert not groups[0] & groups[2]
    assert not groups[1] & groups[2]
    assert groups[0] | groups[1] | groups[2] == {e.source for e in estimates}
    total = len(result.concurrences) + len(result.close_disagreements) + len(result.far_disagreements)
    assert total == len({e.source for e in estimates})


class TestGroupBySession:
    def test_exact_recorded_once(self) -> None:
        votes = group_by_session([sourced("A", date(2024, 1, 24))])
        assert list(votes) == [date(2024, 1, 24)]

    def test_fuzzy_extends_across_weekend(self) -> None:
        votes = group_by_session([sourced("A", date(2024, 1, 19), UNKNOWN)])
        assert sorted(votes) == [date(2024, 1, 18), date(2024, 1, 19), date(2024, 1, 22)]
        assert all(fuzzy for entries in votes.values() for _, fuzzy in entries)


class TestBestEarningsGuess:
    def test_unanimous_exact(self, today) -> None:
        estimates = [sourced(name, date(2024, 1, 24)) for name in ("A", "B", "C")]
        result = best_earnings_guess(estimates, today)

        assert result is not None
        assert result.last_session == date(2024, 1, 24)
        assert _names(result.concurrences) == ["A", "B", "C"]
        assert result.close_disagreements == ()
        assert result.far_disagreements == ()
        assert result.fuzzy_count == 3
        assert result.exact_count == 3

    def test_mixed_announce_times_scenario(self, today) -> None:
        d = date(2024, 1, 23)
        next_day = date(2024, 1, 24)
        estimates = [
            sourced("A", d, AMC),
            sourced("B", d, AMC),
            sourced("C", d, AMC),
            sourced("D", next_day, UNKNOWN),
            sourced(BASELINE_SOURCE, next_day, BMO),
        ]
        result = best_earnings_guess(estimates, today)

        assert result is not None
        assert result.last_session == d
        assert BASELINE_SOURCE in _names(result.concurrences)
        assert "D" in _names(result.concurrences) + _names(result.close_disagreements)
        _assert_partition(result, estimates)

    def test_close_disagreement(self, today) -> None:
        estimates = [
            sourced("A", date(2024, 1, 23)),
            sourced("B", date(2024, 1, 23)),
            sourced("C", date(2024, 1, 24)),
        ]
        result = best_earnings_guess(estimates, today)

        assert result.last_session == date(2024, 1, 23)
        assert _names(result.close_disagreements) == ["C"]
        assert result.far_disagreements == ()

    def test_close_disagreement_across_weekend(self, today) -> None:
        estimates = [
            sourced("A", date(2024, 1, 22)),
            sourced("B", date(2024, 1, 22)),
            sourced("C", date(2024, 1, 19)),
        ]
        result = best_earnings_guess(estimates, today)

        assert result.last_session == date(2024, 1, 22)
        assert _names(result.close_disagreements) == ["C"]

    def test_far_disagreement(self, today) -> None:
        estimates = [
            sourced("A", date(2024, 1, 23)),
            sourced("B", date(2024, 1, 23)),
            sourced("C", date(2024, 2, 1)),
        ]
        result = best_earnings_guess(estimates, today)

        assert _names(result.far_disagreements) == ["C"]
        assert result.close_disagreements == ()

    def test_past_date_never_selected(self, today) -> None:
        past = today - timedelta(days=5)
        estimates = [
            sourced("A", past),
            sourced("B", past),
            sourced("C", past),
            sourced("D", date(2024, 1, 25)),
        ]
        result = best_earnings_guess(estimates, today)

        assert result.last_session == date(2024, 1, 25)
        assert set(_names(result.far_disagreements)) == {"A", "B", "C"}
        _assert_partition(result, estimates)

    def test_today_is_selectable(self, today) -> None:
        result = best_earnings_guess([sourced("A", today)], today)
        assert result.last_session == today

    def test_tie_goes_to_earliest(self, today) -> None:
        estimates = [
            sourced("A", date(2024, 1, 24)),
            sourced("B", date(2024, 1, 22)),
        ]
        result = best_earnings_guess(estimates, today)

        assert result.last_session == date(2024, 1, 22)
        assert _names(result.concurrences) == ["B"]
        assert _names(result.far_disagreements) == ["A"]

    def test_fuzzy_votes_count_towards_neighbours(self, today) -> None:
        estimates = [
            sourced("A", date(2024, 1, 23), UNKNOWN),
            sourced("B", date(2024, 1, 24), AMC),
        ]
        result = best_earnings_guess(estimates, today)

        assert result.last_session == date(2024, 1, 24)
        assert set(_names(result.concurrences)) == {"A", "B"}
        assert result.fuzzy_count == 2
        assert result.exact_count == 1

    def test_exact_count_does_not_override_fuzzy_count(self, today) -> None:
        # Jan 23 gets two fuzzy votes, Jan 25 one exact vote
        estimates = [
            sourced("A", date(2024, 1, 22), UNKNOWN),
            sourced("B", date(2024, 1, 24), UNKNOWN),
            sourced("C", date(2024, 1, 25), AMC),
        ]
        result = best_earnings_guess(estimates, today)

        assert result.last_session == date(2024, 1, 23)
        assert result.exact_count == 0

    def test_fuzzy_source_straddling_is_listed_once(self, today) -> None:
        estimates = [
            sourced("A", date(2024, 1, 23)),
            sourced("B", date(2024, 1, 23)),
            sourced("U", date(2024, 1, 25), UNKNOWN),
        ]
        result = best_earnings_guess(estimates, today)

        assert result.last_session == date(2024, 1, 23)
        assert _names(result.close_disagreements) == ["U"]
        assert result.far_disagreements == ()

    def test_duplicate_source_listed_once(self, today) -> None:
        estimates = [
            sourced("A", date(2024, 1, 23)),
            sourced("A", date(2024, 1, 30)),
            sourced("B", date(2024, 1, 23)),
        ]
        result = best_earnings_guess(estimates, today)

        assert _names(result.concurrences) == ["A", "B"]
        assert result.far_disagreements == ()

    def test_empty_input(self, today) -> None:
        assert best_earnings_guess([], today) is None

    def test_all_past(self, today) -> None:
        estimates = [sourced("A", date(2024, 1, 2)), sourced("B", date(2024, 1, 9))]
        assert best_earnings_guess(estimates, today) is None

    def test_defaults_to_current_date(self) -> None:
        future = date.today() + timedelta(days=30)
        result = best_earnings_guess([sourced("A", future)])
        assert result is not None
        assert result.last_session >= date.today()

    def test_selected_session_is_trading_day(self, today) -> None:
        rng = random.Random(7)
        for _ in range(200):
            estimates = [
                sourced(f"S{i}", today + timedelta(days=rng.randint(0, 20)), rng.choice(list(AnnounceTime)))
                for i in range(rng.randint(1, 6))
            ]
            result = best_earnings_guess(estimates, today)
            if result is not None:
                assert result.last_session.weekday() < 5

    def test_partition_property(self) -> None:
        rng = random.Random(42)
        for _ in range(500):
            estimates = [
                sourced(f"S{i}", MONDAY + timedelta(days=rng.randint(-10, 20)), rng.choice(list(AnnounceTime)))
                for i in range(rng.randint(1, 8))
            ]
            result = best_earnings_guess(estimates, MONDAY)
            if result is None:
                assert all(e.estimate.last_session < MONDAY for e in estimates if not e.estimate.is_fuzzy)
                continue
            assert result.last_session >= MONDAY
            _assert_partition(result, estimates)
