"""Consensus over conflicting earnings date estimates.

Each estimate votes for the last trading session before earnings. Estimates
with an unknown announcement time also vote for the trading days on either
side of their session. The session with the most votes wins; ties go to the
earliest date. Sessions before today can never win, but the sources that
voted for them are still reported as disagreements.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date
from typing import Iterable

from earningsdate.calendar import next_trading_day, prev_trading_day
from earningsdate.models.consensus import ConsensusResult
from earningsdate.models.earnings import SourcedEstimate

logger = logging.getLogger(__name__)

# (estimate, fuzzy) pairs keyed by last-session date
_Votes = dict[date, list[tuple[SourcedEstimate, bool]]]


def group_by_session(estimates: Iterable[SourcedEstimate]) -> _Votes:
    """Record every estimate under its last session and, if fuzzy, its neighbours."""
    votes: _Votes = defaultdict(list)
    for est in estimates:
        session = est.estimate.last_session
        fuzzy = est.estimate.is_fuzzy
        votes[session].append((est, fuzzy))
        if fuzzy:
            votes[next_trading_day(session)].append((est, True))
            votes[prev_trading_day(session)].append((est, True))
    return dict(votes)


def _take_unique(
    entries: Iterable[tuple[SourcedEstimate, bool]],
    seen: set[str],
) -> list[SourcedEstimate]:
    picked: list[SourcedEstimate] = []
    for est, _ in entries:
        if est.source in seen:
            continue
        seen.add(est.source)
        picked.append(est)
    return picked


def best_earnings_guess(
    estimates: Iterable[SourcedEstimate],
    today: date | None = None,
) -> ConsensusResult | None:
    """Pick the most agreed-upon last session and partition the sources.

    Args:
        estimates: Scraped estimates plus the baseline estimate.
        today: Reference date; candidates before it are never selected.
            Defaults to ``date.today()``.

    Returns:
        The consensus, or None when no candidate date remains.
    """
    if today is None:
        today = date.today()

    votes = group_by_session(estimates)

    best_date: date | None = None
    best_fuzzy = 0
    best_exact = 0
    for session in sorted(votes):
        if session < today:
            continue
        entries = votes[session]
        fuzzy_count = len(entries)
        exact_count = sum(1 for _, fuzzy in entries if not fuzzy)
        # Strict comparison keeps the earliest date on ties
        if fuzzy_count > best_fuzzy:
            best_date = session
            best_fuzzy = fuzzy_count
            best_exact = exact_count

    if best_date is None:
        logger.debug("No candidate session on or after %s", today)
        return None

    seen: set[str] = set()
    concurrences = _take_unique(votes[best_date], seen)

    neighbours = (prev_trading_day(best_date), next_trading_day(best_date))
    close: list[SourcedEstimate] = []
    for session in neighbours:
        close.extend(_take_unique(votes.get(session, ()), seen))

    far: list[SourcedEstimate] = []
    for session in sorted(votes):
        if session == best_date or session in neighbours:
            continue
        far.extend(_take_unique(votes[session], seen))

    return ConsensusResult(
        last_session=best_date,
        concurrences=tuple(concurrences),
        close_disagreements=tuple(close),
        far_disagreements=tuple(far),
        fuzzy_count=best_fuzzy,
        exact_count=best_exact,
    )
