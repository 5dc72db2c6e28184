"""Concurrent fan-out over every earnings date source for one symbol.

One thread per source; the call returns once every source has finished,
whatever the outcome. A failing source is logged and dropped for this run
only; it never cancels or delays the result of its siblings beyond the
join itself.
"""

from __future__ import annotations

import logging
from concurrent.futures import ALL_COMPLETED, ThreadPoolExecutor, wait
from typing import Sequence

from earningsdate.errors import EarningsDateError
from earningsdate.models.earnings import SourcedEstimate
from earningsdate.sources.base import BaseEarningsSource

logger = logging.getLogger(__name__)

# Source identity of the estimate carried by the backtest row itself
BASELINE_SOURCE = "CML"


def _fetch_one(source: BaseEarningsSource, symbol: str) -> SourcedEstimate | None:
    try:
        estimate = source.fetch(symbol)
    except EarningsDateError as exc:
        logger.error(
            "%s: %s failed [%s]: %s",
            symbol, source.describe(symbol), exc.code.value, exc,
        )
        return None
    except Exception:  # noqa: BLE001
        logger.exception("%s: %s raised unexpectedly", symbol, source.describe(symbol))
        return None

    if estimate is None:
        logger.warning("%s: %s had no earnings date", symbol, source.describe(symbol))
        return None

    logger.debug("%s: %s reported %s", symbol, source.name, estimate)
    return SourcedEstimate(estimate=estimate, source=source.name)


def fetch_estimates(
    symbol: str,
    sources: Sequence[BaseEarningsSource],
    max_workers: int | None = None,
) -> list[SourcedEstimate]:
    """Query every source concurrently and collect the surviving estimates.

    Args:
        symbol: Ticker symbol.
        sources: Sources to query, one task each.
        max_workers: Thread pool size. Defaults to one worker per source.

    Returns:
        Estimates from the sources that produced a date, in source order.
    """
    if not sources:
        return []

    workers = max_workers or len(sources)
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="earnings-source") as executor:
        futures = [executor.submit(_fetch_one, source, symbol) for source in sources]
        wait(futures, return_when=ALL_COMPLETED)

    results = [f.result() for f in futures]
    surviving = [r for r in results if r is not None]
    logger.info("%s: %d of %d sources returned a date", symbol, len(surviving), len(sources))
    return surviving
