"""Yahoo Finance quote page source.

The quote page bootstraps its state through a ``root.App.main = {...};``
line; the earnings timestamp sits deep inside the QuoteSummaryStore.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone

from earningsdate.errors import EarningsDateError, EarningsDateErrorCode
from earningsdate.models.earnings import AnnounceTime, EarningsEstimate
from earningsdate.sources.base import HttpEarningsSource

_BOOTSTRAP_PREFIX = "root.App.main = "


class YahooSource(HttpEarningsSource):
    name = "Yahoo"
    url_template = "https://finance.yahoo.com/quote/{symbol}"

    def extract(self, text: str) -> EarningsEstimate | None:
        line = next(
            (ln for ln in text.splitlines() if ln.startswith(_BOOTSTRAP_PREFIX)),
            None,
        )
        if line is None:
            raise EarningsDateError(
                "Could not locate JSON bootstrap payload",
                code=EarningsDateErrorCode.SELECTOR_NOT_FOUND,
            )

        payload = json.loads(line[len(_BOOTSTRAP_PREFIX):].rstrip().rstrip(";"))
        try:
            raw = (
                payload["context"]["dispatcher"]["stores"]["QuoteSummaryStore"]
                ["calendarEvents"]["earnings"]["earningsDate"][0]["raw"]
            )
        except (KeyError, IndexError, TypeError):
            return None
        if not isinstance(raw, (int, float)):
            return None

        return EarningsEstimate(
            date=datetime.fromtimestamp(raw, tz=timezone.utc).date(),
            time=AnnounceTime.UNKNOWN,
        )
