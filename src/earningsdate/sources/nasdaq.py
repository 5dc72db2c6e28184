"""NASDAQ earnings report page source.

Not in the default source list: the site throttles scrapers aggressively
and mirrors Zacks data anyway.
"""

from __future__ import annotations

import re
from datetime import datetime

from bs4 import BeautifulSoup

from earningsdate.models.earnings import AnnounceTime, EarningsEstimate
from earningsdate.sources.base import HttpEarningsSource

_REPORT_RE = re.compile(
    r"earnings on\s*(\d{1,2}/\d{1,2}/\d{4})\s*(after market close|before market open)?"
)


class NasdaqSource(HttpEarningsSource):
    name = "NASDAQ"
    url_template = "http://www.nasdaq.com/earnings/report/{symbol}"

    def extract(self, text: str) -> EarningsEstimate | None:
        soup = BeautifulSoup(text, "html.parser")
        node = soup.select_one("#two_column_main_content_reportdata")
        if node is None:
            return None
        match = _REPORT_RE.search(node.get_text(" ", strip=True))
        if match is None:
            return None

        time = {
            "after market close": AnnounceTime.AFTER_MARKET,
            "before market open": AnnounceTime.BEFORE_MARKET,
        }.get(match.group(2) or "", AnnounceTime.UNKNOWN)
        return EarningsEstimate(
            date=datetime.strptime(match.group(1), "%m/%d/%Y").date(),
            time=time,
        )
