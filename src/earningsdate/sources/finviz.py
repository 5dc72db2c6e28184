"""FinViz snapshot table source.

The snapshot shows ``Oct 24 AMC`` style values without a year, so the year
is inferred from today's date.
"""

from __future__ import annotations

import re
from datetime import date, datetime

from bs4 import BeautifulSoup

from earningsdate.models.earnings import AnnounceTime, EarningsEstimate
from earningsdate.sources.base import HttpEarningsSource

_EARNINGS_RE = re.compile(r"(\S+ \d{1,2})\s*(AMC|BMO)?")


def infer_year(month: int, day: int, today: date) -> date:
    """Earliest occurrence of ``month``/``day`` that is not before ``today``.

    Feb 29 only exists in leap years, so the search may skip several years.

    Raises:
        ValueError: If ``month``/``day`` never occurs.
    """
    for year in range(today.year, today.year + 9):
        try:
            candidate = date(year, month, day)
        except ValueError:
            continue
        if candidate >= today:
            return candidate
    raise ValueError(f"No date {month:02d}-{day:02d} on or after {today}")


class FinVizSource(HttpEarningsSource):
    name = "FinViz"
    url_template = "https://finviz.com/quote.ashx?t={symbol}"

    def extract(self, text: str, today: date | None = None) -> EarningsEstimate | None:
        soup = BeautifulSoup(text, "html.parser")
        node = soup.select_one("table.snapshot-table2 tr:nth-of-type(11) > td:nth-of-type(6) > b")
        if node is None:
            return None
        match = _EARNINGS_RE.search(node.get_text(" ", strip=True))
        if match is None:
            return None

        # Leap year placeholder so "Feb 29" parses; the real year comes below
        parsed = datetime.strptime(f"{match.group(1)} 2000", "%b %d %Y")
        when = infer_year(parsed.month, parsed.day, today or date.today())
        time = {
            "AMC": AnnounceTime.AFTER_MARKET,
            "BMO": AnnounceTime.BEFORE_MARKET,
        }.get(match.group(2) or "", AnnounceTime.UNKNOWN)
        return EarningsEstimate(date=when, time=time)
