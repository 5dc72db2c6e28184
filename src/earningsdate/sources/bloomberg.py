"""Bloomberg quote page source — date only, no announcement time."""

from __future__ import annotations

from datetime import datetime

from bs4 import BeautifulSoup

from earningsdate.models.earnings import AnnounceTime, EarningsEstimate
from earningsdate.sources.base import HttpEarningsSource


class BloombergSource(HttpEarningsSource):
    """Next announcement date from the Bloomberg quote header."""

    name = "Bloomberg"
    url_template = "https://www.bloomberg.com/quote/{symbol}:US"

    def extract(self, text: str) -> EarningsEstimate | None:
        soup = BeautifulSoup(text, "html.parser")
        node = soup.select_one('span[class^="nextAnnouncementDate"]')
        if node is None:
            return None
        raw = node.get_text(strip=True)
        if not raw:
            return None
        return EarningsEstimate(
            date=datetime.strptime(raw, "%m/%d/%Y").date(),
            time=AnnounceTime.UNKNOWN,
        )
