"""Zacks stock quote source — key earnings table."""

from __future__ import annotations

from datetime import datetime

from bs4 import BeautifulSoup, NavigableString

from earningsdate.errors import EarningsDateError, EarningsDateErrorCode
from earningsdate.models.earnings import AnnounceTime, EarningsEstimate
from earningsdate.sources.base import HttpEarningsSource

_TIME_MARKERS = {
    "*AMC": AnnounceTime.AFTER_MARKET,
    "*BMO": AnnounceTime.BEFORE_MARKET,
}


class ZacksSource(HttpEarningsSource):
    name = "Zacks"
    url_template = "https://www.zacks.com/stock/quote/{symbol}"

    def extract(self, text: str) -> EarningsEstimate | None:
        soup = BeautifulSoup(text, "html.parser")
        node = soup.select_one(
            "#stock_key_earnings > table > tbody > tr:nth-of-type(5) > td:nth-of-type(2)"
        )
        if node is None:
            raise EarningsDateError(
                "Could not find earnings cell",
                code=EarningsDateErrorCode.SELECTOR_NOT_FOUND,
            )

        sup = node.find("sup")
        marker = sup.get_text(strip=True) if sup is not None else ""
        time = _TIME_MARKERS.get(marker, AnnounceTime.UNKNOWN)

        date_text = next(
            (
                str(child).strip()
                for child in node.children
                if isinstance(child, NavigableString) and str(child).strip()
            ),
            None,
        )
        if date_text is None:
            return None
        try:
            when = datetime.strptime(date_text, "%m/%d/%y").date()
        except ValueError as exc:
            raise EarningsDateError(
                f"parsing date {date_text!r}",
                code=EarningsDateErrorCode.EXTRACT_FAILED,
            ) from exc
        return EarningsEstimate(date=when, time=time)
