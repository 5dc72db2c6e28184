"""Finnhub earnings calendar source — API-backed, needs an API key.

Install the optional dependency:
    pip install earningsdate[finnhub]
"""

from __future__ import annotations

import os
from datetime import date, timedelta
from typing import Any

from earningsdate.errors import EarningsDateError, EarningsDateErrorCode
from earningsdate.models.earnings import AnnounceTime, EarningsEstimate
from earningsdate.sources.base import BaseEarningsSource

try:
    import finnhub
    _FINNHUB_AVAILABLE = True
except ImportError:
    _FINNHUB_AVAILABLE = False

_HOURS = {
    "bmo": AnnounceTime.BEFORE_MARKET,
    "amc": AnnounceTime.AFTER_MARKET,
}


class FinnhubSource(BaseEarningsSource):
    """Next scheduled report from Finnhub's earnings calendar.

    Looks ``horizon_days`` ahead of today and returns the earliest report.
    """

    name = "Finnhub"

    def __init__(
        self,
        api_key: str | None = None,
        client: Any = None,
        horizon_days: int = 120,
    ) -> None:
        self.horizon_days = horizon_days
        if client is not None:
            self.client = client
            return

        if not _FINNHUB_AVAILABLE:
            raise EarningsDateError(
                "finnhub-python is not installed. Run: pip install earningsdate[finnhub]",
                code=EarningsDateErrorCode.AUTH_FAILED,
                source=self.name,
            )
        api_key = api_key or os.getenv("FINNHUB_API_KEY")
        if not api_key:
            raise EarningsDateError(
                "Finnhub API key required. Set FINNHUB_API_KEY env var or pass api_key.",
                code=EarningsDateErrorCode.AUTH_FAILED,
                source=self.name,
            )
        self.client = finnhub.Client(api_key=api_key)

    def describe(self, symbol: str) -> str:
        return f"{self.name} (earnings calendar {symbol.upper()})"

    def fetch(self, symbol: str, today: date | None = None) -> EarningsEstimate | None:
        start = today or date.today()
        end = start + timedelta(days=self.horizon_days)
        try:
            data = self.client.earnings_calendar(
                _from=start.isoformat(),
                to=end.isoformat(),
                symbol=symbol.upper(),
            )
        except Exception as exc:
            raise EarningsDateError(
                f"Finnhub earnings_calendar failed for {symbol.upper()}: {exc}",
                code=EarningsDateErrorCode.REQUEST_FAILED,
                source=self.name,
            ) from exc

        rows = (data or {}).get("earningsCalendar") or []
        estimates: list[EarningsEstimate] = []
        for row in rows:
            raw = row.get("date")
            if not raw:
                continue
            try:
                when = date.fromisoformat(str(raw)[:10])
            except ValueError as exc:
                raise EarningsDateError(
                    f"Finnhub returned invalid date {raw!r}",
                    code=EarningsDateErrorCode.EXTRACT_FAILED,
                    source=self.name,
                ) from exc
            if when < start:
                continue
            time = _HOURS.get(str(row.get("hour") or "").lower(), AnnounceTime.UNKNOWN)
            estimates.append(EarningsEstimate(date=when, time=time))

        if not estimates:
            return None
        return min(estimates, key=lambda e: e.date)
