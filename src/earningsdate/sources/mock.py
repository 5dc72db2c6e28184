"""Mock source for testing and CI — no network access."""

from __future__ import annotations

import threading

from earningsdate.errors import EarningsDateError, EarningsDateErrorCode
from earningsdate.models.earnings import EarningsEstimate
from earningsdate.sources.base import BaseEarningsSource


class MockSource(BaseEarningsSource):
    """In-memory source that returns configurable estimates.

    Use ``set_estimate`` to pre-load a date, ``set_error`` to make a symbol
    fail. Unknown symbols yield no date. Calls are recorded in ``calls``.
    """

    def __init__(self, name: str = "Mock") -> None:
        self.name = name
        self._estimates: dict[str, EarningsEstimate | None] = {}
        self._errors: dict[str, Exception] = {}
        self._lock = threading.Lock()
        self.calls: list[str] = []

    # --- Pre-load helpers ---

    def set_estimate(self, symbol: str, estimate: EarningsEstimate | None) -> None:
        self._estimates[symbol.upper()] = estimate

    def set_error(self, symbol: str, error: Exception | None = None) -> None:
        self._errors[symbol.upper()] = error or EarningsDateError(
            f"{self.name} failed for {symbol.upper()}",
            code=EarningsDateErrorCode.HTTP_STATUS,
            source=self.name,
        )

    # --- Source implementation ---

    def fetch(self, symbol: str) -> EarningsEstimate | None:
        key = symbol.upper()
        with self._lock:
            self.calls.append(key)
        if key in self._errors:
            raise self._errors[key]
        return self._estimates.get(key)
