"""Earnings estimate data models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

from earningsdate.calendar import closest_trading_day, prev_trading_day


class AnnounceTime(Enum):
    """Earnings announcement timing relative to market hours."""

    BEFORE_MARKET = "BMO"
    AFTER_MARKET = "AMC"
    UNKNOWN = "UNKNOWN"

    @property
    def label(self) -> str:
        """Short display label — empty when the time is unknown."""
        if self is AnnounceTime.UNKNOWN:
            return ""
        return self.value


@dataclass(frozen=True)
class EarningsEstimate:
    """Announcement date as reported by a single source.

    Attributes:
        date: Reported announcement date.
        time: Announcement time, if the source publishes one.
    """

    date: date
    time: AnnounceTime = AnnounceTime.UNKNOWN

    @property
    def last_session(self) -> date:
        """Last trading session before the announcement."""
        if self.time is AnnounceTime.BEFORE_MARKET:
            return prev_trading_day(self.date)
        return closest_trading_day(self.date)

    @property
    def is_fuzzy(self) -> bool:
        """True when the last session is only known to ±1 trading day."""
        return self.time is AnnounceTime.UNKNOWN

    def __str__(self) -> str:
        return f"{self.date.isoformat()} {self.time.label}".rstrip()

    def to_dict(self) -> dict:
        return {"date": self.date.isoformat(), "time": self.time.value}

    @classmethod
    def from_dict(cls, data: dict) -> EarningsEstimate:
        return cls(
            date=date.fromisoformat(data["date"]),
            time=AnnounceTime(data.get("time", AnnounceTime.UNKNOWN.value)),
        )


@dataclass(frozen=True)
class SourcedEstimate:
    """An earnings estimate tagged with the source that produced it."""

    estimate: EarningsEstimate
    source: str

    def to_dict(self) -> dict:
        return {"source": self.source, **self.estimate.to_dict()}

    @classmethod
    def from_dict(cls, data: dict) -> SourcedEstimate:
        return cls(estimate=EarningsEstimate.from_dict(data), source=data["source"])
