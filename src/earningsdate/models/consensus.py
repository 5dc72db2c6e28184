"""Consensus result data model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from earningsdate.models.earnings import SourcedEstimate


@dataclass(frozen=True)
class ConsensusResult:
    """Best guess at the last trading session before earnings.

    Attributes:
        last_session: Selected last trading session.
        concurrences: Sources whose estimate lands on ``last_session``.
        close_disagreements: Sources one trading day away.
        far_disagreements: All other sources.
        fuzzy_count: Contributions recorded at ``last_session``, including
            the ±1 day extensions of fuzzy estimates.
        exact_count: Non-fuzzy contributions at ``last_session``.
    """

    last_session: date
    concurrences: tuple[SourcedEstimate, ...] = ()
    close_disagreements: tuple[SourcedEstimate, ...] = ()
    far_disagreements: tuple[SourcedEstimate, ...] = ()
    fuzzy_count: int = 0
    exact_count: int = 0

    @property
    def sources(self) -> set[str]:
        """All source names across the three partitions."""
        return {
            e.source
            for group in (self.concurrences, self.close_disagreements, self.far_disagreements)
            for e in group
        }

    def to_dict(self) -> dict:
        return {
            "last_session": self.last_session.isoformat(),
            "concurrences": [e.to_dict() for e in self.concurrences],
            "close_disagreements": [e.to_dict() for e in self.close_disagreements],
            "far_disagreements": [e.to_dict() for e in self.far_disagreements],
            "fuzzy_count": self.fuzzy_count,
            "exact_count": self.exact_count,
        }

    @classmethod
    def from_dict(cls, data: dict) -> ConsensusResult:
        return cls(
            last_session=date.fromisoformat(data["last_session"]),
            concurrences=tuple(SourcedEstimate.from_dict(e) for e in data.get("concurrences", [])),
            close_disagreements=tuple(
                SourcedEstimate.from_dict(e) for e in data.get("close_disagreements", [])
            ),
            far_disagreements=tuple(
                SourcedEstimate.from_dict(e) for e in data.get("far_disagreements", [])
            ),
            fuzzy_count=int(data.get("fuzzy_count", 0)),
            exact_count=int(data.get("exact_count", 0)),
        )
