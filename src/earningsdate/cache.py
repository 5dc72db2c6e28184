"""Persisted consensus cache — one JSON file mapping symbol to result.

The file is read once before a run and rewritten as a whole afterwards.
An entry stays fresh until its last session is more than two trading days
in the past; after that the next quarter's date is needed and the symbol is
fetched again.
"""

from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path

from earningsdate.calendar import trading_days_before
from earningsdate.models.consensus import ConsensusResult

logger = logging.getLogger(__name__)

FRESHNESS_TRADING_DAYS = 2


class ConsensusCache:
    """Symbol → ConsensusResult mapping backed by a JSON file."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._entries: dict[str, ConsensusResult] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, symbol: str) -> bool:
        return symbol.upper() in self._entries

    @staticmethod
    def is_fresh(result: ConsensusResult, today: date | None = None) -> bool:
        if today is None:
            today = date.today()
        return result.last_session >= trading_days_before(today, FRESHNESS_TRADING_DAYS)

    def get(self, symbol: str) -> ConsensusResult | None:
        return self._entries.get(symbol.upper())

    def get_fresh(self, symbol: str, today: date | None = None) -> ConsensusResult | None:
        """Cached result for ``symbol`` if it is still fresh, else None."""
        result = self.get(symbol)
        if result is None or not self.is_fresh(result, today):
            return None
        return result

    def set(self, symbol: str, result: ConsensusResult) -> None:
        self._entries[symbol.upper()] = result

    def to_dict(self) -> dict:
        return {symbol: result.to_dict() for symbol, result in sorted(self._entries.items())}

    def load(self) -> ConsensusCache:
        """Read the cache file, falling back to empty on any problem."""
        self._entries = {}
        if not self.path.exists():
            logger.info("No consensus cache at %s, starting empty", self.path)
            return self

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError(f"expected an object, got {type(data).__name__}")
            self._entries = {
                symbol.upper(): ConsensusResult.from_dict(entry)
                for symbol, entry in data.items()
            }
        except (OSError, ValueError, KeyError, TypeError) as exc:
            logger.warning("Ignoring unreadable consensus cache %s: %s", self.path, exc)
            self._entries = {}
        return self

    def save(self) -> None:
        """Overwrite the cache file with the current mapping."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)
