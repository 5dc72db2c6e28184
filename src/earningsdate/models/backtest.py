"""Backtest result data model."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from earningsdate.errors import EarningsDateError, EarningsDateErrorCode
from earningsdate.models.earnings import AnnounceTime, EarningsEstimate
from earningsdate.strategy import Strategy

_NEXT_EARNINGS_FORMATS = ("%m/%d/%y", "%m/%d/%Y")


def _parse_int(value: Any, column: str) -> int:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError) as exc:
        raise EarningsDateError(
            f"Invalid {column}: {value!r}",
            code=EarningsDateErrorCode.INVALID_ROW,
        ) from exc


def _parse_percent(value: Any, column: str) -> float:
    text = str(value).strip().rstrip("%").strip()
    try:
        number = float(text)
    except ValueError as exc:
        raise EarningsDateError(
            f"Invalid {column}: {value!r}",
            code=EarningsDateErrorCode.INVALID_ROW,
        ) from exc
    # Finite values only
    if not math.isfinite(number):
        raise EarningsDateError(
            f"Invalid {column}: {value!r}",
            code=EarningsDateErrorCode.INVALID_ROW,
        )
    return number


def _parse_next_earnings(value: Any) -> date:
    text = str(value).strip()
    for fmt in _NEXT_EARNINGS_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise EarningsDateError(
        f"Invalid next_earnings: {value!r}",
        code=EarningsDateErrorCode.INVALID_ROW,
    )


@dataclass(frozen=True)
class BacktestResult:
    """One backtested strategy for one symbol.

    Attributes:
        symbol: Ticker symbol.
        strategy: Strategy that was backtested.
        wins: Winning trades.
        losses: Losing trades.
        win_rate: Win rate in percent.
        avg_trade_return: Average return per trade in percent.
        total_return: Total return in percent.
        backtest_len: Length of the backtest window.
        next_earnings: Next earnings date claimed by the backtest provider.
    """

    symbol: str
    strategy: Strategy
    wins: int
    losses: int
    win_rate: float
    avg_trade_return: float
    total_return: float
    backtest_len: int
    next_earnings: EarningsEstimate

    @property
    def sort_key(self) -> float:
        return self.avg_trade_return

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> BacktestResult:
        """Build from one CSV row of string values.

        Raises:
            EarningsDateError: With code ``INVALID_ROW`` on any bad field.
        """
        try:
            symbol = str(row["symbol"]).strip().upper()
            raw_strategy = row["strategy"]
            raw_next = row["next_earnings"]
        except KeyError as exc:
            raise EarningsDateError(
                f"Missing column: {exc.args[0]}",
                code=EarningsDateErrorCode.INVALID_ROW,
            ) from exc
        if not symbol:
            raise EarningsDateError("Empty symbol", code=EarningsDateErrorCode.INVALID_ROW)

        return cls(
            symbol=symbol,
            strategy=Strategy.from_tag(str(raw_strategy)),
            wins=_parse_int(row.get("wins"), "wins"),
            losses=_parse_int(row.get("losses"), "losses"),
            win_rate=_parse_percent(row.get("win_rate"), "win_rate"),
            avg_trade_return=_parse_percent(row.get("avg_trade_return"), "avg_trade_return"),
            total_return=_parse_percent(row.get("total_return"), "total_return"),
            backtest_len=_parse_int(row.get("backtest_len"), "backtest_len"),
            next_earnings=EarningsEstimate(
                date=_parse_next_earnings(raw_next),
                time=AnnounceTime.UNKNOWN,
            ),
        )
