"""Option strategy templates and their entry/exit date rules.

Every rule is a pure function of the last trading session before earnings.
Callers must pass a date that is already a trading day.
"""

from __future__ import annotations

from datetime import date, timedelta
from enum import Enum

from earningsdate.calendar import closest_trading_day, next_trading_day
from earningsdate.errors import EarningsDateError, EarningsDateErrorCode


def _pre_earnings_offset(anchor: date, trading_days: int) -> int:
    """Calendar days spanning ``trading_days`` sessions back from ``anchor``.

    When the window reaches past Monday it crosses a weekend and needs two
    extra calendar days.
    """
    if anchor.weekday() < trading_days:
        return trading_days + 2
    return trading_days


class Strategy(Enum):
    """Backtested option trade templates, keyed by their CSV tag."""

    CALL_3D_PREEARNINGS = "call_3d_preearnings"
    CALL_7D_PREEARNINGS = "call_7d_preearnings"
    CALL_14D_PREEARNINGS = "call_14d_preearnings"
    STRANGLE_2D_PREEARNINGS = "strangle_2d_preearnings"
    IRON_CONDOR_1W_POSTEARNINGS = "iron_condor_1w_postearnings"
    IRON_CONDOR_3W_POSTEARNINGS = "iron_condor_3w_postearnings"
    PUT_SPREAD_1M_POSTEARNINGS = "put_spread_1m_postearnings"

    @classmethod
    def from_tag(cls, tag: str) -> Strategy:
        try:
            return cls(tag.strip().lower())
        except ValueError as exc:
            raise EarningsDateError(
                f"Unknown strategy tag: {tag!r}",
                code=EarningsDateErrorCode.INVALID_ROW,
            ) from exc

    @property
    def is_pre_earnings(self) -> bool:
        return self in _PRE_EARNINGS

    @property
    def short_name(self) -> str:
        return _SHORT_NAMES[self]

    @property
    def abbreviation(self) -> str:
        return _ABBREVIATIONS[self]

    def open_date(self, last_session: date) -> date:
        """Date the position is opened."""
        if self is Strategy.CALL_3D_PREEARNINGS:
            return last_session - timedelta(days=_pre_earnings_offset(last_session, 3))
        if self is Strategy.CALL_7D_PREEARNINGS:
            return last_session - timedelta(days=7)
        if self is Strategy.CALL_14D_PREEARNINGS:
            return last_session - timedelta(days=14)
        if self is Strategy.STRANGLE_2D_PREEARNINGS:
            return last_session - timedelta(days=_pre_earnings_offset(last_session, 2))
        return next_trading_day(last_session)

    def close_date(self, last_session: date) -> date:
        """Date the position is closed."""
        if self.is_pre_earnings:
            return last_session
        return closest_trading_day(last_session + timedelta(days=_POST_EARNINGS_HOLD[self]))


_PRE_EARNINGS = frozenset({
    Strategy.CALL_3D_PREEARNINGS,
    Strategy.CALL_7D_PREEARNINGS,
    Strategy.CALL_14D_PREEARNINGS,
    Strategy.STRANGLE_2D_PREEARNINGS,
})

# Calendar days from the last session to the exit of post-earnings trades
_POST_EARNINGS_HOLD: dict[Strategy, int] = {
    Strategy.IRON_CONDOR_1W_POSTEARNINGS: 8,
    Strategy.IRON_CONDOR_3W_POSTEARNINGS: 22,
    Strategy.PUT_SPREAD_1M_POSTEARNINGS: 32,
}

_SHORT_NAMES: dict[Strategy, str] = {
    Strategy.CALL_3D_PREEARNINGS: "3 days before earnings, call",
    Strategy.CALL_7D_PREEARNINGS: "7 days before earnings, call",
    Strategy.CALL_14D_PREEARNINGS: "14 days before earnings, call",
    Strategy.STRANGLE_2D_PREEARNINGS: "2 days before earnings, strangle",
    Strategy.IRON_CONDOR_1W_POSTEARNINGS: "post-earnings iron condor, 1 week",
    Strategy.IRON_CONDOR_3W_POSTEARNINGS: "post-earnings iron condor, 3 weeks",
    Strategy.PUT_SPREAD_1M_POSTEARNINGS: "post-earnings put spread, 1 month",
}

_ABBREVIATIONS: dict[Strategy, str] = {
    Strategy.CALL_3D_PREEARNINGS: "C3D",
    Strategy.CALL_7D_PREEARNINGS: "C7D",
    Strategy.CALL_14D_PREEARNINGS: "C14D",
    Strategy.STRANGLE_2D_PREEARNINGS: "S2D",
    Strategy.IRON_CONDOR_1W_POSTEARNINGS: "IC1W",
    Strategy.IRON_CONDOR_3W_POSTEARNINGS: "IC3W",
    Strategy.PUT_SPREAD_1M_POSTEARNINGS: "PS1M",
}
