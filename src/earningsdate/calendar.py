"""Trading calendar arithmetic — weekdays only.

Market holidays are not modeled: every Monday through Friday counts as a
trading day.
"""

from __future__ import annotations

from datetime import date, timedelta

_FRIDAY = 4
_SATURDAY = 5
_SUNDAY = 6


def is_trading_day(d: date) -> bool:
    """Check if a date is a trading day (Monday through Friday)."""
    return d.weekday() < _SATURDAY


def closest_trading_day(d: date) -> date:
    """Return ``d`` if it is a trading day, else the Friday before it.

    Never steps forward.
    """
    weekday = d.weekday()
    if weekday == _SATURDAY:
        return d - timedelta(days=1)
    if weekday == _SUNDAY:
        return d - timedelta(days=2)
    return d


def next_trading_day(d: date) -> date:
    """Return the first trading day strictly after ``d``."""
    weekday = d.weekday()
    if weekday == _FRIDAY:
        return d + timedelta(days=3)
    if weekday == _SATURDAY:
        return d + timedelta(days=2)
    return d + timedelta(days=1)


def prev_trading_day(d: date) -> date:
    """Return the last trading day strictly before ``d``."""
    weekday = d.weekday()
    if weekday == 0:  # Monday → Friday
        return d - timedelta(days=3)
    if weekday == _SUNDAY:
        return d - timedelta(days=2)
    return d - timedelta(days=1)


def trading_days_before(d: date, n: int) -> date:
    """Step back ``n`` trading days from ``d``."""
    current = d
    for _ in range(n):
        current = prev_trading_day(current)
    return current
