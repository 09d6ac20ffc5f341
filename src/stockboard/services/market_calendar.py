"""Taiwan stock exchange trading-hours calendar (pure functions, Asia/Taipei)."""

from datetime import datetime, timedelta

from stockboard.core.timezone import TAIPEI_TZ, to_taipei
from stockboard.domain.views import MarketStatus

TRADING_START_MINUTE = 540  # 09:00
TRADING_END_MINUTE = 810  # 13:30
AFTERNOON_CUTOFF_HOUR = 14

# Day-of-week numbering used below: Sunday=0 .. Saturday=6
SUNDAY = 0
MONDAY = 1
FRIDAY = 5
SATURDAY = 6


def day_of_week(instant: datetime) -> int:
    """Return the Sunday=0..Saturday=6 weekday of a datetime."""
    return (instant.weekday() + 1) % 7


def is_open(instant: datetime) -> bool:
    """True on Monday..Friday between 09:00 and 13:30 (inclusive, minute resolution)."""
    local = to_taipei(instant)
    day = day_of_week(local)
    if day < MONDAY or day > FRIDAY:
        return False
    minutes = local.hour * 60 + local.minute
    return TRADING_START_MINUTE <= minutes <= TRADING_END_MINUTE


def next_open(instant: datetime) -> datetime:
    """
    The 09:00 session open that follows ``instant``.

    Sunday advances one day and Saturday two. A weekday outside trading hours
    at or after 14:00 advances one day. Any other weekday instant, including
    one before 09:00, maps to 09:00 on the same day.
    """
    local = to_taipei(instant)
    day = day_of_week(local)

    days_ahead = 0
    if day == SUNDAY:
        days_ahead = 1
    elif day == SATURDAY:
        days_ahead = 2
    elif not is_open(local) and local.hour >= AFTERNOON_CUTOFF_HOUR:
        days_ahead = 1

    target = local.date() + timedelta(days=days_ahead)
    return TAIPEI_TZ.localize(datetime(target.year, target.month, target.day, 9, 0, 0, 0))


def market_status(instant: datetime) -> MarketStatus:
    """Open/closed state at ``instant`` together with the next open."""
    return MarketStatus(
        is_open=is_open(instant),
        next_open=next_open(instant),
        as_of=to_taipei(instant),
    )
