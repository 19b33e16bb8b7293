"""Time sources. Injected everywhere "now" or "today" matters so tests can pin them."""

from __future__ import annotations

from datetime import date, datetime, timezone, tzinfo
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def today_in(zone: tzinfo, clock: Clock = utc_now) -> date:
    """Current calendar day in ``zone`` according to ``clock``."""
    return clock().astimezone(zone).date()


def fixed_clock(moment: datetime) -> Clock:
    """A clock that always answers ``moment`` (must be timezone-aware)."""
    if moment.tzinfo is None:
        raise ValueError("fixed_clock needs a timezone-aware datetime")
    return lambda: moment
