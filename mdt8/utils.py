from __future__ import annotations

import datetime as dt
from typing import Callable, Optional
from zoneinfo import ZoneInfo

Clock = Callable[[], dt.datetime]


def local_now(tz: Optional[ZoneInfo] = None) -> dt.datetime:
    """Return an aware "now", in ``tz`` when given, else in system local time."""
    if tz is not None:
        return dt.datetime.now(tz)
    return dt.datetime.now().astimezone()


def make_clock(tz: Optional[ZoneInfo] = None) -> Clock:
    return lambda: local_now(tz)


def day_key(value: dt.datetime) -> tuple[int, int]:
    return value.year, value.timetuple().tm_yday


def format_duration(value: dt.timedelta) -> str:
    """Render a duration as "N minutes" or "H hours and M minutes"."""
    total_minutes = int(value.total_seconds()) // 60
    hours = total_minutes // 60
    if hours < 1:
        return f"{total_minutes} minutes"
    return f"{hours} hours and {total_minutes - hours * 60} minutes"


__all__ = ["Clock", "local_now", "make_clock", "day_key", "format_duration"]
