from __future__ import annotations

from datetime import datetime, timedelta, timezone


def _start_of_minute(value: datetime) -> datetime:
    return value.replace(second=0, microsecond=0)


def timestamps_for_changes(now: datetime) -> tuple[int, int, int]:
    """Unix timestamps one day, two days and one week before ``now``, truncated to the minute."""
    current = now.astimezone(timezone.utc)
    one_day = _start_of_minute(current - timedelta(days=1))
    two_days = _start_of_minute(current - timedelta(days=2))
    one_week = _start_of_minute(current - timedelta(weeks=1))
    return int(one_day.timestamp()), int(two_days.timestamp()), int(one_week.timestamp())


def chart_window(now: datetime, *, lookback_days: int) -> tuple[int, int]:
    current = now.astimezone(timezone.utc)
    start = _start_of_minute(current - timedelta(days=lookback_days))
    return int(start.timestamp()) - 1, int(current.timestamp())
