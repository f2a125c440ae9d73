"""
Review-day boundaries.

A review day does not start at midnight but at a fixed local cutoff hour
(04:00 by default), so a late-night session still counts towards the day
it started in. All due timestamps are stamped on these boundaries.

Each boundary is resolved in the zone of ``now`` for its own date, so a
boundary on the far side of a daylight saving change is still 04:00 wall
clock time. Naive datetimes and the fixed offsets returned by
``datetime.astimezone()`` stand for the local clock.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone, tzinfo

DAY_CUTOFF_HOUR = 4


def local_now() -> datetime:
    """Current time as a timezone-aware local datetime."""
    return datetime.now().astimezone()


def _zone(now: datetime) -> tzinfo | None:
    """Zone used to place boundaries, None for the local clock."""
    if now.tzinfo is None:
        return None
    if isinstance(now.tzinfo, timezone) and now.utcoffset() == now.astimezone().utcoffset():
        return None
    return now.tzinfo


def _cutoff_on(day: date, cutoff_hour: int, zone: tzinfo | None) -> datetime:
    if zone is None:
        return datetime.combine(day, time(hour=cutoff_hour)).astimezone()
    return datetime.combine(day, time(hour=cutoff_hour), tzinfo=zone)


def day_start(now: datetime | None = None, cutoff_hour: int = DAY_CUTOFF_HOUR) -> datetime:
    """Most recent cutoff at or before ``now``."""
    now = now or local_now()
    zone = _zone(now)
    if now.tzinfo is None:
        now = now.astimezone()

    start = _cutoff_on(now.date(), cutoff_hour, zone)
    if now < start:
        start = _cutoff_on(now.date() - timedelta(days=1), cutoff_hour, zone)
    return start


def day_offset(
    days: int,
    now: datetime | None = None,
    cutoff_hour: int = DAY_CUTOFF_HOUR,
) -> datetime:
    """Start of the review day ``days`` days after the one containing ``now``."""
    now = now or local_now()
    start = day_start(now, cutoff_hour)
    return _cutoff_on(start.date() + timedelta(days=days), cutoff_hour, _zone(now))


def day_start_unix(now: datetime | None = None, cutoff_hour: int = DAY_CUTOFF_HOUR) -> int:
    return int(day_start(now, cutoff_hour).timestamp())


def day_offset_unix(
    days: int,
    now: datetime | None = None,
    cutoff_hour: int = DAY_CUTOFF_HOUR,
) -> int:
    return int(day_offset(days, now, cutoff_hour).timestamp())
