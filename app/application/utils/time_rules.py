from __future__ import annotations

from datetime import date, datetime, time, timedelta, tzinfo


def normalize(value: datetime) -> datetime:
    """Truncate a datetime to the start of its hour."""
    return value.replace(minute=0, second=0, microsecond=0)


def is_past(value: datetime, now: datetime) -> bool:
    return value < now


def within_lead_time(value: datetime, now: datetime, hours: int) -> bool:
    """True when fewer than `hours` remain before `value`."""
    return value - timedelta(hours=hours) <= now


def ensure_aware(value: datetime, timezone: tzinfo) -> datetime:
    """Express `value` on the canonical clock: naive values are read in `timezone`, aware ones converted."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone)
    return value.astimezone(timezone)


def day_bounds(day: date, timezone: tzinfo) -> tuple[datetime, datetime]:
    """Return the first and last instant of `day` in `timezone`."""
    start = datetime.combine(day, time.min, tzinfo=timezone)
    end = datetime.combine(day, time.max, tzinfo=timezone)
    return start, end


def format_slot(value: datetime) -> str:
    # e.g. "October 20, at 14:00h"
    return value.strftime("%B %d, at %H:%Mh")
