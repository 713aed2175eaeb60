"""
Tests for slot normalization and the temporal checks built on it.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from app.application.utils.time_rules import (
    day_bounds,
    ensure_aware,
    format_slot,
    is_past,
    normalize,
    within_lead_time,
)


def test_normalize_truncates_to_hour():
    value = datetime(2026, 10, 20, 14, 47, 13, 999, tzinfo=timezone.utc)
    assert normalize(value) == datetime(2026, 10, 20, 14, 0, tzinfo=timezone.utc)


def test_normalize_is_idempotent():
    for minute in (0, 1, 30, 59):
        value = datetime(2026, 10, 20, 9, minute, 5, tzinfo=timezone.utc)
        assert normalize(normalize(value)) == normalize(value)


def test_is_past_is_strict():
    now = datetime(2026, 10, 16, 12, 0, tzinfo=timezone.utc)
    assert is_past(now - timedelta(seconds=1), now) is True
    assert is_past(now, now) is False
    assert is_past(now + timedelta(hours=1), now) is False


def test_within_lead_time_boundary():
    """Exactly `hours` before the slot already counts as too late."""
    slot = datetime(2026, 10, 16, 15, 0, tzinfo=timezone.utc)
    assert within_lead_time(slot, slot - timedelta(hours=2), 2) is True
    assert within_lead_time(slot, slot - timedelta(hours=2, seconds=1), 2) is False
    assert within_lead_time(slot, slot - timedelta(hours=1), 2) is True


def test_ensure_aware_reads_naive_values_in_canonical_zone():
    tz = ZoneInfo("America/Sao_Paulo")
    naive = datetime(2026, 10, 20, 14, 0)
    result = ensure_aware(naive, tz)
    assert result.tzinfo == tz
    assert (result.hour, result.minute) == (14, 0)


def test_ensure_aware_converts_other_offsets():
    """A half-hour offset lands on the canonical clock before the hour is floored."""
    india = timezone(timedelta(hours=5, minutes=30))
    value = datetime(2026, 10, 17, 14, 45, tzinfo=india)

    converted = ensure_aware(value, timezone.utc)

    assert converted == value
    assert converted.utcoffset() == timedelta(0)
    assert normalize(converted) == datetime(2026, 10, 17, 9, 0, tzinfo=timezone.utc)


def test_day_bounds_cover_whole_day():
    start, end = day_bounds(date(2026, 10, 20), timezone.utc)
    assert start == datetime(2026, 10, 20, 0, 0, tzinfo=timezone.utc)
    assert end.date() == date(2026, 10, 20)
    assert end.hour == 23 and end.minute == 59


def test_format_slot_is_human_readable():
    assert format_slot(datetime(2026, 10, 20, 14, 0, tzinfo=timezone.utc)) == "October 20, at 14:00h"
