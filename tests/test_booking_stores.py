"""
Tests for the memory and JSON booking stores.
"""

from __future__ import annotations

import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from app.application.exceptions import (
    BookingAlreadyCanceledError,
    BookingNotFoundError,
    SlotUnavailableError,
    StorageError,
)
from app.infrastructure.store.json_store import JsonBookingStore
from app.infrastructure.store.memory_store import MemoryBookingStore

SLOT = datetime(2026, 10, 20, 14, 0, tzinfo=timezone.utc)
CREATED = datetime(2026, 10, 16, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(params=["memory", "json"])
def any_store(request, tmp_path):
    if request.param == "json":
        return JsonBookingStore(data_dir=str(tmp_path))
    return MemoryBookingStore()


def test_create_assigns_increasing_ids(any_store):
    first = any_store.create(2, 1, SLOT, CREATED)
    second = any_store.create(2, 1, SLOT + timedelta(hours=1), CREATED)

    assert second.id > first.id
    assert first.canceled_at is None


def test_create_refuses_duplicate_active_slot(any_store):
    any_store.create(2, 1, SLOT, CREATED)

    with pytest.raises(SlotUnavailableError):
        any_store.create(3, 1, SLOT, CREATED)


def test_same_time_with_other_provider_is_allowed(any_store):
    any_store.create(2, 1, SLOT, CREATED)
    other = any_store.create(2, 5, SLOT, CREATED)

    assert any_store.find_active(5, SLOT) == other


def test_canceled_slot_can_be_taken_again(any_store):
    booking = any_store.create(2, 1, SLOT, CREATED)
    any_store.save(booking.cancel(CREATED))

    assert any_store.find_active(1, SLOT) is None
    assert any_store.create(3, 1, SLOT, CREATED).requester_id == 3


def test_find_by_id_missing(any_store):
    with pytest.raises(BookingNotFoundError):
        any_store.find_by_id(42)


def test_save_keeps_canceled_booking(any_store):
    booking = any_store.create(2, 1, SLOT, CREATED)
    any_store.save(booking.cancel(CREATED + timedelta(minutes=5)))

    stored = any_store.find_by_id(booking.id)
    assert stored.canceled_at == CREATED + timedelta(minutes=5)
    assert any_store.list_active(2, 1, 20) == []


def test_cancel_is_conditional_on_active(any_store):
    booking = any_store.create(2, 1, SLOT, CREATED)

    canceled = any_store.cancel(booking.id, CREATED + timedelta(minutes=1))

    assert canceled.canceled_at == CREATED + timedelta(minutes=1)
    with pytest.raises(BookingAlreadyCanceledError):
        any_store.cancel(booking.id, CREATED + timedelta(minutes=2))
    assert any_store.find_by_id(booking.id).canceled_at == CREATED + timedelta(minutes=1)


def test_cancel_unknown_booking(any_store):
    with pytest.raises(BookingNotFoundError):
        any_store.cancel(42, CREATED)


def test_save_cannot_undo_a_cancellation(any_store):
    booking = any_store.create(2, 1, SLOT, CREATED)
    any_store.cancel(booking.id, CREATED)

    with pytest.raises(BookingAlreadyCanceledError):
        any_store.save(booking)
    assert any_store.find_by_id(booking.id).canceled_at == CREATED


def test_list_active_pagination(any_store):
    for hours in range(5):
        any_store.create(2, 1, SLOT + timedelta(hours=4 - hours), CREATED)
    any_store.create(9, 1, SLOT - timedelta(hours=1), CREATED)

    page_one = any_store.list_active(2, 1, 2)
    page_three = any_store.list_active(2, 3, 2)

    assert [b.scheduled_at for b in page_one] == [SLOT, SLOT + timedelta(hours=1)]
    assert [b.scheduled_at for b in page_three] == [SLOT + timedelta(hours=4)]
    assert any_store.list_active(2, 4, 2) == []


def test_list_provider_range_is_inclusive(any_store):
    start = SLOT
    end = SLOT + timedelta(hours=2)
    inside = [any_store.create(2, 1, start + timedelta(hours=h), CREATED) for h in (2, 0)]
    any_store.create(2, 1, end + timedelta(hours=1), CREATED)

    rows = any_store.list_provider_range(1, start, end)

    assert [b.id for b in rows] == [inside[1].id, inside[0].id]


def test_json_store_persists_across_instances():
    """A second store on the same directory sees the first one's writes."""
    with tempfile.TemporaryDirectory() as tmpdir:
        first = JsonBookingStore(data_dir=tmpdir)
        booking = first.create(2, 1, SLOT, CREATED)
        first.save(booking.cancel(CREATED))
        kept = first.create(3, 1, SLOT, CREATED)

        second = JsonBookingStore(data_dir=tmpdir)

        assert second.find_by_id(booking.id).canceled_at == CREATED
        assert second.find_active(1, SLOT) == kept
        assert second.create(2, 1, SLOT + timedelta(hours=1), CREATED).id == kept.id + 1


def test_json_store_corrupted_file_raises_storage_error():
    with tempfile.TemporaryDirectory() as tmpdir:
        Path(tmpdir, "bookings.json").write_text("{not json", encoding="utf-8")
        store = JsonBookingStore(data_dir=tmpdir)

        with pytest.raises(StorageError):
            store.find_active(1, SLOT)
