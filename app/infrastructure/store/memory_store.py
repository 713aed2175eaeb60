from __future__ import annotations

import threading
from datetime import datetime

from app.application.exceptions import BookingAlreadyCanceledError, BookingNotFoundError, SlotUnavailableError
from app.application.ports.booking_store import BookingStorePort
from app.domain.entities.booking import Booking


class MemoryBookingStore(BookingStorePort):
    def __init__(self) -> None:
        self._bookings: dict[int, Booking] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def create(
        self,
        requester_id: int,
        provider_id: int,
        scheduled_at: datetime,
        created_at: datetime,
    ) -> Booking:
        with self._lock:
            # Check-and-insert under one lock: at most one active booking per slot.
            if self._find_active_unlocked(provider_id, scheduled_at) is not None:
                raise SlotUnavailableError("Appointment date is not available")
            booking = Booking(
                id=self._next_id,
                requester_id=requester_id,
                provider_id=provider_id,
                scheduled_at=scheduled_at,
                created_at=created_at,
            )
            self._bookings[booking.id] = booking
            self._next_id += 1
            return booking

    def find_by_id(self, booking_id: int) -> Booking:
        with self._lock:
            booking = self._bookings.get(booking_id)
        if booking is None:
            raise BookingNotFoundError(f"Booking {booking_id} not found")
        return booking

    def save(self, booking: Booking) -> None:
        with self._lock:
            stored = self._bookings.get(booking.id)
            if stored is None:
                raise BookingNotFoundError(f"Booking {booking.id} not found")
            if stored.canceled_at is not None and booking.canceled_at != stored.canceled_at:
                raise BookingAlreadyCanceledError("This appointment is already canceled")
            self._bookings[booking.id] = booking

    def cancel(self, booking_id: int, canceled_at: datetime) -> Booking:
        with self._lock:
            booking = self._bookings.get(booking_id)
            if booking is None:
                raise BookingNotFoundError(f"Booking {booking_id} not found")
            if not booking.is_active:
                raise BookingAlreadyCanceledError("This appointment is already canceled")
            canceled = booking.cancel(canceled_at)
            self._bookings[booking_id] = canceled
            return canceled

    def find_active(self, provider_id: int, scheduled_at: datetime) -> Booking | None:
        with self._lock:
            return self._find_active_unlocked(provider_id, scheduled_at)

    def list_active(self, requester_id: int, page: int, page_size: int) -> list[Booking]:
        with self._lock:
            rows = [b for b in self._bookings.values() if b.requester_id == requester_id and b.is_active]
        rows.sort(key=lambda b: b.scheduled_at)
        offset = (page - 1) * page_size
        return rows[offset : offset + page_size]

    def list_provider_range(self, provider_id: int, start: datetime, end: datetime) -> list[Booking]:
        with self._lock:
            rows = [
                b
                for b in self._bookings.values()
                if b.provider_id == provider_id and b.is_active and start <= b.scheduled_at <= end
            ]
        rows.sort(key=lambda b: b.scheduled_at)
        return rows

    def _find_active_unlocked(self, provider_id: int, scheduled_at: datetime) -> Booking | None:
        for booking in self._bookings.values():
            if booking.provider_id == provider_id and booking.is_active and booking.scheduled_at == scheduled_at:
                return booking
        return None
