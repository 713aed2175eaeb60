from __future__ import annotations

from datetime import datetime

from app.application.ports.booking_store import BookingStorePort


class AvailabilityIndex:
    def __init__(self, store: BookingStorePort) -> None:
        self._store = store

    def is_taken(self, provider_id: int, scheduled_at: datetime) -> bool:
        """Exact slot match only: slots are fixed one-hour buckets."""
        return self._store.find_active(provider_id, scheduled_at) is not None
