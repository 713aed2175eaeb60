from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timedelta

from app.domain.entities.user import UserProfile


@dataclass(frozen=True)
class Booking:
    id: int
    requester_id: int
    provider_id: int
    scheduled_at: datetime  # always the start of an hour
    created_at: datetime
    canceled_at: datetime | None = None  # None while active

    @property
    def is_active(self) -> bool:
        return self.canceled_at is None

    def is_past(self, now: datetime) -> bool:
        return self.scheduled_at < now

    def is_cancelable(self, now: datetime, lead_hours: int) -> bool:
        return now < self.scheduled_at - timedelta(hours=lead_hours)

    def cancel(self, now: datetime) -> Booking:
        if self.canceled_at is not None:
            raise ValueError(f"Booking {self.id} is already canceled")
        return replace(self, canceled_at=now)


@dataclass(frozen=True)
class CancellationDetails:
    """Payload of the cancellation mail job: the booking plus who was involved."""

    booking: Booking
    provider: UserProfile
    requester: UserProfile
