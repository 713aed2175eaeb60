from __future__ import annotations

from datetime import date, timezone, tzinfo

from app.application.exceptions import NotAProviderError
from app.application.ports.booking_store import BookingStorePort
from app.application.ports.identity import IdentityPort
from app.application.utils.time_rules import day_bounds
from app.domain.entities.booking import Booking


class ProviderScheduleUseCase:
    def __init__(
        self,
        store: BookingStorePort,
        identity: IdentityPort,
        timezone: tzinfo = timezone.utc,
    ) -> None:
        self._store = store
        self._identity = identity
        self._timezone = timezone

    def day_schedule(self, provider_id: int, day: date) -> list[Booking]:
        """Active bookings of the calling provider for one calendar day."""
        if not self._identity.is_provider(provider_id):
            raise NotAProviderError("User is not a provider")

        start, end = day_bounds(day, self._timezone)
        return self._store.list_provider_range(provider_id, start, end)
