from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from app.domain.entities.booking import Booking


class BookingStorePort(ABC):
    @abstractmethod
    def create(
        self,
        requester_id: int,
        provider_id: int,
        scheduled_at: datetime,
        created_at: datetime,
    ) -> Booking:
        """
        Persist a new active booking and return it with its assigned id.
        Raises SlotUnavailableError if an active booking already holds
        (provider_id, scheduled_at); the check and the insert are atomic.
        """
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, booking_id: int) -> Booking:
        """Raises BookingNotFoundError when no booking has this id."""
        raise NotImplementedError

    @abstractmethod
    def save(self, booking: Booking) -> None:
        """Replace a stored booking. Raises BookingAlreadyCanceledError if it would change a set canceled_at."""
        raise NotImplementedError

    @abstractmethod
    def cancel(self, booking_id: int, canceled_at: datetime) -> Booking:
        """
        Set canceled_at on an active booking and return the updated record.
        Raises BookingNotFoundError for unknown ids and BookingAlreadyCanceledError
        when the stored booking is already canceled; the check and the write are atomic.
        """
        raise NotImplementedError

    @abstractmethod
    def find_active(self, provider_id: int, scheduled_at: datetime) -> Booking | None:
        raise NotImplementedError

    @abstractmethod
    def list_active(self, requester_id: int, page: int, page_size: int) -> list[Booking]:
        """Active bookings of a requester, ordered by scheduled_at, one page at a time."""
        raise NotImplementedError

    @abstractmethod
    def list_provider_range(self, provider_id: int, start: datetime, end: datetime) -> list[Booking]:
        """Active bookings of a provider with start <= scheduled_at <= end, ordered by scheduled_at."""
        raise NotImplementedError
