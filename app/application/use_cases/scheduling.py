from __future__ import annotations

import logging
from datetime import datetime, timezone, tzinfo
from typing import Callable

from app.application.exceptions import (
    BookingAlreadyCanceledError,
    NotAProviderError,
    NotOwnerError,
    PastDateError,
    SelfBookingNotAllowedError,
    SlotUnavailableError,
    TooLateToCancelError,
)
from app.application.jobs.cancellation_mail import CANCELLATION_MAIL_KEY
from app.application.ports.booking_store import BookingStorePort
from app.application.ports.identity import IdentityPort
from app.application.ports.job_queue import JobQueuePort
from app.application.ports.notification_sink import NotificationSinkPort
from app.application.ports.task_runner import TaskRunnerPort
from app.application.use_cases.availability import AvailabilityIndex
from app.application.utils.time_rules import ensure_aware, format_slot, is_past, normalize, within_lead_time
from app.domain.entities.booking import Booking, CancellationDetails
from app.domain.entities.user import UserProfile


class SchedulingEngine:
    """
    Grants and cancels provider slots.

    Checks run in a fixed order and stop at the first failure, so nothing is
    persisted for a rejected request. Side effects (provider notification,
    cancellation mail) are handed to the task runner after the store write and
    never change the outcome of the call.
    """

    def __init__(
        self,
        store: BookingStorePort,
        identity: IdentityPort,
        notifications: NotificationSinkPort,
        dispatcher: JobQueuePort,
        tasks: TaskRunnerPort,
        timezone: tzinfo = timezone.utc,
        cancel_lead_hours: int = 2,
        page_size: int = 20,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._identity = identity
        self._notifications = notifications
        self._dispatcher = dispatcher
        self._tasks = tasks
        self._availability = AvailabilityIndex(store)
        self._timezone = timezone
        self._cancel_lead_hours = cancel_lead_hours
        self._page_size = page_size
        self._clock = clock or (lambda: datetime.now(self._timezone))
        self._logger = logging.getLogger(__name__)

    @property
    def cancel_lead_hours(self) -> int:
        return self._cancel_lead_hours

    def now(self) -> datetime:
        return self._clock()

    def request_booking(self, requester_id: int, provider_id: int, requested_at: datetime) -> Booking:
        if not self._identity.is_provider(provider_id):
            raise NotAProviderError("You can only create appointments with providers")

        if requester_id == provider_id:
            raise SelfBookingNotAllowedError("You can't schedule an appointment with yourself")

        scheduled_at = normalize(ensure_aware(requested_at, self._timezone))
        now = self.now()

        if is_past(scheduled_at, now):
            raise PastDateError("Past dates are not permitted")

        if self._availability.is_taken(provider_id, scheduled_at):
            self._logger.info(
                "Slot already taken",
                extra={"provider_id": provider_id, "requester_id": requester_id},
            )
            raise SlotUnavailableError("Appointment date is not available")

        booking = self._store.create(
            requester_id=requester_id,
            provider_id=provider_id,
            scheduled_at=scheduled_at,
            created_at=now,
        )
        self._logger.info(
            "Booking created",
            extra={"booking_id": booking.id, "provider_id": provider_id, "requester_id": requester_id},
        )

        self._tasks.submit("notify_provider", self._notify_provider, booking)
        return booking

    def cancel_booking(self, requester_id: int, booking_id: int) -> Booking:
        booking = self._store.find_by_id(booking_id)

        if booking.requester_id != requester_id:
            raise NotOwnerError("You don't have permission to cancel this appointment")

        now = self.now()
        if within_lead_time(booking.scheduled_at, now, self._cancel_lead_hours):
            raise TooLateToCancelError(
                f"You can only cancel appointments {self._cancel_lead_hours} hours in advance"
            )

        if not booking.is_active:
            raise BookingAlreadyCanceledError("This appointment is already canceled")

        # Atomic in the store: of two concurrent cancels only one gets past here.
        canceled = self._store.cancel(booking.id, now)
        self._logger.info(
            "Booking canceled",
            extra={"booking_id": canceled.id, "provider_id": canceled.provider_id, "requester_id": requester_id},
        )

        self._tasks.submit("dispatch_cancellation", self._dispatch_cancellation, canceled)
        return canceled

    def list_bookings(self, requester_id: int, page: int = 1) -> list[Booking]:
        return self._store.list_active(requester_id, max(page, 1), self._page_size)

    def _notify_provider(self, booking: Booking) -> None:
        requester = self._profile(booking.requester_id)
        content = f"New booking from {requester.name} for {format_slot(booking.scheduled_at)}"
        self._notifications.send(booking.provider_id, content)

    def _dispatch_cancellation(self, booking: Booking) -> None:
        details = CancellationDetails(
            booking=booking,
            provider=self._profile(booking.provider_id),
            requester=self._profile(booking.requester_id),
        )
        self._dispatcher.enqueue(CANCELLATION_MAIL_KEY, details)

    def _profile(self, user_id: int) -> UserProfile:
        profile = self._identity.get_profile(user_id)
        if profile is None:
            return UserProfile(id=user_id, name=f"User {user_id}")
        return profile
