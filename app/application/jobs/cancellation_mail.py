from __future__ import annotations

import logging

from app.application.ports.mailer import MailerPort
from app.application.utils.time_rules import format_slot
from app.domain.entities.booking import CancellationDetails

CANCELLATION_MAIL_KEY = "CancellationMail"


class CancellationMailJob:
    key = CANCELLATION_MAIL_KEY

    def __init__(self, mailer: MailerPort) -> None:
        self._mailer = mailer
        self._logger = logging.getLogger(__name__)

    def handle(self, details: CancellationDetails) -> None:
        provider = details.provider
        if not provider.email:
            self._logger.warning(
                "Provider has no email; skipping cancellation mail",
                extra={"booking_id": details.booking.id, "provider_id": provider.id},
            )
            return

        body = "\n".join(
            [
                f"Hello {provider.name},",
                "",
                "An appointment has been cancelled.",
                f"Client: {details.requester.name}",
                f"Date: {format_slot(details.booking.scheduled_at)}",
            ]
        )
        self._mailer.send(to_email=provider.email, subject="Appointment cancelled", body=body)
        self._logger.info("Cancellation mail sent", extra={"booking_id": details.booking.id})
