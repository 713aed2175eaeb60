from __future__ import annotations

import logging

from app.application.ports.mailer import MailerPort


class MockMailer(MailerPort):
    def __init__(self) -> None:
        self.sent: list[tuple[str, str, str]] = []
        self._logger = logging.getLogger(__name__)

    def send(self, to_email: str, subject: str, body: str) -> None:
        self.sent.append((to_email, subject, body))
        self._logger.info("Mock email send", extra={"reason": subject})
