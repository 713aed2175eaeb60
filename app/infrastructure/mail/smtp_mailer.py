from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage

from app.application.ports.mailer import MailerPort


class SmtpMailer(MailerPort):
    def __init__(
        self,
        host: str,
        port: int = 587,
        username: str | None = None,
        password: str | None = None,
        from_email: str | None = None,
        use_tls: bool = True,
    ) -> None:
        self._host = host
        self._port = port
        self._username = username
        self._password = password
        self._from_email = from_email or username
        self._use_tls = use_tls
        self._logger = logging.getLogger(__name__)

        if not self._from_email:
            raise ValueError("SMTP_FROM_EMAIL or SMTP_USERNAME is required for SMTP mail")

    def send(self, to_email: str, subject: str, body: str) -> None:
        msg = EmailMessage()
        msg["From"] = self._from_email
        msg["To"] = to_email
        msg["Subject"] = subject
        msg.set_content(body)

        try:
            with smtplib.SMTP(self._host, self._port, timeout=10) as server:
                if self._use_tls:
                    server.starttls()
                if self._username and self._password:
                    server.login(self._username, self._password)
                server.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            self._logger.error("SMTP send failed", extra={"error": str(e)})
            raise
