from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import Callable

from app.application.ports.notification_sink import NotificationSinkPort
from app.domain.entities.notification import Notification


class MemoryNotificationSink(NotificationSinkPort):
    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self._notifications: dict[int, list[Notification]] = {}
        self._lock = threading.Lock()
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._logger = logging.getLogger(__name__)

    def send(self, recipient_id: int, content: str) -> None:
        notification = Notification(recipient_id=recipient_id, content=content, created_at=self._clock())
        with self._lock:
            self._notifications.setdefault(recipient_id, []).append(notification)
        self._logger.info("Notification stored", extra={"provider_id": recipient_id})

    def list_for(self, recipient_id: int) -> list[Notification]:
        """Newest first."""
        with self._lock:
            rows = list(self._notifications.get(recipient_id, []))
        return sorted(rows, key=lambda n: n.created_at, reverse=True)
