from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Notification:
    recipient_id: int
    content: str
    created_at: datetime
    read: bool = False
