from __future__ import annotations

import json
import logging
import threading
from datetime import datetime
from pathlib import Path
from typing import Any

from app.application.exceptions import (
    BookingAlreadyCanceledError,
    BookingNotFoundError,
    SlotUnavailableError,
    StorageError,
)
from app.application.ports.booking_store import BookingStorePort
from app.domain.entities.booking import Booking


class JsonBookingStore(BookingStorePort):
    """
    Bookings kept in a single JSON file.

    Every operation reads the file under a process-wide lock and writes it back
    atomically (temp file + rename), so a create that passes the slot check is
    the only writer until it is on disk.
    """

    def __init__(self, data_dir: str = "./data", file_name: str = "bookings.json") -> None:
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._file_path = self._data_dir / file_name
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def create(
        self,
        requester_id: int,
        provider_id: int,
        scheduled_at: datetime,
        created_at: datetime,
    ) -> Booking:
        with self._lock:
            data = self._load()
            bookings = [self._deserialize(row) for row in data["bookings"]]
            if any(
                b.provider_id == provider_id and b.is_active and b.scheduled_at == scheduled_at
                for b in bookings
            ):
                raise SlotUnavailableError("Appointment date is not available")

            booking = Booking(
                id=data["next_id"],
                requester_id=requester_id,
                provider_id=provider_id,
                scheduled_at=scheduled_at,
                created_at=created_at,
            )
            data["bookings"].append(self._serialize(booking))
            data["next_id"] = booking.id + 1
            self._save(data)
            return booking

    def find_by_id(self, booking_id: int) -> Booking:
        for booking in self._all():
            if booking.id == booking_id:
                return booking
        raise BookingNotFoundError(f"Booking {booking_id} not found")

    def save(self, booking: Booking) -> None:
        with self._lock:
            data = self._load()
            for index, row in enumerate(data["bookings"]):
                if row["id"] == booking.id:
                    stored = self._deserialize(row)
                    if stored.canceled_at is not None and booking.canceled_at != stored.canceled_at:
                        raise BookingAlreadyCanceledError("This appointment is already canceled")
                    data["bookings"][index] = self._serialize(booking)
                    self._save(data)
                    return
        raise BookingNotFoundError(f"Booking {booking.id} not found")

    def cancel(self, booking_id: int, canceled_at: datetime) -> Booking:
        with self._lock:
            data = self._load()
            for index, row in enumerate(data["bookings"]):
                if row["id"] != booking_id:
                    continue
                booking = self._deserialize(row)
                if not booking.is_active:
                    raise BookingAlreadyCanceledError("This appointment is already canceled")
                canceled = booking.cancel(canceled_at)
                data["bookings"][index] = self._serialize(canceled)
                self._save(data)
                return canceled
        raise BookingNotFoundError(f"Booking {booking_id} not found")

    def find_active(self, provider_id: int, scheduled_at: datetime) -> Booking | None:
        for booking in self._all():
            if booking.provider_id == provider_id and booking.is_active and booking.scheduled_at == scheduled_at:
                return booking
        return None

    def list_active(self, requester_id: int, page: int, page_size: int) -> list[Booking]:
        rows = sorted(
            (b for b in self._all() if b.requester_id == requester_id and b.is_active),
            key=lambda b: b.scheduled_at,
        )
        offset = (page - 1) * page_size
        return rows[offset : offset + page_size]

    def list_provider_range(self, provider_id: int, start: datetime, end: datetime) -> list[Booking]:
        return sorted(
            (
                b
                for b in self._all()
                if b.provider_id == provider_id and b.is_active and start <= b.scheduled_at <= end
            ),
            key=lambda b: b.scheduled_at,
        )

    def _all(self) -> list[Booking]:
        with self._lock:
            data = self._load()
        return [self._deserialize(row) for row in data["bookings"]]

    def _load(self) -> dict[str, Any]:
        """Load the bookings file, return an empty document if missing."""
        if not self._file_path.exists():
            return {"next_id": 1, "bookings": [], "version": 1}

        try:
            with open(self._file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            self._logger.error("Failed to read bookings file", extra={"error": str(e)})
            raise StorageError(f"Cannot read {self._file_path}") from e

        if "version" not in data:
            data["version"] = 1
        return data

    def _save(self, data: dict[str, Any]) -> None:
        temp_path = self._file_path.with_suffix(".json.tmp")
        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            temp_path.replace(self._file_path)
        except OSError as e:
            if temp_path.exists():
                temp_path.unlink(missing_ok=True)
            self._logger.error("Failed to write bookings file", extra={"error": str(e)})
            raise StorageError(f"Cannot write {self._file_path}") from e

    def _serialize(self, booking: Booking) -> dict[str, Any]:
        return {
            "id": booking.id,
            "requester_id": booking.requester_id,
            "provider_id": booking.provider_id,
            "scheduled_at": booking.scheduled_at.isoformat(),
            "created_at": booking.created_at.isoformat(),
            "canceled_at": booking.canceled_at.isoformat() if booking.canceled_at else None,
        }

    def _deserialize(self, row: dict[str, Any]) -> Booking:
        canceled_at = row.get("canceled_at")
        return Booking(
            id=int(row["id"]),
            requester_id=int(row["requester_id"]),
            provider_id=int(row["provider_id"]),
            scheduled_at=datetime.fromisoformat(row["scheduled_at"]),
            created_at=datetime.fromisoformat(row["created_at"]),
            canceled_at=datetime.fromisoformat(canceled_at) if canceled_at else None,
        )
