from datetime import datetime

from pydantic import BaseModel

from app.application.ports.identity import IdentityPort
from app.application.use_cases.scheduling import SchedulingEngine
from app.domain.entities.booking import Booking


class AppointmentCreateSchema(BaseModel):
    provider_id: int
    date: datetime


class ProviderSchema(BaseModel):
    id: int
    name: str


class AppointmentSchema(BaseModel):
    id: int
    date: datetime
    requester_id: int
    provider_id: int
    created_at: datetime
    canceled_at: datetime | None = None
    past: bool
    cancelable: bool
    provider: ProviderSchema | None = None


class NotificationSchema(BaseModel):
    content: str
    read: bool = False
    created_at: datetime


def appointment_schema(booking: Booking, engine: SchedulingEngine, identity: IdentityPort) -> AppointmentSchema:
    now = engine.now()
    provider = identity.get_profile(booking.provider_id)
    return AppointmentSchema(
        id=booking.id,
        date=booking.scheduled_at,
        requester_id=booking.requester_id,
        provider_id=booking.provider_id,
        created_at=booking.created_at,
        canceled_at=booking.canceled_at,
        past=booking.is_past(now),
        cancelable=booking.is_cancelable(now, engine.cancel_lead_hours),
        provider=ProviderSchema(id=provider.id, name=provider.name) if provider else None,
    )
