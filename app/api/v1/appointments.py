from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_current_user_id
from app.api.v1.schemas import AppointmentCreateSchema, AppointmentSchema, appointment_schema
from app.application.ports.identity import IdentityPort
from app.application.use_cases.scheduling import SchedulingEngine
from app.wiring.dependencies import get_identity, get_scheduling_engine

router = APIRouter()


@router.get("/appointments", response_model=list[AppointmentSchema])
def list_appointments(
    page: int = Query(1, ge=1),
    user_id: int = Depends(get_current_user_id),
    engine: SchedulingEngine = Depends(get_scheduling_engine),
    identity: IdentityPort = Depends(get_identity),
):
    return [appointment_schema(b, engine, identity) for b in engine.list_bookings(user_id, page)]


@router.post("/appointments", response_model=AppointmentSchema)
def create_appointment(
    req: AppointmentCreateSchema,
    user_id: int = Depends(get_current_user_id),
    engine: SchedulingEngine = Depends(get_scheduling_engine),
    identity: IdentityPort = Depends(get_identity),
):
    booking = engine.request_booking(user_id, req.provider_id, req.date)
    return appointment_schema(booking, engine, identity)


@router.delete("/appointments/{appointment_id}", response_model=AppointmentSchema)
def cancel_appointment(
    appointment_id: int,
    user_id: int = Depends(get_current_user_id),
    engine: SchedulingEngine = Depends(get_scheduling_engine),
    identity: IdentityPort = Depends(get_identity),
):
    booking = engine.cancel_booking(user_id, appointment_id)
    return appointment_schema(booking, engine, identity)
