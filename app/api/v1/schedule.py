from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_current_user_id
from app.api.v1.schemas import AppointmentSchema, appointment_schema
from app.application.ports.identity import IdentityPort
from app.application.use_cases.provider_schedule import ProviderScheduleUseCase
from app.application.use_cases.scheduling import SchedulingEngine
from app.wiring.dependencies import get_identity, get_provider_schedule, get_scheduling_engine

router = APIRouter()


@router.get("/schedule", response_model=list[AppointmentSchema])
def provider_schedule(
    day: date = Query(..., alias="date"),
    user_id: int = Depends(get_current_user_id),
    uc: ProviderScheduleUseCase = Depends(get_provider_schedule),
    engine: SchedulingEngine = Depends(get_scheduling_engine),
    identity: IdentityPort = Depends(get_identity),
):
    return [appointment_schema(b, engine, identity) for b in uc.day_schedule(user_id, day)]
