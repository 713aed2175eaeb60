import logging

from fastapi import FastAPI

from app.api.errors import register_error_handlers
from app.api.v1.appointments import router as appointments_router
from app.api.v1.notifications import router as notifications_router
from app.api.v1.schedule import router as schedule_router
from app.core.config import settings

class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in ("booking_id", "provider_id", "requester_id", "job_key", "attempt", "reason", "error"):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)

app = FastAPI(title="Appointment Booking", version="1.0.0")

register_error_handlers(app)
app.include_router(appointments_router, tags=["appointments"])
app.include_router(schedule_router, tags=["schedule"])
app.include_router(notifications_router, tags=["notifications"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
