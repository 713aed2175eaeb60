from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

from app.application.ports.job_queue import JobQueuePort
from app.application.ports.notification_sink import NotificationSinkPort
from app.application.use_cases.provider_schedule import ProviderScheduleUseCase
from app.application.use_cases.scheduling import SchedulingEngine
from app.domain.entities.user import UserProfile
from app.infrastructure.identity.memory_directory import MemoryUserDirectory
from app.infrastructure.notifications.memory_sink import MemoryNotificationSink
from app.infrastructure.store.memory_store import MemoryBookingStore
from app.infrastructure.tasks.inline_runner import InlineTaskRunner

NOW = datetime(2026, 10, 16, 12, 30, tzinfo=timezone.utc)

PROVIDER = UserProfile(id=10, name="Ana Provider", email="ana@example.com", is_provider=True)
CLIENT = UserProfile(id=20, name="Bruno Client", email="bruno@example.com")
OTHER_CLIENT = UserProfile(id=30, name="Carla Client", email="carla@example.com")


class FakeClock:
    def __init__(self, now: datetime = NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


class RecordingJobQueue(JobQueuePort):
    def __init__(self) -> None:
        self.calls: list[tuple[str, Any]] = []

    def enqueue(self, job_key: str, payload: Any) -> None:
        self.calls.append((job_key, payload))


class FailingNotificationSink(NotificationSinkPort):
    def send(self, recipient_id: int, content: str) -> None:
        raise ConnectionError("notification backend down")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def directory() -> MemoryUserDirectory:
    return MemoryUserDirectory([PROVIDER, CLIENT, OTHER_CLIENT])


@pytest.fixture
def store() -> MemoryBookingStore:
    return MemoryBookingStore()


@pytest.fixture
def sink(clock: FakeClock) -> MemoryNotificationSink:
    return MemoryNotificationSink(clock=clock)


@pytest.fixture
def dispatcher() -> RecordingJobQueue:
    return RecordingJobQueue()


@pytest.fixture
def engine(store, directory, sink, dispatcher, clock) -> SchedulingEngine:
    return SchedulingEngine(
        store=store,
        identity=directory,
        notifications=sink,
        dispatcher=dispatcher,
        tasks=InlineTaskRunner(),
        timezone=timezone.utc,
        cancel_lead_hours=2,
        page_size=20,
        clock=clock,
    )


@pytest.fixture
def schedule(store, directory) -> ProviderScheduleUseCase:
    return ProviderScheduleUseCase(store=store, identity=directory, timezone=timezone.utc)
