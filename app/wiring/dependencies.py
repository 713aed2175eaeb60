from functools import lru_cache
import logging
from pathlib import Path
from zoneinfo import ZoneInfo

from app.core.config import settings
from app.application.jobs.cancellation_mail import CancellationMailJob
from app.application.ports.booking_store import BookingStorePort
from app.application.ports.identity import IdentityPort
from app.application.ports.mailer import MailerPort
from app.application.ports.task_runner import TaskRunnerPort
from app.application.use_cases.provider_schedule import ProviderScheduleUseCase
from app.application.use_cases.scheduling import SchedulingEngine
from app.domain.entities.user import UserProfile
from app.infrastructure.identity.memory_directory import MemoryUserDirectory
from app.infrastructure.mail.mock_mailer import MockMailer
from app.infrastructure.mail.smtp_mailer import SmtpMailer
from app.infrastructure.notifications.memory_sink import MemoryNotificationSink
from app.infrastructure.queue.memory_queue import InMemoryJobQueue
from app.infrastructure.store.json_store import JsonBookingStore
from app.infrastructure.store.memory_store import MemoryBookingStore
from app.infrastructure.tasks.thread_pool_runner import ThreadPoolTaskRunner


logger = logging.getLogger(__name__)

DEMO_USERS = (
    UserProfile(id=1, name="Demo Provider", email="provider@example.com", is_provider=True),
    UserProfile(id=2, name="Demo Client", email="client@example.com"),
    UserProfile(id=3, name="Second Client", email="client2@example.com"),
)


@lru_cache
def get_timezone() -> ZoneInfo:
    return ZoneInfo(settings.TIMEZONE)


@lru_cache
def get_booking_store() -> BookingStorePort:
    if settings.STORE_PROVIDER.lower() == "json":
        return JsonBookingStore(data_dir=str(Path(settings.DATA_DIR)))
    return MemoryBookingStore()


@lru_cache
def get_identity() -> IdentityPort:
    if settings.USERS_FILE:
        return MemoryUserDirectory.from_file(settings.USERS_FILE)
    if settings.ENV.lower() in {"dev", "local"}:
        logger.info("Using demo user directory (USERS_FILE unset, ENV=dev/local)")
        return MemoryUserDirectory(DEMO_USERS)
    raise ValueError("USERS_FILE is required outside dev/local.")


@lru_cache
def get_notification_sink() -> MemoryNotificationSink:
    return MemoryNotificationSink()


@lru_cache
def get_mailer() -> MailerPort:
    if not settings.SMTP_HOST:
        logger.info("Using MockMailer (SMTP_HOST missing)")
        return MockMailer()
    return SmtpMailer(
        host=settings.SMTP_HOST,
        port=settings.SMTP_PORT,
        username=settings.SMTP_USERNAME,
        password=settings.SMTP_PASSWORD,
        from_email=settings.SMTP_FROM_EMAIL,
        use_tls=settings.SMTP_USE_TLS,
    )


@lru_cache
def get_job_queue() -> InMemoryJobQueue:
    job_queue = InMemoryJobQueue(max_attempts=settings.JOB_MAX_ATTEMPTS)
    cancellation_mail = CancellationMailJob(mailer=get_mailer())
    job_queue.register(cancellation_mail.key, cancellation_mail.handle)
    job_queue.start()
    return job_queue


@lru_cache
def get_task_runner() -> TaskRunnerPort:
    return ThreadPoolTaskRunner(max_workers=settings.TASK_RUNNER_MAX_WORKERS)


@lru_cache
def get_scheduling_engine() -> SchedulingEngine:
    return SchedulingEngine(
        store=get_booking_store(),
        identity=get_identity(),
        notifications=get_notification_sink(),
        dispatcher=get_job_queue(),
        tasks=get_task_runner(),
        timezone=get_timezone(),
        cancel_lead_hours=settings.CANCEL_LEAD_HOURS,
        page_size=settings.PAGE_SIZE,
    )


@lru_cache
def get_provider_schedule() -> ProviderScheduleUseCase:
    return ProviderScheduleUseCase(
        store=get_booking_store(),
        identity=get_identity(),
        timezone=get_timezone(),
    )
