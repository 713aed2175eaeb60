from __future__ import annotations

import logging
import queue
import threading
from typing import Any, Callable

from app.application.ports.job_queue import JobQueuePort


class InMemoryJobQueue(JobQueuePort):
    """
    In-process job queue with handlers registered by job key.

    `start()` runs a daemon worker that drains the queue. Without a worker,
    `process_pending()` drains it in the calling thread. Each job gets up to
    `max_attempts` tries; failures are logged, never raised to the enqueuer.
    """

    def __init__(self, max_attempts: int = 3) -> None:
        self._handlers: dict[str, Callable[[Any], None]] = {}
        self._queue: queue.Queue[tuple[str, Any] | None] = queue.Queue()
        self._max_attempts = max(max_attempts, 1)
        self._worker: threading.Thread | None = None
        self._logger = logging.getLogger(__name__)

    def register(self, job_key: str, handler: Callable[[Any], None]) -> None:
        self._handlers[job_key] = handler

    def enqueue(self, job_key: str, payload: Any) -> None:
        self._queue.put((job_key, payload))
        self._logger.info("Job enqueued", extra={"job_key": job_key})

    def pending(self) -> int:
        return self._queue.qsize()

    def start(self) -> None:
        if self._worker is not None and self._worker.is_alive():
            return
        self._worker = threading.Thread(target=self._run, name="job-queue-worker", daemon=True)
        self._worker.start()

    def stop(self, timeout: float | None = 5.0) -> None:
        if self._worker is None:
            return
        self._queue.put(None)
        self._worker.join(timeout)
        self._worker = None

    def process_pending(self) -> int:
        """Run every queued job in the calling thread. Returns how many were taken."""
        processed = 0
        while True:
            try:
                item = self._queue.get_nowait()
            except queue.Empty:
                return processed
            if item is not None:
                self._process(*item)
                processed += 1
            self._queue.task_done()

    def _run(self) -> None:
        while True:
            item = self._queue.get()
            try:
                if item is None:
                    return
                self._process(*item)
            finally:
                self._queue.task_done()

    def _process(self, job_key: str, payload: Any) -> None:
        handler = self._handlers.get(job_key)
        if handler is None:
            self._logger.error("No handler registered for job", extra={"job_key": job_key})
            return

        for attempt in range(1, self._max_attempts + 1):
            try:
                handler(payload)
                return
            except Exception as e:
                self._logger.warning(
                    "Job attempt failed",
                    extra={"job_key": job_key, "attempt": attempt, "error": str(e)},
                )
        self._logger.error("Job failed permanently", extra={"job_key": job_key, "attempt": self._max_attempts})
