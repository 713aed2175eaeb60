from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable

from app.application.ports.task_runner import TaskRunnerPort


class ThreadPoolTaskRunner(TaskRunnerPort):
    def __init__(self, max_workers: int = 4) -> None:
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="side-effects")
        self._logger = logging.getLogger(__name__)

    def submit(self, label: str, fn: Callable[..., Any], *args: Any) -> None:
        self._executor.submit(self._run_safely, label, fn, *args)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def _run_safely(self, label: str, fn: Callable[..., Any], *args: Any) -> None:
        try:
            fn(*args)
        except Exception as e:
            self._logger.exception("Background task failed", extra={"reason": label, "error": str(e)})
