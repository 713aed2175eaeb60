from __future__ import annotations

import logging
from typing import Any, Callable

from app.application.ports.task_runner import TaskRunnerPort


class InlineTaskRunner(TaskRunnerPort):
    """Runs tasks immediately in the calling thread; failures are still only logged."""

    def __init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def submit(self, label: str, fn: Callable[..., Any], *args: Any) -> None:
        try:
            fn(*args)
        except Exception as e:
            self._logger.exception("Background task failed", extra={"reason": label, "error": str(e)})
