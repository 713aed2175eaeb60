from abc import ABC, abstractmethod
from typing import Any, Callable


class TaskRunnerPort(ABC):
    @abstractmethod
    def submit(self, label: str, fn: Callable[..., Any], *args: Any) -> None:
        """
        Run fn(*args) without the caller waiting on it.
        Failures are logged under `label` and never raised to the caller.
        """
        raise NotImplementedError
