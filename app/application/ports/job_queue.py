from abc import ABC, abstractmethod
from typing import Any


class JobQueuePort(ABC):
    @abstractmethod
    def enqueue(self, job_key: str, payload: Any) -> None:
        """Accept a job for background processing. Returns once accepted, not once done."""
        raise NotImplementedError
