from abc import ABC, abstractmethod


class NotificationSinkPort(ABC):
    @abstractmethod
    def send(self, recipient_id: int, content: str) -> None:
        raise NotImplementedError
