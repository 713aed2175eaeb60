from abc import ABC, abstractmethod


class MailerPort(ABC):
    @abstractmethod
    def send(self, to_email: str, subject: str, body: str) -> None:
        raise NotImplementedError
