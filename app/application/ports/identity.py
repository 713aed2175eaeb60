from abc import ABC, abstractmethod

from app.domain.entities.user import UserProfile


class IdentityPort(ABC):
    @abstractmethod
    def is_provider(self, user_id: int) -> bool:
        raise NotImplementedError

    @abstractmethod
    def get_profile(self, user_id: int) -> UserProfile | None:
        raise NotImplementedError
