from dataclasses import dataclass


@dataclass(frozen=True)
class UserProfile:
    id: int
    name: str
    email: str | None = None
    is_provider: bool = False
