from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable

from app.application.ports.identity import IdentityPort
from app.domain.entities.user import UserProfile


class MemoryUserDirectory(IdentityPort):
    def __init__(self, users: Iterable[UserProfile] = ()) -> None:
        self._users: dict[int, UserProfile] = {user.id: user for user in users}

    @classmethod
    def from_file(cls, path: str) -> MemoryUserDirectory:
        """Load users from a JSON list of {id, name, email, provider} objects."""
        with open(Path(path), "r", encoding="utf-8") as f:
            rows = json.load(f)
        return cls(
            UserProfile(
                id=int(row["id"]),
                name=str(row["name"]),
                email=row.get("email"),
                is_provider=bool(row.get("provider", False)),
            )
            for row in rows
        )

    def is_provider(self, user_id: int) -> bool:
        user = self._users.get(user_id)
        return bool(user and user.is_provider)

    def get_profile(self, user_id: int) -> UserProfile | None:
        return self._users.get(user_id)
