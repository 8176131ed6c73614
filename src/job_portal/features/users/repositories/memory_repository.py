"""In-memory user repository."""

from dataclasses import replace
from datetime import datetime
from typing import Any, Dict, Optional

from ....core.exceptions import ConflictError
from ....utils import utc_now
from ..entities.user import User
from .user_repository import UPDATABLE_FIELDS


class InMemoryUserRepository:
    """Dictionary-backed user repository for development and tests."""

    def __init__(self):
        self._users: Dict[str, User] = {}

    async def get_by_id(self, user_id: str) -> Optional[User]:
        return self._users.get(user_id)

    async def get_by_email(self, email: str) -> Optional[User]:
        email = email.lower()
        return next((u for u in self._users.values() if u.email == email), None)

    async def create(self, user: User) -> User:
        stored = replace(user, email=user.email.lower())
        if stored.id in self._users or await self.get_by_email(stored.email) is not None:
            raise ConflictError("User already exists", details={"id": stored.id})
        self._users[stored.id] = stored
        return stored

    async def update(self, user_id: str, changes: Dict[str, Any]) -> Optional[User]:
        user = self._users.get(user_id)
        if user is None:
            return None
        allowed = {k: v for k, v in changes.items() if k in UPDATABLE_FIELDS}
        updated = replace(user, updated_at=utc_now(), **allowed)
        self._users[user_id] = updated
        return updated

    async def count(self) -> int:
        return len(self._users)

    async def count_created_since(self, since: datetime) -> int:
        return sum(1 for user in self._users.values() if user.created_at >= since)
