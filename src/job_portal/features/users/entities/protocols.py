"""User repository protocol."""

from abc import abstractmethod
from datetime import datetime
from typing import Any, Dict, Optional, Protocol, runtime_checkable

from .user import User


@runtime_checkable
class UserRepository(Protocol):
    """Persistence operations for user accounts."""

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[User]:
        ...

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        ...

    @abstractmethod
    async def create(self, user: User) -> User:
        """Insert a user; raises ConflictError when the id or email is taken."""
        ...

    @abstractmethod
    async def update(self, user_id: str, changes: Dict[str, Any]) -> Optional[User]:
        """Apply field changes and return the updated user, or None if absent."""
        ...

    @abstractmethod
    async def count(self) -> int:
        ...

    @abstractmethod
    async def count_created_since(self, since: datetime) -> int:
        """Users created at or after ``since``."""
        ...
