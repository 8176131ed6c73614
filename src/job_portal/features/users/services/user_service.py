"""
User service: profile reads and updates, provisioning from token claims.
"""

from typing import Any, Dict

from loguru import logger

from ....core.exceptions import AuthenticationError, ConflictError, NotFoundError
from ..entities.protocols import UserRepository
from ..entities.user import User, UserRole


class UserService:
    """Service for user account business logic."""

    def __init__(self, repository: UserRepository):
        self.repository = repository

    async def get_user(self, user_id: str) -> User:
        user = await self.repository.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    async def update_profile(self, user_id: str, changes: Dict[str, Any]) -> User:
        """Update the caller's own profile fields."""
        user = await self.repository.update(user_id, changes)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    async def resolve_from_claims(self, claims: Dict[str, Any]) -> User:
        """Map verified token claims to a local user.

        The token issuer owns identities: a subject seen for the first time
        is provisioned from its ``email``, ``name`` and ``role`` claims.
        """
        subject = claims.get("sub")
        if not subject:
            raise AuthenticationError("Token has no subject")

        user = await self.repository.get_by_id(str(subject))
        if user is not None:
            return user

        email = claims.get("email")
        if not email:
            raise AuthenticationError("Unknown user and token carries no email")

        try:
            role = UserRole(claims.get("role", UserRole.USER.value))
        except ValueError:
            role = UserRole.USER

        user = User(
            id=str(subject),
            name=claims.get("name") or email.split("@")[0],
            email=email,
            role=role,
        )
        logger.info(f"Provisioning user {user.id} from token claims")
        try:
            return await self.repository.create(user)
        except ConflictError:
            # A concurrent request provisioned the same subject first
            existing = await self.repository.get_by_id(user.id)
            if existing is None:
                raise
            return existing
