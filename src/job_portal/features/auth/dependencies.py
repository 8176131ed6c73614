"""Authentication dependencies for routers."""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ...api.dependencies import get_token_verifier, get_user_service
from ...core.exceptions import AuthenticationError, AuthorizationError
from ..users.entities.user import User
from ..users.services import UserService
from .services import TokenVerifier

security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    verifier: TokenVerifier = Depends(get_token_verifier),
    users: UserService = Depends(get_user_service),
) -> User:
    """Resolve the caller from the bearer token; 401 when missing or invalid."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Not authorized, no token")
    claims = verifier.verify(credentials.credentials)
    return await users.resolve_from_claims(claims)


async def require_admin(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.is_admin:
        raise AuthorizationError("Admin access required")
    return current_user
