from .user import User, UserRole
from .protocols import UserRepository

__all__ = ["User", "UserRole", "UserRepository"]
