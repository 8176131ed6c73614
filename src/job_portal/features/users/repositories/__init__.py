from .user_repository import UserDatabaseRepository
from .memory_repository import InMemoryUserRepository

__all__ = ["UserDatabaseRepository", "InMemoryUserRepository"]
