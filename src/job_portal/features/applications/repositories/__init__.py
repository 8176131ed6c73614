from .application_repository import ApplicationDatabaseRepository
from .memory_repository import InMemoryApplicationRepository

__all__ = ["ApplicationDatabaseRepository", "InMemoryApplicationRepository"]
