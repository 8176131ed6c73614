from .job_repository import JobDatabaseRepository
from .memory_repository import InMemoryJobRepository

__all__ = ["JobDatabaseRepository", "InMemoryJobRepository"]
