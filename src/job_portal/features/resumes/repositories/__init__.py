from .resume_repository import ResumeDatabaseRepository
from .memory_repository import InMemoryResumeRepository

__all__ = ["ResumeDatabaseRepository", "InMemoryResumeRepository"]
