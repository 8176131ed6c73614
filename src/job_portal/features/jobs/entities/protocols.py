"""Job repository protocol."""

from abc import abstractmethod
from typing import Any, Dict, Optional, Protocol, runtime_checkable

from .job import Job, JobFilters, JobPage


@runtime_checkable
class JobRepository(Protocol):
    """Persistence operations for job postings.

    Owner-scoped operations only touch a job whose ``posted_by`` matches,
    so a foreign job is indistinguishable from a missing one.
    """

    @abstractmethod
    async def create(self, job: Job) -> Job:
        ...

    @abstractmethod
    async def get_by_id(self, job_id: str) -> Optional[Job]:
        ...

    @abstractmethod
    async def list(self, filters: JobFilters) -> JobPage:
        """Filtered page of jobs, newest first."""
        ...

    @abstractmethod
    async def update_owned(self, job_id: str, poster_id: str, changes: Dict[str, Any]) -> Optional[Job]:
        ...

    @abstractmethod
    async def delete_owned(self, job_id: str, poster_id: str) -> Optional[Job]:
        """Delete and return the job, or None when absent or not owned."""
        ...

    @abstractmethod
    async def increment_views(self, job_id: str) -> Optional[int]:
        """Atomically add one view and return the new count."""
        ...

    @abstractmethod
    async def count_by_status(self) -> Dict[str, int]:
        ...
