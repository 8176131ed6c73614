"""Application repository protocol."""

from abc import abstractmethod
from datetime import datetime
from typing import Collection, Dict, List, Optional, Protocol, runtime_checkable

from .application import Application, ApplicationPage, ApplicationStatus, StatusHistoryEntry


@runtime_checkable
class ApplicationRepository(Protocol):
    """Persistence operations for applications.

    Every mutation is a single atomic store operation.
    """

    @abstractmethod
    async def create(self, application: Application) -> Application:
        """Insert a new application.

        Raises AlreadyAppliedError when a non-withdrawn application for the
        same (job, applicant) exists.
        """
        ...

    @abstractmethod
    async def get_by_id(self, application_id: str) -> Optional[Application]:
        ...

    @abstractmethod
    async def find_active(self, job_id: str, applicant_id: str) -> Optional[Application]:
        """Non-withdrawn application for (job, applicant), if any."""
        ...

    @abstractmethod
    async def list_for_applicant(self, applicant_id: str, page: int, limit: int) -> ApplicationPage:
        ...

    @abstractmethod
    async def list_for_job(
        self,
        job_id: str,
        status: Optional[ApplicationStatus],
        page: int,
        limit: int,
    ) -> ApplicationPage:
        ...

    @abstractmethod
    async def transition(
        self,
        application_id: str,
        new_status: ApplicationStatus,
        entry: StatusHistoryEntry,
        allowed_from: Collection[ApplicationStatus],
    ) -> Optional[Application]:
        """Set status, append the history entry and stamp last_status_update.

        Applies only while the current status is in ``allowed_from``;
        returns None when the application is absent or in another status.
        """
        ...

    @abstractmethod
    async def add_note(self, application_id: str, note: str) -> Optional[Application]:
        ...

    @abstractmethod
    async def ids_for_resume(self, resume_id: str) -> List[str]:
        ...

    @abstractmethod
    async def delete_by_job(self, job_id: str) -> int:
        ...

    @abstractmethod
    async def delete_by_resume(self, resume_id: str) -> int:
        ...

    @abstractmethod
    async def count_by_status(self) -> Dict[str, int]:
        ...

    @abstractmethod
    async def count_created_since(self, since: datetime) -> int:
        """Applications created at or after ``since``."""
        ...
