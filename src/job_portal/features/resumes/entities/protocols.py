"""Resume repository and storage protocols."""

from abc import abstractmethod
from typing import List, Optional, Protocol, runtime_checkable

from .resume import Resume


@runtime_checkable
class ResumeRepository(Protocol):
    """Persistence operations for resume metadata."""

    @abstractmethod
    async def create(self, resume: Resume) -> Resume:
        ...

    @abstractmethod
    async def get_by_id(self, resume_id: str) -> Optional[Resume]:
        ...

    @abstractmethod
    async def list_for_applicant(self, applicant_id: str) -> List[Resume]:
        ...

    @abstractmethod
    async def delete(self, resume_id: str) -> bool:
        ...

    @abstractmethod
    async def count(self) -> int:
        ...


@runtime_checkable
class ResumeStorage(Protocol):
    """Stores resume file contents."""

    @abstractmethod
    def validate(self, filename: str, content_type: Optional[str], size: int) -> str:
        """Check type and size; return the file extension to store under."""
        ...

    @abstractmethod
    async def save(self, resume_id: str, extension: str, data: bytes) -> str:
        """Persist the content and return its storage path."""
        ...

    @abstractmethod
    async def delete(self, path: str) -> None:
        ...
