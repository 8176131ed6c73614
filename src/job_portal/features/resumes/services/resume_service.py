"""
Resume service: uploads, listing, and deletion with dependent applications.
"""

from typing import List, Optional

from loguru import logger

from ....core.exceptions import ConfirmationRequiredError, NotFoundError
from ....core.value_objects import ResumeId
from ...applications.entities.protocols import ApplicationRepository
from ..entities.protocols import ResumeRepository, ResumeStorage
from ..entities.resume import Resume


class ResumeService:
    """Service for resume business logic."""

    def __init__(
        self,
        repository: ResumeRepository,
        storage: ResumeStorage,
        applications: ApplicationRepository,
    ):
        self.repository = repository
        self.storage = storage
        self.applications = applications

    async def upload(
        self,
        applicant_id: str,
        name: Optional[str],
        filename: str,
        content_type: Optional[str],
        data: bytes,
    ) -> Resume:
        extension = self.storage.validate(filename, content_type, len(data))
        resume_id = str(ResumeId.generate())
        path = await self.storage.save(resume_id, extension, data)
        resume = Resume(
            id=resume_id,
            name=(name or "").strip() or filename,
            path=path,
            applicant_id=applicant_id,
            content_type=content_type,
            size=len(data),
        )
        try:
            return await self.repository.create(resume)
        except Exception:
            await self.storage.delete(path)
            raise

    async def get_resume(self, resume_id: str) -> Resume:
        resume = await self.repository.get_by_id(resume_id)
        if resume is None:
            raise NotFoundError("Resume", resume_id)
        return resume

    async def list_for_applicant(self, applicant_id: str) -> List[Resume]:
        return await self.repository.list_for_applicant(applicant_id)

    async def delete_resume(self, resume_id: str, owner_id: str, confirm_delete: bool = False) -> int:
        """Delete an owned resume.

        Applications that reference the resume are deleted with it, but only
        once the caller confirms; until then ConfirmationRequiredError lists
        them. Returns the number of applications removed.
        """
        resume = await self.repository.get_by_id(resume_id)
        if resume is None or resume.applicant_id != owner_id:
            raise NotFoundError("Resume", resume_id)

        application_ids = await self.applications.ids_for_resume(resume_id)
        if application_ids and not confirm_delete:
            raise ConfirmationRequiredError(
                f"This resume has {len(application_ids)} associated applications. "
                "Deleting it will also delete all related applications.",
                details={"resume_id": resume_id, "application_ids": application_ids},
            )

        removed = await self.applications.delete_by_resume(resume_id) if application_ids else 0
        await self.repository.delete(resume_id)
        await self.storage.delete(resume.path)
        logger.info(f"Deleted resume {resume_id} and {removed} dependent applications")
        return removed
