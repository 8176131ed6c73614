"""In-memory resume repository."""

from typing import Dict, List, Optional

from ..entities.resume import Resume


class InMemoryResumeRepository:
    """Dictionary-backed resume repository for development and tests."""

    def __init__(self):
        self._resumes: Dict[str, Resume] = {}

    async def create(self, resume: Resume) -> Resume:
        self._resumes[resume.id] = resume
        return resume

    async def get_by_id(self, resume_id: str) -> Optional[Resume]:
        return self._resumes.get(resume_id)

    async def list_for_applicant(self, applicant_id: str) -> List[Resume]:
        owned = [r for r in self._resumes.values() if r.applicant_id == applicant_id]
        return sorted(owned, key=lambda r: r.uploaded_at, reverse=True)

    async def delete(self, resume_id: str) -> bool:
        return self._resumes.pop(resume_id, None) is not None

    async def count(self) -> int:
        return len(self._resumes)
