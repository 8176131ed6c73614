"""
Resume repository for database operations.
"""

from typing import List, Optional

from loguru import logger

from ....database import DatabaseManager, process_database_record
from ..entities.resume import Resume

RESUME_COLUMNS = "id, name, path, applicant_id, content_type, size, uploaded_at"


class ResumeDatabaseRepository:
    """Repository for resume metadata."""

    def __init__(self, db: DatabaseManager):
        self.db = db

    def _to_entity(self, record) -> Resume:
        return Resume(**process_database_record(record, datetime_fields=["uploaded_at"]))

    async def create(self, resume: Resume) -> Resume:
        record = await self.db.fetchrow(
            f"""
            INSERT INTO resumes (id, name, path, applicant_id, content_type, size, uploaded_at)
            VALUES ($1, $2, $3, $4, $5, $6, $7)
            RETURNING {RESUME_COLUMNS}
            """,
            resume.id,
            resume.name,
            resume.path,
            resume.applicant_id,
            resume.content_type,
            resume.size,
            resume.uploaded_at,
        )
        logger.info(f"Stored resume {resume.id} for applicant {resume.applicant_id}")
        return self._to_entity(record)

    async def get_by_id(self, resume_id: str) -> Optional[Resume]:
        record = await self.db.fetchrow(f"SELECT {RESUME_COLUMNS} FROM resumes WHERE id = $1", resume_id)
        return self._to_entity(record) if record else None

    async def list_for_applicant(self, applicant_id: str) -> List[Resume]:
        records = await self.db.fetch(
            f"SELECT {RESUME_COLUMNS} FROM resumes WHERE applicant_id = $1 ORDER BY uploaded_at DESC",
            applicant_id,
        )
        return [self._to_entity(record) for record in records]

    async def delete(self, resume_id: str) -> bool:
        result = await self.db.execute("DELETE FROM resumes WHERE id = $1", resume_id)
        return result.split()[-1] != "0"

    async def count(self) -> int:
        return await self.db.fetchval("SELECT COUNT(*) FROM resumes")
