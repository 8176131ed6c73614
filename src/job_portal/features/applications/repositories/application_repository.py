"""
Application repository for database operations.
"""

from datetime import datetime
from typing import Any, Collection, Dict, List, Optional

from asyncpg.exceptions import UniqueViolationError
from loguru import logger

from ....core.exceptions import AlreadyAppliedError
from ....database import DatabaseManager, process_database_record, to_jsonb
from ..entities.application import (
    Application,
    ApplicationPage,
    ApplicationStatus,
    StatusHistoryEntry,
)

APPLICATION_COLUMNS = """
    id, job_id, applicant_id, resume_id, cover_letter, notes, status,
    status_history, applied_at, last_status_update, created_at, updated_at
"""
JSONB_FIELDS = ["notes", "status_history"]
DATETIME_FIELDS = ["applied_at", "last_status_update", "created_at", "updated_at"]


class ApplicationDatabaseRepository:
    """Repository for application data access."""

    def __init__(self, db: DatabaseManager):
        self.db = db

    def _to_entity(self, record) -> Application:
        return Application(**process_database_record(
            record,
            jsonb_fields=JSONB_FIELDS,
            datetime_fields=DATETIME_FIELDS,
        ))

    async def _page(self, where_clause: str, params: List[Any], page: int, limit: int) -> ApplicationPage:
        total = await self.db.fetchval(f"SELECT COUNT(*) FROM applications WHERE {where_clause}", *params)
        records = await self.db.fetch(
            f"""
            SELECT {APPLICATION_COLUMNS} FROM applications
            WHERE {where_clause}
            ORDER BY applied_at DESC, id DESC
            LIMIT ${len(params) + 1} OFFSET ${len(params) + 2}
            """,
            *params,
            limit,
            (page - 1) * limit,
        )
        return ApplicationPage(
            applications=[self._to_entity(record) for record in records],
            total=total,
            page=page,
            limit=limit,
        )

    async def create(self, application: Application) -> Application:
        query = f"""
            INSERT INTO applications (
                id, job_id, applicant_id, resume_id, cover_letter, notes, status,
                status_history, applied_at, last_status_update, created_at, updated_at
            ) VALUES ($1, $2, $3, $4, $5, $6::jsonb, $7, $8::jsonb, $9, $10, $11, $12)
            RETURNING {APPLICATION_COLUMNS}
        """
        try:
            record = await self.db.fetchrow(
                query,
                application.id,
                application.job_id,
                application.applicant_id,
                application.resume_id,
                application.cover_letter,
                to_jsonb(application.notes),
                application.status.value,
                to_jsonb([entry.to_dict() for entry in application.status_history]),
                application.applied_at,
                application.last_status_update,
                application.created_at,
                application.updated_at,
            )
        except UniqueViolationError:
            # Lost the race against a concurrent submission for the same pair
            raise AlreadyAppliedError(application.job_id)
        return self._to_entity(record)

    async def get_by_id(self, application_id: str) -> Optional[Application]:
        record = await self.db.fetchrow(
            f"SELECT {APPLICATION_COLUMNS} FROM applications WHERE id = $1",
            application_id,
        )
        return self._to_entity(record) if record else None

    async def find_active(self, job_id: str, applicant_id: str) -> Optional[Application]:
        record = await self.db.fetchrow(
            f"""
            SELECT {APPLICATION_COLUMNS} FROM applications
            WHERE job_id = $1 AND applicant_id = $2 AND status <> 'withdrawn'
            """,
            job_id,
            applicant_id,
        )
        return self._to_entity(record) if record else None

    async def list_for_applicant(self, applicant_id: str, page: int, limit: int) -> ApplicationPage:
        return await self._page("applicant_id = $1", [applicant_id], page, limit)

    async def list_for_job(
        self,
        job_id: str,
        status: Optional[ApplicationStatus],
        page: int,
        limit: int,
    ) -> ApplicationPage:
        if status is None:
            return await self._page("job_id = $1", [job_id], page, limit)
        return await self._page("job_id = $1 AND status = $2", [job_id, status.value], page, limit)

    async def transition(
        self,
        application_id: str,
        new_status: ApplicationStatus,
        entry: StatusHistoryEntry,
        allowed_from: Collection[ApplicationStatus],
    ) -> Optional[Application]:
        record = await self.db.fetchrow(
            f"""
            UPDATE applications
            SET status = $2,
                status_history = status_history || $3::jsonb,
                last_status_update = $4,
                updated_at = $4
            WHERE id = $1 AND status = ANY($5::text[])
            RETURNING {APPLICATION_COLUMNS}
            """,
            application_id,
            new_status.value,
            to_jsonb([entry.to_dict()]),
            entry.updated_at,
            [status.value for status in allowed_from],
        )
        return self._to_entity(record) if record else None

    async def add_note(self, application_id: str, note: str) -> Optional[Application]:
        record = await self.db.fetchrow(
            f"""
            UPDATE applications
            SET notes = notes || $2::jsonb, updated_at = now()
            WHERE id = $1
            RETURNING {APPLICATION_COLUMNS}
            """,
            application_id,
            to_jsonb([note]),
        )
        return self._to_entity(record) if record else None

    async def ids_for_resume(self, resume_id: str) -> List[str]:
        records = await self.db.fetch("SELECT id FROM applications WHERE resume_id = $1 ORDER BY id", resume_id)
        return [record["id"] for record in records]

    async def delete_by_job(self, job_id: str) -> int:
        result = await self.db.execute("DELETE FROM applications WHERE job_id = $1", job_id)
        deleted = int(result.split()[-1])
        logger.info(f"Deleted {deleted} applications of job {job_id}")
        return deleted

    async def delete_by_resume(self, resume_id: str) -> int:
        result = await self.db.execute("DELETE FROM applications WHERE resume_id = $1", resume_id)
        deleted = int(result.split()[-1])
        logger.info(f"Deleted {deleted} applications using resume {resume_id}")
        return deleted

    async def count_by_status(self) -> Dict[str, int]:
        records = await self.db.fetch("SELECT status, COUNT(*) AS total FROM applications GROUP BY status")
        return {record["status"]: record["total"] for record in records}

    async def count_created_since(self, since: datetime) -> int:
        return await self.db.fetchval("SELECT COUNT(*) FROM applications WHERE created_at >= $1", since)
