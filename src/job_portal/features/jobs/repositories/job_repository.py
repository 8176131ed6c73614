"""
Job repository for database operations.
"""

from typing import Any, Dict, List, Optional

from loguru import logger

from ....database import DatabaseManager, process_database_record, to_jsonb
from ....utils import utc_now
from ..entities.job import Job, JobFilters, JobPage

JOB_COLUMNS = """
    id, title, company, location, type, category, description, requirements,
    responsibilities, skills, experience, salary_min, salary_max, posted_by,
    status, application_deadline, views, created_at, updated_at
"""
JSONB_FIELDS = ["requirements", "responsibilities", "skills"]
DATETIME_FIELDS = ["application_deadline", "created_at", "updated_at"]
UPDATABLE_FIELDS = (
    "title", "company", "location", "type", "category", "description",
    "requirements", "responsibilities", "skills", "experience",
    "salary_min", "salary_max", "status", "application_deadline",
)


def _db_value(field_name: str, value: Any) -> Any:
    if field_name in JSONB_FIELDS:
        return to_jsonb(value)
    if hasattr(value, "value"):
        return value.value
    return value


class JobDatabaseRepository:
    """Repository for job posting data access."""

    def __init__(self, db: DatabaseManager):
        self.db = db

    def _to_entity(self, record) -> Job:
        return Job(**process_database_record(
            record,
            jsonb_fields=JSONB_FIELDS,
            datetime_fields=DATETIME_FIELDS,
        ))

    async def create(self, job: Job) -> Job:
        query = f"""
            INSERT INTO jobs (
                id, title, company, location, type, category, description,
                requirements, responsibilities, skills, experience, salary_min,
                salary_max, posted_by, status, application_deadline, views,
                created_at, updated_at
            ) VALUES (
                $1, $2, $3, $4, $5, $6, $7, $8::jsonb, $9::jsonb, $10::jsonb,
                $11, $12, $13, $14, $15, $16, $17, $18, $19
            )
            RETURNING {JOB_COLUMNS}
        """
        record = await self.db.fetchrow(
            query,
            job.id,
            job.title,
            job.company,
            job.location,
            job.type.value,
            job.category.value,
            job.description,
            to_jsonb(job.requirements),
            to_jsonb(job.responsibilities),
            to_jsonb(job.skills),
            job.experience,
            job.salary_min,
            job.salary_max,
            job.posted_by,
            job.status.value,
            job.application_deadline,
            job.views,
            job.created_at,
            job.updated_at,
        )
        logger.info(f"Created job {job.id} posted by {job.posted_by}")
        return self._to_entity(record)

    async def get_by_id(self, job_id: str) -> Optional[Job]:
        record = await self.db.fetchrow(f"SELECT {JOB_COLUMNS} FROM jobs WHERE id = $1", job_id)
        return self._to_entity(record) if record else None

    async def list(self, filters: JobFilters) -> JobPage:
        where_conditions: List[str] = []
        params: List[Any] = []

        if filters.category:
            params.append(filters.category)
            where_conditions.append(f"category = ${len(params)}")

        if filters.type:
            params.append(filters.type)
            where_conditions.append(f"type = ${len(params)}")

        if filters.status:
            params.append(filters.status)
            where_conditions.append(f"status = ${len(params)}")

        if filters.location:
            params.append(filters.location.lower())
            where_conditions.append(f"position(${len(params)} in lower(location)) > 0")

        if filters.search:
            params.append(filters.search.lower())
            where_conditions.append(f"""position(${len(params)} in lower(
                title || ' ' || description || ' ' || location || ' ' || skills::text
            )) > 0""")

        where_clause = f"WHERE {' AND '.join(where_conditions)}" if where_conditions else ""

        total = await self.db.fetchval(f"SELECT COUNT(*) FROM jobs {where_clause}", *params)

        list_query = f"""
            SELECT {JOB_COLUMNS} FROM jobs
            {where_clause}
            ORDER BY created_at DESC, id DESC
            LIMIT ${len(params) + 1} OFFSET ${len(params) + 2}
        """
        records = await self.db.fetch(list_query, *params, filters.limit, filters.offset)

        return JobPage(
            jobs=[self._to_entity(record) for record in records],
            total=total,
            page=filters.page,
            limit=filters.limit,
        )

    async def update_owned(self, job_id: str, poster_id: str, changes: Dict[str, Any]) -> Optional[Job]:
        set_clauses = []
        params: List[Any] = [job_id, poster_id]
        for field_name in UPDATABLE_FIELDS:
            if field_name not in changes:
                continue
            params.append(_db_value(field_name, changes[field_name]))
            cast = "::jsonb" if field_name in JSONB_FIELDS else ""
            set_clauses.append(f"{field_name} = ${len(params)}{cast}")

        params.append(utc_now())
        set_clauses.append(f"updated_at = ${len(params)}")

        query = f"""
            UPDATE jobs SET {", ".join(set_clauses)}
            WHERE id = $1 AND posted_by = $2
            RETURNING {JOB_COLUMNS}
        """
        record = await self.db.fetchrow(query, *params)
        return self._to_entity(record) if record else None

    async def delete_owned(self, job_id: str, poster_id: str) -> Optional[Job]:
        record = await self.db.fetchrow(
            f"DELETE FROM jobs WHERE id = $1 AND posted_by = $2 RETURNING {JOB_COLUMNS}",
            job_id,
            poster_id,
        )
        if record:
            logger.info(f"Deleted job {job_id}")
        return self._to_entity(record) if record else None

    async def increment_views(self, job_id: str) -> Optional[int]:
        return await self.db.fetchval(
            "UPDATE jobs SET views = views + 1 WHERE id = $1 RETURNING views",
            job_id,
        )

    async def count_by_status(self) -> Dict[str, int]:
        records = await self.db.fetch("SELECT status, COUNT(*) AS total FROM jobs GROUP BY status")
        return {record["status"]: record["total"] for record in records}
