"""
Table definitions for the job portal.

Applied idempotently at startup. Tables carry no foreign keys: dependent
rows are removed by the services that own the cascade.
"""
import logging

from .connection import DatabaseManager

logger = logging.getLogger(__name__)


SCHEMA_STATEMENTS = [
    """
    CREATE TABLE IF NOT EXISTS users (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        email TEXT NOT NULL UNIQUE,
        phone TEXT,
        role TEXT NOT NULL DEFAULT 'user',
        location TEXT,
        skills JSONB NOT NULL DEFAULT '[]'::jsonb,
        created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
        updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS jobs (
        id TEXT PRIMARY KEY,
        title TEXT NOT NULL,
        company TEXT NOT NULL,
        location TEXT NOT NULL,
        type TEXT NOT NULL,
        category TEXT NOT NULL,
        description TEXT NOT NULL,
        requirements JSONB NOT NULL DEFAULT '[]'::jsonb,
        responsibilities JSONB NOT NULL DEFAULT '[]'::jsonb,
        skills JSONB NOT NULL DEFAULT '[]'::jsonb,
        experience INTEGER NOT NULL DEFAULT 0,
        salary_min INTEGER,
        salary_max INTEGER,
        posted_by TEXT NOT NULL,
        status TEXT NOT NULL DEFAULT 'active',
        application_deadline TIMESTAMPTZ,
        views INTEGER NOT NULL DEFAULT 0,
        created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
        updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_jobs_created_at ON jobs (created_at DESC)",
    "CREATE INDEX IF NOT EXISTS idx_jobs_posted_by ON jobs (posted_by)",
    """
    CREATE TABLE IF NOT EXISTS resumes (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        path TEXT NOT NULL,
        applicant_id TEXT NOT NULL,
        content_type TEXT,
        size INTEGER NOT NULL DEFAULT 0,
        uploaded_at TIMESTAMPTZ NOT NULL DEFAULT now()
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_resumes_applicant ON resumes (applicant_id)",
    """
    CREATE TABLE IF NOT EXISTS applications (
        id TEXT PRIMARY KEY,
        job_id TEXT NOT NULL,
        applicant_id TEXT NOT NULL,
        resume_id TEXT NOT NULL,
        cover_letter TEXT,
        notes JSONB NOT NULL DEFAULT '[]'::jsonb,
        status TEXT NOT NULL DEFAULT 'pending',
        status_history JSONB NOT NULL DEFAULT '[]'::jsonb,
        applied_at TIMESTAMPTZ NOT NULL DEFAULT now(),
        last_status_update TIMESTAMPTZ NOT NULL DEFAULT now(),
        created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
        updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
    )
    """,
    # At most one live application per (job, applicant)
    """
    CREATE UNIQUE INDEX IF NOT EXISTS uq_applications_job_applicant_active
        ON applications (job_id, applicant_id)
        WHERE status <> 'withdrawn'
    """,
    "CREATE INDEX IF NOT EXISTS idx_applications_job ON applications (job_id)",
    "CREATE INDEX IF NOT EXISTS idx_applications_applicant ON applications (applicant_id)",
    "CREATE INDEX IF NOT EXISTS idx_applications_resume ON applications (resume_id)",
]


async def ensure_schema(db: DatabaseManager) -> None:
    """Create tables and indexes that do not exist yet."""
    async with db.transaction() as connection:
        for statement in SCHEMA_STATEMENTS:
            await connection.execute(statement)
    logger.info("Database schema verified")
