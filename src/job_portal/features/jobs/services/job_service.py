"""
Job service: reads, and writes followed by cache invalidation.

Writes persist first and invalidate second. There is no transaction across
the database and the cache, so a crash between the two leaves a stale entry
that expires with its TTL.
"""

from typing import Any, Dict, Optional

from loguru import logger

from ....core.exceptions import NotFoundError
from ....core.value_objects import JobId
from ....utils import ensure_utc, utc_now
from ...applications.entities.protocols import ApplicationRepository
from ...cache.services import ResponseCache
from ..entities.job import Job, JobFilters, JobPage
from ..entities.protocols import JobRepository
from .cache_keys import JobCacheKeys


class JobMutationCoordinator:
    """Service for job postings and the cache entries derived from them."""

    def __init__(
        self,
        jobs: JobRepository,
        applications: ApplicationRepository,
        cache: ResponseCache,
        cache_keys: Optional[JobCacheKeys] = None,
    ):
        self.jobs = jobs
        self.applications = applications
        self.cache = cache
        self.cache_keys = cache_keys or JobCacheKeys()

    # Reads

    async def list_jobs(self, filters: JobFilters) -> JobPage:
        return await self.jobs.list(filters)

    async def get_job(self, job_id: str) -> Job:
        job = await self.jobs.get_by_id(job_id)
        if job is None:
            raise NotFoundError("Job", job_id)
        return job

    async def record_view(self, job_id: str) -> int:
        """Count one detail view and return the new total."""
        views = await self.jobs.increment_views(job_id)
        if views is None:
            raise NotFoundError("Job", job_id)
        return views

    # Writes

    async def create_job(self, poster_id: str, data: Dict[str, Any]) -> Job:
        now = utc_now()
        fields = dict(data)
        if fields.get("application_deadline") is not None:
            fields["application_deadline"] = ensure_utc(fields["application_deadline"])

        job = await self.jobs.create(Job(
            id=str(JobId.generate()),
            posted_by=poster_id,
            created_at=now,
            updated_at=now,
            **fields,
        ))
        logger.info(f"Job {job.id} created by {poster_id}")

        await self.cache.invalidate_pattern(self.cache_keys.list_pattern())
        return job

    async def update_job(self, job_id: str, poster_id: str, changes: Dict[str, Any]) -> Job:
        """Update the poster's own job; a foreign job reads as missing."""
        changes = dict(changes)
        if changes.get("application_deadline") is not None:
            changes["application_deadline"] = ensure_utc(changes["application_deadline"])

        job = await self.jobs.update_owned(job_id, poster_id, changes)
        if job is None:
            raise NotFoundError("Job", job_id)
        logger.info(f"Job {job_id} updated by {poster_id}")

        await self._invalidate_job(job_id)
        return job

    async def delete_job(self, job_id: str, poster_id: str) -> Job:
        """Delete the poster's own job and the applications made to it."""
        job = await self.jobs.delete_owned(job_id, poster_id)
        if job is None:
            raise NotFoundError("Job", job_id)
        logger.info(f"Job {job_id} deleted by {poster_id}")

        try:
            await self.purge_applications(job_id)
        except Exception as e:
            # The job is gone either way; purge_applications can be re-run
            logger.error(f"Failed to delete applications for job {job_id}: {e}")

        await self._invalidate_job(job_id)
        return job

    async def purge_applications(self, job_id: str) -> int:
        """Delete every application referencing ``job_id``. Safe to repeat."""
        removed = await self.applications.delete_by_job(job_id)
        if removed:
            logger.info(f"Deleted {removed} applications for job {job_id}")
        return removed

    async def _invalidate_job(self, job_id: str) -> None:
        await self.cache.invalidate_pattern(self.cache_keys.detail_pattern(job_id))
        await self.cache.invalidate_pattern(self.cache_keys.detail_variants_pattern(job_id))
        await self.cache.invalidate_pattern(self.cache_keys.list_pattern())
