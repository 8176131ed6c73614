"""In-memory job repository."""

from dataclasses import replace
from typing import Any, Dict, Optional

from ....utils import utc_now
from ..entities.job import Job, JobFilters, JobPage
from .job_repository import UPDATABLE_FIELDS


def _matches(job: Job, filters: JobFilters) -> bool:
    if filters.category and job.category.value != filters.category:
        return False
    if filters.type and job.type.value != filters.type:
        return False
    if filters.status and job.status.value != filters.status:
        return False
    if filters.location and filters.location.lower() not in job.location.lower():
        return False
    if filters.search:
        haystack = " ".join([job.title, job.description, job.location, *job.skills]).lower()
        if filters.search.lower() not in haystack:
            return False
    return True


class InMemoryJobRepository:
    """Dictionary-backed job repository for development and tests."""

    def __init__(self):
        self._jobs: Dict[str, Job] = {}

    async def create(self, job: Job) -> Job:
        self._jobs[job.id] = job
        return job

    async def get_by_id(self, job_id: str) -> Optional[Job]:
        return self._jobs.get(job_id)

    async def list(self, filters: JobFilters) -> JobPage:
        matched = [job for job in self._jobs.values() if _matches(job, filters)]
        matched.sort(key=lambda job: (job.created_at, job.id), reverse=True)
        return JobPage(
            jobs=matched[filters.offset:filters.offset + filters.limit],
            total=len(matched),
            page=filters.page,
            limit=filters.limit,
        )

    async def update_owned(self, job_id: str, poster_id: str, changes: Dict[str, Any]) -> Optional[Job]:
        job = self._jobs.get(job_id)
        if job is None or job.posted_by != poster_id:
            return None
        allowed = {k: v for k, v in changes.items() if k in UPDATABLE_FIELDS}
        updated = replace(job, updated_at=utc_now(), **allowed)
        self._jobs[job_id] = updated
        return updated

    async def delete_owned(self, job_id: str, poster_id: str) -> Optional[Job]:
        job = self._jobs.get(job_id)
        if job is None or job.posted_by != poster_id:
            return None
        return self._jobs.pop(job_id)

    async def increment_views(self, job_id: str) -> Optional[int]:
        job = self._jobs.get(job_id)
        if job is None:
            return None
        job.views += 1
        return job.views

    async def count_by_status(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for job in self._jobs.values():
            counts[job.status.value] = counts.get(job.status.value, 0) + 1
        return counts
