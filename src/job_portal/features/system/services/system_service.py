"""
System service: health reporting and platform statistics.
"""

from datetime import timedelta
from typing import Any, Dict, Optional

from ....database import DatabaseManager
from ....utils import utc_now
from ...applications.entities.protocols import ApplicationRepository
from ...cache.services import ResponseCache
from ...jobs.entities.protocols import JobRepository
from ...resumes.entities.protocols import ResumeRepository
from ...users.entities.protocols import UserRepository


class SystemService:
    """Reads across features for the utility endpoints."""

    def __init__(
        self,
        cache: ResponseCache,
        users: UserRepository,
        jobs: JobRepository,
        applications: ApplicationRepository,
        resumes: ResumeRepository,
        db: Optional[DatabaseManager] = None,
    ):
        self.cache = cache
        self.users = users
        self.jobs = jobs
        self.applications = applications
        self.resumes = resumes
        self.db = db

    async def health(self) -> Dict[str, Any]:
        """Overall status plus one entry per backing service.

        In-memory repositories always count as connected. A disabled cache
        is reported but does not make the service unhealthy.
        """
        database_ok = True if self.db is None else await self.db.health_check()

        cache_health = await self.cache.health()
        if not cache_health["enabled"]:
            cache_state = "disabled"
            cache_ok = True
        else:
            cache_ok = cache_health["healthy"]
            cache_state = "connected" if cache_ok else "disconnected"

        return {
            "status": "healthy" if database_ok and cache_ok else "unhealthy",
            "timestamp": utc_now().isoformat(),
            "services": {
                "database": "connected" if database_ok else "disconnected",
                "cache": cache_state,
            },
        }

    async def stats(self) -> Dict[str, Any]:
        job_counts = await self.jobs.count_by_status()
        application_counts = await self.applications.count_by_status()
        now = utc_now()
        start_of_day = now.replace(hour=0, minute=0, second=0, microsecond=0)
        return {
            "users": await self.users.count(),
            "jobs": sum(job_counts.values()),
            "active_jobs": job_counts.get("active", 0),
            "applications": sum(application_counts.values()),
            "resumes": await self.resumes.count(),
            "jobs_by_status": job_counts,
            "applications_by_status": application_counts,
            "cached_keys": await self.cache.count(),
            "metrics": {
                "applications_today": await self.applications.count_created_since(start_of_day),
                "new_users_this_week": await self.users.count_created_since(now - timedelta(days=7)),
            },
            "timestamp": now.isoformat(),
        }
