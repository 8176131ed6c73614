"""In-memory application repository."""

from dataclasses import replace
from datetime import datetime
from typing import Callable, Collection, Dict, List, Optional

from ....core.exceptions import AlreadyAppliedError
from ....utils import utc_now
from ..entities.application import (
    Application,
    ApplicationPage,
    ApplicationStatus,
    StatusHistoryEntry,
)


class InMemoryApplicationRepository:
    """Dictionary-backed application repository for development and tests.

    Methods never await between reading and writing, which makes each
    mutation atomic on the event loop.
    """

    def __init__(self):
        self._applications: Dict[str, Application] = {}

    def _page(self, predicate: Callable[[Application], bool], page: int, limit: int) -> ApplicationPage:
        matched = [app for app in self._applications.values() if predicate(app)]
        matched.sort(key=lambda app: (app.applied_at, app.id), reverse=True)
        offset = (page - 1) * limit
        return ApplicationPage(
            applications=matched[offset:offset + limit],
            total=len(matched),
            page=page,
            limit=limit,
        )

    def _active(self, job_id: str, applicant_id: str) -> Optional[Application]:
        return next(
            (
                app for app in self._applications.values()
                if app.job_id == job_id
                and app.applicant_id == applicant_id
                and app.status != ApplicationStatus.WITHDRAWN
            ),
            None,
        )

    async def create(self, application: Application) -> Application:
        if self._active(application.job_id, application.applicant_id) is not None:
            raise AlreadyAppliedError(application.job_id)
        self._applications[application.id] = application
        return application

    async def get_by_id(self, application_id: str) -> Optional[Application]:
        return self._applications.get(application_id)

    async def find_active(self, job_id: str, applicant_id: str) -> Optional[Application]:
        return self._active(job_id, applicant_id)

    async def list_for_applicant(self, applicant_id: str, page: int, limit: int) -> ApplicationPage:
        return self._page(lambda app: app.applicant_id == applicant_id, page, limit)

    async def list_for_job(
        self,
        job_id: str,
        status: Optional[ApplicationStatus],
        page: int,
        limit: int,
    ) -> ApplicationPage:
        return self._page(
            lambda app: app.job_id == job_id and (status is None or app.status == status),
            page,
            limit,
        )

    async def transition(
        self,
        application_id: str,
        new_status: ApplicationStatus,
        entry: StatusHistoryEntry,
        allowed_from: Collection[ApplicationStatus],
    ) -> Optional[Application]:
        app = self._applications.get(application_id)
        if app is None or app.status not in allowed_from:
            return None
        updated = replace(
            app,
            status=new_status,
            status_history=[*app.status_history, entry],
            last_status_update=entry.updated_at,
            updated_at=entry.updated_at,
        )
        self._applications[application_id] = updated
        return updated

    async def add_note(self, application_id: str, note: str) -> Optional[Application]:
        app = self._applications.get(application_id)
        if app is None:
            return None
        updated = replace(app, notes=[*app.notes, note], updated_at=utc_now())
        self._applications[application_id] = updated
        return updated

    async def ids_for_resume(self, resume_id: str) -> List[str]:
        return sorted(app.id for app in self._applications.values() if app.resume_id == resume_id)

    async def delete_by_job(self, job_id: str) -> int:
        doomed = [app_id for app_id, app in self._applications.items() if app.job_id == job_id]
        for app_id in doomed:
            del self._applications[app_id]
        return len(doomed)

    async def delete_by_resume(self, resume_id: str) -> int:
        doomed = [app_id for app_id, app in self._applications.items() if app.resume_id == resume_id]
        for app_id in doomed:
            del self._applications[app_id]
        return len(doomed)

    async def count_by_status(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for app in self._applications.values():
            counts[app.status.value] = counts.get(app.status.value, 0) + 1
        return counts

    async def count_created_since(self, since: datetime) -> int:
        return sum(1 for app in self._applications.values() if app.created_at >= since)
