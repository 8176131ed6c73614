"""
Application lifecycle: submission, status transitions, withdrawal and notes.

Status model::

    pending <-> under_review -> accepted | rejected
    pending | under_review -> withdrawn

``accepted``, ``rejected`` and ``withdrawn`` are terminal. With decision
reversal enabled the job poster may move an accepted or rejected
application to another employer status; ``withdrawn`` stays terminal.
"""

from typing import FrozenSet, Optional

from loguru import logger

from ....core.exceptions import (
    AlreadyAppliedError,
    AlreadyWithdrawnError,
    ApplicationDeadlinePassedError,
    AuthorizationError,
    InvalidStatusError,
    InvalidTransitionError,
    JobNotAcceptingError,
    NotFoundError,
)
from ....core.value_objects import ApplicationId
from ....utils import utc_now
from ...jobs.entities.job import Job
from ...jobs.entities.protocols import JobRepository
from ...notifications.entities import Notification, NotificationEvent
from ...notifications.services import NotificationDispatcher
from ...resumes.entities.protocols import ResumeRepository
from ..entities.application import (
    Application,
    ApplicationPage,
    ApplicationStatus,
    DECISION_STATUSES,
    EMPLOYER_STATUSES,
    OPEN_STATUSES,
    StatusHistoryEntry,
)
from ..entities.protocols import ApplicationRepository


class ApplicationLifecycle:
    """State machine for job applications.

    Every transition is one conditional store update that sets the status,
    appends the history entry and stamps ``last_status_update`` together.
    """

    def __init__(
        self,
        applications: ApplicationRepository,
        jobs: JobRepository,
        resumes: ResumeRepository,
        notifications: Optional[NotificationDispatcher] = None,
        allow_decision_reversal: bool = False,
    ):
        self.applications = applications
        self.jobs = jobs
        self.resumes = resumes
        self.notifications = notifications or NotificationDispatcher()
        self.allow_decision_reversal = allow_decision_reversal

    # Commands

    async def submit(
        self,
        job_id: str,
        applicant_id: str,
        resume_id: str,
        cover_letter: Optional[str] = None,
    ) -> Application:
        job = await self.jobs.get_by_id(job_id)
        if job is None:
            raise NotFoundError("Job", job_id)
        if not job.is_active:
            raise JobNotAcceptingError(job_id)
        now = utc_now()
        if job.deadline_passed(now):
            raise ApplicationDeadlinePassedError(job_id)

        resume = await self.resumes.get_by_id(resume_id)
        if resume is None or resume.applicant_id != applicant_id:
            raise NotFoundError("Resume", resume_id)

        if await self.applications.find_active(job_id, applicant_id) is not None:
            raise AlreadyAppliedError(job_id)

        application = Application(
            id=str(ApplicationId.generate()),
            job_id=job_id,
            applicant_id=applicant_id,
            resume_id=resume_id,
            cover_letter=cover_letter,
            status=ApplicationStatus.PENDING,
            status_history=[
                StatusHistoryEntry(status=ApplicationStatus.PENDING, updated_at=now, updated_by=applicant_id)
            ],
            applied_at=now,
            last_status_update=now,
            created_at=now,
            updated_at=now,
        )
        # The store rejects a concurrent duplicate with AlreadyAppliedError
        application = await self.applications.create(application)
        logger.info(f"Application {application.id} submitted for job {job_id} by {applicant_id}")

        self._notify(NotificationEvent.APPLICATION_SUBMITTED, applicant_id, job, application)
        self._notify(NotificationEvent.NEW_APPLICATION, job.posted_by, job, application)
        return application

    async def update_status(self, application_id: str, new_status: str, actor_id: str) -> Application:
        """Move an application to an employer status on behalf of the job poster."""
        try:
            requested = ApplicationStatus(new_status)
        except ValueError:
            requested = None
        if requested not in EMPLOYER_STATUSES:
            raise InvalidStatusError(
                "Invalid status",
                details={"status": new_status, "allowed": sorted(s.value for s in EMPLOYER_STATUSES)},
            )

        application = await self._get(application_id)
        job = await self.jobs.get_by_id(application.job_id)
        if job is None or job.posted_by != actor_id:
            raise AuthorizationError("Not authorized to update this application")

        allowed_from = self._employer_allowed_from()
        if application.status not in allowed_from:
            raise InvalidTransitionError(application.status.value, requested.value)

        entry = StatusHistoryEntry(status=requested, updated_at=utc_now(), updated_by=actor_id)
        updated = await self.applications.transition(application_id, requested, entry, allowed_from)
        if updated is None:
            # Status changed between the read and the conditional update
            current = await self._get(application_id)
            raise InvalidTransitionError(current.status.value, requested.value)

        logger.info(f"Application {application_id} moved {application.status.value} -> {requested.value}")
        self._notify(NotificationEvent.STATUS_UPDATED, updated.applicant_id, job, updated)
        return updated

    async def withdraw(self, application_id: str, actor_id: str) -> Application:
        """Withdraw an open application on behalf of its applicant."""
        application = await self._get(application_id)
        if application.applicant_id != actor_id:
            raise AuthorizationError("Not authorized to withdraw this application")
        if application.status == ApplicationStatus.WITHDRAWN:
            raise AlreadyWithdrawnError(application_id)
        if application.status in DECISION_STATUSES:
            raise InvalidTransitionError(application.status.value, ApplicationStatus.WITHDRAWN.value)

        entry = StatusHistoryEntry(status=ApplicationStatus.WITHDRAWN, updated_at=utc_now(), updated_by=actor_id)
        updated = await self.applications.transition(
            application_id, ApplicationStatus.WITHDRAWN, entry, OPEN_STATUSES
        )
        if updated is None:
            current = await self._get(application_id)
            if current.status == ApplicationStatus.WITHDRAWN:
                raise AlreadyWithdrawnError(application_id)
            raise InvalidTransitionError(current.status.value, ApplicationStatus.WITHDRAWN.value)

        logger.info(f"Application {application_id} withdrawn by {actor_id}")
        job = await self.jobs.get_by_id(updated.job_id)
        if job is not None:
            self._notify(NotificationEvent.APPLICATION_WITHDRAWN, job.posted_by, job, updated)
        return updated

    async def add_note(self, application_id: str, note: str, actor_id: str) -> Application:
        """Append an employer note; only the job poster may annotate."""
        application = await self._get(application_id)
        job = await self.jobs.get_by_id(application.job_id)
        if job is None or job.posted_by != actor_id:
            raise AuthorizationError("Not authorized to add notes to this application")

        updated = await self.applications.add_note(application_id, note)
        if updated is None:
            raise NotFoundError("Application", application_id)
        return updated

    # Queries

    async def list_for_applicant(self, applicant_id: str, page: int = 1, limit: int = 10) -> ApplicationPage:
        return await self.applications.list_for_applicant(applicant_id, page, limit)

    async def get_for_applicant(self, application_id: str, applicant_id: str) -> Application:
        application = await self.applications.get_by_id(application_id)
        if application is None or application.applicant_id != applicant_id:
            raise NotFoundError("Application", application_id)
        return application

    async def list_for_job(
        self,
        job_id: str,
        actor_id: str,
        status: Optional[ApplicationStatus] = None,
        page: int = 1,
        limit: int = 10,
    ) -> ApplicationPage:
        """Applications to one of the actor's jobs; a foreign job reads as missing."""
        job = await self.jobs.get_by_id(job_id)
        if job is None or job.posted_by != actor_id:
            raise NotFoundError("Job", job_id)
        return await self.applications.list_for_job(job_id, status, page, limit)

    # Internals

    async def _get(self, application_id: str) -> Application:
        application = await self.applications.get_by_id(application_id)
        if application is None:
            raise NotFoundError("Application", application_id)
        return application

    def _employer_allowed_from(self) -> FrozenSet[ApplicationStatus]:
        if self.allow_decision_reversal:
            return OPEN_STATUSES | DECISION_STATUSES
        return OPEN_STATUSES

    def _notify(self, event: NotificationEvent, recipient_id: str, job: Job, application: Application) -> None:
        self.notifications.dispatch(Notification(
            event=event,
            recipient_id=recipient_id,
            context={
                "job_id": job.id,
                "job_title": job.title,
                "company": job.company,
                "application_id": application.id,
                "status": application.status.value,
            },
        ))
