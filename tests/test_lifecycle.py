"""Tests for the application lifecycle state machine."""

import asyncio
from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from job_portal.core.exceptions import (
    AlreadyAppliedError,
    AlreadyWithdrawnError,
    ApplicationDeadlinePassedError,
    AuthorizationError,
    InvalidStatusError,
    InvalidTransitionError,
    JobNotAcceptingError,
    NotFoundError,
)
from job_portal.features.applications.entities import ApplicationStatus
from job_portal.features.applications.services import ApplicationLifecycle
from job_portal.features.jobs.entities import JobStatus
from job_portal.features.notifications.entities import NotificationEvent
from job_portal.features.notifications.services import NotificationDispatcher
from job_portal.utils import utc_now

from .conftest import APPLICANT_ID, EMPLOYER_ID, OTHER_USER_ID, build_job, build_resume


@pytest.fixture
def notifier():
    return AsyncMock()


@pytest.fixture
def dispatcher(notifier):
    return NotificationDispatcher(notifier)


def make_lifecycle(application_repository, job_repository, resume_repository, dispatcher, reversal=False):
    return ApplicationLifecycle(
        application_repository,
        job_repository,
        resume_repository,
        dispatcher,
        allow_decision_reversal=reversal,
    )


@pytest.fixture
def lifecycle(application_repository, job_repository, resume_repository, dispatcher):
    return make_lifecycle(application_repository, job_repository, resume_repository, dispatcher)


@pytest.fixture
async def job(job_repository):
    return await job_repository.create(build_job())


@pytest.fixture
async def resume(resume_repository):
    return await resume_repository.create(build_resume())


@pytest.fixture
async def application(lifecycle, job, resume):
    return await lifecycle.submit(job.id, APPLICANT_ID, resume.id, "Hello")


class TestSubmit:

    @pytest.mark.asyncio
    async def test_creates_pending_application_with_one_history_entry(self, application, dispatcher, notifier):
        assert application.status == ApplicationStatus.PENDING
        assert len(application.status_history) == 1
        assert application.status_history[0].status == ApplicationStatus.PENDING
        assert application.status_history[0].updated_by == APPLICANT_ID

        await dispatcher.drain()
        events = [call.args[0].event for call in notifier.send.await_args_list]
        assert events == [NotificationEvent.APPLICATION_SUBMITTED, NotificationEvent.NEW_APPLICATION]

    @pytest.mark.asyncio
    async def test_missing_job(self, lifecycle, resume):
        with pytest.raises(NotFoundError):
            await lifecycle.submit("missing", APPLICANT_ID, resume.id)

    @pytest.mark.asyncio
    async def test_inactive_job(self, lifecycle, job_repository, resume):
        closed = await job_repository.create(build_job(status=JobStatus.CLOSED))

        with pytest.raises(JobNotAcceptingError) as exc_info:
            await lifecycle.submit(closed.id, APPLICANT_ID, resume.id)
        assert exc_info.value.message == "This job is no longer accepting applications"

    @pytest.mark.asyncio
    async def test_deadline_passed(self, lifecycle, job_repository, resume):
        expired = await job_repository.create(build_job(application_deadline=utc_now() - timedelta(days=1)))

        with pytest.raises(ApplicationDeadlinePassedError):
            await lifecycle.submit(expired.id, APPLICANT_ID, resume.id)

    @pytest.mark.asyncio
    async def test_future_deadline_accepts(self, lifecycle, job_repository, resume):
        open_job = await job_repository.create(build_job(application_deadline=utc_now() + timedelta(days=1)))

        application = await lifecycle.submit(open_job.id, APPLICANT_ID, resume.id)
        assert application.job_id == open_job.id

    @pytest.mark.asyncio
    async def test_resume_must_belong_to_applicant(self, lifecycle, job, resume_repository):
        foreign = await resume_repository.create(build_resume(applicant_id=OTHER_USER_ID))

        with pytest.raises(NotFoundError):
            await lifecycle.submit(job.id, APPLICANT_ID, foreign.id)

    @pytest.mark.asyncio
    async def test_duplicate_application_rejected(self, lifecycle, application, job, resume):
        with pytest.raises(AlreadyAppliedError) as exc_info:
            await lifecycle.submit(job.id, APPLICANT_ID, resume.id)
        assert exc_info.value.message == "You have already applied for this job"

    @pytest.mark.asyncio
    async def test_store_uniqueness_race_maps_to_already_applied(
        self, lifecycle, application_repository, job, resume, monkeypatch
    ):
        # Both requests pass the pre-check; the store rejects the second insert
        monkeypatch.setattr(application_repository, "find_active", AsyncMock(return_value=None))

        await lifecycle.submit(job.id, APPLICANT_ID, resume.id)
        with pytest.raises(AlreadyAppliedError):
            await lifecycle.submit(job.id, APPLICANT_ID, resume.id)

    @pytest.mark.asyncio
    async def test_reapply_after_withdraw(self, lifecycle, application, job, resume):
        await lifecycle.withdraw(application.id, APPLICANT_ID)

        again = await lifecycle.submit(job.id, APPLICANT_ID, resume.id)

        assert again.id != application.id
        assert again.status == ApplicationStatus.PENDING


class TestUpdateStatus:

    @pytest.mark.asyncio
    async def test_poster_moves_application_forward(self, lifecycle, application):
        reviewed = await lifecycle.update_status(application.id, "under_review", EMPLOYER_ID)
        accepted = await lifecycle.update_status(application.id, "accepted", EMPLOYER_ID)

        assert accepted.status == ApplicationStatus.ACCEPTED
        assert [e.status for e in accepted.status_history] == [
            ApplicationStatus.PENDING,
            ApplicationStatus.UNDER_REVIEW,
            ApplicationStatus.ACCEPTED,
        ]
        assert accepted.last_status_update >= reviewed.last_status_update
        assert accepted.status_history[-1].updated_by == EMPLOYER_ID

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", ["withdrawn", "hired", ""])
    async def test_invalid_status_rejected(self, lifecycle, application, value):
        with pytest.raises(InvalidStatusError):
            await lifecycle.update_status(application.id, value, EMPLOYER_ID)

    @pytest.mark.asyncio
    async def test_invalid_status_checked_before_existence(self, lifecycle):
        with pytest.raises(InvalidStatusError):
            await lifecycle.update_status("missing", "hired", EMPLOYER_ID)

    @pytest.mark.asyncio
    async def test_missing_application(self, lifecycle):
        with pytest.raises(NotFoundError):
            await lifecycle.update_status("missing", "accepted", EMPLOYER_ID)

    @pytest.mark.asyncio
    async def test_only_poster_may_update(self, lifecycle, application, application_repository):
        with pytest.raises(AuthorizationError):
            await lifecycle.update_status(application.id, "accepted", OTHER_USER_ID)

        unchanged = await application_repository.get_by_id(application.id)
        assert unchanged.status == ApplicationStatus.PENDING
        assert len(unchanged.status_history) == 1

    @pytest.mark.asyncio
    async def test_decisions_are_terminal_by_default(self, lifecycle, application):
        await lifecycle.update_status(application.id, "rejected", EMPLOYER_ID)

        with pytest.raises(InvalidTransitionError):
            await lifecycle.update_status(application.id, "accepted", EMPLOYER_ID)

    @pytest.mark.asyncio
    async def test_decision_reversal_when_enabled(
        self, application_repository, job_repository, resume_repository, dispatcher, job, resume
    ):
        lifecycle = make_lifecycle(
            application_repository, job_repository, resume_repository, dispatcher, reversal=True
        )
        application = await lifecycle.submit(job.id, APPLICANT_ID, resume.id)
        await lifecycle.update_status(application.id, "rejected", EMPLOYER_ID)

        corrected = await lifecycle.update_status(application.id, "accepted", EMPLOYER_ID)

        assert corrected.status == ApplicationStatus.ACCEPTED
        assert len(corrected.status_history) == 3

    @pytest.mark.asyncio
    async def test_withdrawn_stays_terminal_with_reversal(
        self, application_repository, job_repository, resume_repository, dispatcher, job, resume
    ):
        lifecycle = make_lifecycle(
            application_repository, job_repository, resume_repository, dispatcher, reversal=True
        )
        application = await lifecycle.submit(job.id, APPLICANT_ID, resume.id)
        await lifecycle.withdraw(application.id, APPLICANT_ID)

        with pytest.raises(InvalidTransitionError):
            await lifecycle.update_status(application.id, "pending", EMPLOYER_ID)

    @pytest.mark.asyncio
    async def test_notification_failure_does_not_fail_transition(
        self, lifecycle, application, dispatcher, notifier
    ):
        notifier.send.side_effect = RuntimeError("smtp down")

        updated = await lifecycle.update_status(application.id, "under_review", EMPLOYER_ID)
        await dispatcher.drain()

        assert updated.status == ApplicationStatus.UNDER_REVIEW


class TestWithdraw:

    @pytest.mark.asyncio
    async def test_applicant_withdraws(self, lifecycle, application):
        withdrawn = await lifecycle.withdraw(application.id, APPLICANT_ID)

        assert withdrawn.status == ApplicationStatus.WITHDRAWN
        assert withdrawn.status_history[-1].status == ApplicationStatus.WITHDRAWN
        assert withdrawn.status_history[-1].updated_by == APPLICANT_ID

    @pytest.mark.asyncio
    async def test_only_applicant_may_withdraw(self, lifecycle, application):
        with pytest.raises(AuthorizationError):
            await lifecycle.withdraw(application.id, EMPLOYER_ID)

    @pytest.mark.asyncio
    async def test_double_withdraw_conflicts(self, lifecycle, application):
        await lifecycle.withdraw(application.id, APPLICANT_ID)

        with pytest.raises(AlreadyWithdrawnError) as exc_info:
            await lifecycle.withdraw(application.id, APPLICANT_ID)
        assert exc_info.value.message == "Application already withdrawn"

    @pytest.mark.asyncio
    async def test_concurrent_withdraw_appends_one_entry(self, lifecycle, application, application_repository):
        results = await asyncio.gather(
            lifecycle.withdraw(application.id, APPLICANT_ID),
            lifecycle.withdraw(application.id, APPLICANT_ID),
            return_exceptions=True,
        )

        assert sum(isinstance(r, AlreadyWithdrawnError) for r in results) == 1
        stored = await application_repository.get_by_id(application.id)
        assert [e.status for e in stored.status_history].count(ApplicationStatus.WITHDRAWN) == 1

    @pytest.mark.asyncio
    async def test_decided_application_cannot_be_withdrawn(self, lifecycle, application):
        await lifecycle.update_status(application.id, "accepted", EMPLOYER_ID)

        with pytest.raises(InvalidTransitionError):
            await lifecycle.withdraw(application.id, APPLICANT_ID)


class TestNotesAndQueries:

    @pytest.mark.asyncio
    async def test_poster_adds_notes(self, lifecycle, application):
        await lifecycle.add_note(application.id, "Strong portfolio", EMPLOYER_ID)
        noted = await lifecycle.add_note(application.id, "Call back", EMPLOYER_ID)

        assert noted.notes == ["Strong portfolio", "Call back"]
        assert noted.status == ApplicationStatus.PENDING

    @pytest.mark.asyncio
    async def test_applicant_cannot_add_notes(self, lifecycle, application):
        with pytest.raises(AuthorizationError):
            await lifecycle.add_note(application.id, "Hire me", APPLICANT_ID)

    @pytest.mark.asyncio
    async def test_get_for_applicant_hides_foreign_applications(self, lifecycle, application):
        assert (await lifecycle.get_for_applicant(application.id, APPLICANT_ID)).id == application.id
        with pytest.raises(NotFoundError):
            await lifecycle.get_for_applicant(application.id, OTHER_USER_ID)

    @pytest.mark.asyncio
    async def test_list_for_job_is_poster_only_and_filters(self, lifecycle, application, job):
        page = await lifecycle.list_for_job(job.id, EMPLOYER_ID, status=ApplicationStatus.PENDING)
        assert page.total == 1

        page = await lifecycle.list_for_job(job.id, EMPLOYER_ID, status=ApplicationStatus.ACCEPTED)
        assert page.total == 0

        with pytest.raises(NotFoundError):
            await lifecycle.list_for_job(job.id, OTHER_USER_ID)
