"""
Application API endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ....api.dependencies import get_lifecycle
from ...auth.dependencies import get_current_user
from ...users.entities.user import User
from ..entities.application import ApplicationStatus
from ..models import (
    ApplicationListResponse,
    ApplicationMutationResponse,
    ApplicationResponse,
    NoteRequest,
    StatusUpdateRequest,
)
from ..services import ApplicationLifecycle

router = APIRouter()


@router.get(
    "/my-applications",
    response_model=ApplicationListResponse,
    summary="List my applications",
)
async def list_my_applications(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    lifecycle: ApplicationLifecycle = Depends(get_lifecycle),
) -> ApplicationListResponse:
    result = await lifecycle.list_for_applicant(current_user.id, page=page, limit=limit)
    return ApplicationListResponse.from_page(result)


@router.get(
    "/my-applications/{application_id}",
    response_model=ApplicationResponse,
    summary="Get one of my applications",
)
async def get_my_application(
    application_id: str,
    current_user: User = Depends(get_current_user),
    lifecycle: ApplicationLifecycle = Depends(get_lifecycle),
) -> ApplicationResponse:
    application = await lifecycle.get_for_applicant(application_id, current_user.id)
    return ApplicationResponse.from_entity(application)


@router.post(
    "/my-applications/{application_id}/withdraw",
    response_model=ApplicationMutationResponse,
    summary="Withdraw an application",
)
async def withdraw_application(
    application_id: str,
    current_user: User = Depends(get_current_user),
    lifecycle: ApplicationLifecycle = Depends(get_lifecycle),
) -> ApplicationMutationResponse:
    application = await lifecycle.withdraw(application_id, current_user.id)
    return ApplicationMutationResponse(
        message="Application withdrawn successfully",
        application=ApplicationResponse.from_entity(application),
    )


@router.get(
    "/jobs/{job_id}/applications",
    response_model=ApplicationListResponse,
    summary="List applications for my job",
)
async def list_job_applications(
    job_id: str,
    application_status: Optional[ApplicationStatus] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    lifecycle: ApplicationLifecycle = Depends(get_lifecycle),
) -> ApplicationListResponse:
    result = await lifecycle.list_for_job(
        job_id, current_user.id, status=application_status, page=page, limit=limit
    )
    return ApplicationListResponse.from_page(result)


@router.patch(
    "/{application_id}/status",
    response_model=ApplicationMutationResponse,
    summary="Update application status",
    description="Only the poster of the job may change the status",
)
async def update_application_status(
    application_id: str,
    status_data: StatusUpdateRequest,
    current_user: User = Depends(get_current_user),
    lifecycle: ApplicationLifecycle = Depends(get_lifecycle),
) -> ApplicationMutationResponse:
    application = await lifecycle.update_status(application_id, status_data.status, current_user.id)
    return ApplicationMutationResponse(
        message="Application status updated successfully",
        application=ApplicationResponse.from_entity(application),
    )


@router.post(
    "/{application_id}/notes",
    response_model=ApplicationMutationResponse,
    summary="Add a note to an application",
)
async def add_application_note(
    application_id: str,
    note_data: NoteRequest,
    current_user: User = Depends(get_current_user),
    lifecycle: ApplicationLifecycle = Depends(get_lifecycle),
) -> ApplicationMutationResponse:
    application = await lifecycle.add_note(application_id, note_data.note, current_user.id)
    return ApplicationMutationResponse(
        message="Note added successfully",
        application=ApplicationResponse.from_entity(application),
    )
