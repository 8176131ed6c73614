"""
Job API endpoints.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, Request, status

from ....api.dependencies import get_job_coordinator, get_lifecycle, get_response_cache
from ...applications.models import ApplicationMutationResponse, ApplicationResponse
from ...applications.services import ApplicationLifecycle
from ...auth.dependencies import get_current_user
from ...cache.services import ResponseCache, cached
from ...users.entities.user import User
from ..entities.job import JobCategory, JobFilters, JobStatus, JobType
from ..models import (
    ApplyRequest,
    JobCreate,
    JobListResponse,
    JobMutationResponse,
    JobResponse,
    JobUpdate,
)
from ..services import DETAIL_PREFIX, LIST_PREFIX, JobMutationCoordinator

router = APIRouter()


@router.get(
    "",
    response_model=JobListResponse,
    summary="List jobs",
    description="Filtered, paginated job listing, newest first",
)
@cached(LIST_PREFIX)
async def list_jobs(
    request: Request,
    category: Optional[JobCategory] = Query(None),
    type: Optional[JobType] = Query(None),
    job_status: Optional[JobStatus] = Query(None, alias="status"),
    location: Optional[str] = Query(None, description="Case-insensitive substring match"),
    search: Optional[str] = Query(None, description="Matches title, description, location and skills"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    coordinator: JobMutationCoordinator = Depends(get_job_coordinator),
) -> JobListResponse:
    filters = JobFilters(
        category=category.value if category else None,
        type=type.value if type else None,
        status=job_status.value if job_status else None,
        location=location,
        search=search,
        page=page,
        limit=limit,
    )
    return JobListResponse.from_page(await coordinator.list_jobs(filters))


@router.get(
    "/{job_id}",
    response_model=JobResponse,
    summary="Get job details",
    description="Every call counts a view, including calls served from the cache",
)
async def get_job(
    job_id: str,
    request: Request,
    coordinator: JobMutationCoordinator = Depends(get_job_coordinator),
    cache: ResponseCache = Depends(get_response_cache),
) -> Dict[str, Any]:
    views = await coordinator.record_view(job_id)

    async def load(_request: Request) -> JobResponse:
        return JobResponse.from_entity(await coordinator.get_job(job_id))

    payload = await cache.wrap(DETAIL_PREFIX, None, load)(request)
    # The cached body may carry an older count
    return {**payload, "views": views}


@router.post(
    "",
    response_model=JobMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Post a job",
)
async def create_job(
    job_data: JobCreate,
    current_user: User = Depends(get_current_user),
    coordinator: JobMutationCoordinator = Depends(get_job_coordinator),
) -> JobMutationResponse:
    job = await coordinator.create_job(current_user.id, job_data.model_dump())
    return JobMutationResponse(message="Job created successfully", job=JobResponse.from_entity(job))


@router.put(
    "/{job_id}",
    response_model=JobMutationResponse,
    summary="Update a job",
    description="Only the user who posted the job may update it",
)
async def update_job(
    job_id: str,
    update_data: JobUpdate,
    current_user: User = Depends(get_current_user),
    coordinator: JobMutationCoordinator = Depends(get_job_coordinator),
) -> JobMutationResponse:
    job = await coordinator.update_job(job_id, current_user.id, update_data.model_dump(exclude_unset=True))
    return JobMutationResponse(message="Job updated successfully", job=JobResponse.from_entity(job))


@router.delete(
    "/{job_id}",
    response_model=JobMutationResponse,
    summary="Delete a job",
    description="Deletes the caller's job together with its applications",
)
async def delete_job(
    job_id: str,
    current_user: User = Depends(get_current_user),
    coordinator: JobMutationCoordinator = Depends(get_job_coordinator),
) -> JobMutationResponse:
    job = await coordinator.delete_job(job_id, current_user.id)
    return JobMutationResponse(message="Job deleted successfully", job=JobResponse.from_entity(job))


@router.post(
    "/{job_id}/apply",
    response_model=ApplicationMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Apply for a job",
)
async def apply_for_job(
    job_id: str,
    apply_data: ApplyRequest,
    current_user: User = Depends(get_current_user),
    lifecycle: ApplicationLifecycle = Depends(get_lifecycle),
) -> ApplicationMutationResponse:
    application = await lifecycle.submit(
        job_id=job_id,
        applicant_id=current_user.id,
        resume_id=apply_data.resume_id,
        cover_letter=apply_data.cover_letter,
    )
    return ApplicationMutationResponse(
        message="Application submitted successfully",
        application=ApplicationResponse.from_entity(application),
    )
