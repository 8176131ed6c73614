"""
Resume API endpoints.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status

from ....api.dependencies import get_resume_service, get_app_settings
from ....config import Settings
from ...auth.dependencies import get_current_user
from ...users.entities.user import User
from ..models import ResumeDeleteResponse, ResumeResponse
from ..services import ResumeService

router = APIRouter()


@router.post(
    "",
    response_model=ResumeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload a resume",
    description="Upload a PDF, DOC or DOCX resume (multipart field `file`)",
)
async def upload_resume(
    file: UploadFile = File(...),
    name: Optional[str] = Form(None),
    current_user: User = Depends(get_current_user),
    service: ResumeService = Depends(get_resume_service),
    settings: Settings = Depends(get_app_settings),
) -> ResumeResponse:
    # One byte past the limit is enough to reject oversize uploads
    data = await file.read(settings.max_upload_size + 1)
    resume = await service.upload(
        applicant_id=current_user.id,
        name=name,
        filename=file.filename,
        content_type=file.content_type,
        data=data,
    )
    return ResumeResponse.from_entity(resume)


@router.get(
    "/user/{user_id}",
    response_model=List[ResumeResponse],
    summary="List a user's resumes",
)
async def list_user_resumes(
    user_id: str,
    current_user: User = Depends(get_current_user),
    service: ResumeService = Depends(get_resume_service),
) -> List[ResumeResponse]:
    resumes = await service.list_for_applicant(user_id)
    return [ResumeResponse.from_entity(resume) for resume in resumes]


@router.get(
    "/{resume_id}",
    response_model=ResumeResponse,
    summary="Get a resume",
)
async def get_resume(
    resume_id: str,
    current_user: User = Depends(get_current_user),
    service: ResumeService = Depends(get_resume_service),
) -> ResumeResponse:
    return ResumeResponse.from_entity(await service.get_resume(resume_id))


@router.delete(
    "/{resume_id}",
    response_model=ResumeDeleteResponse,
    summary="Delete a resume",
    description=(
        "Deletes one of the caller's resumes. When applications reference it the "
        "request fails with 409 listing them until `confirm_delete=true` is passed."
    ),
)
async def delete_resume(
    resume_id: str,
    confirm_delete: bool = Query(False, description="Also delete applications that use this resume"),
    current_user: User = Depends(get_current_user),
    service: ResumeService = Depends(get_resume_service),
) -> ResumeDeleteResponse:
    removed = await service.delete_resume(resume_id, current_user.id, confirm_delete=confirm_delete)
    return ResumeDeleteResponse(message="Resume deleted successfully", deleted_applications=removed)
