"""Application response models."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from ..entities.application import Application, ApplicationPage, StatusHistoryEntry


class StatusHistoryResponse(BaseModel):
    status: str
    updated_at: datetime
    updated_by: Optional[str] = None

    @classmethod
    def from_entry(cls, entry: StatusHistoryEntry) -> "StatusHistoryResponse":
        return cls(status=entry.status.value, updated_at=entry.updated_at, updated_by=entry.updated_by)


class ApplicationResponse(BaseModel):
    id: str = Field(..., description="Application ID")
    job_id: str
    applicant_id: str
    resume_id: str
    cover_letter: Optional[str] = None
    status: str
    notes: List[str] = Field(default_factory=list)
    status_history: List[StatusHistoryResponse] = Field(default_factory=list)
    applied_at: datetime
    last_status_update: datetime
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, application: Application) -> "ApplicationResponse":
        return cls(
            id=application.id,
            job_id=application.job_id,
            applicant_id=application.applicant_id,
            resume_id=application.resume_id,
            cover_letter=application.cover_letter,
            status=application.status.value,
            notes=list(application.notes),
            status_history=[StatusHistoryResponse.from_entry(e) for e in application.status_history],
            applied_at=application.applied_at,
            last_status_update=application.last_status_update,
            created_at=application.created_at,
            updated_at=application.updated_at,
        )


class ApplicationListResponse(BaseModel):
    applications: List[ApplicationResponse]
    current_page: int
    total_pages: int
    total: int

    @classmethod
    def from_page(cls, page: ApplicationPage) -> "ApplicationListResponse":
        return cls(
            applications=[ApplicationResponse.from_entity(a) for a in page.applications],
            current_page=page.page,
            total_pages=page.total_pages,
            total=page.total,
        )


class ApplicationMutationResponse(BaseModel):
    message: str
    application: ApplicationResponse
