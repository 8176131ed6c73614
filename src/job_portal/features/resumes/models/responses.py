"""Resume response models."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from ..entities.resume import Resume


class ResumeResponse(BaseModel):
    id: str
    name: str
    applicant_id: str
    content_type: Optional[str] = None
    size: int
    uploaded_at: datetime

    @classmethod
    def from_entity(cls, resume: Resume) -> "ResumeResponse":
        return cls(
            id=resume.id,
            name=resume.name,
            applicant_id=resume.applicant_id,
            content_type=resume.content_type,
            size=resume.size,
            uploaded_at=resume.uploaded_at,
        )


class ResumeDeleteResponse(BaseModel):
    message: str
    deleted_applications: int = 0
