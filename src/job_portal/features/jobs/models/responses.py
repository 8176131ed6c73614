"""Job response models."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from ..entities.job import Job, JobPage


class JobResponse(BaseModel):
    id: str = Field(..., description="Job ID")
    title: str
    company: str
    location: str
    type: str
    category: str
    description: str
    requirements: List[str] = Field(default_factory=list)
    responsibilities: List[str] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)
    experience: int = 0
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None
    posted_by: str
    status: str
    application_deadline: Optional[datetime] = None
    views: int = 0
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, job: Job) -> "JobResponse":
        return cls(
            id=job.id,
            title=job.title,
            company=job.company,
            location=job.location,
            type=job.type.value,
            category=job.category.value,
            description=job.description,
            requirements=list(job.requirements),
            responsibilities=list(job.responsibilities),
            skills=list(job.skills),
            experience=job.experience,
            salary_min=job.salary_min,
            salary_max=job.salary_max,
            posted_by=job.posted_by,
            status=job.status.value,
            application_deadline=job.application_deadline,
            views=job.views,
            created_at=job.created_at,
            updated_at=job.updated_at,
        )


class JobListResponse(BaseModel):
    jobs: List[JobResponse]
    current_page: int
    total_pages: int
    total: int

    @classmethod
    def from_page(cls, page: JobPage) -> "JobListResponse":
        return cls(
            jobs=[JobResponse.from_entity(job) for job in page.jobs],
            current_page=page.page,
            total_pages=page.total_pages,
            total=page.total,
        )


class JobMutationResponse(BaseModel):
    message: str
    job: JobResponse
