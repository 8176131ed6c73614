"""Job request models."""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field, model_validator

from ..entities.job import JobCategory, JobStatus, JobType

# Fields a job update may set back to null
CLEARABLE_FIELDS = frozenset({"salary_min", "salary_max", "application_deadline"})


def _check_salary_range(salary_min: Optional[int], salary_max: Optional[int]) -> None:
    if salary_min is not None and salary_max is not None and salary_min > salary_max:
        raise ValueError("salary_min must not exceed salary_max")


def reject_nulls(data: Any, clearable: frozenset = frozenset()) -> Any:
    """Refuse explicit nulls for fields outside ``clearable``."""
    if isinstance(data, dict):
        nulls = sorted(k for k, v in data.items() if v is None and k not in clearable)
        if nulls:
            raise ValueError(f"{', '.join(nulls)} cannot be null")
    return data


class JobCreate(BaseModel):
    """Model for posting a job."""

    title: str = Field(..., min_length=1, max_length=200)
    company: str = Field(..., min_length=1, max_length=200)
    location: str = Field(..., min_length=1, max_length=200)
    type: JobType
    category: JobCategory
    description: str = Field(..., min_length=1)
    requirements: List[str] = Field(default_factory=list)
    responsibilities: List[str] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)
    experience: int = Field(0, ge=0, description="Years of experience")
    salary_min: Optional[int] = Field(None, ge=0)
    salary_max: Optional[int] = Field(None, ge=0)
    status: JobStatus = JobStatus.ACTIVE
    application_deadline: Optional[datetime] = None

    @model_validator(mode="after")
    def validate_salary(self) -> "JobCreate":
        _check_salary_range(self.salary_min, self.salary_max)
        return self


class JobUpdate(BaseModel):
    """Model for updating a job; only the fields sent are changed."""

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    company: Optional[str] = Field(None, min_length=1, max_length=200)
    location: Optional[str] = Field(None, min_length=1, max_length=200)
    type: Optional[JobType] = None
    category: Optional[JobCategory] = None
    description: Optional[str] = Field(None, min_length=1)
    requirements: Optional[List[str]] = None
    responsibilities: Optional[List[str]] = None
    skills: Optional[List[str]] = None
    experience: Optional[int] = Field(None, ge=0)
    salary_min: Optional[int] = Field(None, ge=0)
    salary_max: Optional[int] = Field(None, ge=0)
    status: Optional[JobStatus] = None
    application_deadline: Optional[datetime] = None

    @model_validator(mode="before")
    @classmethod
    def reject_required_nulls(cls, data: Any) -> Any:
        return reject_nulls(data, CLEARABLE_FIELDS)

    @model_validator(mode="after")
    def validate_salary(self) -> "JobUpdate":
        _check_salary_range(self.salary_min, self.salary_max)
        return self


class ApplyRequest(BaseModel):
    resume_id: str = Field(..., min_length=1)
    cover_letter: Optional[str] = Field(None, max_length=5000)
