"""Job posting entity."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from math import ceil
from typing import List, Optional

from ....utils import utc_now


class JobType(str, Enum):
    FULL_TIME = "Full-time"
    PART_TIME = "Part-time"
    CONTRACT = "Contract"
    INTERNSHIP = "Internship"
    REMOTE = "Remote"


class JobCategory(str, Enum):
    SOFTWARE_DEVELOPMENT = "Software Development"
    DESIGN = "Design"
    MARKETING = "Marketing"
    SALES = "Sales"
    CUSTOMER_SERVICE = "Customer Service"
    DATA_SCIENCE = "Data Science"
    PROJECT_MANAGEMENT = "Project Management"
    HUMAN_RESOURCES = "Human Resources"
    OTHER = "Other"


class JobStatus(str, Enum):
    ACTIVE = "active"
    CLOSED = "closed"
    DRAFT = "draft"


@dataclass
class Job:
    """A job posting owned by the user who posted it."""

    id: str
    title: str
    company: str
    location: str
    type: JobType
    category: JobCategory
    description: str
    posted_by: str
    requirements: List[str] = field(default_factory=list)
    responsibilities: List[str] = field(default_factory=list)
    skills: List[str] = field(default_factory=list)
    experience: int = 0
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None
    status: JobStatus = JobStatus.ACTIVE
    application_deadline: Optional[datetime] = None
    views: int = 0
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def __post_init__(self):
        self.type = JobType(self.type)
        self.category = JobCategory(self.category)
        self.status = JobStatus(self.status)

    @property
    def is_active(self) -> bool:
        return self.status == JobStatus.ACTIVE

    def deadline_passed(self, now: Optional[datetime] = None) -> bool:
        if self.application_deadline is None:
            return False
        return (now or utc_now()) > self.application_deadline


@dataclass
class JobFilters:
    """Listing filters; unset fields do not constrain the result."""
    category: Optional[str] = None
    type: Optional[str] = None
    status: Optional[str] = None
    location: Optional[str] = None
    search: Optional[str] = None
    page: int = 1
    limit: int = 10

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass
class JobPage:
    jobs: List[Job]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return ceil(self.total / self.limit) if self.limit else 0
