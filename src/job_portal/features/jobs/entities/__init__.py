from .job import Job, JobCategory, JobFilters, JobPage, JobStatus, JobType
from .protocols import JobRepository

__all__ = [
    "Job",
    "JobCategory",
    "JobFilters",
    "JobPage",
    "JobStatus",
    "JobType",
    "JobRepository",
]
