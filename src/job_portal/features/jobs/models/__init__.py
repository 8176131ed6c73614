from .requests import ApplyRequest, JobCreate, JobUpdate
from .responses import JobListResponse, JobMutationResponse, JobResponse

__all__ = [
    "ApplyRequest",
    "JobCreate",
    "JobUpdate",
    "JobListResponse",
    "JobMutationResponse",
    "JobResponse",
]
