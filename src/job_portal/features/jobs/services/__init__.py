from .cache_keys import DETAIL_PREFIX, LIST_PREFIX, JobCacheKeys
from .job_service import JobMutationCoordinator

__all__ = ["DETAIL_PREFIX", "LIST_PREFIX", "JobCacheKeys", "JobMutationCoordinator"]
