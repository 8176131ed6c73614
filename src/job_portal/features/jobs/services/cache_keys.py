"""Cache key families owned by the jobs feature."""

LIST_PREFIX = "jobs:list"
DETAIL_PREFIX = "jobs:detail"


class JobCacheKeys:
    """Glob patterns for the keys the job read endpoints are cached under.

    Cached keys carry the full request path, which depends on the API
    prefix and any ASGI ``root_path``. Detail patterns therefore match any
    path ending in ``/jobs/<id>`` rather than one fixed prefix.
    """

    @staticmethod
    def detail_pattern(job_id: str) -> str:
        return f"{DETAIL_PREFIX}:*/jobs/{job_id}"

    @staticmethod
    def detail_variants_pattern(job_id: str) -> str:
        # Same path with any query string; [?] keeps the ? literal in glob syntax
        return f"{JobCacheKeys.detail_pattern(job_id)}[?]*"

    @staticmethod
    def list_pattern() -> str:
        return f"{LIST_PREFIX}:*"
