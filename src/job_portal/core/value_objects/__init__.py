"""Value objects."""

from .identifiers import UserId, JobId, ApplicationId, ResumeId

__all__ = ["UserId", "JobId", "ApplicationId", "ResumeId"]
