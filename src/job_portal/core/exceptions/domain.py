"""Domain exceptions for the job portal.

Grouped by the HTTP class of failure they represent. The status code of
each group lives in http_mapping.HTTP_STATUS_MAP.
"""

from .base import JobPortalError


# Validation Errors (400)
class ValidationError(JobPortalError):
    """Raised when input or requested state change is invalid."""
    pass


class InvalidStatusError(ValidationError):
    """Raised when an application status outside the allowed set is requested."""
    pass


class JobNotAcceptingError(ValidationError):
    """Raised when applying to a job that is not active."""

    def __init__(self, job_id: str):
        super().__init__(
            "This job is no longer accepting applications",
            details={"job_id": job_id},
        )


class ApplicationDeadlinePassedError(ValidationError):
    """Raised when applying after the job's application deadline."""

    def __init__(self, job_id: str):
        super().__init__(
            "The application deadline for this job has passed",
            details={"job_id": job_id},
        )


class InvalidTransitionError(ValidationError):
    """Raised when an application is moved out of a terminal status."""

    def __init__(self, current_status: str, requested_status: str):
        super().__init__(
            f"Cannot change application status from '{current_status}' to '{requested_status}'",
            details={"current_status": current_status, "requested_status": requested_status},
        )


class InvalidResumeFileError(ValidationError):
    """Raised when an uploaded resume has the wrong type or size."""
    pass


# Authentication Errors (401)
class AuthenticationError(JobPortalError):
    """Raised when the bearer token is missing or invalid."""
    pass


# Authorization Errors (403)
class AuthorizationError(JobPortalError):
    """Raised when the caller may not act on a resource."""
    pass


# Not Found Errors (404)
class NotFoundError(JobPortalError):
    """Raised when a resource does not exist or is not visible to the caller."""

    def __init__(self, resource: str, identifier: str = None):
        message = f"{resource} not found"
        details = {"resource": resource}
        if identifier is not None:
            details["id"] = str(identifier)
        super().__init__(message, details=details)


# Conflict Errors
class ConflictError(JobPortalError):
    """Raised when a request conflicts with current state."""
    pass


class AlreadyAppliedError(ConflictError):
    """Raised when a non-withdrawn application already exists for (job, applicant)."""

    def __init__(self, job_id: str):
        super().__init__("You have already applied for this job", details={"job_id": job_id})


class AlreadyWithdrawnError(ConflictError):
    """Raised when withdrawing an application twice."""

    def __init__(self, application_id: str):
        super().__init__("Application already withdrawn", details={"application_id": application_id})


class ConfirmationRequiredError(ConflictError):
    """Raised when a destructive action needs explicit confirmation.

    The details carry the identifiers of everything the action would remove.
    """
    pass


# Infrastructure Errors
class StoreUnavailableError(JobPortalError):
    """Raised inside key store adapters when the backing store cannot be reached."""
    pass
