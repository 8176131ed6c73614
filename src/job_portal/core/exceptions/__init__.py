"""Exception hierarchy for the job portal."""

from .base import (
    JobPortalError,
    get_http_status_code,
    create_error_response,
)

from .domain import (
    # Validation Errors
    ValidationError,
    InvalidStatusError,
    JobNotAcceptingError,
    ApplicationDeadlinePassedError,
    InvalidTransitionError,
    InvalidResumeFileError,

    # Auth Errors
    AuthenticationError,
    AuthorizationError,

    # Lookup and Conflict Errors
    NotFoundError,
    ConflictError,
    AlreadyAppliedError,
    AlreadyWithdrawnError,
    ConfirmationRequiredError,

    # Infrastructure Errors
    StoreUnavailableError,
)

from .http_mapping import HTTP_STATUS_MAP

__all__ = [
    "JobPortalError",
    "get_http_status_code",
    "create_error_response",
    "ValidationError",
    "InvalidStatusError",
    "JobNotAcceptingError",
    "ApplicationDeadlinePassedError",
    "InvalidTransitionError",
    "InvalidResumeFileError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "ConflictError",
    "AlreadyAppliedError",
    "AlreadyWithdrawnError",
    "ConfirmationRequiredError",
    "StoreUnavailableError",
    "HTTP_STATUS_MAP",
]
