"""Base exceptions for the job portal.

All exceptions inherit from JobPortalError and carry an error code and a
details dictionary that ends up in the API error envelope.
"""

from typing import Any, Dict, Optional


class JobPortalError(Exception):
    """Base exception for all job portal errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        *args,
        **kwargs
    ):
        super().__init__(message, *args, **kwargs)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


def get_http_status_code(exception: Exception) -> int:
    """Get HTTP status code for exception.

    Args:
        exception: The exception instance

    Returns:
        HTTP status code
    """
    from .http_mapping import get_http_status_code as resolve_status_code
    return resolve_status_code(exception)


def create_error_response(exception: JobPortalError) -> Dict[str, Any]:
    """Create standardized error response from exception.

    Args:
        exception: The job portal exception

    Returns:
        Error response dictionary
    """
    return {
        "success": False,
        "message": exception.message,
        "errors": [
            {
                "code": exception.error_code,
                "message": exception.message,
                "type": exception.__class__.__name__,
            }
        ],
        "data": None,
        "details": exception.details,
    }
