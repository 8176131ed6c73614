"""HTTP status code mapping for exceptions.

The mapping is resolved along the exception's MRO, so subclasses inherit
their parent's status unless listed explicitly.
"""

from typing import Dict, Type

from .base import JobPortalError
from .domain import *


HTTP_STATUS_MAP: Dict[Type[Exception], int] = {
    # 400 Bad Request
    ValidationError: 400,
    AlreadyAppliedError: 400,
    AlreadyWithdrawnError: 400,

    # 401 Unauthorized
    AuthenticationError: 401,

    # 403 Forbidden
    AuthorizationError: 403,

    # 404 Not Found
    NotFoundError: 404,

    # 409 Conflict
    ConflictError: 409,

    # 503 Service Unavailable
    StoreUnavailableError: 503,

    # Default for JobPortalError
    JobPortalError: 500,
}

_resolved: Dict[Type[Exception], int] = {}


def get_http_status_code(exception: Exception) -> int:
    """Get HTTP status code for exception.

    Args:
        exception: The exception instance

    Returns:
        HTTP status code (cached per exception type)
    """
    exception_type = type(exception)
    if exception_type in _resolved:
        return _resolved[exception_type]

    status_code = 500
    for klass in exception_type.__mro__:
        if klass in HTTP_STATUS_MAP:
            status_code = HTTP_STATUS_MAP[klass]
            break

    _resolved[exception_type] = status_code
    return status_code
