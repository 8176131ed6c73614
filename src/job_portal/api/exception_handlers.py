"""
Application exception handlers.

Every error leaves the API in the same envelope:
``{"success": false, "message", "errors", "data": null, "details"}``.
"""
import logging
import traceback
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..core.exceptions import JobPortalError, create_error_response, get_http_status_code

logger = logging.getLogger(__name__)


def _error_envelope(
    message: str,
    errors: Optional[list] = None,
    details: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    return {
        "success": False,
        "message": message,
        "errors": errors or [],
        "data": None,
        "details": details or {},
    }


class ExceptionHandlerRegistry:
    """Registers the job portal exception handlers on an application."""

    def __init__(self, is_production: bool = True, include_stack: bool = False):
        """
        Args:
            is_production: Hide unexpected error messages from clients
            include_stack: Attach a ``stack`` field to error responses
        """
        self.is_production = is_production
        self.include_stack = include_stack

    def _with_stack(self, content: Dict[str, Any], exc: Exception) -> Dict[str, Any]:
        if self.include_stack:
            content["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        return content

    def register_handlers(self, app: FastAPI) -> None:
        """Register exception handlers for the application.

        Args:
            app: FastAPI application instance
        """
        @app.exception_handler(JobPortalError)
        async def job_portal_exception_handler(request: Request, exc: JobPortalError):
            """Handle domain exceptions with their mapped status code."""
            status_code = get_http_status_code(exc)
            if status_code >= 500:
                logger.error(f"{exc.__class__.__name__} on {request.method} {request.url.path}: {exc.message}")
            return JSONResponse(
                status_code=status_code,
                content=self._with_stack(create_error_response(exc), exc),
            )

        @app.exception_handler(RequestValidationError)
        async def validation_exception_handler(request: Request, exc: RequestValidationError):
            """Reshape request validation failures into the error envelope."""
            errors = [
                {
                    "code": "ValidationError",
                    "message": error.get("msg", "Invalid value"),
                    "type": error.get("type"),
                    "field": ".".join(str(part) for part in error.get("loc", ())),
                }
                for error in exc.errors()
            ]
            message = errors[0]["message"] if errors else "Validation failed"
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content=_error_envelope(message, errors),
            )

        @app.exception_handler(Exception)
        async def general_exception_handler(request: Request, exc: Exception):
            """Handle unexpected exceptions."""
            logger.error(f"Unhandled exception: {exc}", exc_info=True)

            if self.is_production:
                message = "An unexpected error occurred"
            else:
                message = str(exc) or "An unexpected error occurred"

            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=self._with_stack(_error_envelope(message), exc),
            )


def register_exception_handlers(
    app: FastAPI,
    is_production: bool = True,
    include_stack: bool = False,
) -> None:
    """
    Register exception handlers for a FastAPI application.

    Args:
        app: FastAPI application instance
        is_production: Whether running in production mode
        include_stack: Whether error responses carry a stack trace
    """
    registry = ExceptionHandlerRegistry(is_production, include_stack)
    registry.register_handlers(app)
