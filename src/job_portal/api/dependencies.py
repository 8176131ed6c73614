"""FastAPI dependency providers.

Everything is resolved from the ``ServiceContainer`` stored on
``app.state.container`` by the application factory.
"""

from fastapi import Depends, Request

from ..config import Settings


def get_container(request: Request):
    """Get the service container of the running application."""
    return request.app.state.container


def get_app_settings(container=Depends(get_container)) -> Settings:
    return container.settings


def get_token_verifier(container=Depends(get_container)):
    return container.token_verifier


def get_user_service(container=Depends(get_container)):
    return container.user_service


def get_response_cache(container=Depends(get_container)):
    return container.response_cache


def get_job_coordinator(container=Depends(get_container)):
    return container.job_coordinator


def get_lifecycle(container=Depends(get_container)):
    return container.lifecycle


def get_resume_service(container=Depends(get_container)):
    return container.resume_service


def get_system_service(container=Depends(get_container)):
    return container.system_service
