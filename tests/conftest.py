"""Pytest configuration and fixtures for job-portal tests."""

from datetime import timedelta
from typing import Any, Dict, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from jose import jwt

from job_portal.app import ServiceContainer, create_app
from job_portal.config import Settings
from job_portal.features.applications.repositories import InMemoryApplicationRepository
from job_portal.features.cache import MemoryKeyStore, ResponseCache
from job_portal.features.jobs.entities import Job, JobCategory, JobType
from job_portal.features.jobs.repositories import InMemoryJobRepository
from job_portal.features.resumes.entities.resume import Resume
from job_portal.features.resumes.repositories import InMemoryResumeRepository
from job_portal.utils import generate_uuid_v7, utc_now

TEST_SECRET = "test-secret"

EMPLOYER_ID = "0190b8d2-0000-7000-8000-000000000001"
APPLICANT_ID = "0190b8d2-0000-7000-8000-000000000002"
OTHER_USER_ID = "0190b8d2-0000-7000-8000-000000000003"
ADMIN_ID = "0190b8d2-0000-7000-8000-000000000004"


def make_token(
    user_id: str,
    email: Optional[str] = None,
    role: str = "user",
    secret: str = TEST_SECRET,
    expires_in: timedelta = timedelta(hours=1),
) -> str:
    claims: Dict[str, Any] = {
        "sub": user_id,
        "email": email or f"{user_id[-4:]}@example.com",
        "name": f"User {user_id[-4:]}",
        "role": role,
        "exp": utc_now() + expires_in,
    }
    return jwt.encode(claims, secret, algorithm="HS256")


def auth_headers(user_id: str, role: str = "user") -> Dict[str, str]:
    return {"Authorization": f"Bearer {make_token(user_id, role=role)}"}


def build_job(posted_by: str = EMPLOYER_ID, **overrides) -> Job:
    fields = dict(
        id=generate_uuid_v7(),
        title="Backend Engineer",
        company="Acme",
        location="Berlin",
        type=JobType.FULL_TIME,
        category=JobCategory.SOFTWARE_DEVELOPMENT,
        description="Build APIs",
        posted_by=posted_by,
        skills=["python"],
    )
    fields.update(overrides)
    return Job(**fields)


def build_resume(applicant_id: str = APPLICANT_ID, **overrides) -> Resume:
    fields = dict(
        id=generate_uuid_v7(),
        name="cv.pdf",
        path="/tmp/cv.pdf",
        applicant_id=applicant_id,
        content_type="application/pdf",
        size=3,
    )
    fields.update(overrides)
    return Resume(**fields)


JOB_PAYLOAD = {
    "title": "Backend Engineer",
    "company": "Acme",
    "location": "Berlin",
    "type": "Full-time",
    "category": "Software Development",
    "description": "Build APIs",
    "skills": ["python", "fastapi"],
    "salary_min": 50000,
    "salary_max": 70000,
}


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings isolated from the environment and any .env file."""
    return Settings(
        _env_file=None,
        environment="testing",
        database_url=None,
        redis_url=None,
        cache_backend="memory",
        jwt_secret=TEST_SECRET,
        upload_dir=str(tmp_path / "uploads"),
        max_upload_size=1024,
    )


@pytest.fixture
def key_store() -> MemoryKeyStore:
    return MemoryKeyStore()


@pytest.fixture
def response_cache(key_store) -> ResponseCache:
    return ResponseCache(key_store, default_ttl=60)


@pytest.fixture
def job_repository() -> InMemoryJobRepository:
    return InMemoryJobRepository()


@pytest.fixture
def application_repository() -> InMemoryApplicationRepository:
    return InMemoryApplicationRepository()


@pytest.fixture
def resume_repository() -> InMemoryResumeRepository:
    return InMemoryResumeRepository()


@pytest.fixture
def container(settings, key_store) -> ServiceContainer:
    return ServiceContainer(settings, key_store=key_store)


@pytest.fixture
def app(container):
    return create_app(container=container)


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client


@pytest.fixture
def employer_headers() -> Dict[str, str]:
    return auth_headers(EMPLOYER_ID)


@pytest.fixture
def applicant_headers() -> Dict[str, str]:
    return auth_headers(APPLICANT_ID)


@pytest.fixture
def other_headers() -> Dict[str, str]:
    return auth_headers(OTHER_USER_ID)


@pytest.fixture
def admin_headers() -> Dict[str, str]:
    return auth_headers(ADMIN_ID, role="admin")
