"""API tests over the ASGI app with in-memory backends."""

from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from job_portal.app import ServiceContainer, create_app
from job_portal.features.cache import RedisKeyStore

from .conftest import (
    ADMIN_ID,
    APPLICANT_ID,
    EMPLOYER_ID,
    JOB_PAYLOAD,
    OTHER_USER_ID,
    auth_headers,
    build_job,
    make_token,
)

API = "/api/v1"


async def post_job(client, headers, **overrides) -> dict:
    response = await client.post(f"{API}/jobs", json={**JOB_PAYLOAD, **overrides}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["job"]


async def upload_resume(client, headers) -> dict:
    response = await client.post(
        f"{API}/resumes",
        files={"file": ("cv.pdf", b"%PDF-1.4 resume", "application/pdf")},
        data={"name": "My CV"},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


class TestAuthentication:

    @pytest.mark.asyncio
    async def test_missing_token(self, client):
        response = await client.post(f"{API}/jobs", json=JOB_PAYLOAD)

        assert response.status_code == 401
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Not authorized, no token"

    @pytest.mark.asyncio
    async def test_invalid_token(self, client):
        response = await client.get(f"{API}/users/me", headers={"Authorization": "Bearer garbage"})

        assert response.status_code == 401
        assert response.json()["message"] == "Not authorized, token failed"

    @pytest.mark.asyncio
    async def test_expired_token(self, client):
        token = make_token(APPLICANT_ID, expires_in=timedelta(hours=-1))
        response = await client.get(f"{API}/users/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["message"] == "Token has expired"

    @pytest.mark.asyncio
    async def test_profile_is_provisioned_and_updatable(self, client, applicant_headers):
        me = await client.get(f"{API}/users/me", headers=applicant_headers)
        assert me.status_code == 200
        assert me.json()["id"] == APPLICANT_ID
        assert me.json()["role"] == "user"

        updated = await client.put(
            f"{API}/users/me", json={"location": "Lisbon", "skills": ["sql"]}, headers=applicant_headers
        )
        assert updated.status_code == 200
        assert updated.json()["location"] == "Lisbon"
        assert updated.json()["skills"] == ["sql"]

    @pytest.mark.asyncio
    async def test_profile_rejects_null_for_required_fields(self, client, applicant_headers):
        await client.put(f"{API}/users/me", json={"location": "Lisbon"}, headers=applicant_headers)

        rejected = await client.put(f"{API}/users/me", json={"name": None}, headers=applicant_headers)
        assert rejected.status_code == 400
        assert rejected.json()["success"] is False

        cleared = await client.put(f"{API}/users/me", json={"location": None}, headers=applicant_headers)
        assert cleared.status_code == 200
        assert cleared.json()["location"] is None
        assert cleared.json()["name"] == "User 0002"


class TestJobEndpoints:

    @pytest.mark.asyncio
    async def test_list_is_cached_until_a_job_is_created(self, client, container, employer_headers):
        first = await client.get(f"{API}/jobs")
        assert first.status_code == 200
        assert first.json()["total"] == 0

        # Written behind the coordinator's back, so the cached page goes stale
        await container.jobs.create(build_job())
        stale = await client.get(f"{API}/jobs")
        assert stale.json()["total"] == 0

        await post_job(client, employer_headers)
        fresh = await client.get(f"{API}/jobs")
        assert fresh.json()["total"] == 2
        assert fresh.json()["current_page"] == 1
        assert fresh.json()["total_pages"] == 1

    @pytest.mark.asyncio
    async def test_list_filters_and_query_keys(self, client, container, employer_headers):
        await post_job(client, employer_headers, location="Berlin")
        await post_job(client, employer_headers, location="Paris", category="Design")

        response = await client.get(f"{API}/jobs", params={"location": "berlin"})
        assert response.json()["total"] == 1

        response = await client.get(f"{API}/jobs?category=Design&page=1")
        assert response.json()["total"] == 1
        assert response.json()["jobs"][0]["location"] == "Paris"

        keys = await container.key_store.keys("jobs:list:*")
        assert "jobs:list:/api/v1/jobs?category=Design&page=1" in keys

    @pytest.mark.asyncio
    async def test_detail_counts_views_when_served_from_cache(self, client, container, employer_headers):
        job = await post_job(client, employer_headers)

        first = await client.get(f"{API}/jobs/{job['id']}")
        second = await client.get(f"{API}/jobs/{job['id']}")

        assert first.json()["views"] == 1
        assert second.json()["views"] == 2
        assert await container.key_store.keys("jobs:detail:*") == [f"jobs:detail:/api/v1/jobs/{job['id']}"]

    @pytest.mark.asyncio
    async def test_missing_job_detail_is_not_cached(self, client, container):
        response = await client.get(f"{API}/jobs/missing")

        assert response.status_code == 404
        assert response.json()["message"] == "Job not found"
        assert await container.key_store.keys() == []

    @pytest.mark.asyncio
    async def test_update_refreshes_cached_detail(self, client, employer_headers):
        job = await post_job(client, employer_headers)
        await client.get(f"{API}/jobs/{job['id']}")

        response = await client.put(f"{API}/jobs/{job['id']}", json={"title": "Lead"}, headers=employer_headers)
        assert response.status_code == 200
        assert response.json()["message"] == "Job updated successfully"

        detail = await client.get(f"{API}/jobs/{job['id']}")
        assert detail.json()["title"] == "Lead"

    @pytest.mark.asyncio
    async def test_update_rejects_null_for_required_fields(self, client, employer_headers):
        job = await post_job(client, employer_headers)

        for field in ("title", "type"):
            response = await client.put(f"{API}/jobs/{job['id']}", json={field: None}, headers=employer_headers)
            assert response.status_code == 400, field
            assert response.json()["success"] is False

        listing = await client.get(f"{API}/jobs")
        detail = await client.get(f"{API}/jobs/{job['id']}")
        assert listing.status_code == 200
        assert detail.status_code == 200
        assert detail.json()["title"] == "Backend Engineer"

        cleared = await client.put(f"{API}/jobs/{job['id']}", json={"salary_min": None}, headers=employer_headers)
        assert cleared.status_code == 200
        assert cleared.json()["job"]["salary_min"] is None

    @pytest.mark.asyncio
    async def test_only_poster_may_update_or_delete(self, client, employer_headers, other_headers):
        job = await post_job(client, employer_headers)

        update = await client.put(f"{API}/jobs/{job['id']}", json={"title": "Mine"}, headers=other_headers)
        delete = await client.delete(f"{API}/jobs/{job['id']}", headers=other_headers)

        assert update.status_code == 404
        assert delete.status_code == 404

    @pytest.mark.asyncio
    async def test_invalid_payload_uses_error_envelope(self, client, employer_headers):
        response = await client.post(
            f"{API}/jobs", json={**JOB_PAYLOAD, "salary_min": 90000, "salary_max": 10}, headers=employer_headers
        )

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["data"] is None
        assert body["errors"]

    @pytest.mark.asyncio
    async def test_delete_cascades_applications(self, client, container, employer_headers):
        job = await post_job(client, employer_headers)
        applicants = [auth_headers(user_id) for user_id in (APPLICANT_ID, OTHER_USER_ID, ADMIN_ID)]
        for headers in applicants:
            resume = await upload_resume(client, headers)
            applied = await client.post(
                f"{API}/jobs/{job['id']}/apply", json={"resume_id": resume["id"]}, headers=headers
            )
            assert applied.status_code == 201
        assert (await container.applications.list_for_job(job["id"], None, 1, 10)).total == 3

        response = await client.delete(f"{API}/jobs/{job['id']}", headers=employer_headers)

        assert response.status_code == 200
        assert (await container.applications.list_for_job(job["id"], None, 1, 10)).total == 0
        for headers in applicants:
            mine = await client.get(f"{API}/applications/my-applications", headers=headers)
            assert mine.json()["total"] == 0

    @pytest.mark.asyncio
    async def test_reads_survive_a_failing_redis(self, settings, mocker):
        failure = ConnectionError("redis unavailable")
        redis_client = mocker.MagicMock()
        for command in ("get", "set", "delete", "ping"):
            setattr(redis_client, command, mocker.AsyncMock(side_effect=failure))
        redis_client.scan_iter.side_effect = failure
        container = ServiceContainer(settings, key_store=RedisKeyStore("redis://localhost:6379/0", client=redis_client))
        job = await container.jobs.create(build_job())
        app = create_app(container=container)

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http_client:
            listing = await http_client.get(f"{API}/jobs")
            detail = await http_client.get(f"{API}/jobs/{job.id}")

        assert listing.status_code == 200
        assert listing.json()["total"] == 1
        assert detail.status_code == 200
        assert detail.json()["id"] == job.id
        redis_client.get.assert_awaited()


class TestApplicationEndpoints:

    @pytest.mark.asyncio
    async def test_full_lifecycle(self, client, employer_headers, applicant_headers):
        job = await post_job(client, employer_headers)
        resume = await upload_resume(client, applicant_headers)

        applied = await client.post(
            f"{API}/jobs/{job['id']}/apply",
            json={"resume_id": resume["id"], "cover_letter": "Hi"},
            headers=applicant_headers,
        )
        application = applied.json()["application"]
        assert application["status"] == "pending"

        duplicate = await client.post(
            f"{API}/jobs/{job['id']}/apply", json={"resume_id": resume["id"]}, headers=applicant_headers
        )
        assert duplicate.status_code == 400
        assert duplicate.json()["message"] == "You have already applied for this job"

        forbidden = await client.patch(
            f"{API}/applications/{application['id']}/status", json={"status": "accepted"}, headers=applicant_headers
        )
        assert forbidden.status_code == 403

        invalid = await client.patch(
            f"{API}/applications/{application['id']}/status", json={"status": "hired"}, headers=employer_headers
        )
        assert invalid.status_code == 400
        assert invalid.json()["message"] == "Invalid status"

        reviewed = await client.patch(
            f"{API}/applications/{application['id']}/status",
            json={"status": "under_review"},
            headers=employer_headers,
        )
        assert reviewed.status_code == 200
        assert [h["status"] for h in reviewed.json()["application"]["status_history"]] == ["pending", "under_review"]

        listed = await client.get(
            f"{API}/applications/jobs/{job['id']}/applications?status=under_review", headers=employer_headers
        )
        assert listed.json()["total"] == 1

        withdrawn = await client.post(
            f"{API}/applications/my-applications/{application['id']}/withdraw", headers=applicant_headers
        )
        assert withdrawn.json()["application"]["status"] == "withdrawn"

        again = await client.post(
            f"{API}/applications/my-applications/{application['id']}/withdraw", headers=applicant_headers
        )
        assert again.status_code == 400
        assert again.json()["message"] == "Application already withdrawn"

    @pytest.mark.asyncio
    async def test_notes_and_own_application_detail(self, client, employer_headers, applicant_headers, other_headers):
        job = await post_job(client, employer_headers)
        resume = await upload_resume(client, applicant_headers)
        applied = await client.post(
            f"{API}/jobs/{job['id']}/apply", json={"resume_id": resume["id"]}, headers=applicant_headers
        )
        application_id = applied.json()["application"]["id"]

        noted = await client.post(
            f"{API}/applications/{application_id}/notes", json={"note": "Good fit"}, headers=employer_headers
        )
        assert noted.json()["application"]["notes"] == ["Good fit"]

        own = await client.get(f"{API}/applications/my-applications/{application_id}", headers=applicant_headers)
        foreign = await client.get(f"{API}/applications/my-applications/{application_id}", headers=other_headers)
        assert own.status_code == 200
        assert foreign.status_code == 404


class TestResumeEndpoints:

    @pytest.mark.asyncio
    async def test_rejects_unsupported_file(self, client, applicant_headers):
        response = await client.post(
            f"{API}/resumes",
            files={"file": ("cv.txt", b"plain text", "text/plain")},
            headers=applicant_headers,
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Only PDF, DOC, DOCX files are allowed"

    @pytest.mark.asyncio
    async def test_rejects_oversize_file(self, client, applicant_headers):
        response = await client.post(
            f"{API}/resumes",
            files={"file": ("cv.pdf", b"x" * 2048, "application/pdf")},
            headers=applicant_headers,
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_delete_requires_confirmation_then_cascades(self, client, employer_headers, applicant_headers):
        job = await post_job(client, employer_headers)
        resume = await upload_resume(client, applicant_headers)
        applied = await client.post(
            f"{API}/jobs/{job['id']}/apply", json={"resume_id": resume["id"]}, headers=applicant_headers
        )
        application_id = applied.json()["application"]["id"]

        refused = await client.delete(f"{API}/resumes/{resume['id']}", headers=applicant_headers)
        assert refused.status_code == 409
        assert refused.json()["details"]["application_ids"] == [application_id]

        confirmed = await client.delete(
            f"{API}/resumes/{resume['id']}?confirm_delete=true", headers=applicant_headers
        )
        assert confirmed.status_code == 200
        assert confirmed.json()["deleted_applications"] == 1

        mine = await client.get(f"{API}/applications/my-applications", headers=applicant_headers)
        assert mine.json()["total"] == 0
        gone = await client.get(f"{API}/resumes/{resume['id']}", headers=applicant_headers)
        assert gone.status_code == 404

    @pytest.mark.asyncio
    async def test_list_user_resumes(self, client, applicant_headers):
        await upload_resume(client, applicant_headers)

        response = await client.get(f"{API}/resumes/user/{APPLICANT_ID}", headers=applicant_headers)

        assert response.status_code == 200
        assert [r["name"] for r in response.json()] == ["My CV"]


class TestUtilityEndpoints:

    @pytest.mark.asyncio
    async def test_health_ok(self, client):
        response = await client.get(f"{API}/utility/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["services"] == {"database": "connected", "cache": "connected"}

    @pytest.mark.asyncio
    async def test_health_503_when_cache_is_down(self, settings):
        client_mock = MagicMock()
        client_mock.ping = AsyncMock(side_effect=ConnectionError("refused"))
        store = RedisKeyStore("redis://localhost:6379/0", client=client_mock)
        app = create_app(container=ServiceContainer(settings, key_store=store))

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http_client:
            response = await http_client.get(f"{API}/utility/health")

        assert response.status_code == 503
        assert response.json()["services"]["cache"] == "disconnected"

    @pytest.mark.asyncio
    async def test_health_with_cache_disabled(self, settings):
        app = create_app(container=ServiceContainer(settings, key_store=None))

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http_client:
            health = await http_client.get(f"{API}/utility/health")
            jobs = await http_client.get(f"{API}/jobs")

        assert health.status_code == 200
        assert health.json()["services"]["cache"] == "disabled"
        assert jobs.status_code == 200

    @pytest.mark.asyncio
    async def test_cache_clear_requires_admin(self, client, applicant_headers):
        response = await client.post(f"{API}/utility/cache/clear", headers=applicant_headers)

        assert response.status_code == 403
        assert response.json()["message"] == "Admin access required"

    @pytest.mark.asyncio
    async def test_admin_clears_cache_by_pattern(self, client, container, admin_headers):
        await container.key_store.set("jobs:list:/api/v1/jobs", "{}")
        await container.key_store.set("jobs:detail:/api/v1/jobs/1", "{}")

        response = await client.post(
            f"{API}/utility/cache/clear", params={"pattern": "jobs:list:*"}, headers=admin_headers
        )

        assert response.status_code == 200
        assert response.json()["cleared_keys"] == 1
        assert await container.key_store.keys() == ["jobs:detail:/api/v1/jobs/1"]

    @pytest.mark.asyncio
    async def test_admin_stats(self, client, employer_headers, applicant_headers, admin_headers):
        job = await post_job(client, employer_headers)
        await post_job(client, employer_headers, status="draft")
        resume = await upload_resume(client, applicant_headers)
        applied = await client.post(
            f"{API}/jobs/{job['id']}/apply", json={"resume_id": resume["id"]}, headers=applicant_headers
        )
        assert applied.status_code == 201

        response = await client.get(f"{API}/utility/stats", headers=admin_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["jobs"] == 2
        assert body["active_jobs"] == 1
        assert body["users"] == 3
        assert body["jobs_by_status"] == {"active": 1, "draft": 1}
        assert body["applications_by_status"] == {"pending": 1}
        assert body["metrics"] == {"applications_today": 1, "new_users_this_week": 3}
