"""API client test suite — URL building, query cleaning, session/CSRF
cookies, rate-limit and connection retries, error mapping.
"""

from __future__ import annotations

import httpx
import pytest

from staffos.client import ApiClient, clean_params
from staffos.common.constants import CaseStatus
from staffos.common.exceptions import (
    ApiUnavailable,
    AppException,
    AuthenticationRequired,
    ConflictError,
    ForbiddenException,
    NotFoundException,
    ValidationException,
)
from staffos.config import Settings


def _failing_client(exc: Exception, calls: list, **kwargs) -> ApiClient:
    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.method)
        raise exc

    return ApiClient(
        base_url="http://test/api",
        transport=httpx.MockTransport(handler),
        backoff=0,
        **kwargs,
    )


# ═════════════════════════════════════════════════════════════════════
# 1. CONFIGURATION / PARAMS
# ═════════════════════════════════════════════════════════════════════


class TestConfiguration:
    async def test_base_url_from_settings(self):
        config = Settings(API_BASE_URL="http://staffos.local/", API_PREFIX="/api/")
        async with ApiClient(config=config) as api:
            assert api.base_url == "http://staffos.local/api"

    async def test_explicit_url_wins(self):
        async with ApiClient("http://other:3001/api/") as api:
            assert api.base_url == "http://other:3001/api"

    async def test_session_cookie_from_settings(self, fake_api):
        config = Settings(SESSION_COOKIE="abc123")
        fake_api.reply("GET", "/auth/me", {"user": {"email": "hr@example.com"}})

        async with ApiClient(
            "http://test/api", config=config, transport=httpx.ASGITransport(app=fake_api.app),
        ) as api:
            user = await api.me()

        assert user["email"] == "hr@example.com"
        assert "HeadOfficeOS_sid=abc123" in fake_api.last.headers["cookie"]


class TestCleanParams:
    def test_drops_empty_values(self):
        assert clean_params({"a": None, "b": "", "c": 0, "d": "x"}) == {"c": 0, "d": "x"}

    def test_booleans_become_strings(self):
        assert clean_params({"unread_only": True, "include_closed": False}) == {
            "unread_only": "true", "include_closed": "false",
        }

    def test_enums_become_values(self):
        assert clean_params({"status": CaseStatus.open}) == {"status": "open"}
        assert clean_params({"status": [CaseStatus.open, "closed"]}) == {"status": ["open", "closed"]}

    def test_none(self):
        assert clean_params(None) == {}


# ═════════════════════════════════════════════════════════════════════
# 2. SESSION
# ═════════════════════════════════════════════════════════════════════


class TestSession:
    async def test_login_stores_user(self, api, fake_api):
        fake_api.reply("POST", "/auth/login", {"user": {"id": 1, "email": "hr@example.com"}})

        user = await api.login("hr@example.com", "secret")

        assert user["id"] == 1
        assert api.user == user
        assert fake_api.last.json == {"email": "hr@example.com", "password": "secret"}

    async def test_csrf_cookie_is_echoed(self, api, fake_api):
        fake_api.reply("POST", "/auth/login", {"user": {"id": 1}}, cookies={"staffos_csrf": "tok-1"})
        fake_api.reply("POST", "/hr-cases/10/open", {"id": 10, "case_type": "pip"})

        await api.login("hr@example.com", "secret")
        assert "x-csrf-token" not in fake_api.last.headers
        await api.post("/hr-cases/10/open")

        assert api.csrf_token() == "tok-1"
        assert fake_api.last.headers["x-csrf-token"] == "tok-1"

    async def test_logout_clears_cookies(self, api, fake_api):
        fake_api.reply("POST", "/auth/login", {"user": {"id": 1}}, cookies={"staffos_csrf": "tok-1"})
        fake_api.reply("POST", "/auth/logout", {"message": "Logged out"})

        await api.login("hr@example.com", "secret")
        await api.logout()

        assert api.user is None
        assert api.csrf_token() is None

    async def test_health(self, api, fake_api):
        fake_api.reply("GET", "/health", {"status": "ok"})

        assert await api.health() == {"status": "ok"}


# ═════════════════════════════════════════════════════════════════════
# 3. REQUESTS / RETRIES
# ═════════════════════════════════════════════════════════════════════


class TestRequests:
    async def test_empty_body_is_empty_dict(self, api, fake_api):
        fake_api.reply("DELETE", "/offboarding/3", None, status=204)

        assert await api.delete("/offboarding/3") == {}

    async def test_get_sends_no_body(self, api, fake_api):
        fake_api.reply("GET", "/hr-cases/stats", {"active_cases": 2})

        await api.request("GET", "/hr-cases/stats", {"ignored": True})

        assert fake_api.last.raw == b""

    async def test_upload_is_multipart(self, api, fake_api):
        fake_api.reply("POST", "/documents", {"id": 3})

        await api.upload("/documents", "fit-note.pdf", b"%PDF-1.4", fields={"category": "sick", "skip": None})

        assert fake_api.last.headers["content-type"].startswith("multipart/form-data")
        assert b'filename="fit-note.pdf"' in fake_api.last.raw
        assert b"sick" in fake_api.last.raw
        assert b"skip" not in fake_api.last.raw

    async def test_rate_limit_waits_and_retries(self, api, fake_api):
        fake_api.reply("GET", "/notifications/unread-count", {"error": "Too many requests"},
                       status=429, headers={"Retry-After": "0"})
        fake_api.reply("GET", "/notifications/unread-count", {"unread_count": 2})

        body = await api.get("/notifications/unread-count")

        assert body == {"unread_count": 2}
        assert len(fake_api.calls("GET", "/notifications/unread-count")) == 2

    async def test_rate_limit_gives_up(self, fake_api):
        fake_api.reply("GET", "/health", {"error": "Too many requests"}, status=429,
                       headers={"Retry-After": "0"})

        async with ApiClient(
            "http://test/api", transport=httpx.ASGITransport(app=fake_api.app), max_retries=2, backoff=0,
        ) as api:
            with pytest.raises(AppException) as exc_info:
                await api.health()

        assert exc_info.value.status_code == 429
        assert len(fake_api.requests) == 2

    async def test_connection_errors_retry_then_fail(self):
        calls: list = []
        async with _failing_client(httpx.ConnectError("refused"), calls, max_retries=3) as api:
            with pytest.raises(ApiUnavailable) as exc_info:
                await api.post("/sick-leave/report", {"sick_reason": "illness"})

        assert calls == ["POST", "POST", "POST"]
        assert "Could not reach http://test/api" in exc_info.value.detail

    async def test_read_timeout_on_post_is_not_retried(self):
        calls: list = []
        async with _failing_client(httpx.ReadTimeout("slow"), calls, max_retries=3) as api:
            with pytest.raises(ApiUnavailable):
                await api.post("/hr-cases", {"summary": "x"})

        assert calls == ["POST"]

    async def test_read_timeout_on_get_is_retried(self):
        calls: list = []
        async with _failing_client(httpx.ReadTimeout("slow"), calls, max_retries=2) as api:
            with pytest.raises(ApiUnavailable):
                await api.get("/hr-cases")

        assert calls == ["GET", "GET"]


# ═════════════════════════════════════════════════════════════════════
# 4. ERROR MAPPING
# ═════════════════════════════════════════════════════════════════════


class TestErrorMapping:
    @pytest.mark.parametrize("status,exc_type", [
        (401, AuthenticationRequired),
        (403, ForbiddenException),
        (404, NotFoundException),
        (409, ConflictError),
        (400, ValidationException),
        (422, ValidationException),
    ])
    async def test_status_maps_to_exception(self, api, fake_api, status, exc_type):
        fake_api.reply("GET", "/hr-cases/10", {"error": "Nope"}, status=status)

        with pytest.raises(exc_type) as exc_info:
            await api.get("/hr-cases/10")

        assert exc_info.value.status_code == status
        assert exc_info.value.instance == "/api/hr-cases/10"

    async def test_server_message_becomes_detail(self, api, fake_api):
        fake_api.reply("PUT", "/offboarding/3", {"error": "Workflow already completed"}, status=409)

        with pytest.raises(ConflictError) as exc_info:
            await api.put("/offboarding/3", {"status": "cancelled"})

        assert exc_info.value.detail == "Workflow already completed"

    async def test_field_errors_are_kept(self, api, fake_api):
        fake_api.reply("POST", "/compensation/pay-bands", {
            "detail": "Invalid band", "errors": {"min_salary": ["Must be positive"]},
        }, status=422)

        with pytest.raises(ValidationException) as exc_info:
            await api.post("/compensation/pay-bands", {})

        assert exc_info.value.errors == {"min_salary": ["Must be positive"]}
        assert exc_info.value.detail == "Invalid band"

    async def test_problem_document(self, api, fake_api):
        fake_api.reply("GET", "/compensation/stats", {
            "type": "https://staffos.app/errors/internal", "title": "Internal Error",
            "detail": "Database unavailable",
        }, status=500)

        with pytest.raises(AppException) as exc_info:
            await api.get("/compensation/stats")

        problem = exc_info.value.to_problem()
        assert problem["type"] == "https://staffos.app/errors/internal"
        assert problem["title"] == "Internal Error"
        assert problem["status"] == 500
        assert problem["instance"] == "/api/compensation/stats"

    async def test_non_json_error(self, api, fake_api):
        fake_api.reply("GET", "/missing-route", None, status=502)

        with pytest.raises(AppException) as exc_info:
            await api.get("/missing-route")

        assert exc_info.value.detail == "Request failed"
        assert exc_info.value.title == "Bad Gateway"
