"""Shared test fixtures — fake StaffOS server, API client, factories.

The fake server is a FastAPI app with one catch-all route: tests queue
canned replies per ``(method, path)`` and inspect the requests it saw.
The client talks to it in-process through ``httpx.ASGITransport``.
"""

from __future__ import annotations

import os

# Pin settings before anything imports pydantic-settings
os.environ.setdefault("API_BASE_URL", "http://test")
os.environ.setdefault("TIMEZONE", "Europe/London")

import json
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from typing import Any, AsyncGenerator, Optional

import httpx
import pytest
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from staffos.client import ApiClient

API_PREFIX = "/api"
METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]


# ── Fake server ─────────────────────────────────────────────────────

@dataclass
class Reply:
    body: Any = None
    status: int = 200
    headers: dict[str, str] = field(default_factory=dict)
    cookies: dict[str, str] = field(default_factory=dict)


@dataclass
class Recorded:
    method: str
    path: str
    params: dict[str, str]
    query: list[tuple[str, str]]
    json: Any
    headers: dict[str, str]
    raw: bytes = b""


class FakeStaffOS:
    """In-process stand-in for the StaffOS API."""

    def __init__(self) -> None:
        self.replies: dict[tuple[str, str], list[Reply]] = {}
        self.requests: list[Recorded] = []
        self.app = FastAPI()
        self.app.add_api_route("/{path:path}", self._handle, methods=METHODS, response_model=None)

    def reply(
        self,
        method: str,
        path: str,
        body: Any = None,
        status: int = 200,
        *,
        headers: Optional[dict[str, str]] = None,
        cookies: Optional[dict[str, str]] = None,
    ) -> None:
        """Queue a reply; the last one queued for a route keeps answering."""
        self.replies.setdefault((method.upper(), path), []).append(
            Reply(body, status, headers or {}, cookies or {})
        )

    @property
    def last(self) -> Recorded:
        return self.requests[-1]

    def calls(self, method: str, path: str) -> list[Recorded]:
        return [r for r in self.requests if r.method == method and r.path == path]

    async def _handle(self, request: Request, path: str) -> Response:
        route = "/" + path
        if route.startswith(API_PREFIX + "/") or route == API_PREFIX:
            route = route[len(API_PREFIX):] or "/"
        raw = await request.body()
        payload = None
        if raw and request.headers.get("content-type", "").startswith("application/json"):
            payload = json.loads(raw)
        self.requests.append(Recorded(
            method=request.method,
            path=route,
            params=dict(request.query_params),
            query=list(request.query_params.multi_items()),
            json=payload,
            headers=dict(request.headers),
            raw=raw,
        ))

        queue = self.replies.get((request.method, route))
        if not queue:
            return JSONResponse({"error": f"No route for {request.method} {route}"}, status_code=404)
        reply = queue.pop(0) if len(queue) > 1 else queue[0]
        if reply.body is None:
            response: Response = Response(status_code=reply.status, headers=reply.headers)
        else:
            response = JSONResponse(reply.body, status_code=reply.status, headers=reply.headers)
        for name, value in reply.cookies.items():
            response.set_cookie(name, value)
        return response


@pytest.fixture
def fake_api() -> FakeStaffOS:
    return FakeStaffOS()


@pytest.fixture
async def api(fake_api) -> AsyncGenerator[ApiClient, None]:
    """ApiClient wired to the fake server, with retries that do not sleep."""
    async with ApiClient(
        base_url="http://test/api",
        transport=httpx.ASGITransport(app=fake_api.app),
        backoff=0,
    ) as client:
        yield client


# ── Factories ───────────────────────────────────────────────────────

def _make_candidate(**overrides) -> dict:
    data = dict(
        id=1,
        full_name="Alex Morgan",
        email="alex.morgan@example.com",
        stage="candidate",
        proposed_role_name="Care Assistant",
        proposed_tier=5,
        proposed_start_date="2026-11-02",
        contract_signed=False,
        verified_refs="0",
        pending_required_checks="2",
        pending_required_tasks="0",
    )
    data.update(overrides)
    return data


def _make_case(**overrides) -> dict:
    data = dict(
        id=10,
        case_reference="HR-2026-0010",
        employee_id=7,
        employee_name="Sam Patel",
        case_type="pip",
        status="open",
        summary="Timekeeping below expectations",
        opened_date="2026-09-01",
    )
    data.update(overrides)
    return data


def _make_workflow(**overrides) -> dict:
    data = dict(
        id=3,
        employee_id=12,
        employee_name="Jordan Lee",
        termination_type="resignation",
        notice_date="2026-10-01",
        last_working_day="2026-10-31",
        status="pending",
        total_items="6",
        completed_items="2",
    )
    data.update(overrides)
    return data


def _make_insight(**overrides) -> dict:
    data = dict(
        id=21,
        employee_id=7,
        employee_name="Sam Patel",
        pattern_type="frequency",
        priority="high",
        status="new",
        summary="4 absences in 90 days",
        pattern_data={"count": 4, "period_days": 90, "threshold": 3},
        period_start="2026-07-01",
        period_end="2026-09-29",
    )
    data.update(overrides)
    return data


def _make_notification(minutes_ago: int = 5, **overrides) -> dict:
    created = datetime.now(timezone.utc) - timedelta(minutes=minutes_ago)
    data = dict(
        id=1,
        type="leave_request_pending",
        title="Leave request awaiting approval",
        message="Sam Patel requested 2 days",
        is_read=False,
        created_at=created.isoformat(),
    )
    data.update(overrides)
    return data


def _make_review(**overrides) -> dict:
    data = dict(
        id=5,
        review_cycle_id=1,
        employee_id=7,
        employee_name="Sam Patel",
        current_salary="30000.00",
        proposed_salary="32000.00",
        status="draft",
    )
    data.update(overrides)
    return data


def _make_absence(start: date, days: int = 1, **overrides) -> dict:
    data = dict(
        id=overrides.pop("id", None) or int(start.strftime("%Y%m%d")),
        absence_category="sick",
        leave_start_date=start.isoformat(),
        leave_end_date=(start + timedelta(days=days - 1)).isoformat(),
        total_days=days,
        status="approved",
        sick_reason="illness",
    )
    data.update(overrides)
    return data
