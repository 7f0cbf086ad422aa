"""Tests for common utilities — formatting, pagination and exceptions."""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal

import httpx
import pytest

from staffos.common.exceptions import (
    AppException,
    NotFoundException,
    ValidationException,
    exception_from_response,
    require_fields,
)
from staffos.common.formatting import (
    format_currency,
    format_date,
    format_datetime,
    humanize,
    parse_date,
    parse_datetime,
    percentage,
)
from staffos.common.pagination import build_meta, offset_for_page


# ── Formatting ──────────────────────────────────────────────────────


class TestDates:
    @pytest.mark.parametrize("value,expected", [
        ("2026-03-05", date(2026, 3, 5)),
        ("2026-03-05T00:00:00.000Z", date(2026, 3, 5)),
        (datetime(2026, 3, 5, 14, 5), date(2026, 3, 5)),
        (date(2026, 3, 5), date(2026, 3, 5)),
        (None, None),
        ("", None),
        ("not-a-date", None),
        ("2026-13-45", None),
    ])
    def test_parse_date(self, value, expected):
        assert parse_date(value) == expected

    def test_parse_datetime_handles_zulu(self):
        assert parse_datetime("2026-03-05T14:05:00Z") == datetime(2026, 3, 5, 14, 5, tzinfo=timezone.utc)

    def test_format_date(self):
        assert format_date("2026-03-05") == "5 Mar 2026"
        assert format_date(None) == "-"
        assert format_date("31/02/2026") == "-"

    def test_format_datetime(self):
        assert format_datetime("2026-03-05T14:05:00") == "5 Mar 2026, 14:05"


class TestMoney:
    @pytest.mark.parametrize("value,expected", [
        (50000, "£50,000"),
        ("32000.00", "£32,000"),
        (Decimal("1234.6"), "£1,235"),
        (-250, "-£250"),
        (0, "£0"),
        (None, "—"),
        ("", "—"),
        ("n/a", "—"),
    ])
    def test_format_currency(self, value, expected):
        assert format_currency(value) == expected


class TestLabels:
    def test_humanize(self):
        assert humanize("interview_scheduled") == "Interview Scheduled"
        assert humanize(None) == ""

    @pytest.mark.parametrize("part,whole,expected", [
        (1, 2, 50), (1, 3, 33), (2, 3, 67), (1, 8, 13), (0, 0, 0),
    ])
    def test_percentage_rounds_half_up(self, part, whole, expected):
        assert percentage(part, whole) == expected


# ── Pagination ──────────────────────────────────────────────────────


class TestPagination:
    def test_middle_page(self):
        meta = build_meta(offset=50, limit=50, total=120)
        assert meta.page == 2
        assert meta.total_pages == 3
        assert meta.has_next is True
        assert meta.has_prev is True

    def test_last_page(self):
        meta = build_meta(offset=100, limit=50, total=120)
        assert meta.has_next is False

    def test_empty(self):
        meta = build_meta(offset=0, limit=50, total=0)
        assert (meta.page, meta.total_pages, meta.has_next, meta.has_prev) == (1, 0, False, False)

    def test_zero_limit_uses_default(self):
        assert build_meta(offset=0, limit=0, total=10).page_size == 50

    def test_offset_for_page(self):
        assert offset_for_page(1) == 0
        assert offset_for_page(3, 20) == 40
        assert offset_for_page(0) == 0


# ── Exceptions ──────────────────────────────────────────────────────


class TestExceptions:
    def test_validation_detail_single_message(self):
        exc = ValidationException({"reason": ["Please provide a reason"]})
        assert exc.detail == "Please provide a reason"
        assert exc.status_code == 422

    def test_validation_detail_many_messages(self):
        exc = ValidationException({"a": ["x"], "b": ["y"]})
        assert exc.detail == "One or more fields failed validation."

    def test_not_found_messages(self):
        assert NotFoundException("Case", 9).detail == "Case with id '9' does not exist."
        assert NotFoundException("Case").detail == "Case not found."

    def test_to_problem_omits_empty_parts(self):
        problem = NotFoundException("Case", 9).to_problem()
        assert problem == {
            "type": "https://staffos.app/errors/not-found",
            "title": "Case Not Found",
            "status": 404,
            "detail": "Case with id '9' does not exist.",
        }

    def test_response_without_request(self):
        exc = exception_from_response(httpx.Response(418, json={"error": "Teapot"}))
        assert isinstance(exc, AppException)
        assert exc.detail == "Teapot"
        assert exc.instance is None

    def test_require_fields(self):
        with pytest.raises(ValidationException) as exc_info:
            require_fields(
                {"name": "  ", "year": 2026, "start_date": None},
                {"name": "Name is required", "year": "Year is required", "start_date": "Start is required"},
            )
        assert exc_info.value.errors == {
            "name": ["Name is required"],
            "start_date": ["Start is required"],
        }

    def test_require_fields_passes(self):
        require_fields({"name": "Band A"}, {"name": "Name is required"})
