"""Client exceptions modelled on RFC 7807 Problem Details.

The StaffOS API answers failures with ``{"error": "..."}``; newer endpoints
send full problem documents.  ``exception_from_response`` understands both
and raises the matching subclass so callers can ``except NotFoundException``
without looking at status codes.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx

BASE_ERROR_URI = "https://staffos.app/errors"


# ── Exception hierarchy ─────────────────────────────────────────────

class AppException(Exception):
    """Base for all client exceptions → RFC 7807 fields."""

    def __init__(
        self,
        status_code: int,
        error_type: str,
        title: str,
        detail: str,
        errors: Optional[dict[str, Any]] = None,
        instance: Optional[str] = None,
    ) -> None:
        self.status_code = status_code
        self.error_type = error_type
        self.title = title
        self.detail = detail
        self.errors = errors
        self.instance = instance
        super().__init__(detail)

    def to_problem(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "type": f"{BASE_ERROR_URI}/{self.error_type}",
            "title": self.title,
            "status": self.status_code,
            "detail": self.detail,
        }
        if self.instance:
            body["instance"] = self.instance
        if self.errors:
            body["errors"] = self.errors
        return body


class AuthenticationRequired(AppException):
    """401 — no valid session."""

    def __init__(self, detail: str = "Authentication required") -> None:
        super().__init__(
            status_code=401,
            error_type="unauthorized",
            title="Unauthorized",
            detail=detail,
        )


class ForbiddenException(AppException):
    """403 — insufficient permissions or CSRF rejection."""

    def __init__(self, detail: str = "Access denied") -> None:
        super().__init__(
            status_code=403,
            error_type="forbidden",
            title="Forbidden",
            detail=detail,
        )


class NotFoundException(AppException):
    """404 — entity not found."""

    def __init__(
        self,
        entity_type: str = "Resource",
        entity_id: Any = None,
        detail: Optional[str] = None,
    ) -> None:
        if detail is None:
            detail = (
                f"{entity_type} with id '{entity_id}' does not exist."
                if entity_id is not None
                else f"{entity_type} not found."
            )
        super().__init__(
            status_code=404,
            error_type="not-found",
            title=f"{entity_type} Not Found",
            detail=detail,
        )


class ConflictError(AppException):
    """409 — duplicate or state conflict reported by the server."""

    def __init__(self, detail: str, errors: Optional[dict[str, Any]] = None) -> None:
        super().__init__(
            status_code=409,
            error_type="conflict",
            title="Conflict",
            detail=detail,
            errors=errors,
        )


class ValidationException(AppException):
    """400/422 — field validation failures, raised locally or by the server."""

    def __init__(
        self,
        errors: dict[str, list[str]],
        detail: Optional[str] = None,
        status_code: int = 422,
    ) -> None:
        if detail is None:
            messages = [m for msgs in errors.values() for m in msgs]
            detail = messages[0] if len(messages) == 1 else "One or more fields failed validation."
        super().__init__(
            status_code=status_code,
            error_type="validation-error",
            title="Validation Error",
            detail=detail,
            errors=errors,
        )


class ApiUnavailable(AppException):
    """The server could not be reached after all retries."""

    def __init__(self, detail: str) -> None:
        super().__init__(
            status_code=503,
            error_type="unavailable",
            title="Service Unavailable",
            detail=detail,
        )


# ── Response mapping ────────────────────────────────────────────────

def _read_body(response: httpx.Response) -> dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def exception_from_response(response: httpx.Response) -> AppException:
    """Build the exception matching a non-OK ``response``."""
    body = _read_body(response)
    status = response.status_code
    message = body.get("error") or body.get("detail")
    errors = body.get("errors") if isinstance(body.get("errors"), dict) else None
    try:
        instance: Optional[str] = response.request.url.path
    except RuntimeError:  # response built without a request
        instance = None

    if status == 401:
        exc: AppException = AuthenticationRequired()
    elif status == 403:
        exc = ForbiddenException(message or "Access denied")
    elif status == 404:
        exc = NotFoundException(detail=message or "Resource not found.")
    elif status == 409:
        exc = ConflictError(message or "Request failed", errors=errors)
    elif status in (400, 422):
        exc = ValidationException(
            errors or {"request": [message or "Request failed"]},
            detail=message or "Request failed",
            status_code=status,
        )
    else:
        exc = AppException(
            status_code=status,
            error_type=body.get("type", "").rsplit("/", 1)[-1] or "request-failed",
            title=body.get("title") or response.reason_phrase or "Request Failed",
            detail=message or "Request failed",
            errors=errors,
        )
    exc.instance = instance
    return exc


def require_fields(values: dict[str, Any], messages: dict[str, str]) -> None:
    """Raise ``ValidationException`` for every blank field named in ``messages``."""
    errors: dict[str, list[str]] = {}
    for field, message in messages.items():
        value = values.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            errors.setdefault(field, []).append(message)
    if errors:
        raise ValidationException(errors)
