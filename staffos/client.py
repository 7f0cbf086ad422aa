"""Async HTTP client for the StaffOS REST API.

Wraps ``httpx.AsyncClient`` with the conventions every endpoint shares:

* requests go to ``{API_BASE_URL}{API_PREFIX}{endpoint}`` with JSON bodies;
* the session cookie lives in the client's cookie jar and the CSRF token
  from the ``staffos_csrf`` cookie is echoed in ``X-CSRF-Token``;
* non-OK responses become ``AppException`` subclasses (see
  ``staffos.common.exceptions``); empty bodies decode to ``{}``;
* 429 responses wait for ``Retry-After``; connection failures retry with
  linear backoff up to ``MAX_RETRIES`` attempts.

Usage::

    async with ApiClient() as api:
        await api.login("hr@example.com", "secret")
        data = await api.get("/hr-cases/stats")
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping, Optional

import httpx

from staffos.common.exceptions import ApiUnavailable, exception_from_response
from staffos.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)

IDEMPOTENT_METHODS = frozenset({"GET", "HEAD", "OPTIONS", "PUT", "DELETE"})


def clean_params(params: Optional[Mapping[str, Any]]) -> dict[str, Any]:
    """Drop ``None``/empty values; lists become repeated query keys."""
    if not params:
        return {}
    cleaned: dict[str, Any] = {}
    for key, value in params.items():
        if value is None or value == "":
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        elif isinstance(value, (list, tuple)):
            value = [getattr(v, "value", v) for v in value]
        else:
            value = getattr(value, "value", value)
        cleaned[key] = value
    return cleaned


class ApiClient:
    """Cookie-session client with CSRF handling and retries."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        config: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        backoff: Optional[float] = None,
    ) -> None:
        self.config = config or default_settings
        self.base_url = (base_url or self.config.api_root).rstrip("/")
        self.max_retries = max(1, max_retries if max_retries is not None else self.config.MAX_RETRIES)
        self.backoff = backoff if backoff is not None else self.config.RETRY_BACKOFF_SECONDS

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            transport=transport,
            timeout=timeout or self.config.REQUEST_TIMEOUT_SECONDS,
            headers={"Accept": "application/json"},
        )
        if self.config.SESSION_COOKIE:
            self._client.cookies.set(self.config.SESSION_COOKIE_NAME, self.config.SESSION_COOKIE)

        self.user: Optional[dict[str, Any]] = None

    # ── Lifecycle ─────────────────────────────────────────────────────

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    @property
    def cookies(self) -> httpx.Cookies:
        return self._client.cookies

    def csrf_token(self) -> Optional[str]:
        """Current CSRF token from the cookie jar, if the server set one."""
        for cookie in self._client.cookies.jar:
            if cookie.name == self.config.CSRF_COOKIE_NAME:
                return cookie.value
        return None

    # ── Core request ──────────────────────────────────────────────────

    def _headers(self) -> dict[str, str]:
        token = self.csrf_token()
        return {self.config.CSRF_HEADER_NAME: token} if token else {}

    async def request(
        self,
        method: str,
        endpoint: str,
        data: Any = None,
        *,
        params: Optional[Mapping[str, Any]] = None,
        files: Optional[dict[str, Any]] = None,
        form: Optional[dict[str, Any]] = None,
    ) -> Any:
        """Send one request and return the decoded JSON body."""
        method = method.upper()
        kwargs: dict[str, Any] = {"params": clean_params(params)}
        if files is not None:
            kwargs["files"] = files
            kwargs["data"] = {k: str(v) for k, v in (form or {}).items() if v is not None}
        elif data is not None and method not in ("GET", "HEAD"):
            kwargs["json"] = data

        for attempt in range(1, self.max_retries + 1):
            try:
                response = await self._client.request(
                    method, endpoint, headers=self._headers(), **kwargs,
                )
            except httpx.TransportError as exc:
                retryable = method in IDEMPOTENT_METHODS or isinstance(exc, httpx.ConnectError)
                if retryable and attempt < self.max_retries:
                    wait = self.backoff * attempt
                    logger.warning(
                        "%s %s failed (%s), retry %d/%d in %.1fs",
                        method, endpoint, type(exc).__name__, attempt, self.max_retries - 1, wait,
                    )
                    await asyncio.sleep(wait)
                    continue
                raise ApiUnavailable(f"Could not reach {self.base_url}: {exc}") from exc

            logger.debug("%s %s → %d", method, endpoint, response.status_code)

            if response.status_code == 429 and attempt < self.max_retries:
                wait = self._retry_after(response)
                logger.warning("Rate limited on %s %s, waiting %.1fs", method, endpoint, wait)
                await asyncio.sleep(wait)
                continue

            return self._decode(response)

        raise ApiUnavailable(f"{method} {endpoint} exhausted {self.max_retries} attempts")

    def _retry_after(self, response: httpx.Response) -> float:
        header = response.headers.get("Retry-After")
        try:
            return max(float(header), 0.0) if header is not None else self.backoff
        except ValueError:
            return self.backoff

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if not response.is_success:
            raise exception_from_response(response)
        if not response.content or not response.text.strip():
            return {}
        return response.json()

    # ── Verbs ─────────────────────────────────────────────────────────

    async def get(self, endpoint: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        return await self.request("GET", endpoint, params=params)

    async def post(self, endpoint: str, data: Any = None, params: Optional[Mapping[str, Any]] = None) -> Any:
        return await self.request("POST", endpoint, data, params=params)

    async def put(self, endpoint: str, data: Any = None, params: Optional[Mapping[str, Any]] = None) -> Any:
        return await self.request("PUT", endpoint, data, params=params)

    async def patch(self, endpoint: str, data: Any = None, params: Optional[Mapping[str, Any]] = None) -> Any:
        return await self.request("PATCH", endpoint, data, params=params)

    async def delete(self, endpoint: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        return await self.request("DELETE", endpoint, params=params)

    async def upload(
        self,
        endpoint: str,
        filename: str,
        content: bytes,
        *,
        content_type: str = "application/octet-stream",
        field: str = "file",
        fields: Optional[dict[str, Any]] = None,
    ) -> Any:
        """Multipart POST of a single file plus optional form fields."""
        return await self.request(
            "POST", endpoint,
            files={field: (filename, content, content_type)},
            form=fields,
        )

    # ── Session ───────────────────────────────────────────────────────

    async def login(self, email: str, password: str) -> dict[str, Any]:
        """Start a cookie session; returns the user summary."""
        body = await self.post("/auth/login", {"email": email, "password": password})
        self.user = body.get("user") or {}
        logger.info("Logged in as %s", self.user.get("email", email))
        return self.user

    async def me(self) -> dict[str, Any]:
        body = await self.get("/auth/me")
        self.user = body.get("user") or {}
        return self.user

    async def logout(self) -> None:
        await self.post("/auth/logout")
        self.user = None
        self._client.cookies.clear()

    async def health(self) -> dict[str, Any]:
        return await self.get("/health")
