"""
Downstream HTTP client.

One ``HttpClient`` exists per downstream service. It performs a single
outbound call per ``request`` and folds every possible outcome into a
``ServiceResponse`` envelope, so callers never have to catch transport
exceptions:

- 2xx: ``ServiceResponse(status, data=<parsed JSON>)``
- non-2xx: ``ServiceResponse(status, error="HTTP <status>: <reason>")``
- deadline expired or call aborted: ``ServiceResponse(408, error="Request timeout")``
- anything else: ``ServiceResponse(500, error=<message>)``

Retries, caching and circuit breaking are left to the service mesh.

Example:
    client = HttpClient("http://user-service:8080", settings=settings)
    response = await client.get("/users/123")
    if response.error:
        ...
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any, Generic, TypeVar

import httpx

from conduit_bff.config import Settings, get_settings
from conduit_bff.logging import get_logger

if TYPE_CHECKING:
    from types import TracebackType

logger = get_logger("Clients")

T = TypeVar("T")

TIMEOUT_STATUS = 408
TIMEOUT_MESSAGE = "Request timeout"
UNKNOWN_ERROR_MESSAGE = "Unknown error occurred"


# =============================================================================
# Response Types
# =============================================================================


@dataclass(frozen=True)
class ServiceResponse(Generic[T]):
    """Outcome of one downstream call.

    Attributes:
        status: HTTP status code (or 408/500 for local failures)
        data: Parsed JSON body on success
        error: Error description on failure
    """

    status: int
    data: T | None = None
    error: str | None = None

    @property
    def is_success(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict[str, Any]:
        """Envelope as a dict, leaving out members that were never set."""
        result: dict[str, Any] = {"status": self.status}
        if self.error is not None:
            result["error"] = self.error
        elif self.data is not None:
            result["data"] = self.data
        return result


class HealthStatus(StrEnum):
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


@dataclass(frozen=True)
class HealthResult:
    """Result of probing a downstream ``/health`` endpoint."""

    status: HealthStatus
    response_time: int  # milliseconds

    def to_dict(self) -> dict[str, Any]:
        return {"status": self.status.value, "responseTime": self.response_time}


def elapsed_ms(start: float) -> int:
    """Whole milliseconds since ``start`` (a ``time.monotonic()`` reading)."""
    return max(0, round((time.monotonic() - start) * 1000))


# =============================================================================
# HTTP Client
# =============================================================================


class HttpClient:
    """Generic JSON client bound to one downstream base URL.

    The underlying ``httpx.AsyncClient`` (and with it the connection pool) is
    created once and reused for every request; close it with ``aclose()``.
    """

    def __init__(
        self,
        base_url: str,
        *,
        settings: Settings | None = None,
        timeout: int | None = None,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            base_url: Downstream base URL; a trailing slash is dropped
            settings: Process settings (defaults to ``get_settings()``)
            timeout: Deadline per request in milliseconds (defaults to
                ``settings.request_timeout``)
            headers: Extra default headers, applied over the standard ones
            transport: Optional httpx transport (used by tests)
        """
        settings = settings or get_settings()
        self.base_url = base_url[:-1] if base_url.endswith("/") else base_url
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self.default_headers: dict[str, str] = {
            "Content-Type": "application/json",
            "User-Agent": settings.user_agent,
            **(headers or {}),
        }
        self._client = httpx.AsyncClient(timeout=self.timeout / 1000, transport=transport)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> HttpClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    # -------------------------------------------------------------------------
    # HTTP Methods
    # -------------------------------------------------------------------------

    async def get(self, path: str, headers: dict[str, str] | None = None) -> ServiceResponse[Any]:
        return await self.request("GET", path, headers=headers)

    async def post(
        self, path: str, body: Any = None, headers: dict[str, str] | None = None
    ) -> ServiceResponse[Any]:
        return await self.request("POST", path, body, headers=headers)

    async def put(
        self, path: str, body: Any = None, headers: dict[str, str] | None = None
    ) -> ServiceResponse[Any]:
        return await self.request("PUT", path, body, headers=headers)

    async def delete(
        self, path: str, headers: dict[str, str] | None = None
    ) -> ServiceResponse[Any]:
        return await self.request("DELETE", path, headers=headers)

    # -------------------------------------------------------------------------
    # Core Request Logic
    # -------------------------------------------------------------------------

    async def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        headers: dict[str, str] | None = None,
    ) -> ServiceResponse[Any]:
        """Make one outbound call and normalize the outcome.

        The path is appended to the base URL as-is, so it must carry its own
        leading slash (and query string, if any).

        Args:
            method: HTTP method
            path: Path relative to the base URL
            body: JSON-serializable body; ``None`` sends no body at all
            headers: Per-request headers, applied over the defaults

        Returns:
            ServiceResponse with either ``data`` or ``error`` populated
        """
        url = f"{self.base_url}{path}"
        request_headers = {**self.default_headers, **(headers or {})}

        start = time.monotonic()
        try:
            response = await asyncio.wait_for(
                self._exchange(method, url, body, request_headers),
                timeout=self.timeout / 1000,
            )
        except (TimeoutError, httpx.TimeoutException):
            logger.warning(f"{method} {url} timed out after {self.timeout}ms")
            return ServiceResponse(status=TIMEOUT_STATUS, error=TIMEOUT_MESSAGE)
        except Exception as e:
            logger.warning(f"{method} {url} failed: {e!r}")
            return ServiceResponse(status=500, error=str(e) or UNKNOWN_ERROR_MESSAGE)

        logger.debug(f"{method} {url} -> {response.status} ({elapsed_ms(start)}ms)")
        return response

    async def _exchange(
        self,
        method: str,
        url: str,
        body: Any,
        headers: dict[str, str],
    ) -> ServiceResponse[Any]:
        request = self._client.build_request(
            method,
            url,
            headers=headers,
            json=body,
        )
        response = await self._client.send(request, stream=True)
        try:
            if not response.is_success:
                return ServiceResponse(
                    status=response.status_code,
                    error=f"HTTP {response.status_code}: {response.reason_phrase}",
                )

            await response.aread()
            data = response.json() if response.content else None
            return ServiceResponse(status=response.status_code, data=data)
        finally:
            await response.aclose()

    # -------------------------------------------------------------------------
    # Health Check
    # -------------------------------------------------------------------------

    async def health_check(self) -> HealthResult:
        """Probe ``GET /health``; healthy only on exactly 200. Never raises."""
        start = time.monotonic()
        try:
            response = await self.get("/health")
        except Exception:
            return HealthResult(status=HealthStatus.UNHEALTHY, response_time=elapsed_ms(start))

        status = HealthStatus.HEALTHY if response.status == 200 else HealthStatus.UNHEALTHY
        return HealthResult(status=status, response_time=elapsed_ms(start))
