"""
Base classes for the per-domain service clients.

Two conventions coexist:

- ``ServiceClient`` wraps an ``HttpClient`` and unwraps its
  ``ServiceResponse`` envelope into the domain record (users, products,
  notifications).
- ``DirectClient`` talks to httpx directly and raises on any non-2xx status
  (accounts, customers).

Both raise plain exceptions; turning them into GraphQL errors is the
resolver layer's job.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any

import httpx

from conduit_bff.clients.http import (
    HealthResult,
    HealthStatus,
    HttpClient,
    ServiceResponse,
    elapsed_ms,
)
from conduit_bff.config import Settings, get_settings
from conduit_bff.errors import DownstreamError, ServiceError

if TYPE_CHECKING:
    from types import TracebackType


# =============================================================================
# Envelope Clients
# =============================================================================


class ServiceClient:
    """Base for clients built on the shared ``HttpClient`` envelope."""

    service_name: str = "service"

    def __init__(self, http: HttpClient) -> None:
        self.http = http

    def _unwrap(self, response: ServiceResponse[Any], fallback: str) -> Any:
        """Return the record carried by ``response`` or raise ``ServiceError``.

        A response without data is a failure even when no error was reported;
        ``fallback`` names the operation in that case.
        """
        if response.error or response.data is None:
            raise ServiceError(
                response.error or fallback,
                status_code=response.status,
                service_name=self.service_name,
            )
        return response.data

    def _confirm_deleted(self, response: ServiceResponse[Any]) -> bool:
        """Deletes succeed only on 204; any other 2xx reports ``False``."""
        if response.error:
            raise ServiceError(
                response.error,
                status_code=response.status,
                service_name=self.service_name,
            )
        return response.status == 204

    async def health_check(self) -> HealthResult:
        return await self.http.health_check()

    async def aclose(self) -> None:
        await self.http.aclose()


# =============================================================================
# Direct Clients
# =============================================================================


class DirectClient:
    """Base for clients that call httpx themselves and raise on failure.

    Transport errors and malformed JSON propagate unchanged.
    """

    service_name: str = "service"

    def __init__(
        self,
        base_url: str,
        *,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = settings or get_settings()
        self.base_url = base_url[:-1] if base_url.endswith("/") else base_url
        self._client = httpx.AsyncClient(
            timeout=settings.request_timeout_seconds,
            transport=transport,
        )

    async def _fetch_json(
        self,
        path: str,
        failure: str,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """GET ``path`` and return the parsed body.

        Args:
            path: Path (with query string) relative to the base URL
            failure: Message prefix used when the status is not 2xx
            headers: Optional request headers

        Raises:
            DownstreamError: On a non-2xx status
        """
        response = await self._client.get(f"{self.base_url}{path}", headers=headers)
        if not response.is_success:
            raise DownstreamError(
                f"{failure}: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
                service_name=self.service_name,
            )
        return response.json()

    async def health_check(self) -> HealthResult:
        """Probe ``GET /health``; healthy only on exactly 200. Never raises."""
        start = time.monotonic()
        try:
            response = await self._client.get(f"{self.base_url}/health")
        except Exception:
            return HealthResult(status=HealthStatus.UNHEALTHY, response_time=elapsed_ms(start))

        status = HealthStatus.HEALTHY if response.status_code == 200 else HealthStatus.UNHEALTHY
        return HealthResult(status=status, response_time=elapsed_ms(start))

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> DirectClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
