"""
HTTP middleware for the BFF.

- RequestLoggingMiddleware: structured start/finish lines per request
- SecurityHeadersMiddleware: standard hardening headers
- ServiceMeshHeadersMiddleware: service identity and trace header echo
"""

from __future__ import annotations

import logging
import time
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from conduit_bff.config import Settings
from conduit_bff.logging import get_logger, log_with_context

logger = get_logger("API")

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
}

TRACE_HEADERS = ("x-request-id", "x-trace-id", "x-span-id", "x-b3-traceid", "x-b3-spanid")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request on arrival and on completion with its duration."""

    def __init__(self, app: ASGIApp, settings: Settings) -> None:
        super().__init__(app)
        self.settings = settings

    async def dispatch(self, request: Request, call_next: Any) -> Response:
        start = time.monotonic()
        url = str(request.url.path)
        if request.url.query:
            url = f"{url}?{request.url.query}"

        log_with_context(
            logger,
            logging.INFO,
            "Incoming request",
            method=request.method,
            url=url,
            ip=request.client.host if request.client else None,
            userAgent=request.headers.get("user-agent", "unknown"),
            version=self.settings.service_version,
        )

        response: Response = await call_next(request)

        log_with_context(
            logger,
            logging.INFO,
            "Request completed",
            method=request.method,
            url=url,
            statusCode=response.status_code,
            duration=round((time.monotonic() - start) * 1000),
        )
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to every response."""

    async def dispatch(self, request: Request, call_next: Any) -> Response:
        response: Response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers[name] = value
        return response


class ServiceMeshHeadersMiddleware(BaseHTTPMiddleware):
    """Identify the service and echo distributed-tracing headers back."""

    def __init__(self, app: ASGIApp, settings: Settings) -> None:
        super().__init__(app)
        self.settings = settings

    async def dispatch(self, request: Request, call_next: Any) -> Response:
        response: Response = await call_next(request)
        response.headers["X-Service-Name"] = self.settings.service_name
        response.headers["X-Service-Version"] = self.settings.service_version

        for header in TRACE_HEADERS:
            value = request.headers.get(header)
            if value:
                response.headers[header] = value
        return response
