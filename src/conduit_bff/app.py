"""
FastAPI application for the BFF.

Serves:
- the GraphQL endpoint (``settings.graphql_endpoint``)
- liveness and readiness probes
- ``/api/info`` and ``/api/assets-config`` for the micro-frontend
- static assets in development (production assets come from the CDN)

Run with:
    uvicorn conduit_bff.app:create_app --factory
"""

from __future__ import annotations

import os
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response
from starlette.types import Scope

from conduit_bff._version import get_version
from conduit_bff.clients.registry import ServiceClients
from conduit_bff.config import AssetsMode, Settings, get_settings
from conduit_bff.graphql.schema import mount_graphql
from conduit_bff.logging import get_logger
from conduit_bff.middleware import (
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
    ServiceMeshHeadersMiddleware,
)

logger = get_logger("API")


def _now() -> str:
    return datetime.now(UTC).isoformat()


class DevelopmentStaticFiles(StaticFiles):
    """Static files with caching disabled, for local asset development."""

    def file_response(
        self,
        full_path: str | os.PathLike[str],
        stat_result: os.stat_result,
        scope: Scope,
        status_code: int = 200,
    ) -> Response:
        response = super().file_response(full_path, stat_result, scope, status_code)
        response.headers["Cache-Control"] = "no-cache, no-store, must-revalidate"
        response.headers["Pragma"] = "no-cache"
        response.headers["Expires"] = "0"
        return response


def create_app(
    settings: Settings | None = None,
    clients: ServiceClients | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Process settings (defaults to ``get_settings()``)
        clients: Service clients (defaults to ones built from ``settings``)

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    clients = clients or ServiceClients.from_settings(settings)
    started_at = time.monotonic()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Application lifespan handler."""
        logger.info(
            f"{settings.service_name} ready on {settings.host}:{settings.port} "
            f"(GraphQL at {settings.graphql_endpoint})"
        )
        yield
        await clients.aclose()
        logger.info("Shutting down gracefully")

    app = FastAPI(
        title=settings.service_name,
        version=get_version(),
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
    )

    # Middleware (last added runs first)
    app.add_middleware(ServiceMeshHeadersMiddleware, settings=settings)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware, settings=settings)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.cors_origin],
        allow_credentials=settings.cors_credentials,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=[
            "Origin",
            "X-Requested-With",
            "Content-Type",
            "Accept",
            "Authorization",
        ],
    )

    # -------------------------------------------------------------------------
    # Probes
    # -------------------------------------------------------------------------

    @app.get(settings.health_check_path)
    async def health() -> dict[str, Any]:
        """Liveness probe."""
        return {
            "status": "healthy",
            "service": settings.service_name,
            "version": settings.service_version,
            "timestamp": _now(),
            "uptime": round(time.monotonic() - started_at, 3),
        }

    @app.get(settings.readiness_check_path)
    async def ready() -> JSONResponse:
        """Readiness probe: the GraphQL schema must expose a Query type."""
        base = {
            "service": settings.service_name,
            "version": settings.service_version,
            "timestamp": _now(),
        }
        if schema.get_type_by_name("Query") is None:
            return JSONResponse(
                status_code=503,
                content={
                    "status": "not ready",
                    **base,
                    "error": "GraphQL Query type not found in schema",
                },
            )
        return JSONResponse(
            content={
                "status": "ready",
                **base,
                "checks": {"process": "ok", "schema": "ok"},
            }
        )

    # -------------------------------------------------------------------------
    # Micro-frontend bootstrap
    # -------------------------------------------------------------------------

    @app.get("/api/info")
    async def info() -> dict[str, Any]:
        assets: dict[str, Any] = {"mode": settings.assets_mode.value}
        if settings.assets_mode == AssetsMode.PRODUCTION:
            assets["cdnUrl"] = settings.assets_cdn_url
        return {
            "service": settings.service_name,
            "version": settings.service_version,
            "environment": settings.app_env,
            "graphql": {
                "endpoint": settings.graphql_endpoint,
                "playground": settings.graphiql_enabled,
            },
            "assets": assets,
        }

    @app.get("/api/assets-config")
    async def assets_config() -> dict[str, Any]:
        if settings.assets_mode == AssetsMode.PRODUCTION:
            return {
                "mode": AssetsMode.PRODUCTION.value,
                "baseUrl": settings.assets_cdn_url,
                "cdnUrl": settings.assets_cdn_url,
            }
        return {
            "mode": AssetsMode.DEVELOPMENT.value,
            "baseUrl": f"http://{settings.host}:{settings.port}/assets",
            "cdnUrl": None,
        }

    if settings.assets_mode == AssetsMode.PRODUCTION:
        logger.info(f"Production mode: using CDN assets from {settings.assets_cdn_url}")

        @app.get("/assets/{asset_path:path}")
        async def assets_not_served(asset_path: str) -> JSONResponse:
            return JSONResponse(
                status_code=404,
                content={
                    "error": "Assets not served locally",
                    "message": "Static assets are served from CDN in production mode",
                    "cdnBaseUrl": settings.assets_cdn_url,
                    "requestedPath": f"/assets/{asset_path}",
                },
            )
    else:
        assets_dir = Path(settings.assets_local_path).resolve()
        if assets_dir.is_dir():
            logger.info(f"Development mode: serving static assets from {assets_dir}")
            app.mount("/assets", DevelopmentStaticFiles(directory=assets_dir), name="assets")
        else:
            logger.warning(f"Assets directory {assets_dir} not found; /assets is disabled")

    # -------------------------------------------------------------------------
    # GraphQL
    # -------------------------------------------------------------------------

    schema = mount_graphql(
        app,
        clients,
        path=settings.graphql_endpoint,
        enable_graphiql=settings.graphiql_enabled,
    )

    # -------------------------------------------------------------------------
    # Error handlers
    # -------------------------------------------------------------------------

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        """Unmatched routes get a JSON 404; other HTTP errors keep their detail."""
        if exc.status_code == 404:
            return JSONResponse(
                status_code=404,
                content={
                    "error": "Not Found",
                    "message": f"Route {request.method} {request.url.path} not found",
                    "timestamp": _now(),
                },
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        """Convert unexpected errors to 500; details only in development."""
        logger.error(
            f"Unhandled error on {request.method} {request.url.path}: {exc}",
            exc_info=exc,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal Server Error",
                "message": str(exc) if settings.is_development else "Something went wrong",
            },
        )

    return app
