"""
Runtime configuration for the BFF.

All settings come from environment variables (or a local ``.env`` file) and
are resolved once per process. The resulting ``Settings`` object is frozen and
handed to the HTTP clients and the application factory; request handling code
never reads the environment itself.

Usage:
    from conduit_bff.config import get_settings

    settings = get_settings()
    settings.user_service_url  # "http://user-service:8080"
"""

from __future__ import annotations

from enum import StrEnum
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AssetsMode(StrEnum):
    """Where the micro-frontend loads its static assets from."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"


class LogFormat(StrEnum):
    """Log output format."""

    JSON = "json"
    CONSOLE = "console"


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # Server
    app_env: str = "development"
    host: str = "0.0.0.0"
    port: int = 4000

    # GraphQL
    graphql_endpoint: str = "/graphql"
    graphql_playground: bool = False

    # Assets
    assets_mode: AssetsMode = AssetsMode.DEVELOPMENT
    assets_cdn_url: str = "https://cdn.example.com"
    assets_local_path: str = "./assets"
    build_version: str = "dev"

    # Downstream services
    user_service_url: str = "http://user-service:8080"
    product_service_url: str = "http://product-service:8080"
    notification_service_url: str = "http://notification-service:8080"
    account_service_url: str = "http://account-service:8080"
    customer_service_url: str = "http://customer-service:8080"

    # Service mesh identity
    service_name: str = "conduites-bff"
    service_version: str = "1.0.0"
    cluster_name: str = "development"

    # Probes
    health_check_path: str = "/health"
    readiness_check_path: str = "/ready"

    # Logging
    log_level: str = "info"
    log_format: LogFormat = LogFormat.JSON

    # CORS
    cors_origin: str = "*"
    cors_credentials: bool = False

    # Outbound requests (milliseconds)
    request_timeout: int = Field(default=30000, gt=0)

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @property
    def user_agent(self) -> str:
        """User-Agent sent on every downstream call."""
        return f"{self.service_name}/{self.service_version}"

    @property
    def request_timeout_seconds(self) -> float:
        return self.request_timeout / 1000

    @property
    def graphiql_enabled(self) -> bool:
        """GraphiQL is only served in development, and only when asked for."""
        return self.graphql_playground and self.is_development


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
