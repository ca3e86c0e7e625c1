"""
Service client registry.

Builds one client per downstream domain from the process settings. The
registry is created once at startup and shared by every request; each client
keeps its own connection pool.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

import httpx

from conduit_bff.clients.accounts import AccountClient
from conduit_bff.clients.customers import CustomerClient
from conduit_bff.clients.http import HealthResult, HttpClient
from conduit_bff.clients.notifications import NotificationClient
from conduit_bff.clients.products import ProductClient
from conduit_bff.clients.users import UserClient
from conduit_bff.config import Settings, get_settings

HealthCheck = Callable[[], Awaitable[HealthResult]]


@dataclass
class ServiceClients:
    """All downstream clients used by the resolver graph."""

    users: UserClient
    products: ProductClient
    notifications: NotificationClient
    accounts: AccountClient
    customers: CustomerClient

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> ServiceClients:
        """
        Create the registry from settings.

        Args:
            settings: Process settings (defaults to ``get_settings()``)
            transport: Optional httpx transport shared by every client (tests)

        Returns:
            ServiceClients with one client per domain
        """
        settings = settings or get_settings()

        def http(base_url: str) -> HttpClient:
            return HttpClient(base_url, settings=settings, transport=transport)

        return cls(
            users=UserClient(http(settings.user_service_url)),
            products=ProductClient(http(settings.product_service_url)),
            notifications=NotificationClient(http(settings.notification_service_url)),
            accounts=AccountClient(
                settings.account_service_url, settings=settings, transport=transport
            ),
            customers=CustomerClient(
                settings.customer_service_url, settings=settings, transport=transport
            ),
        )

    def health_checks(self) -> dict[str, HealthCheck]:
        """Health probes keyed by service name, in reporting order."""
        return {
            client.service_name: client.health_check
            for client in (
                self.users,
                self.products,
                self.notifications,
                self.accounts,
                self.customers,
            )
        }

    async def aclose(self) -> None:
        await asyncio.gather(
            self.users.aclose(),
            self.products.aclose(),
            self.notifications.aclose(),
            self.accounts.aclose(),
            self.customers.aclose(),
        )
