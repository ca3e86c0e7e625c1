"""
Downstream service clients.

``HttpClient`` is the shared envelope-returning transport; the per-domain
clients build on it (or on httpx directly) and the ``ServiceClients``
registry wires one of each from settings.
"""

from conduit_bff.clients.accounts import AccountClient
from conduit_bff.clients.base import DirectClient, ServiceClient
from conduit_bff.clients.customers import CustomerClient
from conduit_bff.clients.http import HealthResult, HealthStatus, HttpClient, ServiceResponse
from conduit_bff.clients.notifications import NotificationClient
from conduit_bff.clients.products import ProductClient
from conduit_bff.clients.registry import ServiceClients
from conduit_bff.clients.users import UserClient

__all__ = [
    "AccountClient",
    "CustomerClient",
    "DirectClient",
    "HealthResult",
    "HealthStatus",
    "HttpClient",
    "NotificationClient",
    "ProductClient",
    "ServiceClient",
    "ServiceClients",
    "ServiceResponse",
    "UserClient",
]
