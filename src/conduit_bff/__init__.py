"""
Graph Conduit BFF.

A thin GraphQL Backend-for-Frontend: every query and mutation is passed
through unmodified to a downstream HTTP microservice (users, products,
notifications, accounts, customers).

Key components:
- config: Environment-driven settings
- clients: Downstream HTTP client and per-service clients
- graphql: Schema, resolvers and FastAPI integration
- health: Downstream health aggregation
- app: FastAPI application factory
"""

from conduit_bff._version import get_version
from conduit_bff.clients import HttpClient, ServiceClients, ServiceResponse
from conduit_bff.config import Settings, get_settings
from conduit_bff.errors import DownstreamError, ServiceError

__version__ = get_version()

__all__ = [
    "__version__",
    "DownstreamError",
    "HttpClient",
    "ServiceClients",
    "ServiceError",
    "ServiceResponse",
    "Settings",
    "get_settings",
]
