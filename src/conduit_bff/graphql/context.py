"""
GraphQL request context.

The context is attached to every GraphQL request and provides:
- The shared service client registry
- A request identifier for log correlation
"""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from strawberry.fastapi import BaseContext

if TYPE_CHECKING:
    from starlette.requests import Request

    from conduit_bff.clients.registry import ServiceClients


class GraphQLContext(BaseContext):
    """
    GraphQL request context.

    Attributes:
        clients: Downstream service clients, shared across requests
        request_id: Correlation identifier for logging (optional)

    Example:
        async def resolve_user(info: strawberry.Info, id: strawberry.ID):
            return await info.context.clients.users.get_user(id)
    """

    def __init__(self, clients: ServiceClients, request_id: str | None = None) -> None:
        super().__init__()
        self.clients = clients
        self.request_id = request_id


def create_context_from_request(request: Request, clients: ServiceClients) -> GraphQLContext:
    """
    Create GraphQL context from an HTTP request.

    The request ID comes from the ``X-Request-ID`` header, or is generated
    when the caller did not send one.

    Args:
        request: Starlette/FastAPI request object
        clients: Service client registry

    Returns:
        GraphQLContext populated from request
    """
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    return GraphQLContext(clients=clients, request_id=request_id)
