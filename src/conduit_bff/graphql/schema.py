"""
Schema assembly and FastAPI/Strawberry integration.

Combines the declared types with the resolver graph into an executable
Strawberry schema and mounts it on a FastAPI application.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import strawberry
from starlette.requests import Request
from strawberry.fastapi import GraphQLRouter
from strawberry.schema.config import StrawberryConfig

from conduit_bff.graphql.context import GraphQLContext, create_context_from_request
from conduit_bff.graphql.inputs import to_camel_case
from conduit_bff.graphql.types import Mutation, Query

if TYPE_CHECKING:
    from fastapi import FastAPI

    from conduit_bff.clients.registry import ServiceClients


def resolve_record_field(obj: Any, field_name: str) -> Any:
    """Default field resolver for dict-backed records.

    Downstream records use camelCase keys; the declared field ``created_at``
    is read from ``obj["createdAt"]``. Non-dict sources fall back to
    attribute access.
    """
    if isinstance(obj, Mapping):
        return obj.get(to_camel_case(field_name))
    return getattr(obj, field_name, None)


def create_schema() -> strawberry.Schema:
    """
    Create the executable GraphQL schema.

    Returns:
        Strawberry Schema with Query and Mutation roots
    """
    return strawberry.Schema(
        query=Query,
        mutation=Mutation,
        config=StrawberryConfig(default_resolver=resolve_record_field),
    )


def mount_graphql(
    app: FastAPI,
    clients: ServiceClients,
    schema: strawberry.Schema | None = None,
    path: str = "/graphql",
    enable_graphiql: bool = False,
) -> strawberry.Schema:
    """
    Mount the GraphQL endpoint on an existing FastAPI application.

    Args:
        app: FastAPI application
        clients: Service clients handed to every request's context
        schema: Schema to serve (defaults to ``create_schema()``)
        path: URL path for the GraphQL endpoint
        enable_graphiql: Serve the GraphiQL IDE on GET

    Returns:
        The mounted schema
    """
    schema = schema or create_schema()

    async def get_context(request: Request) -> GraphQLContext:
        return create_context_from_request(request, clients)

    graphql_router: GraphQLRouter[GraphQLContext, None] = GraphQLRouter(
        schema,
        context_getter=get_context,
        graphql_ide="graphiql" if enable_graphiql else None,
    )
    app.include_router(graphql_router, prefix=path)
    return schema


# =============================================================================
# Schema Inspection
# =============================================================================


def print_schema(schema: strawberry.Schema | None = None) -> str:
    """
    Print the GraphQL schema SDL.

    Returns:
        GraphQL SDL string
    """
    return (schema or create_schema()).as_str()


def inspect_schema(schema: strawberry.Schema | None = None) -> dict[str, Any]:
    """
    Get schema inspection data.

    Returns:
        Dictionary with the root operation names and counts
    """
    graphql_schema = (schema or create_schema())._schema
    query_type = graphql_schema.query_type
    mutation_type = graphql_schema.mutation_type

    queries = sorted(query_type.fields) if query_type else []
    mutations = sorted(mutation_type.fields) if mutation_type else []
    return {
        "queries": queries,
        "mutations": mutations,
        "stats": {
            "query_count": len(queries),
            "mutation_count": len(mutations),
        },
    }
