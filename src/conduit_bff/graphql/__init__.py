"""
GraphQL layer of the BFF.

Key components:
- context: Per-request context carrying the service clients
- inputs / types: Strawberry declarations of the public schema
- resolvers: Pass-through resolvers mapping fields to service calls
- schema: Schema assembly and FastAPI integration
"""

from conduit_bff.graphql.context import GraphQLContext, create_context_from_request
from conduit_bff.graphql.schema import (
    create_schema,
    inspect_schema,
    mount_graphql,
    print_schema,
    resolve_record_field,
)

__all__ = [
    "GraphQLContext",
    "create_context_from_request",
    "create_schema",
    "inspect_schema",
    "mount_graphql",
    "print_schema",
    "resolve_record_field",
]
