"""
GraphQL object types and root operations.

Domain records travel through the gateway as the plain dicts returned by
the downstream services; these classes only declare the schema. Field values
are read from the dicts by ``resolve_record_field`` (see ``schema.py``), so
extra fields sent by a service are carried along but never exposed.
"""

from __future__ import annotations

import strawberry

from conduit_bff.graphql import resolvers
from conduit_bff.graphql.inputs import NotificationType

# =============================================================================
# Domain Types
# =============================================================================


@strawberry.type
class User:
    id: strawberry.ID
    email: str
    name: str
    avatar: str | None
    created_at: str
    updated_at: str


@strawberry.type
class Product:
    id: strawberry.ID
    name: str
    description: str | None
    price: float
    category: str
    image_url: str | None
    in_stock: bool
    created_at: str


@strawberry.type
class Notification:
    id: strawberry.ID
    user_id: strawberry.ID
    type: NotificationType
    title: str
    message: str
    read: bool
    created_at: str


@strawberry.type
class Account:
    id: strawberry.ID
    account_number: str
    balance: float
    customer_id: strawberry.ID
    customer: Customer | None = strawberry.field(resolver=resolvers.resolve_account_customer)


@strawberry.type
class Customer:
    id: strawberry.ID
    name: str
    email: str
    accounts: list[Account] = strawberry.field(resolver=resolvers.resolve_customer_accounts)


# =============================================================================
# Health Types
# =============================================================================


@strawberry.type
class ServiceHealth:
    name: str
    status: str
    response_time: float | None


@strawberry.type(description="Health check for readiness/liveness probes")
class HealthCheck:
    status: str
    timestamp: str
    services: list[ServiceHealth]


# =============================================================================
# Root Types
# =============================================================================


@strawberry.type
class Query:
    user: User | None = strawberry.field(resolver=resolvers.resolve_user)
    users: list[User] = strawberry.field(resolver=resolvers.resolve_users)

    product: Product | None = strawberry.field(resolver=resolvers.resolve_product)
    products: list[Product] = strawberry.field(resolver=resolvers.resolve_products)

    notifications: list[Notification] = strawberry.field(
        resolver=resolvers.resolve_notifications
    )
    unread_notification_count: int = strawberry.field(
        resolver=resolvers.resolve_unread_notification_count
    )

    account: Account | None = strawberry.field(resolver=resolvers.resolve_account)
    customer: Customer | None = strawberry.field(resolver=resolvers.resolve_customer)

    health: HealthCheck = strawberry.field(resolver=resolvers.resolve_health)


@strawberry.type
class Mutation:
    create_user: User = strawberry.mutation(resolver=resolvers.resolve_create_user)
    update_user: User = strawberry.mutation(resolver=resolvers.resolve_update_user)
    delete_user: bool = strawberry.mutation(resolver=resolvers.resolve_delete_user)

    create_product: Product = strawberry.mutation(resolver=resolvers.resolve_create_product)
    update_product: Product = strawberry.mutation(resolver=resolvers.resolve_update_product)
    delete_product: bool = strawberry.mutation(resolver=resolvers.resolve_delete_product)

    create_notification: Notification = strawberry.mutation(
        resolver=resolvers.resolve_create_notification
    )
    mark_notification_as_read: Notification = strawberry.mutation(
        resolver=resolvers.resolve_mark_notification_as_read
    )
    delete_notification: bool = strawberry.mutation(
        resolver=resolvers.resolve_delete_notification
    )
