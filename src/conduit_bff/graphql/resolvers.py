"""
GraphQL resolvers.

Every resolver is a thin pass-through: it makes exactly one service client
call and returns the result unmodified. Failures are converted to
``GraphQLError`` at this boundary and nowhere else.

Relational resolvers (``Account.customer``, ``Customer.accounts``) read a key
off the parent record and issue one downstream call per parent. There is no
batching layer.
"""

from __future__ import annotations

from typing import Any

import strawberry

from conduit_bff.errors import graphql_errors
from conduit_bff.graphql.context import GraphQLContext
from conduit_bff.graphql.inputs import (
    NotificationInput,
    ProductInput,
    UserInput,
    input_to_payload,
)
from conduit_bff.health import aggregate_health
from conduit_bff.logging import get_logger

logger = get_logger("GraphQL")


def _log(info: strawberry.Info, message: str) -> None:
    request_id = getattr(info.context, "request_id", None)
    logger.info(f"[{request_id or 'unknown'}] {message}")


def _clients(info: strawberry.Info) -> Any:
    ctx: GraphQLContext = info.context
    return ctx.clients


# =============================================================================
# Users
# =============================================================================


async def resolve_user(info: strawberry.Info, id: strawberry.ID) -> Any:
    _log(info, f"Fetching user: {id}")
    with graphql_errors("Failed to fetch user"):
        return await _clients(info).users.get_user(id)


async def resolve_users(info: strawberry.Info, limit: int = 10, offset: int = 0) -> Any:
    _log(info, f"Fetching users: limit={limit} offset={offset}")
    with graphql_errors("Failed to fetch users"):
        return await _clients(info).users.get_users(limit=limit, offset=offset)


async def resolve_create_user(info: strawberry.Info, input: UserInput) -> Any:
    _log(info, "Creating user")
    with graphql_errors("Failed to create user"):
        return await _clients(info).users.create_user(input_to_payload(input))


async def resolve_update_user(info: strawberry.Info, id: strawberry.ID, input: UserInput) -> Any:
    _log(info, f"Updating user: {id}")
    with graphql_errors("Failed to update user"):
        return await _clients(info).users.update_user(id, input_to_payload(input))


async def resolve_delete_user(info: strawberry.Info, id: strawberry.ID) -> Any:
    _log(info, f"Deleting user: {id}")
    with graphql_errors("Failed to delete user"):
        return await _clients(info).users.delete_user(id)


# =============================================================================
# Products
# =============================================================================


async def resolve_product(info: strawberry.Info, id: strawberry.ID) -> Any:
    _log(info, f"Fetching product: {id}")
    with graphql_errors("Failed to fetch product"):
        return await _clients(info).products.get_product(id)


async def resolve_products(
    info: strawberry.Info,
    category: str | None = None,
    limit: int = 10,
    offset: int = 0,
) -> Any:
    _log(info, f"Fetching products: category={category} limit={limit} offset={offset}")
    with graphql_errors("Failed to fetch products"):
        return await _clients(info).products.get_products(
            limit=limit, offset=offset, category=category
        )


async def resolve_create_product(info: strawberry.Info, input: ProductInput) -> Any:
    _log(info, "Creating product")
    with graphql_errors("Failed to create product"):
        return await _clients(info).products.create_product(input_to_payload(input))


async def resolve_update_product(
    info: strawberry.Info, id: strawberry.ID, input: ProductInput
) -> Any:
    _log(info, f"Updating product: {id}")
    with graphql_errors("Failed to update product"):
        return await _clients(info).products.update_product(id, input_to_payload(input))


async def resolve_delete_product(info: strawberry.Info, id: strawberry.ID) -> Any:
    _log(info, f"Deleting product: {id}")
    with graphql_errors("Failed to delete product"):
        return await _clients(info).products.delete_product(id)


# =============================================================================
# Notifications
# =============================================================================


async def resolve_notifications(
    info: strawberry.Info,
    user_id: strawberry.ID,
    limit: int = 10,
    offset: int = 0,
) -> Any:
    _log(info, f"Fetching notifications for user: {user_id}")
    with graphql_errors("Failed to fetch notifications"):
        return await _clients(info).notifications.get_user_notifications(
            user_id, limit=limit, offset=offset
        )


async def resolve_unread_notification_count(info: strawberry.Info, user_id: strawberry.ID) -> Any:
    _log(info, f"Fetching unread notification count for user: {user_id}")
    with graphql_errors("Failed to fetch unread notification count"):
        return await _clients(info).notifications.get_unread_count(user_id)


async def resolve_create_notification(info: strawberry.Info, input: NotificationInput) -> Any:
    _log(info, "Creating notification")
    with graphql_errors("Failed to create notification"):
        return await _clients(info).notifications.create_notification(input_to_payload(input))


async def resolve_mark_notification_as_read(info: strawberry.Info, id: strawberry.ID) -> Any:
    _log(info, f"Marking notification as read: {id}")
    with graphql_errors("Failed to mark notification as read"):
        return await _clients(info).notifications.mark_as_read(id)


async def resolve_delete_notification(info: strawberry.Info, id: strawberry.ID) -> Any:
    _log(info, f"Deleting notification: {id}")
    with graphql_errors("Failed to delete notification"):
        return await _clients(info).notifications.delete_notification(id)


# =============================================================================
# Accounts & Customers
# =============================================================================


async def resolve_account(info: strawberry.Info, id: strawberry.ID) -> Any:
    _log(info, f"Fetching account: {id}")
    with graphql_errors("Failed to fetch account"):
        return await _clients(info).accounts.get_account(id)


async def resolve_customer(info: strawberry.Info, id: strawberry.ID) -> Any:
    _log(info, f"Fetching customer: {id}")
    with graphql_errors("Failed to fetch customer"):
        return await _clients(info).customers.get_customer(id)


async def resolve_account_customer(root: dict[str, Any], info: strawberry.Info) -> Any:
    """Resolve ``Account.customer`` from the parent's ``customerId``."""
    customer_id = root["customerId"]
    _log(info, f"Fetching customer for account: {customer_id}")
    with graphql_errors("Failed to fetch customer"):
        return await _clients(info).customers.get_customer(customer_id)


async def resolve_customer_accounts(root: dict[str, Any], info: strawberry.Info) -> Any:
    """Resolve ``Customer.accounts`` from the parent's ``id``."""
    customer_id = root["id"]
    _log(info, f"Fetching accounts for customer: {customer_id}")
    with graphql_errors("Failed to fetch accounts"):
        return await _clients(info).accounts.get_accounts_by_customer_id(customer_id)


# =============================================================================
# Health
# =============================================================================


async def resolve_health(info: strawberry.Info) -> Any:
    snapshot = await aggregate_health(_clients(info).health_checks())
    return snapshot.to_dict()
