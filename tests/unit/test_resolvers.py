"""Tests for the GraphQL resolvers, called directly with a mocked service layer."""

from __future__ import annotations

import logging
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
import strawberry
from graphql import GraphQLError

from conduit_bff.errors import DownstreamError, ServiceError, graphql_errors
from conduit_bff.graphql import resolvers
from conduit_bff.graphql.context import GraphQLContext
from conduit_bff.graphql.inputs import (
    NotificationInput,
    NotificationType,
    ProductInput,
    UserInput,
    input_to_payload,
    to_camel_case,
)


def _info(clients: MagicMock, request_id: str | None = "req-1") -> SimpleNamespace:
    return SimpleNamespace(context=GraphQLContext(clients=clients, request_id=request_id))


@pytest.fixture
def clients() -> MagicMock:
    mock = MagicMock()
    for name in (
        "get_user",
        "get_users",
        "create_user",
        "update_user",
        "delete_user",
    ):
        setattr(mock.users, name, AsyncMock())
    for name in (
        "get_product",
        "get_products",
        "create_product",
        "update_product",
        "delete_product",
    ):
        setattr(mock.products, name, AsyncMock())
    for name in (
        "get_user_notifications",
        "get_unread_count",
        "create_notification",
        "mark_as_read",
        "delete_notification",
    ):
        setattr(mock.notifications, name, AsyncMock())
    mock.accounts.get_account = AsyncMock()
    mock.accounts.get_accounts_by_customer_id = AsyncMock()
    mock.customers.get_customer = AsyncMock()
    return mock


# =============================================================================
# Error boundary
# =============================================================================


class TestGraphQLErrors:
    """Tests for the graphql_errors boundary."""

    def test_message_carried_verbatim(self) -> None:
        with pytest.raises(GraphQLError) as exc_info:
            with graphql_errors("Failed to fetch user"):
                raise ServiceError("HTTP 404: Not Found")

        assert exc_info.value.message == "HTTP 404: Not Found"
        assert isinstance(exc_info.value.original_error, ServiceError)

    def test_fallback_for_empty_message(self) -> None:
        with pytest.raises(GraphQLError, match="^Failed to fetch account$"):
            with graphql_errors("Failed to fetch account"):
                raise RuntimeError()

    def test_graphql_errors_pass_through(self) -> None:
        original = GraphQLError("already typed")
        with pytest.raises(GraphQLError) as exc_info:
            with graphql_errors("fallback"):
                raise original

        assert exc_info.value is original

    def test_no_error_no_effect(self) -> None:
        with graphql_errors("fallback"):
            value = 42
        assert value == 42


# =============================================================================
# Pass-through
# =============================================================================


class TestQueryResolvers:
    """Tests for root query resolvers."""

    @pytest.mark.asyncio
    async def test_user_returns_client_result_unmodified(self, clients: MagicMock) -> None:
        record = {"id": "u1", "name": "Ada", "extra": {"nested": True}}
        clients.users.get_user.return_value = record

        result = await resolvers.resolve_user(_info(clients), id=strawberry.ID("u1"))

        assert result is record
        clients.users.get_user.assert_awaited_once_with("u1")

    @pytest.mark.asyncio
    async def test_users_pagination(self, clients: MagicMock) -> None:
        clients.users.get_users.return_value = []

        await resolvers.resolve_users(_info(clients), limit=5, offset=15)

        clients.users.get_users.assert_awaited_once_with(limit=5, offset=15)

    @pytest.mark.asyncio
    async def test_products_category(self, clients: MagicMock) -> None:
        clients.products.get_products.return_value = []

        await resolvers.resolve_products(_info(clients), category="books")

        clients.products.get_products.assert_awaited_once_with(
            limit=10, offset=0, category="books"
        )

    @pytest.mark.asyncio
    async def test_notifications(self, clients: MagicMock) -> None:
        clients.notifications.get_user_notifications.return_value = []

        await resolvers.resolve_notifications(_info(clients), user_id=strawberry.ID("u1"))

        clients.notifications.get_user_notifications.assert_awaited_once_with(
            "u1", limit=10, offset=0
        )

    @pytest.mark.asyncio
    async def test_unread_count(self, clients: MagicMock) -> None:
        clients.notifications.get_unread_count.return_value = 3

        result = await resolvers.resolve_unread_notification_count(
            _info(clients), user_id=strawberry.ID("u1")
        )

        assert result == 3

    @pytest.mark.asyncio
    async def test_failure_becomes_graphql_error(self, clients: MagicMock) -> None:
        """Client failures surface as GraphQL errors with the message untouched."""
        clients.users.get_user.side_effect = ServiceError("HTTP 503: Service Unavailable")

        with pytest.raises(GraphQLError, match="^HTTP 503: Service Unavailable$"):
            await resolvers.resolve_user(_info(clients), id=strawberry.ID("u1"))

    @pytest.mark.asyncio
    async def test_account_failure_message(self, clients: MagicMock) -> None:
        clients.accounts.get_account.side_effect = DownstreamError(
            "Failed to fetch account acc1: 404 Not Found"
        )

        with pytest.raises(GraphQLError, match="^Failed to fetch account acc1: 404 Not Found$"):
            await resolvers.resolve_account(_info(clients), id=strawberry.ID("acc1"))


class TestRelationalResolvers:
    """Tests for Account.customer and Customer.accounts."""

    @pytest.mark.asyncio
    async def test_account_customer_uses_parent_key(self, clients: MagicMock) -> None:
        customer = {"id": "cust789", "name": "Grace"}
        clients.customers.get_customer.return_value = customer
        account = {"id": "acc1", "customerId": "cust789"}

        result = await resolvers.resolve_account_customer(account, _info(clients))

        assert result is customer
        clients.customers.get_customer.assert_awaited_once_with("cust789")

    @pytest.mark.asyncio
    async def test_one_call_per_parent(self, clients: MagicMock) -> None:
        """Sibling parents each trigger their own downstream call."""
        clients.customers.get_customer.return_value = {"id": "cust789"}
        accounts = [{"id": "a1", "customerId": "cust789"}, {"id": "a2", "customerId": "cust789"}]

        for account in accounts:
            await resolvers.resolve_account_customer(account, _info(clients))

        assert clients.customers.get_customer.await_count == 2

    @pytest.mark.asyncio
    async def test_customer_accounts_uses_parent_id(self, clients: MagicMock) -> None:
        clients.accounts.get_accounts_by_customer_id.return_value = []

        await resolvers.resolve_customer_accounts({"id": "cust789"}, _info(clients))

        clients.accounts.get_accounts_by_customer_id.assert_awaited_once_with("cust789")


class TestMutationResolvers:
    """Tests for mutation resolvers."""

    @pytest.mark.asyncio
    async def test_create_user_omits_unset_fields(self, clients: MagicMock) -> None:
        clients.users.create_user.return_value = {"id": "u1"}

        await resolvers.resolve_create_user(
            _info(clients), input=UserInput(email="ada@example.com", name="Ada")
        )

        clients.users.create_user.assert_awaited_once_with(
            {"email": "ada@example.com", "name": "Ada"}
        )

    @pytest.mark.asyncio
    async def test_update_product_payload(self, clients: MagicMock) -> None:
        clients.products.update_product.return_value = {"id": "p1"}
        product = ProductInput(
            name="Lamp", price=19.5, category="home", image_url="https://img/lamp.png"
        )

        await resolvers.resolve_update_product(_info(clients), id=strawberry.ID("p1"), input=product)

        clients.products.update_product.assert_awaited_once_with(
            "p1",
            {
                "name": "Lamp",
                "price": 19.5,
                "category": "home",
                "imageUrl": "https://img/lamp.png",
                "inStock": True,
            },
        )

    @pytest.mark.asyncio
    async def test_delete_returns_client_boolean(self, clients: MagicMock) -> None:
        clients.notifications.delete_notification.return_value = False

        result = await resolvers.resolve_delete_notification(
            _info(clients), id=strawberry.ID("n1")
        )

        assert result is False

    @pytest.mark.asyncio
    async def test_mark_as_read(self, clients: MagicMock) -> None:
        clients.notifications.mark_as_read.return_value = {"id": "n1", "read": True}

        result = await resolvers.resolve_mark_notification_as_read(
            _info(clients), id=strawberry.ID("n1")
        )

        assert result == {"id": "n1", "read": True}


# =============================================================================
# Logging
# =============================================================================


class TestResolverLogging:
    """Tests for resolver invocation logging."""

    @pytest.mark.asyncio
    async def test_logs_request_id(self, clients: MagicMock, caplog) -> None:
        caplog.set_level(logging.INFO, logger="conduit_bff")
        clients.accounts.get_account.return_value = {"id": "acc1"}

        await resolvers.resolve_account(_info(clients, "req-42"), id=strawberry.ID("acc1"))

        assert "[req-42] Fetching account: acc1" in caplog.messages

    @pytest.mark.asyncio
    async def test_unknown_request_id(self, clients: MagicMock, caplog) -> None:
        caplog.set_level(logging.INFO, logger="conduit_bff")
        clients.customers.get_customer.return_value = {"id": "c1"}

        await resolvers.resolve_customer(_info(clients, None), id=strawberry.ID("c1"))

        assert "[unknown] Fetching customer: c1" in caplog.messages

    @pytest.mark.asyncio
    async def test_relational_log_lines(self, clients: MagicMock, caplog) -> None:
        caplog.set_level(logging.INFO, logger="conduit_bff")
        clients.customers.get_customer.return_value = {"id": "cust789"}
        clients.accounts.get_accounts_by_customer_id.return_value = []

        info = _info(clients, "r1")
        await resolvers.resolve_account_customer({"customerId": "cust789"}, info)
        await resolvers.resolve_customer_accounts({"id": "cust789"}, info)

        assert "[r1] Fetching customer for account: cust789" in caplog.messages
        assert "[r1] Fetching accounts for customer: cust789" in caplog.messages


# =============================================================================
# Inputs
# =============================================================================


class TestInputs:
    """Tests for input payload conversion."""

    def test_to_camel_case(self) -> None:
        assert to_camel_case("image_url") == "imageUrl"
        assert to_camel_case("in_stock") == "inStock"
        assert to_camel_case("id") == "id"

    def test_enum_sent_by_value(self) -> None:
        payload = input_to_payload(
            NotificationInput(
                user_id=strawberry.ID("u1"),
                type=NotificationType.WARNING,
                title="Heads up",
                message="Disk almost full",
            )
        )

        assert payload == {
            "userId": "u1",
            "type": "WARNING",
            "title": "Heads up",
            "message": "Disk almost full",
        }

    def test_explicit_null_is_sent(self) -> None:
        payload = input_to_payload(UserInput(email="a@b.c", name="A", avatar=None))

        assert payload == {"email": "a@b.c", "name": "A", "avatar": None}
