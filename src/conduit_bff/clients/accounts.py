"""Account service client."""

from __future__ import annotations

from typing import Any

from conduit_bff.clients.base import DirectClient


class AccountClient(DirectClient):
    """Thin client for the account microservice.

    Raises ``DownstreamError`` on any non-2xx status instead of returning an
    envelope. Resilience (retries, breakers) is left to the service mesh.
    """

    service_name = "account-service"

    async def get_account(self, id: str) -> dict[str, Any]:
        return await self._fetch_json(f"/accounts/{id}", f"Failed to fetch account {id}")

    async def get_accounts_by_customer_id(self, customer_id: str) -> list[dict[str, Any]]:
        return await self._fetch_json(
            f"/accounts?customerId={customer_id}",
            f"Failed to fetch accounts for customer {customer_id}",
        )
