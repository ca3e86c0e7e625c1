"""Customer service client."""

from __future__ import annotations

from typing import Any

from conduit_bff.clients.base import DirectClient


class CustomerClient(DirectClient):
    """Thin client for the customer microservice."""

    service_name = "customer-service"

    async def get_customer(self, id: str) -> dict[str, Any]:
        return await self._fetch_json(
            f"/customers/{id}",
            f"Failed to fetch customer {id}",
            headers={"Content-Type": "application/json"},
        )
