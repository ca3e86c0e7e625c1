"""Product service client."""

from __future__ import annotations

from typing import Any
from urllib.parse import urlencode

from conduit_bff.clients.base import ServiceClient


class ProductClient(ServiceClient):
    """Pass-through client for the product catalogue microservice."""

    service_name = "product-service"

    async def get_product(self, id: str) -> dict[str, Any]:
        response = await self.http.get(f"/products/{id}")
        return self._unwrap(response, "Failed to fetch product")

    async def get_products(
        self,
        limit: int = 10,
        offset: int = 0,
        category: str | None = None,
    ) -> list[dict[str, Any]]:
        """List products, optionally filtered by category.

        The ``category`` parameter is only sent when it is non-empty.
        """
        params: dict[str, Any] = {"limit": limit, "offset": offset}
        if category:
            params["category"] = category
        response = await self.http.get(f"/products?{urlencode(params)}")
        return self._unwrap(response, "Failed to fetch products")

    async def create_product(self, payload: dict[str, Any]) -> dict[str, Any]:
        response = await self.http.post("/products", payload)
        return self._unwrap(response, "Failed to create product")

    async def update_product(self, id: str, payload: dict[str, Any]) -> dict[str, Any]:
        response = await self.http.put(f"/products/{id}", payload)
        return self._unwrap(response, "Failed to update product")

    async def delete_product(self, id: str) -> bool:
        response = await self.http.delete(f"/products/{id}")
        return self._confirm_deleted(response)
