"""User service client."""

from __future__ import annotations

from typing import Any
from urllib.parse import urlencode

from conduit_bff.clients.base import ServiceClient


class UserClient(ServiceClient):
    """Pass-through client for the user microservice."""

    service_name = "user-service"

    async def get_user(self, id: str) -> dict[str, Any]:
        response = await self.http.get(f"/users/{id}")
        return self._unwrap(response, "Failed to fetch user")

    async def get_users(self, limit: int = 10, offset: int = 0) -> list[dict[str, Any]]:
        query = urlencode({"limit": limit, "offset": offset})
        response = await self.http.get(f"/users?{query}")
        return self._unwrap(response, "Failed to fetch users")

    async def create_user(self, payload: dict[str, Any]) -> dict[str, Any]:
        response = await self.http.post("/users", payload)
        return self._unwrap(response, "Failed to create user")

    async def update_user(self, id: str, payload: dict[str, Any]) -> dict[str, Any]:
        response = await self.http.put(f"/users/{id}", payload)
        return self._unwrap(response, "Failed to update user")

    async def delete_user(self, id: str) -> bool:
        response = await self.http.delete(f"/users/{id}")
        return self._confirm_deleted(response)
