"""Notification service client."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote, urlencode

from conduit_bff.clients.base import ServiceClient


class NotificationClient(ServiceClient):
    """Pass-through client for the notification microservice."""

    service_name = "notification-service"

    async def get_user_notifications(
        self,
        user_id: str,
        limit: int = 10,
        offset: int = 0,
    ) -> list[dict[str, Any]]:
        query = urlencode({"userId": user_id, "limit": limit, "offset": offset})
        response = await self.http.get(f"/notifications?{query}")
        return self._unwrap(response, "Failed to fetch notifications")

    async def get_unread_count(self, user_id: str) -> int:
        response = await self.http.get(f"/notifications/unread-count?userId={quote(user_id)}")
        data = self._unwrap(response, "Failed to fetch unread notification count")
        return data["count"]

    async def create_notification(self, payload: dict[str, Any]) -> dict[str, Any]:
        response = await self.http.post("/notifications", payload)
        return self._unwrap(response, "Failed to create notification")

    async def mark_as_read(self, id: str) -> dict[str, Any]:
        # The downstream takes no body for this transition
        response = await self.http.put(f"/notifications/{id}/read")
        return self._unwrap(response, "Failed to mark notification as read")

    async def delete_notification(self, id: str) -> bool:
        response = await self.http.delete(f"/notifications/{id}")
        return self._confirm_deleted(response)
