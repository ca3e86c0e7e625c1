"""
GraphQL input types and enums.

Inputs are forwarded to the downstream services as JSON using their GraphQL
field names. Optional fields the caller left out are not sent at all.
"""

from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Any

import strawberry


@strawberry.enum
class NotificationType(Enum):
    INFO = "INFO"
    WARNING = "WARNING"
    SUCCESS = "SUCCESS"
    ERROR = "ERROR"


@strawberry.input
class UserInput:
    email: str
    name: str
    avatar: str | None = strawberry.UNSET


@strawberry.input
class ProductInput:
    name: str
    price: float
    category: str
    description: str | None = strawberry.UNSET
    image_url: str | None = strawberry.UNSET
    in_stock: bool | None = True


@strawberry.input
class NotificationInput:
    user_id: strawberry.ID
    type: NotificationType
    title: str
    message: str


def to_camel_case(name: str) -> str:
    """Convert a snake_case attribute name to its GraphQL field name."""
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def input_to_payload(input_obj: Any) -> dict[str, Any]:
    """Convert a Strawberry input object to the JSON payload sent downstream.

    Keys use GraphQL field names, unset fields are dropped and enums are
    sent by value.
    """
    payload: dict[str, Any] = {}
    for f in dataclasses.fields(input_obj):
        value = getattr(input_obj, f.name)
        if value is strawberry.UNSET:
            continue
        if isinstance(value, Enum):
            value = value.value
        payload[to_camel_case(f.name)] = value
    return payload
