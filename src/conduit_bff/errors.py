"""
Error types shared by the service clients and the resolver boundary.

Lower layers signal failure with plain exceptions whose message is the
downstream error verbatim. Resolvers translate them into ``GraphQLError`` via
``graphql_errors``; nothing else in the package raises GraphQL errors.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from graphql import GraphQLError


class ServiceError(Exception):
    """A service client could not produce the record it was asked for.

    The message is kept exactly as reported downstream (or the fixed
    fallback naming the failed operation), so ``str(error)`` is safe to
    surface to GraphQL callers unchanged.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        service_name: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.service_name = service_name

    @property
    def message(self) -> str:
        return str(self.args[0]) if self.args else ""


class DownstreamError(ServiceError):
    """Non-success HTTP status from a client that raises instead of returning an envelope."""


@contextmanager
def graphql_errors(fallback: str) -> Iterator[None]:
    """Re-raise any failure inside the block as a ``GraphQLError``.

    The original message is carried over untouched; ``fallback`` is only
    used when the failure has no message at all.

    Example:
        async def resolve_account(info, id):
            with graphql_errors("Failed to fetch account"):
                return await info.context.clients.accounts.get_account(id)
    """
    try:
        yield
    except GraphQLError:
        raise
    except Exception as e:
        raise GraphQLError(str(e) or fallback, original_error=e) from e
