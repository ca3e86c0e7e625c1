"""
Health Check Aggregator.

Fans out to every downstream service's health probe and folds the results
into one snapshot for the ``health`` GraphQL query. Failures are reported as
data (``"unhealthy"``); nothing here raises.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from conduit_bff.clients.http import HealthResult, HealthStatus
from conduit_bff.logging import get_logger

logger = get_logger("Health")

HealthCheckFn = Callable[[], Awaitable[HealthResult]]


@dataclass
class ServiceHealth:
    """Health of a single downstream service."""

    name: str
    status: HealthStatus
    response_time: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "status": self.status.value,
            "responseTime": self.response_time,
        }


@dataclass
class HealthSnapshot:
    """Aggregated health of the gateway and its downstreams."""

    status: HealthStatus
    timestamp: str
    services: list[ServiceHealth] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the shape served by the ``health`` query."""
        return {
            "status": self.status.value,
            "timestamp": self.timestamp,
            "services": [s.to_dict() for s in self.services],
        }


def _to_service_health(name: str, outcome: HealthResult | BaseException) -> ServiceHealth:
    if isinstance(outcome, HealthResult) and outcome.status == HealthStatus.HEALTHY:
        return ServiceHealth(name, HealthStatus.HEALTHY, outcome.response_time)
    if isinstance(outcome, BaseException):
        logger.warning(f"Health check for {name} raised: {outcome!r}")
    return ServiceHealth(name, HealthStatus.UNHEALTHY)


async def aggregate_health(checks: Mapping[str, HealthCheckFn]) -> HealthSnapshot:
    """
    Run every health check concurrently and aggregate the results.

    One service failing never hides the others: each check is settled
    independently. The top-level status stays ``healthy`` while the gateway
    itself can answer; only a failure of the aggregation as a whole reports
    ``unhealthy`` with an empty service list.

    Args:
        checks: Health probes keyed by service name, in reporting order

    Returns:
        HealthSnapshot with one entry per check
    """
    timestamp = datetime.now(UTC).isoformat()
    names = list(checks)

    try:
        outcomes = await asyncio.gather(
            *(checks[name]() for name in names),
            return_exceptions=True,
        )
        services = [
            _to_service_health(name, outcome)
            for name, outcome in zip(names, outcomes, strict=True)
        ]
    except Exception:
        logger.exception("Health aggregation failed")
        return HealthSnapshot(status=HealthStatus.UNHEALTHY, timestamp=timestamp)

    return HealthSnapshot(status=HealthStatus.HEALTHY, timestamp=timestamp, services=services)
