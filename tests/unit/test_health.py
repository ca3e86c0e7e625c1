"""Tests for the downstream health aggregator."""

from __future__ import annotations

import asyncio
from datetime import datetime

import pytest

from conduit_bff.clients.http import HealthResult, HealthStatus
from conduit_bff.health import HealthSnapshot, ServiceHealth, aggregate_health


def _healthy(ms: int):
    async def check() -> HealthResult:
        return HealthResult(status=HealthStatus.HEALTHY, response_time=ms)

    return check


def _unhealthy():
    async def check() -> HealthResult:
        return HealthResult(status=HealthStatus.UNHEALTHY, response_time=7)

    return check


def _raising():
    async def check() -> HealthResult:
        raise RuntimeError("probe exploded")

    return check


class TestAggregateHealth:
    """Tests for aggregate_health."""

    @pytest.mark.asyncio
    async def test_all_healthy(self) -> None:
        snapshot = await aggregate_health(
            {"user-service": _healthy(3), "product-service": _healthy(5)}
        )

        assert snapshot.status == HealthStatus.HEALTHY
        assert snapshot.services == [
            ServiceHealth("user-service", HealthStatus.HEALTHY, 3),
            ServiceHealth("product-service", HealthStatus.HEALTHY, 5),
        ]

    @pytest.mark.asyncio
    async def test_failures_are_isolated(self) -> None:
        """A raising or unhealthy check does not hide the others."""
        snapshot = await aggregate_health(
            {
                "user-service": _healthy(4),
                "product-service": _raising(),
                "notification-service": _unhealthy(),
            }
        )

        assert snapshot.to_dict()["services"] == [
            {"name": "user-service", "status": "healthy", "responseTime": 4},
            {"name": "product-service", "status": "unhealthy", "responseTime": None},
            {"name": "notification-service", "status": "unhealthy", "responseTime": None},
        ]

    @pytest.mark.asyncio
    async def test_top_level_status_stays_healthy(self) -> None:
        """The gateway reports itself healthy even when every downstream is down."""
        snapshot = await aggregate_health({"a": _raising(), "b": _unhealthy()})

        assert snapshot.status == HealthStatus.HEALTHY
        assert all(s.status == HealthStatus.UNHEALTHY for s in snapshot.services)

    @pytest.mark.asyncio
    async def test_aggregation_failure(self) -> None:
        """A check that cannot even be started turns the whole snapshot unhealthy."""

        def broken() -> HealthResult:
            raise TypeError("not a coroutine")

        snapshot = await aggregate_health({"b": broken, "a": _healthy(1)})  # type: ignore[dict-item]

        assert snapshot.to_dict()["status"] == "unhealthy"
        assert snapshot.services == []

    @pytest.mark.asyncio
    async def test_checks_run_concurrently(self) -> None:
        """Each check can wait on another; a sequential run would never finish."""
        first_started = asyncio.Event()

        async def first() -> HealthResult:
            first_started.set()
            await second_done.wait()
            return HealthResult(status=HealthStatus.HEALTHY, response_time=1)

        second_done = asyncio.Event()

        async def second() -> HealthResult:
            await first_started.wait()
            second_done.set()
            return HealthResult(status=HealthStatus.HEALTHY, response_time=1)

        snapshot = await asyncio.wait_for(aggregate_health({"a": first, "b": second}), 2)

        assert [s.status for s in snapshot.services] == [HealthStatus.HEALTHY] * 2

    @pytest.mark.asyncio
    async def test_timestamp_is_iso(self) -> None:
        snapshot = await aggregate_health({})

        assert isinstance(snapshot, HealthSnapshot)
        assert datetime.fromisoformat(snapshot.timestamp).tzinfo is not None
        assert snapshot.services == []
