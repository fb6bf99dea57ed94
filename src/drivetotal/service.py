"""Fetch-then-compute entry points shared by every request handler."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from drivetotal.engine.summary import fleet_stats, vehicle_stats
from drivetotal.exceptions import DriveTotalNotFoundError
from drivetotal.models.stats import FleetStats, VehicleStats
from drivetotal.models.vehicle import Vehicle
from drivetotal.store import RecordStore

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class StatsService:
    """Resolve a user's records and run the aggregation engine on them.

    Ownership is enforced here, by asking the store for the user's own
    records only; the engine itself trusts its input.
    """

    def __init__(
        self,
        store: RecordStore,
        *,
        include_ownership_costs: bool = False,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._store = store
        self._include_ownership_costs = include_ownership_costs
        self._clock = clock

    async def _vehicle(self, user_id: str, vehicle_id: str) -> Vehicle:
        vehicle = await self._store.get_vehicle(user_id, vehicle_id)
        if vehicle is None:
            raise DriveTotalNotFoundError("Vehicle not found", resource="vehicle", record_id=vehicle_id)
        return vehicle

    async def vehicle_stats(self, user_id: str, vehicle_id: str) -> VehicleStats:
        vehicle = await self._vehicle(user_id, vehicle_id)
        return vehicle_stats(vehicle, self._clock())

    async def vehicle_detail(self, user_id: str, vehicle_id: str) -> dict[str, Any]:
        """Vehicle record with its entries and a ``stats`` object."""
        vehicle = await self._vehicle(user_id, vehicle_id)
        stats = vehicle_stats(vehicle, self._clock())
        _logger.debug(
            "Vehicle %s: %d fuel entries, distance %.1f km",
            vehicle_id,
            len(vehicle.fuel_entries),
            stats.total_distance,
        )
        return {**vehicle.to_dict(), "stats": stats.to_dict()}

    async def dashboard_stats(self, user_id: str) -> FleetStats:
        vehicles = await self._store.list_vehicles(user_id)
        return fleet_stats(vehicles, self._clock(), include_ownership_costs=self._include_ownership_costs)
