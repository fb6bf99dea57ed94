"""Record store interface and a process-local implementation.

The store is the calling layer's source of records.  It scopes every read
to the owning user and hands out vehicles with their entry collections
attached, fuel entries sorted by date ascending, which is the ordering the
aggregation engine relies on.
"""

from __future__ import annotations

import copy
from collections import defaultdict
from collections.abc import Iterable
from enum import StrEnum
from typing import Protocol

from drivetotal.models.entries import FuelEntry, OwnershipCostEntry
from drivetotal.models.vehicle import Vehicle


class CostKind(StrEnum):
    MAINTENANCE = "maintenance"
    ROAD_TAX = "road_tax"
    INSURANCE = "insurance"


_COLLECTION_FIELDS: dict[CostKind, str] = {
    CostKind.MAINTENANCE: "maintenance_entries",
    CostKind.ROAD_TAX: "road_tax_entries",
    CostKind.INSURANCE: "insurance_entries",
}


class RecordStore(Protocol):
    """Read side of the record store used by :class:`~drivetotal.service.StatsService`."""

    async def get_vehicle(self, user_id: str, vehicle_id: str) -> Vehicle | None:
        """Return the user's vehicle with all entry collections, or ``None``."""
        ...

    async def list_vehicles(self, user_id: str) -> list[Vehicle]:
        """Return every vehicle of the user with all entry collections."""
        ...


class InMemoryRecordStore:
    """Dictionary-backed store for tests, scripts and single-process demos."""

    def __init__(self) -> None:
        self._vehicles: dict[str, Vehicle] = {}
        self._fuel: dict[str, list[FuelEntry]] = defaultdict(list)
        self._costs: dict[tuple[CostKind, str], list[OwnershipCostEntry]] = defaultdict(list)

    def add_vehicle(self, vehicle: Vehicle) -> None:
        """Register *vehicle*; entry collections it carries are stored too."""
        self._vehicles[vehicle.id] = vehicle.model_copy(
            update={
                "fuel_entries": [],
                "maintenance_entries": [],
                "road_tax_entries": [],
                "insurance_entries": [],
            }
        )
        self.add_fuel_entries(vehicle.id, vehicle.fuel_entries)
        for kind, field_name in _COLLECTION_FIELDS.items():
            self.add_cost_entries(kind, vehicle.id, getattr(vehicle, field_name))

    def add_fuel_entries(self, vehicle_id: str, entries: Iterable[FuelEntry]) -> None:
        self._fuel[vehicle_id].extend(entries)

    def add_cost_entries(self, kind: CostKind, vehicle_id: str, entries: Iterable[OwnershipCostEntry]) -> None:
        self._costs[(kind, vehicle_id)].extend(entries)

    def delete_vehicle(self, vehicle_id: str) -> None:
        self._vehicles.pop(vehicle_id, None)
        self._fuel.pop(vehicle_id, None)
        for kind in CostKind:
            self._costs.pop((kind, vehicle_id), None)

    def _assemble(self, vehicle: Vehicle) -> Vehicle:
        update: dict[str, list] = {
            "fuel_entries": sorted(self._fuel.get(vehicle.id, ()), key=lambda e: e.date),
        }
        for kind, field_name in _COLLECTION_FIELDS.items():
            update[field_name] = copy.copy(self._costs.get((kind, vehicle.id), []))
        return vehicle.model_copy(update=update)

    async def get_vehicle(self, user_id: str, vehicle_id: str) -> Vehicle | None:
        vehicle = self._vehicles.get(vehicle_id)
        if vehicle is None or vehicle.user_id != user_id:
            return None
        return self._assemble(vehicle)

    async def list_vehicles(self, user_id: str) -> list[Vehicle]:
        return [self._assemble(v) for v in self._vehicles.values() if v.user_id == user_id]
