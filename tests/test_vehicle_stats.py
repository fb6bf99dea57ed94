from __future__ import annotations

import json
from datetime import UTC, datetime

import pytest

from drivetotal.engine.summary import vehicle_stats
from drivetotal.models.entries import FuelEntry, OwnershipCostEntry
from drivetotal.models.vehicle import Vehicle

NOW = datetime(2026, 1, 1, tzinfo=UTC)

EXPECTED_KEYS = {
    "totalDistance",
    "totalFuel",
    "totalFuelCost",
    "avgConsumption",
    "fuelCostPerKm",
    "totalMaintenanceCost",
    "totalRoadTaxCost",
    "totalInsuranceCost",
    "totalDepreciationToDate",
    "totalOtherCost",
    "totalSpend",
    "totalCostPerKm",
    "costPerKm",
    "totalCost",
}


def _fuel(day: str, odometer: float, fuel: float, cost: float, **kwargs: object) -> FuelEntry:
    return FuelEntry(date=day, odometer=odometer, fuel_amount=fuel, cost=cost, **kwargs)


def _touran(**kwargs: object) -> Vehicle:
    return Vehicle(
        id="v1",
        name="Touran",
        fuel_entries=[_fuel("2024-01-15", 10000, 40, 60), _fuel("2024-02-03", 10500, 35, 52.5)],
        **kwargs,
    )


def test_two_full_tanks() -> None:
    stats = vehicle_stats(_touran(), NOW)

    assert stats.total_distance == 500
    assert stats.total_fuel == 75
    assert stats.total_fuel_cost == 112.5
    assert stats.avg_consumption == pytest.approx(6.6667, abs=1e-4)
    assert stats.fuel_cost_per_km == pytest.approx(0.225)


def test_ownership_costs_are_included_in_spend() -> None:
    vehicle = _touran(
        maintenance_entries=[OwnershipCostEntry(cost=150), OwnershipCostEntry(cost=50)],
        road_tax_entries=[OwnershipCostEntry(cost=100)],
        insurance_entries=[OwnershipCostEntry(cost=137.5)],
    )

    stats = vehicle_stats(vehicle, NOW)

    assert stats.total_maintenance_cost == 200
    assert stats.total_road_tax_cost == 100
    assert stats.total_insurance_cost == 137.5
    assert stats.total_other_cost == 437.5
    assert stats.total_spend == 550
    assert stats.total_cost_per_km == pytest.approx(1.1)


def test_depreciation_is_accrued_to_now() -> None:
    stats = vehicle_stats(_touran(depreciation_yearly=1200, purchase_date="2024-01-01"), NOW)

    assert stats.total_depreciation_to_date == pytest.approx(2400, abs=5)
    assert stats.total_spend == pytest.approx(112.5 + stats.total_depreciation_to_date)


def test_legacy_aliases_match_their_targets() -> None:
    stats = vehicle_stats(_touran(maintenance_entries=[OwnershipCostEntry(cost=80)]), NOW)

    assert stats.cost_per_km == stats.total_cost_per_km
    assert stats.total_cost == stats.total_fuel_cost


def test_initial_odometer_extends_distance() -> None:
    stats = vehicle_stats(_touran(initial_odometer=9500), NOW)
    assert stats.total_distance == 1000


def test_trip_distances_take_priority() -> None:
    vehicle = Vehicle(
        id="v1",
        initial_odometer=9000,
        fuel_entries=[
            _fuel("2024-01-15", 10000, 40, 60, trip_distance=480),
            _fuel("2024-02-03", 10500, 35, 52.5, trip_distance=470),
        ],
    )
    assert vehicle_stats(vehicle, NOW).total_distance == 950


def test_zero_trip_distance_falls_back_to_odometer() -> None:
    vehicle = Vehicle(
        id="v1",
        fuel_entries=[
            _fuel("2024-01-15", 10000, 40, 60, trip_distance=0),
            _fuel("2024-02-03", 10500, 35, 52.5, trip_distance=0),
        ],
    )
    assert vehicle_stats(vehicle, NOW).total_distance == 500


def test_vehicle_without_entries() -> None:
    vehicle = Vehicle(id="v1", road_tax_entries=[OwnershipCostEntry(cost=120)])

    stats = vehicle_stats(vehicle, NOW)

    assert stats.total_distance == 0
    assert stats.total_fuel == 0
    assert stats.avg_consumption == 0
    assert stats.fuel_cost_per_km == 0
    assert stats.total_cost_per_km == 0
    assert stats.total_spend == 120


def test_serialized_keys() -> None:
    assert set(vehicle_stats(_touran(), NOW).to_dict()) == EXPECTED_KEYS


def test_repeated_calls_are_identical() -> None:
    vehicle = _touran(depreciation_yearly=900, purchase_date="2023-03-01")

    first = json.dumps(vehicle_stats(vehicle, NOW).to_dict(), sort_keys=True)
    second = json.dumps(vehicle_stats(vehicle, NOW).to_dict(), sort_keys=True)

    assert first == second
