from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

import pytest

from drivetotal.exceptions import DriveTotalImportError
from drivetotal.ingestion.csv_import import read_fuel_csv
from drivetotal.models.entries import FuelEntry

VEHICLES = {"1": "v1", "2": "v2"}

FUEL_LOG = """\
car_id,date,km_total,liters,amount,gas_station,km_trip,liter_price,tyres
1,2024-02-03,10500,35,52.5,Aral,500,1.5,summer
1,2024-01-15,10000,40,60,Shell,0,1.5,summer
2,2024-01-20,50000,45,70,,,,
3,2024-01-20,1000,45,70,,,,
1,yesterday,10600,30,45,,,,
1,2024-03-01,0,30,45,,,,
1,2024-01-15,10000,40,60,Shell,0,1.5,summer
"""


def test_import_counts() -> None:
    result = read_fuel_csv(FUEL_LOG, VEHICLES)

    assert result.imported == 3
    assert result.skipped == 4


def test_imported_entries_are_full_tanks_mapped_to_vehicles() -> None:
    result = read_fuel_csv(FUEL_LOG, VEHICLES)

    entries = result.for_vehicle("v1")
    assert [e.date for e in entries] == [datetime(2024, 1, 15, tzinfo=UTC), datetime(2024, 2, 3, tzinfo=UTC)]
    assert all(e.full_tank for e in result.entries)

    first, second = entries
    assert first.fuel_amount == 40
    assert first.cost == 60
    assert first.gas_station == "Shell"
    assert first.trip_distance is None
    assert first.price_per_liter == 1.5
    assert first.tyres == "summer"
    assert second.trip_distance == 500


def test_empty_cells_become_none() -> None:
    (entry,) = read_fuel_csv(FUEL_LOG, VEHICLES).for_vehicle("v2")

    assert entry.gas_station is None
    assert entry.price_per_liter is None
    assert entry.odometer == 50000


def test_existing_entries_are_not_imported_again() -> None:
    existing = [FuelEntry(vehicle_id="v1", date="2024-01-15", odometer=10000)]

    result = read_fuel_csv(FUEL_LOG, VEHICLES, existing=existing)

    assert result.imported == 2
    assert result.skipped == 5


def test_quoted_header_and_values() -> None:
    text = '"car_id","date","km_total","liters","amount"\n"1","2024-01-15","10000","40","60"\n'

    result = read_fuel_csv(text, VEHICLES)

    assert result.imported == 1
    assert result.entries[0].vehicle_id == "v1"


def test_missing_required_column() -> None:
    with pytest.raises(DriveTotalImportError, match="km_total"):
        read_fuel_csv("car_id,date,liters\n1,2024-01-15,40\n", VEHICLES)


def test_empty_input() -> None:
    with pytest.raises(DriveTotalImportError):
        read_fuel_csv("", VEHICLES)


def test_reads_path(tmp_path: Path) -> None:
    path = tmp_path / "import_data.csv"
    path.write_text(FUEL_LOG, encoding="utf-8")

    assert read_fuel_csv(path, VEHICLES).imported == 3


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(DriveTotalImportError):
        read_fuel_csv(tmp_path / "missing.csv", VEHICLES)
