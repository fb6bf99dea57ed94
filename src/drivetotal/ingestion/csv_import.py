"""Import fill-ups from a CSV fuel log export.

Expected columns (header row required, extra columns ignored)::

    car_id, date, km_total, liters, amount, gas_station, km_trip, liter_price, tyres

Every imported row is treated as a full tank; the export format has no
partial-fill marker.
"""

from __future__ import annotations

import csv
import io
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from drivetotal.exceptions import DriveTotalImportError
from drivetotal.ingestion.normalize import parse_timestamp, positive_or_none, safe_float, safe_str
from drivetotal.models.entries import FuelEntry

_logger = logging.getLogger(__name__)

REQUIRED_COLUMNS: frozenset[str] = frozenset({"car_id", "date", "km_total"})


@dataclass
class ImportResult:
    """Outcome of a CSV import."""

    entries: list[FuelEntry] = field(default_factory=list)
    imported: int = 0
    skipped: int = 0

    def for_vehicle(self, vehicle_id: str) -> list[FuelEntry]:
        """Imported entries of one vehicle, sorted by date ascending."""
        return sorted((e for e in self.entries if e.vehicle_id == vehicle_id), key=lambda e: e.date)


def _read_text(source: str | Path) -> str:
    if isinstance(source, Path):
        try:
            return source.read_text(encoding="utf-8")
        except OSError as exc:
            raise DriveTotalImportError(f"Cannot read fuel log {source}: {exc}") from exc
    return source


def _clean_row(row: Mapping[str, str | None]) -> dict[str, str | None]:
    cleaned: dict[str, str | None] = {}
    for key, value in row.items():
        if key is None:
            continue
        name = key.replace('"', "").strip()
        cleaned[name] = safe_str(value.replace('"', "")) if isinstance(value, str) else None
    return cleaned


def read_fuel_csv(
    source: str | Path,
    vehicle_map: Mapping[str, str],
    *,
    existing: Iterable[FuelEntry] = (),
) -> ImportResult:
    """Parse a CSV fuel log into :class:`FuelEntry` records.

    Parameters
    ----------
    source : str or Path
        CSV text, or a path to a UTF-8 CSV file.
    vehicle_map : mapping
        ``car_id`` values of the export mapped to vehicle ids.
    existing : iterable of FuelEntry
        Entries already stored.  A row matching one of them (same vehicle,
        date and odometer) is skipped, as are duplicates within the file.

    Rows are skipped when their ``car_id`` is unknown, the date is missing
    or unparseable, or the odometer is zero.
    """
    text = _read_text(source)
    reader = csv.DictReader(io.StringIO(text.strip()))
    header = {name.replace('"', "").strip() for name in reader.fieldnames or ()}
    missing = REQUIRED_COLUMNS - header
    if missing:
        raise DriveTotalImportError(f"Fuel log is missing columns: {', '.join(sorted(missing))}")

    seen: set[tuple[str, datetime, float]] = {(e.vehicle_id, e.date, e.odometer) for e in existing}
    result = ImportResult()

    for line_no, raw_row in enumerate(reader, start=2):
        row = _clean_row(raw_row)
        car_id = row.get("car_id")
        vehicle_id = vehicle_map.get(car_id) if car_id is not None else None
        if vehicle_id is None:
            _logger.debug("Skipping line %d: unknown car_id %r", line_no, car_id)
            result.skipped += 1
            continue

        date = parse_timestamp(row.get("date"))
        odometer = safe_float(row.get("km_total")) or 0.0
        if date is None or odometer == 0:
            _logger.debug("Skipping line %d: invalid date or odometer", line_no)
            result.skipped += 1
            continue

        key = (vehicle_id, date, odometer)
        if key in seen:
            result.skipped += 1
            continue
        seen.add(key)

        result.entries.append(
            FuelEntry(
                vehicle_id=vehicle_id,
                date=date,
                odometer=odometer,
                fuel_amount=safe_float(row.get("liters")) or 0.0,
                cost=safe_float(row.get("amount")) or 0.0,
                full_tank=True,
                gas_station=row.get("gas_station"),
                trip_distance=positive_or_none(row.get("km_trip")),
                price_per_liter=positive_or_none(row.get("liter_price")),
                tyres=row.get("tyres"),
            )
        )
        result.imported += 1

    _logger.info("Imported %d fuel entries, skipped %d", result.imported, result.skipped)
    return result
