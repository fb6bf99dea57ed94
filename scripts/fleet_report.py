#!/usr/bin/env python3
"""Print vehicle and fleet statistics for a CSV fuel log.

Usage
-----
::

    python scripts/fleet_report.py import_data.csv \\
        --vehicle 1="VW Touran" --vehicle 2="Skoda Octavia"

Options::

    --vehicle ID=NAME   Map a car_id of the export to a vehicle name (repeatable)
    --json              Output machine-readable JSON
    --output FILE       Write output to FILE instead of stdout
    --verbose           Enable debug logging
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from drivetotal import DriveTotalImportError, Vehicle, fleet_stats, vehicle_stats  # noqa: E402
from drivetotal.ingestion.csv_import import read_fuel_csv  # noqa: E402

# ── helpers ──────────────────────────────────────────────────


def _parse_vehicle_args(values: list[str]) -> dict[str, str]:
    mapping: dict[str, str] = {}
    for value in values:
        car_id, sep, name = value.partition("=")
        if not sep or not car_id.strip():
            raise argparse.ArgumentTypeError(f"expected ID=NAME, got {value!r}")
        mapping[car_id.strip()] = name.strip() or f"Vehicle {car_id.strip()}"
    return mapping


def _section(title: str) -> str:
    line = "=" * 60
    return f"\n{line}\n  {title}\n{line}"


def _format_stats(stats: dict[str, Any]) -> list[str]:
    return [f"  {key}: {value}" for key, value in stats.items() if not isinstance(value, (list, dict))]


# ── main ─────────────────────────────────────────────────────


def build_report(csv_path: Path, names: dict[str, str]) -> dict[str, Any]:
    result = read_fuel_csv(csv_path, {car_id: car_id for car_id in names})
    vehicles = [
        Vehicle(id=car_id, name=name, fuel_entries=result.for_vehicle(car_id)) for car_id, name in names.items()
    ]
    return {
        "imported": result.imported,
        "skipped": result.skipped,
        "vehicles": {v.name: vehicle_stats(v).to_dict() for v in vehicles},
        "fleet": fleet_stats(vehicles).to_dict(),
    }


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("csv", type=Path, help="CSV fuel log export")
    parser.add_argument("--vehicle", action="append", default=[], metavar="ID=NAME")
    parser.add_argument("--json", action="store_true", help="Output JSON")
    parser.add_argument("--output", type=Path, help="Write output to FILE")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s %(message)s")

    try:
        names = _parse_vehicle_args(args.vehicle)
    except argparse.ArgumentTypeError as exc:
        parser.error(str(exc))
    if not names:
        parser.error("at least one --vehicle ID=NAME is required")

    try:
        report = build_report(args.csv, names)
    except DriveTotalImportError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if args.json:
        text = json.dumps(report, indent=2, ensure_ascii=False)
    else:
        out: list[str] = [f"Imported {report['imported']} entries, skipped {report['skipped']}"]
        for name, stats in report["vehicles"].items():
            out.append(_section(name))
            out.extend(_format_stats(stats))
        out.append(_section("Fleet summary"))
        out.extend(_format_stats(report["fleet"]["summary"]))
        text = "\n".join(out)

    if args.output:
        args.output.write_text(text + "\n", encoding="utf-8")
    else:
        print(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
