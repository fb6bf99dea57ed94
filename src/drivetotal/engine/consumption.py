"""Per-fill-up fuel efficiency between consecutive full tanks."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from itertools import pairwise

from drivetotal.models.entries import FuelEntry
from drivetotal.models.stats import ConsumptionPoint
from drivetotal.rounding import FieldKind, round_field


def interval_distance(previous: FuelEntry, current: FuelEntry) -> float:
    """Distance driven between two fill-ups.

    A positive trip distance recorded on *current* wins over the odometer
    delta.
    """
    if current.trip_distance is not None and current.trip_distance > 0:
        return current.trip_distance
    return current.odometer - previous.odometer


def iter_consumption_points(entries: Sequence[FuelEntry], vehicle_name: str = "") -> Iterator[ConsumptionPoint]:
    """Yield one :class:`ConsumptionPoint` per full-to-full interval.

    Only adjacent pairs are considered.  When either side of a pair is a
    partial fill the interval is skipped; the calculator does not search
    further back for an earlier full tank.
    """
    for previous, current in pairwise(entries):
        if not (previous.full_tank and current.full_tank):
            continue
        distance = interval_distance(previous, current)
        if distance > 0 and current.fuel_amount > 0:
            yield ConsumptionPoint(
                date=current.day_key,
                consumption=round_field(distance / current.fuel_amount, FieldKind.CONSUMPTION),
                vehicle=vehicle_name,
            )


class ConsumptionTrend:
    """Restartable view over the consumption points of one vehicle.

    Each iteration recomputes the points from the entries; nothing is
    cached between passes.
    """

    def __init__(self, entries: Iterable[FuelEntry], vehicle_name: str = "") -> None:
        self._entries = tuple(entries)
        self._vehicle_name = vehicle_name

    def __iter__(self) -> Iterator[ConsumptionPoint]:
        return iter_consumption_points(self._entries, self._vehicle_name)

    def __repr__(self) -> str:
        return f"ConsumptionTrend(vehicle={self._vehicle_name!r}, entries={len(self._entries)})"


def consumption_trend(entries: Sequence[FuelEntry], vehicle_name: str = "") -> list[ConsumptionPoint]:
    """Return the consumption points of one vehicle as a list."""
    return list(iter_consumption_points(entries, vehicle_name))
