"""Calendar-month fuel and cost series."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from drivetotal._constants import ROLLING_TREND_MONTHS, TRAILING_MONTHS
from drivetotal.models.entries import FuelEntry
from drivetotal.models.stats import MonthBucket, RollingMonth
from drivetotal.rounding import FieldKind, round_distance, round_field

_logger = logging.getLogger(__name__)


@dataclass
class _MonthAccumulator:
    fuel: float = 0.0
    cost: float = 0.0
    trip_distance: float = 0.0
    odometers: list[float] = field(default_factory=list)

    def distance(self) -> float:
        if self.trip_distance != 0 or len(self.odometers) < 2:
            return self.trip_distance
        return max(self.odometers) - min(self.odometers)


class MonthlySeriesBuilder:
    """Accumulate fuel entries into ``YYYY-MM`` buckets.

    Entries from several vehicles may be added to the same builder; they
    then share buckets, which is what the fleet view needs.

    Each bucket also tracks distance: the sum of recorded trip distances,
    or, for a month without any, the odometer span of that month's entries.
    """

    def __init__(self) -> None:
        self._months: dict[str, _MonthAccumulator] = {}

    def add(self, entries: Iterable[FuelEntry]) -> None:
        for entry in entries:
            acc = self._months.get(entry.month_key)
            if acc is None:
                acc = _MonthAccumulator()
                self._months[entry.month_key] = acc
            acc.fuel += entry.fuel_amount
            acc.cost += entry.cost
            if entry.trip_distance:
                acc.trip_distance += entry.trip_distance
            acc.odometers.append(entry.odometer)

    def build(self) -> list[MonthBucket]:
        """Return the buckets sorted by month, values rounded."""
        # Keys are zero-padded, so lexicographic order is chronological.
        buckets = [
            MonthBucket(
                month=month,
                fuel=round_field(acc.fuel, FieldKind.VOLUME),
                cost=round_field(acc.cost, FieldKind.CURRENCY),
                distance=round_distance(acc.distance()),
            )
            for month, acc in sorted(self._months.items())
        ]
        _logger.debug("Built %d monthly buckets", len(buckets))
        return buckets


def monthly_series(entries: Iterable[FuelEntry]) -> list[MonthBucket]:
    """Convenience wrapper for a single entry sequence."""
    builder = MonthlySeriesBuilder()
    builder.add(entries)
    return builder.build()


def rolling_trailing_twelve(
    buckets: Sequence[MonthBucket],
    *,
    window: int = TRAILING_MONTHS,
    limit: int = ROLLING_TREND_MONTHS,
) -> list[RollingMonth]:
    """Trailing totals for each bucket over the *window* buckets ending at it.

    The window counts buckets, not calendar months: months without any
    fill-up have no bucket and are simply not part of the series.  Only the
    last *limit* rows are returned.
    """
    rows: list[RollingMonth] = []
    for index, bucket in enumerate(buckets):
        in_window = buckets[max(0, index - window + 1) : index + 1]
        fuel = sum(b.fuel for b in in_window)
        cost = sum(b.cost for b in in_window)
        distance = sum(b.distance for b in in_window)

        avg_consumption = distance / fuel if fuel > 0 and distance > 0 else 0.0
        cost_per_km = cost / distance if distance > 0 else 0.0

        rows.append(
            RollingMonth(
                month=bucket.month,
                fuel=round_field(fuel, FieldKind.VOLUME),
                cost=round_field(cost, FieldKind.CURRENCY),
                distance=distance,
                avg_consumption=round_field(avg_consumption, FieldKind.CONSUMPTION),
                cost_per_km=round_field(cost_per_km, FieldKind.COST_PER_KM),
                months_included=len(in_window),
            )
        )
    return rows[-limit:] if limit > 0 else rows
