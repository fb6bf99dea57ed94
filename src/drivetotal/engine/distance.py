"""Distance resolution for a vehicle's fuel log."""

from __future__ import annotations

from collections.abc import Sequence

from drivetotal.models.entries import FuelEntry


def trip_distance_sum(entries: Sequence[FuelEntry]) -> float:
    """Sum of the explicitly recorded trip distances."""
    return sum((entry.trip_distance or 0.0 for entry in entries), 0.0)


def resolve_distance(entries: Sequence[FuelEntry], initial_odometer: float = 0.0) -> float:
    """Return the total distance covered by *entries*.

    Recorded trip distances win when they add up to something positive,
    since they reflect the distance actually driven even across partial
    fills.  Otherwise the odometer span is used, measured from
    *initial_odometer* when it is set and from the first logged reading
    when it is not.

    The result is not clamped: an odometer reading entered lower than an
    earlier one yields a negative distance.
    """
    if not entries:
        return 0.0

    trips = trip_distance_sum(entries)
    if trips > 0:
        return trips

    start = initial_odometer or entries[0].odometer
    return entries[-1].odometer - start


def resolve_window_distance(entries: Sequence[FuelEntry]) -> float:
    """Distance over a slice of the log (e.g. the trailing twelve months).

    Same trip-distance preference as :func:`resolve_distance`, but the
    odometer fallback needs two readings inside the window; the vehicle's
    initial odometer is never used for a partial window.
    """
    trips = trip_distance_sum(entries)
    if trips > 0:
        return trips
    if len(entries) >= 2:
        return entries[-1].odometer - entries[0].odometer
    return 0.0
