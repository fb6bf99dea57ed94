"""Rounding rules for reported statistics.

All rounding goes through :func:`round_field` so that a given kind of value
(liters, currency, cost per kilometer, ...) is rounded the same way in the
per-vehicle and fleet views.

Rounding is half-up on the scaled value: ``floor(value * 10**places + 0.5)``
divided back down.  This differs from Python's :func:`round`, which rounds
half to even (``round(2.5) == 2``).
"""

from __future__ import annotations

import enum
import math


class FieldKind(enum.StrEnum):
    """Kinds of reported values."""

    DISTANCE = "distance"
    VOLUME = "volume"
    CURRENCY = "currency"
    CONSUMPTION = "consumption"
    COST_PER_KM = "cost_per_km"
    UNIT_PRICE = "unit_price"
    PERCENT = "percent"

    @property
    def places(self) -> int:
        """Number of decimal places reported for this kind."""
        return _PLACES[self]


_PLACES: dict[FieldKind, int] = {
    FieldKind.DISTANCE: 0,
    FieldKind.VOLUME: 2,
    FieldKind.CURRENCY: 2,
    FieldKind.CONSUMPTION: 2,
    FieldKind.COST_PER_KM: 3,
    FieldKind.UNIT_PRICE: 3,
    FieldKind.PERCENT: 0,
}


def round_half_up(value: float, places: int = 0) -> float:
    """Round *value* to *places* decimals, ties going towards positive infinity."""
    if not math.isfinite(value):
        return value
    factor = 10**places
    return math.floor(value * factor + 0.5) / factor


def round_field(value: float, kind: FieldKind) -> float:
    """Round *value* according to the rule for *kind*."""
    return round_half_up(value, kind.places)


def round_distance(value: float) -> int:
    """Round a distance to whole kilometers."""
    rounded = round_field(value, FieldKind.DISTANCE)
    return int(rounded) if math.isfinite(rounded) else 0
