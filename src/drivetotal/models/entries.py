"""Fuel and ownership-cost entry models."""

from __future__ import annotations

from drivetotal.models._base import DriveTotalModel, OptionalTimestamp, RecordId, RecordTimestamp


class FuelEntry(DriveTotalModel):
    """A single refuelling event.

    Parameters
    ----------
    date : datetime
        When the vehicle was refuelled (aware UTC).
    odometer : float
        Odometer reading at the pump, in kilometers.
    fuel_amount : float
        Liters put in the tank.
    cost : float
        Amount paid, in currency units.
    full_tank : bool
        Whether the tank was filled to capacity.  Only full-to-full
        intervals yield a reliable consumption figure.
    trip_distance : float or None
        Explicitly recorded distance for this fill interval, in kilometers.
    price_per_liter : float or None
        Pump price, when recorded.
    """

    id: RecordId = ""
    vehicle_id: RecordId = ""
    date: RecordTimestamp
    odometer: float = 0.0
    fuel_amount: float = 0.0
    cost: float = 0.0
    full_tank: bool = True
    trip_distance: float | None = None
    price_per_liter: float | None = None
    gas_station: str | None = None
    tyres: str | None = None
    notes: str | None = None

    @property
    def day_key(self) -> str:
        """Calendar day as ``YYYY-MM-DD``."""
        return self.date.strftime("%Y-%m-%d")

    @property
    def month_key(self) -> str:
        """Calendar month as ``YYYY-MM`` (the first 7 characters of :attr:`day_key`)."""
        return self.day_key[:7]


class OwnershipCostEntry(DriveTotalModel):
    """A maintenance, road-tax or insurance payment.

    Only :attr:`cost` takes part in aggregation; the dates are kept so the
    records round-trip through the API unchanged.
    """

    id: RecordId = ""
    vehicle_id: RecordId = ""
    cost: float = 0.0
    date: OptionalTimestamp = None
    start_date: OptionalTimestamp = None
    end_date: OptionalTimestamp = None
    description: str | None = None
    provider: str | None = None
    notes: str | None = None
