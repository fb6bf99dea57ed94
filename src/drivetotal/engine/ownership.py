"""Ownership cost aggregation: maintenance, road tax, insurance, depreciation.

Financing and sale-based depreciation are only reported on the fleet
dashboard; the per-vehicle figures stick to :class:`OwnershipCosts`.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime

from drivetotal._constants import ONE_YEAR
from drivetotal.ingestion.normalize import to_utc
from drivetotal.models.entries import OwnershipCostEntry
from drivetotal.models.vehicle import Vehicle


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class OwnershipCosts:
    """Ownership costs of one vehicle, unrounded."""

    maintenance: float = 0.0
    road_tax: float = 0.0
    insurance: float = 0.0
    depreciation: float = 0.0

    @property
    def total(self) -> float:
        return self.maintenance + self.road_tax + self.insurance + self.depreciation


def sum_costs(entries: Iterable[OwnershipCostEntry]) -> float:
    return sum((entry.cost for entry in entries), 0.0)


def years_between(start: datetime, end: datetime) -> float:
    """Fractional years between two instants, in Julian years of 365.25 days."""
    return (to_utc(end) - to_utc(start)) / ONE_YEAR


def depreciation_to_date(vehicle: Vehicle, now: datetime | None = None) -> float:
    """Linear depreciation accrued since purchase.

    Zero unless both the yearly rate and the purchase date are known.
    """
    if not vehicle.depreciation_yearly or vehicle.purchase_date is None:
        return 0.0
    return vehicle.depreciation_yearly * years_between(vehicle.purchase_date, now or _utcnow())


def aggregate_ownership_costs(vehicle: Vehicle, now: datetime | None = None) -> OwnershipCosts:
    return OwnershipCosts(
        maintenance=sum_costs(vehicle.maintenance_entries),
        road_tax=sum_costs(vehicle.road_tax_entries),
        insurance=sum_costs(vehicle.insurance_entries),
        depreciation=depreciation_to_date(vehicle, now),
    )


def months_between(start: datetime, end: datetime) -> int:
    """Whole calendar months from *start* to *end*, never negative."""
    start, end = to_utc(start), to_utc(end)
    return max(0, (end.year - start.year) * 12 + (end.month - start.month))


def financing_cost(vehicle: Vehicle, now: datetime | None = None) -> float:
    """Amount paid towards financing.

    A recorded total amount wins.  Otherwise the monthly payment is
    multiplied by the calendar months between the start date and the end
    date (or *now* for running contracts).
    """
    if vehicle.financing_total_amount:
        return vehicle.financing_total_amount
    if vehicle.financing_monthly_payment and vehicle.financing_start_date is not None:
        end = vehicle.financing_end_date or now or _utcnow()
        return vehicle.financing_monthly_payment * months_between(vehicle.financing_start_date, end)
    return 0.0


def lifetime_depreciation(vehicle: Vehicle, now: datetime | None = None) -> float:
    """Realized loss for sold vehicles, accrued estimate otherwise."""
    if vehicle.is_sold and vehicle.purchase_price:
        return vehicle.purchase_price - (vehicle.sold_price or 0.0)
    return depreciation_to_date(vehicle, now)
