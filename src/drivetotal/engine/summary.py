"""Per-vehicle and fleet-wide statistics.

This is the single place where the engine's building blocks are combined
into the two public result shapes.  Both views share the distance,
consumption and monthly logic; they differ on purpose in how costs are
reported:

* :func:`vehicle_stats` folds maintenance, road tax, insurance and
  accrued depreciation into ``totalSpend`` and ``totalCostPerKm``.
* :func:`fleet_stats` reports fuel cost only in its summary unless
  ``include_ownership_costs`` is set.

Nothing here raises: every ratio falls back to ``0`` when its denominator
is zero, and vehicles without fuel entries simply contribute nothing to
distance and fuel.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from drivetotal._constants import COST_CATEGORY_COLORS
from drivetotal.engine.consumption import iter_consumption_points
from drivetotal.engine.distance import resolve_distance, resolve_window_distance
from drivetotal.engine.monthly import MonthlySeriesBuilder, rolling_trailing_twelve
from drivetotal.engine.ownership import aggregate_ownership_costs, financing_cost, lifetime_depreciation
from drivetotal.ingestion.normalize import to_utc
from drivetotal.models.entries import FuelEntry
from drivetotal.models.stats import (
    ComparisonStats,
    ConsumptionPoint,
    CostBreakdownItem,
    FleetStats,
    FleetSummary,
    FuelPricePoint,
    ProjectedAnnualCosts,
    ProjectionBasis,
    TrailingSummary,
    VehicleComparison,
    VehicleStats,
    VehicleSummaryRow,
    YearChanges,
    YearOverYear,
    YearTotals,
)
from drivetotal.models.vehicle import Vehicle
from drivetotal.rounding import FieldKind, round_distance, round_field

_logger = logging.getLogger(__name__)


def _ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator != 0 else 0.0


def _resolve_now(now: datetime | None) -> datetime:
    return to_utc(now) if now is not None else datetime.now(UTC)


# ------------------------------------------------------------------
# Per-vehicle view
# ------------------------------------------------------------------


def vehicle_stats(vehicle: Vehicle, now: datetime | None = None) -> VehicleStats:
    """Statistics for one vehicle, ownership costs included.

    Values are not rounded.  ``costPerKm`` and ``totalCost`` duplicate
    ``totalCostPerKm`` and ``totalFuelCost`` for older clients.
    """
    entries = vehicle.fuel_entries
    total_fuel = sum((e.fuel_amount for e in entries), 0.0)
    total_fuel_cost = sum((e.cost for e in entries), 0.0)
    total_distance = resolve_distance(entries, vehicle.initial_odometer)

    costs = aggregate_ownership_costs(vehicle, _resolve_now(now))
    total_spend = total_fuel_cost + costs.total
    total_cost_per_km = _ratio(total_spend, total_distance)

    return VehicleStats(
        total_distance=total_distance,
        total_fuel=total_fuel,
        total_fuel_cost=total_fuel_cost,
        avg_consumption=_ratio(total_distance, total_fuel),
        fuel_cost_per_km=_ratio(total_fuel_cost, total_distance),
        total_maintenance_cost=costs.maintenance,
        total_road_tax_cost=costs.road_tax,
        total_insurance_cost=costs.insurance,
        total_depreciation_to_date=costs.depreciation,
        total_other_cost=costs.total,
        total_spend=total_spend,
        total_cost_per_km=total_cost_per_km,
        cost_per_km=total_cost_per_km,
        total_cost=total_fuel_cost,
    )


# ------------------------------------------------------------------
# Fleet view
# ------------------------------------------------------------------


@dataclass
class _Totals:
    distance: float = 0.0
    fuel: float = 0.0
    cost: float = 0.0


@dataclass
class _YearTally:
    distance: float = 0.0
    fuel: float = 0.0
    cost: float = 0.0
    entries: int = 0

    def add(self, entry: FuelEntry) -> None:
        self.fuel += entry.fuel_amount
        self.cost += entry.cost
        self.entries += 1
        if entry.trip_distance:
            self.distance += entry.trip_distance

    @property
    def avg_consumption(self) -> float:
        return _ratio(self.distance, self.fuel) if self.fuel > 0 else 0.0

    def to_model(self, year: int) -> YearTotals:
        return YearTotals(
            year=year,
            distance=round_distance(self.distance),
            fuel=round_field(self.fuel, FieldKind.VOLUME),
            cost=round_field(self.cost, FieldKind.CURRENCY),
            avg_consumption=round_field(self.avg_consumption, FieldKind.CONSUMPTION),
            entries=self.entries,
        )


@dataclass
class _CostTotals:
    fuel: float = 0.0
    maintenance: float = 0.0
    road_tax: float = 0.0
    insurance: float = 0.0
    financing: float = 0.0
    depreciation: float = 0.0

    def breakdown(self) -> list[CostBreakdownItem]:
        values = {
            "Fuel": self.fuel,
            "Maintenance": self.maintenance,
            "Road Tax": self.road_tax,
            "Insurance": self.insurance,
            "Financing": self.financing,
            "Depreciation": self.depreciation,
        }
        items = [
            CostBreakdownItem(name=name, value=round_field(value, FieldKind.CURRENCY), color=COST_CATEGORY_COLORS[name])
            for name, value in values.items()
        ]
        return [item for item in items if item.value > 0]


def _percent_change(current: float, previous: float) -> int | None:
    if previous <= 0:
        return None
    return int(round_field((current - previous) / previous * 100, FieldKind.PERCENT))


def _one_year_before(now: datetime) -> datetime:
    # Feb 29 rolls over to Mar 1 of the previous year.
    return datetime(now.year - 1, now.month, 1, tzinfo=UTC) + timedelta(days=now.day - 1)


def _vehicle_row(
    vehicle: Vehicle, distance: float, fuel: float, fuel_cost: float, total_cost: float
) -> VehicleSummaryRow:
    net_cost = total_cost - vehicle.sold_price if vehicle.sold_price else total_cost
    return VehicleSummaryRow(
        id=vehicle.id,
        total_distance=round_distance(distance),
        avg_consumption=round_field(_ratio(distance, fuel) if fuel > 0 else 0.0, FieldKind.CONSUMPTION),
        cost_per_km=round_field(_ratio(fuel_cost, distance) if distance > 0 else 0.0, FieldKind.COST_PER_KM),
        total_cost=round_field(total_cost, FieldKind.CURRENCY),
        total_cost_per_km=round_field(_ratio(net_cost, distance) if distance > 0 else 0.0, FieldKind.COST_PER_KM),
    )


def _comparison(vehicle: Vehicle, row: VehicleSummaryRow) -> VehicleComparison:
    return VehicleComparison(
        id=vehicle.id,
        name=vehicle.name,
        make=vehicle.make,
        model=vehicle.model,
        year=vehicle.year,
        photo=vehicle.photo,
        status=vehicle.status,
        stats=ComparisonStats(
            total_distance=row.total_distance,
            avg_consumption=row.avg_consumption,
            fuel_cost_per_km=row.cost_per_km,
            total_cost=row.total_cost,
            total_cost_per_km=row.total_cost_per_km,
        ),
    )


def fleet_stats(
    vehicles: Sequence[Vehicle],
    now: datetime | None = None,
    *,
    include_ownership_costs: bool = False,
) -> FleetStats:
    """Dashboard statistics across all vehicles of one user.

    Parameters
    ----------
    vehicles : sequence of Vehicle
        Every vehicle of the user, each with its fuel entries sorted by
        date ascending.  Vehicles without fuel entries are still counted
        in ``vehicleCount``.
    now : datetime or None
        Reference instant for trailing windows, year-over-year and
        depreciation.  Defaults to the current time.
    include_ownership_costs : bool
        When ``False`` (the response contract) the summary's ``totalCost``
        and ``costPerKm`` cover fuel only.  When ``True`` they also include
        maintenance, road tax, insurance and accrued depreciation, like the
        per-vehicle view.
    """
    now = _resolve_now(now)
    t12m_start = _one_year_before(now)
    current_year_start = datetime(now.year, 1, 1, tzinfo=UTC)
    previous_year_start = datetime(now.year - 1, 1, 1, tzinfo=UTC)
    previous_year_end = datetime(now.year - 1, 12, 31, 23, 59, 59, tzinfo=UTC)

    totals = _Totals()
    t12m = _Totals()
    current_year = _YearTally()
    previous_year = _YearTally()
    costs = _CostTotals()
    ownership_total = 0.0

    monthly = MonthlySeriesBuilder()
    consumption: list[ConsumptionPoint] = []
    fuel_prices: list[FuelPricePoint] = []
    # One row per vehicle, in input order; ids need not be unique.
    rows: list[VehicleSummaryRow] = []

    for vehicle in vehicles:
        entries = vehicle.fuel_entries
        fuel_cost = sum((e.cost for e in entries), 0.0)
        ownership = aggregate_ownership_costs(vehicle, now)
        financing = financing_cost(vehicle, now)
        depreciation = lifetime_depreciation(vehicle, now)
        vehicle_total_cost = (
            fuel_cost + ownership.maintenance + depreciation + ownership.road_tax + ownership.insurance + financing
        )

        costs.fuel += fuel_cost
        costs.maintenance += ownership.maintenance
        costs.road_tax += ownership.road_tax
        costs.insurance += ownership.insurance
        costs.financing += financing
        costs.depreciation += depreciation
        ownership_total += ownership.total

        if not entries:
            rows.append(
                VehicleSummaryRow(id=vehicle.id, total_cost=round_field(vehicle_total_cost, FieldKind.CURRENCY))
            )
            continue

        fuel = sum((e.fuel_amount for e in entries), 0.0)
        distance = resolve_distance(entries, vehicle.initial_odometer)
        totals.fuel += fuel
        totals.cost += fuel_cost
        totals.distance += distance
        rows.append(_vehicle_row(vehicle, distance, fuel, fuel_cost, vehicle_total_cost))

        recent = [e for e in entries if e.date >= t12m_start]
        if recent:
            t12m.fuel += sum((e.fuel_amount for e in recent), 0.0)
            t12m.cost += sum((e.cost for e in recent), 0.0)
            t12m.distance += resolve_window_distance(recent)

        monthly.add(entries)
        for entry in entries:
            if entry.date >= current_year_start:
                current_year.add(entry)
            elif previous_year_start <= entry.date <= previous_year_end:
                previous_year.add(entry)
            if entry.price_per_liter:
                fuel_prices.append(
                    FuelPricePoint(
                        date=entry.day_key,
                        price=round_field(entry.price_per_liter, FieldKind.UNIT_PRICE),
                        vehicle=vehicle.name,
                    )
                )

        consumption.extend(iter_consumption_points(entries, vehicle.name))

    buckets = monthly.build()
    summary_cost = totals.cost + ownership_total if include_ownership_costs else totals.cost

    months_elapsed = now.month
    projected = ProjectedAnnualCosts(
        fuel=round_distance(current_year.cost / months_elapsed * 12),
        distance=round_distance(current_year.distance / months_elapsed * 12),
        based_on_t12m=(
            ProjectionBasis(cost=round_distance(t12m.cost), distance=round_distance(t12m.distance))
            if t12m.cost > 0
            else None
        ),
    )

    _logger.debug(
        "Fleet stats: %d vehicles, %d months, %d consumption points",
        len(vehicles),
        len(buckets),
        len(consumption),
    )

    return FleetStats(
        summary=FleetSummary(
            total_distance=round_distance(totals.distance),
            total_fuel=round_field(totals.fuel, FieldKind.VOLUME),
            total_cost=round_field(summary_cost, FieldKind.CURRENCY),
            avg_consumption=round_field(_ratio(totals.distance, totals.fuel), FieldKind.CONSUMPTION),
            cost_per_km=round_field(_ratio(summary_cost, totals.distance), FieldKind.COST_PER_KM)
            if totals.distance > 0
            else 0.0,
            vehicle_count=len(vehicles),
        ),
        t12m=TrailingSummary(
            total_distance=round_distance(t12m.distance),
            total_fuel=round_field(t12m.fuel, FieldKind.VOLUME),
            total_cost=round_field(t12m.cost, FieldKind.CURRENCY),
            avg_consumption=round_field(_ratio(t12m.distance, t12m.fuel), FieldKind.CONSUMPTION),
            cost_per_km=round_field(_ratio(t12m.cost, t12m.distance), FieldKind.COST_PER_KM)
            if t12m.distance > 0
            else 0.0,
        ),
        year_over_year=YearOverYear(
            current_year=current_year.to_model(now.year),
            previous_year=previous_year.to_model(now.year - 1),
            changes=YearChanges(
                distance=_percent_change(current_year.distance, previous_year.distance),
                cost=_percent_change(current_year.cost, previous_year.cost),
                consumption=_percent_change(current_year.avg_consumption, previous_year.avg_consumption),
            ),
        ),
        cost_breakdown=costs.breakdown(),
        projected_annual_costs=projected,
        vehicle_comparison=[_comparison(v, row) for v, row in zip(vehicles, rows, strict=True)],
        fuel_price_trend=sorted(fuel_prices, key=lambda p: p.date),
        vehicle_stats=rows,
        monthly=buckets,
        t12m_trend=rolling_trailing_twelve(buckets),
        consumption_trend=sorted(consumption, key=lambda p: p.date),
    )
