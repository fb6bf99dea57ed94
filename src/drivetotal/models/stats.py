"""Statistics returned by the aggregation engine.

These models are the response contract: their camelCase serialization is
sent to clients as-is, so field names must not change.
"""

from __future__ import annotations

from pydantic import Field

from drivetotal.models._base import DriveTotalModel


class MonthBucket(DriveTotalModel):
    """Fuel and cost accumulated over one calendar month."""

    month: str
    """``YYYY-MM`` key."""
    fuel: float = 0.0
    cost: float = 0.0
    distance: int = 0


class ConsumptionPoint(DriveTotalModel):
    """Fuel efficiency over one full-to-full refuelling interval."""

    date: str
    """``YYYY-MM-DD`` of the closing fill-up."""
    consumption: float
    """Kilometers per liter, two decimals."""
    vehicle: str


class FuelPricePoint(DriveTotalModel):
    date: str
    price: float
    vehicle: str


class VehicleStats(DriveTotalModel):
    """Statistics for a single vehicle, ownership costs included.

    ``cost_per_km`` and ``total_cost`` are kept for older consumers and
    always equal ``total_cost_per_km`` and ``total_fuel_cost``.
    """

    total_distance: float = 0.0
    total_fuel: float = 0.0
    total_fuel_cost: float = 0.0
    avg_consumption: float = 0.0
    fuel_cost_per_km: float = 0.0
    total_maintenance_cost: float = 0.0
    total_road_tax_cost: float = 0.0
    total_insurance_cost: float = 0.0
    total_depreciation_to_date: float = 0.0
    total_other_cost: float = 0.0
    total_spend: float = 0.0
    total_cost_per_km: float = 0.0
    cost_per_km: float = 0.0
    total_cost: float = 0.0


class FleetSummary(DriveTotalModel):
    total_distance: int = 0
    total_fuel: float = 0.0
    total_cost: float = 0.0
    avg_consumption: float = 0.0
    cost_per_km: float = 0.0
    vehicle_count: int = 0


class TrailingSummary(DriveTotalModel):
    """Totals over the trailing twelve months."""

    total_distance: int = 0
    total_fuel: float = 0.0
    total_cost: float = 0.0
    avg_consumption: float = 0.0
    cost_per_km: float = 0.0


class YearTotals(DriveTotalModel):
    year: int
    distance: int = 0
    fuel: float = 0.0
    cost: float = 0.0
    avg_consumption: float = 0.0
    entries: int = 0


class YearChanges(DriveTotalModel):
    """Percentage change from the previous year; ``None`` without a baseline."""

    distance: int | None = None
    cost: int | None = None
    consumption: int | None = None


class YearOverYear(DriveTotalModel):
    current_year: YearTotals
    previous_year: YearTotals
    changes: YearChanges = Field(default_factory=YearChanges)


class CostBreakdownItem(DriveTotalModel):
    name: str
    value: float
    color: str


class ProjectionBasis(DriveTotalModel):
    cost: int
    distance: int


class ProjectedAnnualCosts(DriveTotalModel):
    fuel: int = 0
    distance: int = 0
    based_on_t12m: ProjectionBasis | None = Field(default=None, alias="basedOnT12M")


class VehicleSummaryRow(DriveTotalModel):
    """Per-vehicle row of the fleet dashboard.

    Unlike :class:`VehicleStats`, ``cost_per_km`` here is the *fuel* cost per
    kilometer and ``total_cost`` covers every cost category, financing and
    lifetime depreciation included.
    """

    id: str
    total_distance: int = 0
    avg_consumption: float = 0.0
    cost_per_km: float = 0.0
    total_cost: float = 0.0
    total_cost_per_km: float = 0.0


class ComparisonStats(DriveTotalModel):
    total_distance: int = 0
    avg_consumption: float = 0.0
    fuel_cost_per_km: float = 0.0
    total_cost: float = 0.0
    total_cost_per_km: float = 0.0


class VehicleComparison(DriveTotalModel):
    id: str
    name: str
    make: str | None = None
    model: str | None = None
    year: int | None = None
    photo: str | None = None
    status: str = "active"
    stats: ComparisonStats = Field(default_factory=ComparisonStats)


class RollingMonth(DriveTotalModel):
    """Trailing-twelve-month totals ending at ``month``."""

    month: str
    fuel: float = 0.0
    cost: float = 0.0
    distance: int = 0
    avg_consumption: float = 0.0
    cost_per_km: float = 0.0
    months_included: int = 0


class FleetStats(DriveTotalModel):
    """Dashboard statistics across all vehicles of one user."""

    summary: FleetSummary = Field(default_factory=FleetSummary)
    t12m: TrailingSummary = Field(default_factory=TrailingSummary, alias="t12m")
    year_over_year: YearOverYear
    cost_breakdown: list[CostBreakdownItem] = Field(default_factory=list)
    projected_annual_costs: ProjectedAnnualCosts = Field(default_factory=ProjectedAnnualCosts)
    vehicle_comparison: list[VehicleComparison] = Field(default_factory=list)
    fuel_price_trend: list[FuelPricePoint] = Field(default_factory=list)
    vehicle_stats: list[VehicleSummaryRow] = Field(default_factory=list)
    monthly: list[MonthBucket] = Field(default_factory=list)
    t12m_trend: list[RollingMonth] = Field(default_factory=list, alias="t12mTrend")
    consumption_trend: list[ConsumptionPoint] = Field(default_factory=list)
