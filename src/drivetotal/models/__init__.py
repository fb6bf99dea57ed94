"""Data models for drivetotal records and statistics."""

from drivetotal.models._base import DriveTotalModel, OptionalTimestamp, RecordId, RecordTimestamp
from drivetotal.models.entries import FuelEntry, OwnershipCostEntry
from drivetotal.models.stats import (
    ComparisonStats,
    ConsumptionPoint,
    CostBreakdownItem,
    FleetStats,
    FleetSummary,
    FuelPricePoint,
    MonthBucket,
    ProjectedAnnualCosts,
    ProjectionBasis,
    RollingMonth,
    TrailingSummary,
    VehicleComparison,
    VehicleStats,
    VehicleSummaryRow,
    YearChanges,
    YearOverYear,
    YearTotals,
)
from drivetotal.models.vehicle import Vehicle

__all__ = [
    "ComparisonStats",
    "ConsumptionPoint",
    "CostBreakdownItem",
    "DriveTotalModel",
    "FleetStats",
    "FleetSummary",
    "FuelEntry",
    "FuelPricePoint",
    "MonthBucket",
    "OptionalTimestamp",
    "OwnershipCostEntry",
    "ProjectedAnnualCosts",
    "ProjectionBasis",
    "RecordId",
    "RecordTimestamp",
    "RollingMonth",
    "TrailingSummary",
    "Vehicle",
    "VehicleComparison",
    "VehicleStats",
    "VehicleSummaryRow",
    "YearChanges",
    "YearOverYear",
    "YearTotals",
]
