"""drivetotal - Fuel, consumption and ownership-cost statistics for vehicle fleets."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("drivetotal")
except PackageNotFoundError:
    __version__ = "0+local"
from drivetotal.config import DriveTotalConfig
from drivetotal.engine import (
    ConsumptionTrend,
    MonthlySeriesBuilder,
    consumption_trend,
    fleet_stats,
    monthly_series,
    resolve_distance,
    vehicle_stats,
)
from drivetotal.exceptions import (
    DriveTotalAuthError,
    DriveTotalConfigError,
    DriveTotalError,
    DriveTotalImportError,
    DriveTotalNotFoundError,
    DriveTotalRateLimitError,
)
from drivetotal.models import (
    ConsumptionPoint,
    FleetStats,
    FleetSummary,
    FuelEntry,
    MonthBucket,
    OwnershipCostEntry,
    Vehicle,
    VehicleStats,
)
from drivetotal.rounding import FieldKind, round_field

__all__ = [
    "__version__",
    "ConsumptionPoint",
    "ConsumptionTrend",
    "DriveTotalAuthError",
    "DriveTotalConfig",
    "DriveTotalConfigError",
    "DriveTotalError",
    "DriveTotalImportError",
    "DriveTotalNotFoundError",
    "DriveTotalRateLimitError",
    "FieldKind",
    "FleetStats",
    "FleetSummary",
    "FuelEntry",
    "MonthBucket",
    "MonthlySeriesBuilder",
    "OwnershipCostEntry",
    "Vehicle",
    "VehicleStats",
    "consumption_trend",
    "fleet_stats",
    "monthly_series",
    "resolve_distance",
    "round_field",
    "vehicle_stats",
]
