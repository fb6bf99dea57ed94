"""Vehicle cost and consumption aggregation engine.

Pure, synchronous functions over already-fetched records.  Nothing in this
package performs I/O, keeps state between calls or raises on incomplete
data.
"""

from drivetotal.engine.consumption import ConsumptionTrend, consumption_trend, iter_consumption_points
from drivetotal.engine.distance import resolve_distance, resolve_window_distance
from drivetotal.engine.monthly import MonthlySeriesBuilder, monthly_series, rolling_trailing_twelve
from drivetotal.engine.ownership import (
    OwnershipCosts,
    aggregate_ownership_costs,
    depreciation_to_date,
    financing_cost,
    lifetime_depreciation,
)
from drivetotal.engine.summary import fleet_stats, vehicle_stats

__all__ = [
    "ConsumptionTrend",
    "MonthlySeriesBuilder",
    "OwnershipCosts",
    "aggregate_ownership_costs",
    "consumption_trend",
    "depreciation_to_date",
    "financing_cost",
    "fleet_stats",
    "iter_consumption_points",
    "lifetime_depreciation",
    "monthly_series",
    "resolve_distance",
    "resolve_window_distance",
    "rolling_trailing_twelve",
    "vehicle_stats",
]
