"""Internal constants shared across the library."""

from datetime import timedelta

# Julian year, averages out leap years for depreciation accrual.
DAYS_PER_YEAR = 365.25
ONE_YEAR = timedelta(days=DAYS_PER_YEAR)

# Trailing-window sizes for the fleet dashboard.
TRAILING_MONTHS = 12
ROLLING_TREND_MONTHS = 24

DEFAULT_TOKEN_TTL_SECONDS = 7 * 24 * 3600
DEFAULT_API_RATE_LIMIT = 100
DEFAULT_AUTH_RATE_LIMIT = 5
DEFAULT_RATE_WINDOW_SECONDS = 60.0

# Cost breakdown categories in display order.
COST_CATEGORY_COLORS: dict[str, str] = {
    "Fuel": "#3b82f6",
    "Maintenance": "#f59e0b",
    "Road Tax": "#10b981",
    "Insurance": "#8b5cf6",
    "Financing": "#ef4444",
    "Depreciation": "#6b7280",
}
