"""Normalization helpers.

Centralizes lenient parsing of values coming from record stores, HTTP
payloads and CSV exports.
"""

from __future__ import annotations

import math
from datetime import UTC, date, datetime, time
from typing import Any

# Threshold to distinguish seconds from milliseconds.
_MS_THRESHOLD = 1e11


def safe_float(value: Any) -> float | None:
    if value is None or value == "" or value == "--":
        return None
    if isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(result):
        return None
    return result


def safe_int(value: Any) -> int | None:
    parsed = safe_float(value)
    if parsed is None or math.isinf(parsed):
        return None
    return int(parsed)


def safe_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text if text else None


def positive_or_none(value: Any) -> float | None:
    """Return the parsed number when it is strictly positive, else ``None``.

    CSV exports and older clients write ``0`` or an empty cell for
    "not recorded"; both mean the same thing here.
    """
    parsed = safe_float(value)
    if parsed is None or parsed <= 0:
        return None
    return parsed


def to_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def parse_timestamp(value: Any) -> datetime | None:
    """Convert a record timestamp to an aware UTC datetime.

    Accepts datetimes, dates, ISO-8601 strings (date-only or full, with or
    without ``Z``) and epoch numbers in seconds or milliseconds.  Returns
    ``None`` for empty or unparseable values.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return to_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=UTC)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        ts = float(value)
        if math.isnan(ts) or math.isinf(ts):
            return None
        if abs(ts) >= _MS_THRESHOLD:
            ts /= 1000.0
        return datetime.fromtimestamp(ts, tz=UTC)
    text = safe_str(value)
    if text is None:
        return None
    try:
        return to_utc(datetime.fromisoformat(text))
    except ValueError:
        return None
