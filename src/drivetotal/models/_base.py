"""Base model shared by every drivetotal record and result type.

Every model inherits from :class:`DriveTotalModel` which provides:

* ``alias_generator=to_camel`` so the camelCase keys used by record
  stores and JSON clients (``fuelAmount``, ``initialOdometer``) map to
  snake_case fields, and results serialize back to the same keys.
* ``populate_by_name`` so Python callers can use the field names.
* Immutability: records are snapshots handed over by the calling layer.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel

from drivetotal.ingestion.normalize import parse_timestamp


def _require_timestamp(value: Any) -> datetime:
    parsed = parse_timestamp(value)
    if parsed is None:
        raise ValueError(f"not a valid timestamp: {value!r}")
    return parsed


def _coerce_id(value: Any) -> Any:
    # Record stores hand out integer or UUID keys; ids are opaque strings here.
    if value is None or isinstance(value, str):
        return value
    return str(value)


RecordTimestamp = Annotated[datetime, BeforeValidator(_require_timestamp)]
"""Required timestamp, normalized to aware UTC."""

OptionalTimestamp = Annotated[datetime | None, BeforeValidator(parse_timestamp)]
"""Optional timestamp; empty or unparseable input becomes ``None``."""

RecordId = Annotated[str, BeforeValidator(_coerce_id)]
"""Opaque record identifier."""


class DriveTotalModel(BaseModel):
    """Base for drivetotal records and statistics."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready camelCase representation."""
        return self.model_dump(mode="json", by_alias=True)
