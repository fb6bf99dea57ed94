"""Vehicle model."""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from drivetotal.models._base import DriveTotalModel, OptionalTimestamp, RecordId
from drivetotal.models.entries import FuelEntry, OwnershipCostEntry


class Vehicle(DriveTotalModel):
    """A vehicle together with the entries fetched for it.

    The calling layer is expected to hand over ``fuel_entries`` sorted by
    date ascending.  The other collections may come in any order.
    """

    id: RecordId = ""
    user_id: RecordId = ""
    name: str = ""
    make: str | None = None
    model: str | None = None
    year: int | None = None
    photo: str | None = None

    initial_odometer: float = 0.0
    """Odometer reading before the first logged fill-up."""

    purchase_price: float | None = None
    purchase_date: OptionalTimestamp = None
    depreciation_yearly: float | None = None
    """Linear depreciation estimate, currency per year."""
    sold_date: OptionalTimestamp = None
    sold_price: float | None = None

    financing_total_amount: float | None = None
    financing_monthly_payment: float | None = None
    financing_start_date: OptionalTimestamp = None
    financing_end_date: OptionalTimestamp = None

    fuel_entries: list[FuelEntry] = Field(default_factory=list)
    maintenance_entries: list[OwnershipCostEntry] = Field(default_factory=list)
    road_tax_entries: list[OwnershipCostEntry] = Field(default_factory=list)
    insurance_entries: list[OwnershipCostEntry] = Field(default_factory=list)

    @property
    def is_sold(self) -> bool:
        return self.sold_date is not None

    @property
    def status(self) -> str:
        return "sold" if self.is_sold else "active"

    @field_validator("initial_odometer", mode="before")
    @classmethod
    def _default_initial_odometer(cls, value: Any) -> Any:
        # Stores write NULL for vehicles created without a starting reading.
        return 0.0 if value is None else value
