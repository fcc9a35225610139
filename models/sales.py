"""
Sales-related data models.
Includes the SaleRecord ledger line and the DailySeries built from it.
"""

from dataclasses import dataclass, field
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .enums import RejectionReason


class SaleRecord(BaseModel):
    """A single sold line item as read from the sales ledger."""

    model_config = ConfigDict(frozen=True)

    product_id: str
    quantity: int = Field(gt=0)
    occurred_at: datetime
    unit_price: float | None = Field(default=None, ge=0)
    unit_cost: float | None = Field(default=None, ge=0)


@dataclass(frozen=True)
class RejectedRecord:
    """A sale record left out of a daily series, with the reason."""

    record: SaleRecord
    reason: RejectionReason


@dataclass(frozen=True)
class DailySeries:
    """
    Fixed-length daily quantity series for one product.

    ``quantities[i]`` is the units sold on day ``i`` counted from
    ``window_start``. Days without sales are present with 0.
    """

    product_id: str
    window_start: datetime
    quantities: tuple[int, ...]
    record_count: int = 0
    rejected: tuple[RejectedRecord, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.quantities)

    @property
    def total_quantity(self) -> int:
        return sum(self.quantities)

    def last_days(self, days: int) -> tuple[int, ...]:
        """Return the trailing ``days`` entries of the series."""
        if days <= 0:
            return ()
        return self.quantities[-days:]
