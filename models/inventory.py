"""
Inventory-related data models.
Includes the StockPosition snapshot and the StockRecommendation policy output.
"""

from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .enums import Urgency


class StockPosition(BaseModel):
    """
    Current stock snapshot for a product as reported by the inventory service.
    ``current_stock`` may be negative; the anomaly detector flags that.
    """

    model_config = ConfigDict(frozen=True)

    product_id: str
    product_name: str
    current_stock: int
    unit_price: float = Field(default=0.0, ge=0)
    unit_cost: float | None = Field(default=None, ge=0)
    last_sold_at: datetime | None = None


@dataclass(frozen=True)
class StockRecommendation:
    """
    Reorder decision for a product.
    """

    product_id: str
    product_name: str
    current_stock: int
    avg_daily_sales: float
    days_of_stock: int
    reorder_point: int
    suggested_order_qty: int
    urgency: Urgency
    unit_price: float = 0.0

    @property
    def is_actionable(self) -> bool:
        return self.urgency != Urgency.OK
