"""
Pricing-related data models.
Includes the PricingSuggestion and PriceAdjustment outputs of the pricing advisor.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PricingSuggestion:
    """
    Directional price adjustment for a product.
    """

    product_id: str
    product_name: str
    current_price: float
    suggested_price: float
    reason: str
    potential_impact: str

    @property
    def change_percent(self) -> float:
        if self.current_price <= 0:
            return 0.0
        return round((self.suggested_price / self.current_price - 1) * 100, 1)


@dataclass(frozen=True)
class PriceAdjustment:
    """A concrete new price; ``auto_apply`` marks markdowns that need no approval."""

    product_id: str
    product_name: str
    current_price: float
    new_price: float
    change_percent: float
    reason: str
    auto_apply: bool


@dataclass(frozen=True)
class PriceAdjustmentPlan:
    adjustments: list[PriceAdjustment] = field(default_factory=list)

    @property
    def auto_apply_count(self) -> int:
        return sum(1 for a in self.adjustments if a.auto_apply)

    @property
    def pending_approval_count(self) -> int:
        return sum(1 for a in self.adjustments if not a.auto_apply)
