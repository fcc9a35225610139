"""
Data models for the Margin Guard (discount evaluation).
"""

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field

from .enums import EvaluationStatus


class DiscountEvaluationInput(BaseModel):
    """
    Price/cost structure of a proposed sale.

    Fractions (discount, commission, tax) are expressed in [0, 1]; the
    minimum acceptable margin is a percentage (10 means 10%).
    """

    model_config = ConfigDict(frozen=True)

    product_cost: float = Field(ge=0)
    sales_price: float = Field(ge=0)
    discount_percent: float = Field(default=0.0, ge=0, le=1)
    payment_method_commission: float = Field(default=0.0, ge=0, le=1)
    tax_percent: float = Field(default=0.0, ge=0, le=1)
    operational_costs: float = Field(default=0.0, ge=0)
    min_acceptable_margin: float | None = None  # Percentage; None uses the configured default (10)


@dataclass(frozen=True)
class EvaluationMetrics:
    final_price: float
    total_commission: float
    total_tax: float
    total_real_cost: float
    net_profit: float
    real_margin_percent: float | None  # Margin on cost; None when product cost is 0


@dataclass(frozen=True)
class SafeRecommendations:
    max_safe_discount_percent: float
    min_safe_price: float | None  # None when commission + tax leave nothing to cover costs
    alternatives: tuple[str, ...] = ()


@dataclass(frozen=True)
class AlertEvent:
    """A notification the caller should hand to the notification channel."""

    status: EvaluationStatus
    message: str


@dataclass(frozen=True)
class EvaluationResult:
    status: EvaluationStatus
    alerts: tuple[str, ...]
    metrics: EvaluationMetrics
    recommendations: SafeRecommendations
    alert_events: tuple[AlertEvent, ...] = field(default_factory=tuple)

    @property
    def is_blocked(self) -> bool:
        return self.status == EvaluationStatus.BLOCKED
