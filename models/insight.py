"""
Data models for the insight summary, promotion proposals and marketing alerts.
"""

from dataclasses import dataclass, field
from datetime import datetime

from .anomaly import AnomalyAlert
from .enums import MarketingAlertType, PromotionType, Severity
from .forecast import ForecastResult
from .inventory import StockRecommendation
from .pricing import PriceAdjustmentPlan, PricingSuggestion


@dataclass(frozen=True)
class InsightCounts:
    total_products: int
    trending_up: int
    trending_down: int
    critical_stock_items: int
    high_priority_alerts: int


@dataclass(frozen=True)
class InsightSummary:
    """Dashboard view composed from forecasts, stock, anomaly and pricing outputs."""

    counts: InsightCounts
    top_trending: list[ForecastResult] = field(default_factory=list)
    critical_stock: list[StockRecommendation] = field(default_factory=list)
    high_alerts: list[AnomalyAlert] = field(default_factory=list)
    pricing_suggestions: list[PricingSuggestion] = field(default_factory=list)


@dataclass(frozen=True)
class PromotionProduct:
    product_id: str
    product_name: str
    current_stock: int


@dataclass(frozen=True)
class Promotion:
    type: PromotionType
    name: str
    description: str
    products: list[PromotionProduct]
    suggested_discount_percent: int
    estimated_impact: str
    starts_at: datetime
    ends_at: datetime


@dataclass(frozen=True)
class MarketingAlert:
    type: MarketingAlertType
    priority: Severity
    title: str
    message: str
    action: str | None = None
    data: dict = field(default_factory=dict)


@dataclass(frozen=True)
class MarketingAlertReport:
    """Marketing alerts ordered HIGH, MEDIUM, LOW, with per-type counts."""

    alerts: list[MarketingAlert] = field(default_factory=list)

    def _count(self, alert_type: MarketingAlertType) -> int:
        return sum(1 for a in self.alerts if a.type == alert_type)

    @property
    def action_required(self) -> int:
        return self._count(MarketingAlertType.ACTION_REQUIRED)

    @property
    def opportunities(self) -> int:
        return self._count(MarketingAlertType.OPPORTUNITY)

    @property
    def info(self) -> int:
        return self._count(MarketingAlertType.INFO)

@dataclass(frozen=True)
class InsightReport:
    """Every per-catalog output of one analysis run, plus the composed summary."""

    as_of: datetime
    forecasts: list[ForecastResult]
    recommendations: list[StockRecommendation]
    anomalies: list[AnomalyAlert]
    pricing_suggestions: list[PricingSuggestion]
    summary: InsightSummary
    price_adjustments: PriceAdjustmentPlan = field(default_factory=PriceAdjustmentPlan)
    skipped_products: list[str] = field(default_factory=list)
