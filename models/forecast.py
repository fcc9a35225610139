"""
Forecast data models.
"""

from dataclasses import dataclass

from .enums import Trend


@dataclass(frozen=True)
class ForecastResult:
    """
    Demand projection for one product.

    ``confidence`` is a data-volume heuristic (more sale records, higher
    value, capped below 1). It is not a statistical confidence interval and
    should not be read as a probability that the forecast is right.
    """

    product_id: str
    predicted_quantity_next_30_days: float
    confidence: float
    trend: Trend
    avg_daily_sales: float
    slope: float
    intercept: float = 0.0
    predicted_quantity_next_7_days: int = 0
    trend_percent: int = 0
    record_count: int = 0
    explanation: str | None = None

    @property
    def has_data(self) -> bool:
        return self.trend != Trend.INSUFFICIENT_DATA

    @classmethod
    def insufficient(cls, product_id: str, record_count: int = 0) -> "ForecastResult":
        """Sentinel result for products with too few sale records."""
        return cls(
            product_id=product_id,
            predicted_quantity_next_30_days=0,
            confidence=0.0,
            trend=Trend.INSUFFICIENT_DATA,
            avg_daily_sales=0.0,
            slope=0.0,
            record_count=record_count,
        )
