"""
Demand forecasting over a daily sales series.

Fits a linear trend to the observed window and projects it over the
forecast horizon. Closed-form, single pass; nothing is learned or kept
between calls.
"""

import logging
from collections.abc import Iterable

import numpy as np

from config.config import ForecastConfig
from models.enums import Trend
from models.forecast import ForecastResult
from models.sales import DailySeries
from utils.stats import linear_regression, mean

logger = logging.getLogger(__name__)


class DemandForecaster:
    """Projects demand from a DailySeries using an OLS trend line."""

    def __init__(self, config: ForecastConfig | None = None):
        self.config = config or ForecastConfig()

    def forecast(self, series: DailySeries) -> ForecastResult:
        """
        Forecast the next ``horizon_days`` of demand for the series' product.

        Products with fewer than ``min_sale_records`` records in the window get
        the INSUFFICIENT_DATA sentinel regardless of the series values.
        """
        if series.record_count < self.config.min_sale_records:
            logger.debug(
                f"Insufficient data for {series.product_id}: "
                f"{series.record_count} record(s) < {self.config.min_sale_records}"
            )
            return ForecastResult.insufficient(series.product_id, series.record_count)

        n = len(series)
        slope, intercept = linear_regression(np.arange(n), series.quantities)

        future_days = np.arange(n, n + self.config.horizon_days)
        # Negative daily projections count as zero demand.
        daily_projection = np.maximum(0.0, slope * future_days + intercept)
        predicted_30 = float(daily_projection.sum())

        avg_daily_sales = mean(series.quantities)
        trend = self.classify_trend(slope)
        confidence = min(
            self.config.confidence_cap,
            series.record_count / self.config.confidence_divisor,
        )

        result = ForecastResult(
            product_id=series.product_id,
            predicted_quantity_next_30_days=predicted_30,
            confidence=confidence,
            trend=trend,
            avg_daily_sales=avg_daily_sales,
            slope=slope,
            intercept=intercept,
            predicted_quantity_next_7_days=round(predicted_30 * 7 / self.config.horizon_days),
            trend_percent=min(100, abs(round(slope * 100))),
            record_count=series.record_count,
        )
        logger.debug(
            f"Forecast for {series.product_id}: trend={trend.value} slope={slope:.4f} "
            f"next30={predicted_30:.1f} avg={avg_daily_sales:.2f}"
        )
        return result

    def forecast_many(self, series_list: Iterable[DailySeries]) -> list[ForecastResult]:
        return [self.forecast(series) for series in series_list]

    def classify_trend(self, slope: float) -> Trend:
        threshold = self.config.trend_slope_threshold
        if slope > threshold:
            return Trend.UP
        if slope < -threshold:
            return Trend.DOWN
        return Trend.STABLE
