"""
Stock policy: combines a stock position with its demand forecast into an
urgency classification and a reorder quantity.
"""

import logging
import math
from collections.abc import Iterable

from config.config import StockPolicyConfig
from models.enums import Urgency
from models.forecast import ForecastResult
from models.inventory import StockPosition, StockRecommendation

logger = logging.getLogger(__name__)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


class StockPolicyEngine:
    """
    Reorder policy based on days of stock.

    - reorder point = ceil(avg daily sales * safety_cover_days)
    - order up to target_cover_multiplier * reorder point
    """

    def __init__(self, config: StockPolicyConfig | None = None):
        self.config = config or StockPolicyConfig()

    def classify_urgency(self, days_of_stock: int) -> Urgency:
        """Evaluated in priority order: CRITICAL, LOW, OVERSTOCK, OK."""
        if days_of_stock < self.config.critical_days:
            return Urgency.CRITICAL
        elif days_of_stock < self.config.low_days:
            return Urgency.LOW
        elif days_of_stock > self.config.overstock_days:
            return Urgency.OVERSTOCK
        else:
            return Urgency.OK

    def recommend(
        self, position: StockPosition, forecast: ForecastResult
    ) -> StockRecommendation | None:
        """
        Return the recommendation for one product, or None when the forecast
        cannot support one (no data, or too little average demand to express
        stock in days).
        """
        if position.product_id != forecast.product_id:
            raise ValueError(
                f"Position {position.product_id} does not match forecast {forecast.product_id}"
            )
        if not forecast.has_data or forecast.avg_daily_sales <= self.config.min_avg_daily_sales:
            return None

        avg = forecast.avg_daily_sales
        days_of_stock = _round_half_up(position.current_stock / avg)
        reorder_point = math.ceil(avg * self.config.safety_cover_days)
        suggested_order_qty = max(
            0, reorder_point * self.config.target_cover_multiplier - position.current_stock
        )

        return StockRecommendation(
            product_id=position.product_id,
            product_name=position.product_name,
            current_stock=position.current_stock,
            avg_daily_sales=avg,
            days_of_stock=days_of_stock,
            reorder_point=reorder_point,
            suggested_order_qty=suggested_order_qty,
            urgency=self.classify_urgency(days_of_stock),
            unit_price=position.unit_price,
        )

    def recommend_all(
        self, pairs: Iterable[tuple[StockPosition, ForecastResult]]
    ) -> list[StockRecommendation]:
        """Actionable recommendations only (OK is left out), most urgent first."""
        results = []
        for position, forecast in pairs:
            rec = self.recommend(position, forecast)
            if rec is None or not rec.is_actionable:
                continue
            results.append(rec)
        results.sort(key=lambda r: r.days_of_stock)
        logger.info(f"Stock policy produced {len(results)} actionable recommendation(s)")
        return results
