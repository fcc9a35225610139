"""
Pricing advisor: turns stock urgency into directional price nudges.
No elasticity model is involved.
"""

import logging
import math
from collections.abc import Iterable

from config.config import PricingConfig
from models.enums import Urgency
from models.inventory import StockRecommendation
from models.pricing import PriceAdjustment, PriceAdjustmentPlan, PricingSuggestion

logger = logging.getLogger(__name__)


class PricingAdvisor:
    def __init__(self, config: PricingConfig | None = None):
        self.config = config or PricingConfig()

    def suggest_for(self, rec: StockRecommendation) -> PricingSuggestion | None:
        """Suggestion for a single recommendation; None for LOW/OK or unpriced products."""
        if rec.unit_price <= 0:
            return None
        if rec.urgency == Urgency.OVERSTOCK:
            factor = self.config.overstock_price_factor
            return PricingSuggestion(
                product_id=rec.product_id,
                product_name=rec.product_name,
                current_price=rec.unit_price,
                suggested_price=rec.unit_price * factor,
                reason=f"Excess stock liquidation ({rec.days_of_stock} days of inventory)",
                potential_impact="Free up capital and shelf space",
            )
        if rec.urgency == Urgency.CRITICAL:
            factor = self.config.critical_price_factor
            return PricingSuggestion(
                product_id=rec.product_id,
                product_name=rec.product_name,
                current_price=rec.unit_price,
                suggested_price=rec.unit_price * factor,
                reason="High demand / tight stock",
                potential_impact=f"Improve margin {round((factor - 1) * 100):+d}%",
            )
        return None

    def suggest(self, recommendations: Iterable[StockRecommendation]) -> list[PricingSuggestion]:
        """Overstock markdowns first, then critical-stock increases."""
        recommendations = list(recommendations)
        suggestions = []
        for urgency in (Urgency.OVERSTOCK, Urgency.CRITICAL):
            for rec in recommendations:
                if rec.urgency != urgency:
                    continue
                suggestion = self.suggest_for(rec)
                if suggestion is None:
                    logger.debug(f"Skipping pricing for {rec.product_id}: no current price")
                    continue
                suggestions.append(suggestion)
        return suggestions

    def markdown_percent(self, days_of_stock: int) -> int:
        """Automatic markdown for a given cover; 0 at or below ``auto_markdown_min_days``."""
        cfg = self.config
        if days_of_stock <= cfg.auto_markdown_min_days:
            return 0
        steps = math.floor((days_of_stock - cfg.auto_markdown_base_days) / cfg.auto_markdown_step_days)
        return min(cfg.auto_markdown_max_percent, steps * cfg.auto_markdown_step_percent)

    def automatic_adjustments(self, recommendations: Iterable[StockRecommendation]) -> PriceAdjustmentPlan:
        """
        Concrete markdowns for deeply overstocked products.

        These are flagged ``auto_apply``. Critical-stock increases stay as
        suggestions and are never applied automatically.
        """
        adjustments = []
        for rec in recommendations:
            if rec.urgency != Urgency.OVERSTOCK or rec.unit_price <= 0:
                continue
            percent = self.markdown_percent(rec.days_of_stock)
            if percent <= 0:
                continue
            new_price = round(rec.unit_price * (1 - percent / 100), 2)
            adjustments.append(
                PriceAdjustment(
                    product_id=rec.product_id,
                    product_name=rec.product_name,
                    current_price=rec.unit_price,
                    new_price=new_price,
                    change_percent=round((new_price / rec.unit_price - 1) * 100, 1),
                    reason=f"Critical overstock ({rec.days_of_stock} days). Automatic markdown.",
                    auto_apply=True,
                )
            )
        plan = PriceAdjustmentPlan(adjustments)
        if adjustments:
            logger.info(f"Planned {len(adjustments)} automatic markdown(s)")
        return plan
