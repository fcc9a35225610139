"""
Promotion planner: proposes promotions from slow-moving stock, overstock and
trending products. Proposed discounts are suggestions; run them through the
Margin Guard before applying.
"""

import logging
from collections.abc import Sequence
from datetime import datetime, timedelta

from models.anomaly import AnomalyAlert
from models.enums import AnomalyType, PromotionType, Trend, Urgency
from models.forecast import ForecastResult
from models.insight import Promotion, PromotionProduct
from models.inventory import StockRecommendation

logger = logging.getLogger(__name__)


def _from_alert(alert: AnomalyAlert) -> PromotionProduct:
    return PromotionProduct(alert.product_id, alert.product_name, int(alert.value))


def plan_promotions(
    anomalies: Sequence[AnomalyAlert],
    forecasts: Sequence[ForecastResult],
    recommendations: Sequence[StockRecommendation],
    as_of: datetime,
    names: dict[str, str] | None = None,
) -> list[Promotion]:
    names = names or {}
    deadstock = [a for a in anomalies if a.type == AnomalyType.DEADSTOCK]
    slow_movers = [a for a in anomalies if a.type == AnomalyType.SLOW_MOVING]
    fast_movers = [f for f in forecasts if f.trend == Trend.UP][:3]
    overstock = [r for r in recommendations if r.urgency == Urgency.OVERSTOCK][:5]

    promotions = []
    if deadstock:
        promotions.append(
            Promotion(
                type=PromotionType.DEADSTOCK_CLEARANCE,
                name="Stock Clearance",
                description="Products without movement in 90+ days at special discounts",
                products=[_from_alert(a) for a in deadstock],
                suggested_discount_percent=30,
                estimated_impact=f"Release {sum(int(a.value) for a in deadstock)} idle units",
                starts_at=as_of,
                ends_at=as_of + timedelta(days=14),
            )
        )

    if len(slow_movers) >= 3:
        promotions.append(
            Promotion(
                type=PromotionType.SLOW_MOVER,
                name="Seasonal Offers",
                description="Selected slow-rotation products",
                products=[_from_alert(a) for a in slow_movers[:10]],
                suggested_discount_percent=15,
                estimated_impact="Speed up rotation by 50%",
                starts_at=as_of,
                ends_at=as_of + timedelta(days=7),
            )
        )

    bundle_slow = slow_movers[:3]
    if fast_movers and bundle_slow:
        promotions.append(
            Promotion(
                type=PromotionType.BUNDLE,
                name="Special Bundles",
                description="Pair trending products with slow movers",
                products=[
                    PromotionProduct(f.product_id, names.get(f.product_id, f.product_id), 0)
                    for f in fast_movers
                ]
                + [_from_alert(a) for a in bundle_slow],
                suggested_discount_percent=10,
                estimated_impact="Raise average ticket by 20%",
                starts_at=as_of,
                ends_at=as_of + timedelta(days=30),
            )
        )

    if len(overstock) >= 2:
        promotions.append(
            Promotion(
                type=PromotionType.VOLUME_DISCOUNT,
                name="Volume Discount",
                description="Buy more, save more on selected products",
                products=[
                    PromotionProduct(r.product_id, r.product_name, r.current_stock) for r in overstock
                ],
                suggested_discount_percent=20,
                estimated_impact="Reduce inventory by 40%",
                starts_at=as_of,
                ends_at=as_of + timedelta(days=21),
            )
        )

    logger.info(f"Planned {len(promotions)} promotion(s)")
    return promotions
