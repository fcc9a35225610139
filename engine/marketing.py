"""
Marketing alerts derived from the engine's own signals: deadstock needing a
clearance campaign, fast-growing products worth featuring, and the holiday
season.
"""

import logging
from collections.abc import Mapping, Sequence
from datetime import datetime

from models.anomaly import AnomalyAlert
from models.enums import SEVERITY_ORDER, AnomalyType, MarketingAlertType, Severity, Trend
from models.forecast import ForecastResult
from models.insight import MarketingAlert, MarketingAlertReport

logger = logging.getLogger(__name__)

HOLIDAY_MONTHS = (12, 1)


def marketing_alerts(
    anomalies: Sequence[AnomalyAlert],
    forecasts: Sequence[ForecastResult],
    as_of: datetime,
    names: Mapping[str, str] | None = None,
    trend_percent_threshold: int = 20,
    featured_products: int = 5,
) -> MarketingAlertReport:
    names = names or {}
    alerts = []

    deadstock = [a for a in anomalies if a.type == AnomalyType.DEADSTOCK]
    if deadstock:
        alerts.append(
            MarketingAlert(
                type=MarketingAlertType.ACTION_REQUIRED,
                priority=Severity.HIGH,
                title="Products without movement",
                message=(
                    f"{len(deadstock)} product(s) without sales in 90+ days. "
                    "A clearance campaign is recommended."
                ),
                action="Create a clearance promotion",
                data={"count": len(deadstock)},
            )
        )

    trending = [f for f in forecasts if f.trend == Trend.UP and f.trend_percent > trend_percent_threshold]
    if trending:
        alerts.append(
            MarketingAlert(
                type=MarketingAlertType.OPPORTUNITY,
                priority=Severity.MEDIUM,
                title="Trending products",
                message=(
                    f"{len(trending)} product(s) growing more than {trend_percent_threshold}%. "
                    "Feature them in marketing."
                ),
                action="Create a star products campaign",
                data={"products": [names.get(f.product_id, f.product_id) for f in trending[:featured_products]]},
            )
        )

    if as_of.month in HOLIDAY_MONTHS:
        alerts.append(
            MarketingAlert(
                type=MarketingAlertType.INFO,
                priority=Severity.MEDIUM,
                title="High season",
                message="Holiday season. Prepare stock and special promotions.",
                action="Review inventory for the holidays",
            )
        )

    alerts.sort(key=lambda a: SEVERITY_ORDER[a.priority])
    logger.info(f"Raised {len(alerts)} marketing alert(s)")
    return MarketingAlertReport(alerts)
