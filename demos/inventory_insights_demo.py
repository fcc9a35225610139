"""
Demonstrates the full inventory signal pipeline on a synthetic beverage catalog:
forecasts, stock recommendations, anomalies, pricing suggestions, the
dashboard summary, automatic markdowns, promotion proposals and marketing
alerts.

Set OPENAI_API_KEY to also get one-line explanations for the top moving
products; without it the demo runs offline.
"""

import asyncio
import os
from datetime import datetime

from openai import AsyncOpenAI

from config.config import EngineConfig
from connectors.dummy_inventory_service import DummyInventoryService
from connectors.dummy_sales_ledger import DummySalesLedger
from engine.explanations import TrendExplainer
from engine.insights import InsightAggregator
from engine.marketing import marketing_alerts
from engine.promotions import plan_promotions
from utils.data_generation import generate_synthetic_sales
from utils.logger import get_logger

logger = get_logger("demos.inventory_insights")


async def run_inventory_insights_demo(num_products: int = 10, seed: int = 42):
    logger.info("--- Inventory Insights Demo ---")
    config = EngineConfig.from_env()
    as_of = datetime.now().replace(hour=0, minute=0, second=0, microsecond=0)

    records, positions = generate_synthetic_sales(
        as_of, num_products=num_products, days=config.forecast.lookback_days, seed=seed
    )
    logger.info(f"Generated {len(records)} sale records for {len(positions)} products")

    explainer = None
    if os.getenv("OPENAI_API_KEY"):
        explainer = TrendExplainer(AsyncOpenAI())
    else:
        logger.info("OPENAI_API_KEY not set; skipping trend explanations")

    aggregator = InsightAggregator(
        DummySalesLedger(records),
        DummyInventoryService(positions),
        config=config,
        explainer=explainer,
    )
    report = await aggregator.analyze(as_of)

    for forecast in report.forecasts:
        line = (
            f"{forecast.product_id}: trend={forecast.trend.value} "
            f"next30={forecast.predicted_quantity_next_30_days:.1f} "
            f"confidence={forecast.confidence:.2f}"
        )
        if forecast.explanation:
            line += f" | {forecast.explanation}"
        logger.info(line)

    for rec in report.recommendations:
        logger.info(
            f"{rec.product_name}: {rec.urgency.value} ({rec.days_of_stock} days), "
            f"order {rec.suggested_order_qty} units"
        )
    for alert in report.anomalies:
        logger.info(f"[{alert.severity.value}] {alert.product_name}: {alert.message}")
    for suggestion in report.pricing_suggestions:
        logger.info(
            f"{suggestion.product_name}: {suggestion.current_price:.2f} -> "
            f"{suggestion.suggested_price:.2f} ({suggestion.reason})"
        )

    plan = report.price_adjustments
    for adjustment in plan.adjustments:
        logger.info(
            f"{adjustment.product_name}: {adjustment.current_price:.2f} -> {adjustment.new_price:.2f} "
            f"({adjustment.change_percent:+.1f}%, auto={adjustment.auto_apply})"
        )
    logger.info(f"Price adjustments: {plan.auto_apply_count} automatic, {plan.pending_approval_count} pending")

    counts = report.summary.counts
    logger.info(
        f"Summary: {counts.total_products} products, {counts.trending_up} up, "
        f"{counts.trending_down} down, {counts.critical_stock_items} critical, "
        f"{counts.high_priority_alerts} high alerts"
    )

    names = {p.product_id: p.product_name for p in positions}
    promotions = plan_promotions(
        report.anomalies, report.forecasts, report.recommendations, as_of, names=names
    )
    for promo in promotions:
        logger.info(
            f"Promotion '{promo.name}' ({promo.suggested_discount_percent}% off, "
            f"{len(promo.products)} products): {promo.estimated_impact}"
        )

    alerts = marketing_alerts(report.anomalies, report.forecasts, as_of, names=names)
    for alert in alerts.alerts:
        logger.info(f"[{alert.type.value}/{alert.priority.value}] {alert.title}: {alert.message}")

    logger.info("--- Inventory Insights Demo Finished ---")
    return report


if __name__ == "__main__":
    asyncio.run(run_inventory_insights_demo())
