"""
Demonstrates the Margin Guard evaluating a few discount proposals and sending
alerts for the risky and blocked ones.

Alerts go to an in-memory channel, and also to a webhook when
SIGNAL_ALERT_WEBHOOK_URL is set.
"""

import asyncio

from config.config import EngineConfig
from connectors.dummy_notification_channel import DummyNotificationChannel
from connectors.webhook_channel import WebhookNotificationChannel
from engine.margin_guard import MarginGuard
from models.guard import DiscountEvaluationInput
from utils.logger import get_logger
from utils.notifications import AlertDispatcher

logger = get_logger("demos.margin_guard")

PROPOSALS = {
    "10% off, card payment": DiscountEvaluationInput(
        product_cost=1000,
        sales_price=2000,
        discount_percent=0.10,
        payment_method_commission=0.05,
        tax_percent=0.21,
        operational_costs=200,
    ),
    "10% off, 15% margin floor": DiscountEvaluationInput(
        product_cost=1000,
        sales_price=2000,
        discount_percent=0.10,
        payment_method_commission=0.05,
        tax_percent=0.21,
        operational_costs=200,
        min_acceptable_margin=15,
    ),
    "40% off clearance": DiscountEvaluationInput(
        product_cost=1000,
        sales_price=2000,
        discount_percent=0.40,
        payment_method_commission=0.05,
        tax_percent=0.21,
        operational_costs=200,
    ),
}


async def run_margin_guard_demo():
    logger.info("--- Margin Guard Demo ---")
    config = EngineConfig.from_env()
    guard = MarginGuard(config.margin_guard)

    channel = DummyNotificationChannel()
    channels = [channel]
    if config.notification.webhook_url:
        channels.append(
            WebhookNotificationChannel(config.notification.webhook_url, timeout=config.notification.timeout_seconds)
        )
    dispatcher = AlertDispatcher(channels, timeout_seconds=config.notification.timeout_seconds)

    results = {}
    for label, proposal in PROPOSALS.items():
        result = await guard.evaluate_and_notify(proposal, dispatcher)
        results[label] = result
        metrics = result.metrics
        margin = "n/a" if metrics.real_margin_percent is None else f"{metrics.real_margin_percent:.2f}%"
        logger.info(
            f"{label}: {result.status.value} | final price {metrics.final_price:.2f} | "
            f"net profit {metrics.net_profit:.2f} | margin {margin}"
        )
        for alert in result.alerts:
            logger.info(f"  alert: {alert}")
        recs = result.recommendations
        logger.info(
            f"  max safe discount {recs.max_safe_discount_percent:.2%}, min safe price {recs.min_safe_price}"
        )

    await dispatcher.drain()
    logger.info(f"Notifications delivered to the in-memory channel: {len(channel.messages)}")
    logger.info("--- Margin Guard Demo Finished ---")
    return results


if __name__ == "__main__":
    asyncio.run(run_margin_guard_demo())
