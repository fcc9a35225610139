"""
Margin Guard: evaluates a proposed discount against the full cost structure
of a sale and decides whether it is approved, risky or blocked.

The evaluation is a pure function. Notifications for BLOCKED and RISKY
outcomes are returned as ``AlertEvent`` data; delivering them is up to the
caller (see ``utils.notifications.AlertDispatcher``).
"""

import logging
import math

from config.config import MarginGuardConfig
from models.enums import EvaluationStatus
from models.guard import (
    AlertEvent,
    DiscountEvaluationInput,
    EvaluationMetrics,
    EvaluationResult,
    SafeRecommendations,
)

from .exceptions import UndefinedMarginError

logger = logging.getLogger(__name__)


def _round_down(value: float, precision: int) -> float:
    factor = 10**precision
    return math.floor(value * factor) / factor


def _round_up(value: float, precision: int) -> float:
    factor = 10**precision
    return math.ceil(value * factor) / factor


def break_even_price(
    product_cost: float,
    operational_costs: float,
    commission: float,
    tax: float,
) -> float:
    """
    Price at which net profit is exactly zero with no discount.

    Raises UndefinedMarginError when commission and tax together take 100% or
    more of the price, since no price can then cover the costs.
    """
    net_share = 1 - commission - tax
    if net_share <= 0:
        raise UndefinedMarginError(
            f"Commission ({commission:.2%}) plus tax ({tax:.2%}) leave no revenue to cover costs"
        )
    return (product_cost + operational_costs) / net_share


def max_safe_discount(
    sales_price: float,
    product_cost: float,
    operational_costs: float,
    commission: float,
    tax: float,
) -> float:
    """Largest discount fraction that keeps net profit at or above zero (never negative)."""
    denominator = sales_price * (1 - commission - tax)
    if denominator <= 0:
        return 0.0
    return max(0.0, 1 - (product_cost + operational_costs) / denominator)


class MarginGuard:
    """
    Discount evaluator.

    Note that ``real_margin_percent`` is margin on *cost*
    (net profit / product cost), not margin on price.
    """

    def __init__(self, config: MarginGuardConfig | None = None):
        self.config = config or MarginGuardConfig()

    def evaluate(self, data: DiscountEvaluationInput) -> EvaluationResult:
        min_margin = (
            data.min_acceptable_margin
            if data.min_acceptable_margin is not None
            else self.config.default_min_margin_percent
        )
        commission = data.payment_method_commission
        tax = data.tax_percent

        final_price = data.sales_price * (1 - data.discount_percent)
        total_commission = final_price * commission
        total_tax = final_price * tax
        total_real_cost = data.product_cost + total_commission + total_tax + data.operational_costs
        net_profit = final_price - total_real_cost
        real_margin = net_profit / data.product_cost * 100 if data.product_cost > 0 else None

        original_profit = data.sales_price - (
            data.product_cost
            + data.sales_price * commission
            + data.sales_price * tax
            + data.operational_costs
        )

        alerts: list[str] = []
        events: list[AlertEvent] = []
        status = EvaluationStatus.APPROVED

        if net_profit < 0:
            status = EvaluationStatus.BLOCKED
            msg = "Sale at a loss: the operation produces a deficit."
            alerts.append(msg)
            events.append(
                AlertEvent(status, f"SALE BLOCKED\nReason: {msg}\nProfit: ${net_profit:.2f}")
            )
        elif real_margin is not None and real_margin < min_margin:
            status = EvaluationStatus.RISKY
            msg = (
                f"Insufficient margin: {real_margin:.2f}% is below the minimum "
                f"acceptable ({min_margin:g}%)."
            )
            alerts.append(msg)
            events.append(AlertEvent(status, f"RISKY SALE\nReason: {msg}"))

        discount_amount = data.sales_price * data.discount_percent
        ratio = self.config.aggressive_discount_ratio
        if original_profit > 0 and discount_amount > original_profit * ratio:
            alerts.append(
                f"Aggressive discount: consumes more than {ratio:.0%} of the original margin."
            )

        try:
            # Rounded up: a safe price never drops below break-even.
            min_safe_price = _round_up(
                break_even_price(data.product_cost, data.operational_costs, commission, tax),
                self.config.price_precision,
            )
        except UndefinedMarginError as e:
            min_safe_price = None
            alerts.append(f"Minimum safe price not computable: {e}.")

        # The safe discount is rounded down so applying it never makes a loss.
        recommendations = SafeRecommendations(
            max_safe_discount_percent=_round_down(
                max_safe_discount(
                    data.sales_price, data.product_cost, data.operational_costs, commission, tax
                ),
                self.config.discount_precision,
            ),
            min_safe_price=min_safe_price,
            alternatives=tuple(self.config.alternatives),
        )

        logger.debug(
            f"Discount evaluation: status={status.value} final_price={final_price:.2f} "
            f"net_profit={net_profit:.2f}"
        )
        return EvaluationResult(
            status=status,
            alerts=tuple(alerts),
            metrics=EvaluationMetrics(
                final_price=final_price,
                total_commission=total_commission,
                total_tax=total_tax,
                total_real_cost=total_real_cost,
                net_profit=net_profit,
                real_margin_percent=real_margin,
            ),
            recommendations=recommendations,
            alert_events=tuple(events),
        )

    async def evaluate_and_notify(self, data: DiscountEvaluationInput, dispatcher) -> EvaluationResult:
        """
        Evaluate and hand any alert events to ``dispatcher`` in the background.
        Notification failures never affect the returned result.
        """
        result = self.evaluate(data)
        if result.alert_events:
            dispatcher.schedule(result.alert_events)
        return result
