from datetime import datetime, timedelta

from engine.promotions import plan_promotions
from models.anomaly import AnomalyAlert
from models.enums import AnomalyType, PromotionType, Severity, Trend, Urgency
from models.forecast import ForecastResult
from models.inventory import StockRecommendation

AS_OF = datetime(2024, 3, 1)


def _stock_alert(product_id: str, kind: AnomalyType, stock: int = 10) -> AnomalyAlert:
    return AnomalyAlert(
        type=kind,
        severity=Severity.HIGH if kind == AnomalyType.DEADSTOCK else Severity.MEDIUM,
        product_id=product_id,
        product_name=f"Name {product_id}",
        message="No sales",
        value=stock,
    )


def _up(product_id: str) -> ForecastResult:
    return ForecastResult(
        product_id=product_id,
        predicted_quantity_next_30_days=120,
        confidence=0.9,
        trend=Trend.UP,
        avg_daily_sales=4,
        slope=0.2,
    )


def _overstock(product_id: str) -> StockRecommendation:
    return StockRecommendation(
        product_id=product_id,
        product_name=f"Name {product_id}",
        current_stock=500,
        avg_daily_sales=2,
        days_of_stock=250,
        reorder_point=28,
        suggested_order_qty=0,
        urgency=Urgency.OVERSTOCK,
    )


def test_no_signals_no_promotions():
    assert plan_promotions([], [], [], AS_OF) == []


def test_deadstock_clearance():
    anomalies = [_stock_alert("D1", AnomalyType.DEADSTOCK, 4), _stock_alert("D2", AnomalyType.DEADSTOCK, 6)]

    (promo,) = plan_promotions(anomalies, [], [], AS_OF)

    assert promo.type == PromotionType.DEADSTOCK_CLEARANCE
    assert promo.suggested_discount_percent == 30
    assert [p.product_id for p in promo.products] == ["D1", "D2"]
    assert promo.estimated_impact == "Release 10 idle units"
    assert promo.starts_at == AS_OF
    assert promo.ends_at == AS_OF + timedelta(days=14)


def test_slow_mover_promotion_needs_three_products():
    two = [_stock_alert(f"S{i}", AnomalyType.SLOW_MOVING) for i in range(2)]
    assert plan_promotions(two, [], [], AS_OF) == []

    twelve = [_stock_alert(f"S{i}", AnomalyType.SLOW_MOVING) for i in range(12)]
    (promo,) = plan_promotions(twelve, [], [], AS_OF)
    assert promo.type == PromotionType.SLOW_MOVER
    assert len(promo.products) == 10
    assert promo.suggested_discount_percent == 15
    assert promo.ends_at - promo.starts_at == timedelta(days=7)


def test_bundle_pairs_fast_and_slow_movers():
    anomalies = [_stock_alert("S1", AnomalyType.SLOW_MOVING, 7)]
    forecasts = [_up(f"F{i}") for i in range(5)]

    (promo,) = plan_promotions(anomalies, forecasts, [], AS_OF, names={"F0": "Cola"})

    assert promo.type == PromotionType.BUNDLE
    assert [p.product_id for p in promo.products] == ["F0", "F1", "F2", "S1"]
    assert promo.products[0].product_name == "Cola"
    assert promo.products[1].product_name == "F1"
    assert promo.products[-1].current_stock == 7


def test_volume_discount_needs_two_overstocked_products():
    assert plan_promotions([], [], [_overstock("O1")], AS_OF) == []

    (promo,) = plan_promotions([], [], [_overstock(f"O{i}") for i in range(7)], AS_OF)
    assert promo.type == PromotionType.VOLUME_DISCOUNT
    assert len(promo.products) == 5
    assert promo.suggested_discount_percent == 20
    assert promo.ends_at == AS_OF + timedelta(days=21)


def test_all_promotion_kinds_in_order():
    anomalies = [_stock_alert("D1", AnomalyType.DEADSTOCK)] + [
        _stock_alert(f"S{i}", AnomalyType.SLOW_MOVING) for i in range(3)
    ]
    promos = plan_promotions(anomalies, [_up("F1")], [_overstock("O1"), _overstock("O2")], AS_OF)
    assert [p.type for p in promos] == [
        PromotionType.DEADSTOCK_CLEARANCE,
        PromotionType.SLOW_MOVER,
        PromotionType.BUNDLE,
        PromotionType.VOLUME_DISCOUNT,
    ]
