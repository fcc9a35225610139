from datetime import datetime

import pytest
from pydantic import ValidationError

from models.enums import Trend, Urgency
from models.forecast import ForecastResult
from models.inventory import StockPosition, StockRecommendation
from models.pricing import PricingSuggestion
from models.sales import DailySeries, SaleRecord

T0 = datetime(2024, 1, 1)


@pytest.mark.parametrize("quantity", [0, -2])
def test_sale_record_quantity_must_be_positive(quantity):
    with pytest.raises(ValidationError):
        SaleRecord(product_id="P1", quantity=quantity, occurred_at=T0)


def test_sale_record_rejects_negative_price_and_cost():
    with pytest.raises(ValidationError):
        SaleRecord(product_id="P1", quantity=1, occurred_at=T0, unit_price=-1)
    with pytest.raises(ValidationError):
        SaleRecord(product_id="P1", quantity=1, occurred_at=T0, unit_cost=-1)


def test_sale_record_parses_iso_timestamps_and_is_frozen():
    record = SaleRecord(product_id="P1", quantity=2, occurred_at="2024-01-05T10:30:00")
    assert record.occurred_at == datetime(2024, 1, 5, 10, 30)
    with pytest.raises(ValidationError):
        record.quantity = 3


def test_stock_position_allows_negative_stock_but_not_negative_price():
    assert StockPosition(product_id="P1", product_name="Cola", current_stock=-4).current_stock == -4
    with pytest.raises(ValidationError):
        StockPosition(product_id="P1", product_name="Cola", current_stock=1, unit_price=-5)


def test_daily_series_helpers():
    series = DailySeries(product_id="P1", window_start=T0, quantities=(0, 2, 0, 5))
    assert len(series) == 4
    assert series.total_quantity == 7
    assert series.last_days(2) == (0, 5)
    assert series.last_days(10) == (0, 2, 0, 5)


def test_forecast_sentinel():
    forecast = ForecastResult.insufficient("P1", record_count=2)
    assert not forecast.has_data
    assert forecast.trend == Trend.INSUFFICIENT_DATA
    assert forecast.record_count == 2
    assert forecast.predicted_quantity_next_30_days == 0


def test_stock_recommendation_is_actionable():
    base = dict(
        product_id="P1",
        product_name="Cola",
        current_stock=5,
        avg_daily_sales=1,
        days_of_stock=5,
        reorder_point=14,
        suggested_order_qty=23,
    )
    assert StockRecommendation(urgency=Urgency.CRITICAL, **base).is_actionable
    assert not StockRecommendation(urgency=Urgency.OK, **base).is_actionable


@pytest.mark.parametrize("current, suggested, expected", [(100, 90, -10.0), (100, 105, 5.0), (0, 5, 0.0)])
def test_pricing_change_percent(current, suggested, expected):
    suggestion = PricingSuggestion("P1", "Cola", current, suggested, "reason", "impact")
    assert suggestion.change_percent == pytest.approx(expected)
