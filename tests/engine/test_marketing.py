from datetime import datetime

import pytest

from engine.marketing import marketing_alerts
from models.anomaly import AnomalyAlert
from models.enums import AnomalyType, MarketingAlertType, Severity, Trend
from models.forecast import ForecastResult

SPRING = datetime(2024, 4, 10)


def _deadstock(product_id: str) -> AnomalyAlert:
    return AnomalyAlert(
        type=AnomalyType.DEADSTOCK,
        severity=Severity.HIGH,
        product_id=product_id,
        product_name=product_id,
        message="No sales in 90+ days. Stock: 5",
        value=5,
    )


def _forecast(product_id: str, trend: Trend, trend_percent: int) -> ForecastResult:
    return ForecastResult(
        product_id=product_id,
        predicted_quantity_next_30_days=30,
        confidence=0.5,
        trend=trend,
        avg_daily_sales=1.0,
        slope=0.1,
        trend_percent=trend_percent,
    )


def test_quiet_catalog_raises_nothing():
    report = marketing_alerts([], [_forecast("A", Trend.UP, 20)], SPRING)
    assert report.alerts == []
    assert (report.action_required, report.opportunities, report.info) == (0, 0, 0)


def test_deadstock_requires_clearance_action():
    report = marketing_alerts([_deadstock("X"), _deadstock("Y")], [], SPRING)

    (alert,) = report.alerts
    assert alert.type == MarketingAlertType.ACTION_REQUIRED
    assert alert.priority == Severity.HIGH
    assert alert.action == "Create a clearance promotion"
    assert alert.data == {"count": 2}
    assert alert.message.startswith("2 product(s) without sales in 90+ days")


def test_fast_growers_become_an_opportunity():
    forecasts = [_forecast(f"G{i}", Trend.UP, 30 + i) for i in range(7)]
    forecasts += [_forecast("DOWN", Trend.DOWN, -40), _forecast("SLOW", Trend.UP, 15)]
    names = {f"G{i}": f"Growth {i}" for i in range(7)}

    report = marketing_alerts([], forecasts, SPRING, names=names)

    (alert,) = report.alerts
    assert alert.type == MarketingAlertType.OPPORTUNITY
    assert alert.priority == Severity.MEDIUM
    assert alert.message.startswith("7 product(s) growing more than 20%")
    assert alert.data["products"] == ["Growth 0", "Growth 1", "Growth 2", "Growth 3", "Growth 4"]


@pytest.mark.parametrize("month, expected", [(12, 1), (1, 1), (2, 0), (11, 0)])
def test_holiday_season_info(month, expected):
    report = marketing_alerts([], [], datetime(2024, month, 15))
    assert report.info == expected


def test_alerts_ordered_by_priority():
    report = marketing_alerts(
        [_deadstock("X")], [_forecast("G", Trend.UP, 50)], datetime(2024, 12, 1)
    )

    assert [a.priority for a in report.alerts] == [Severity.HIGH, Severity.MEDIUM, Severity.MEDIUM]
    assert report.alerts[0].type == MarketingAlertType.ACTION_REQUIRED
    assert (report.action_required, report.opportunities, report.info) == (1, 1, 1)
