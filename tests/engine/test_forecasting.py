from datetime import datetime

import pytest

from config.config import ForecastConfig
from engine.forecasting import DemandForecaster
from models.enums import Trend
from models.sales import DailySeries

WINDOW_START = datetime(2024, 1, 1)


def _series(quantities, record_count=None, product_id="P1") -> DailySeries:
    quantities = tuple(quantities)
    return DailySeries(
        product_id=product_id,
        window_start=WINDOW_START,
        quantities=quantities,
        record_count=sum(1 for q in quantities if q > 0) if record_count is None else record_count,
    )


@pytest.fixture
def forecaster() -> DemandForecaster:
    return DemandForecaster()


def test_exact_linear_series_recovers_slope_and_intercept(forecaster):
    m0, b0 = 0.5, 2.0
    series = _series([m0 * x + b0 for x in range(60)])

    result = forecaster.forecast(series)

    assert result.slope == pytest.approx(m0)
    assert result.intercept == pytest.approx(b0)
    assert result.trend == Trend.UP
    expected_next_30 = sum(m0 * i + b0 for i in range(60, 90))
    assert result.predicted_quantity_next_30_days == pytest.approx(expected_next_30)
    assert result.predicted_quantity_next_7_days == round(expected_next_30 * 7 / 30)


@pytest.mark.parametrize("record_count", [0, 1, 4])
def test_fewer_than_five_records_is_insufficient_data(forecaster, record_count):
    # Large values must not matter: the gate is on record count only.
    series = _series([100] * 60, record_count=record_count)

    result = forecaster.forecast(series)

    assert result.trend == Trend.INSUFFICIENT_DATA
    assert result.predicted_quantity_next_30_days == 0
    assert result.confidence == 0
    assert result.avg_daily_sales == 0
    assert result.slope == 0
    assert not result.has_data


def test_five_records_is_enough(forecaster):
    series = _series([1] * 5 + [0] * 55, record_count=5)
    assert forecaster.forecast(series).trend != Trend.INSUFFICIENT_DATA


def test_declining_trend_floors_negative_daily_projections(forecaster):
    # y = 30 - x: crosses zero at day 30, so every future day projects negative.
    series = _series([max(0, 30 - x) for x in range(60)])

    result = forecaster.forecast(series)

    assert result.trend == Trend.DOWN
    assert result.slope < 0
    assert result.predicted_quantity_next_30_days >= 0


def test_declining_projection_partially_positive():
    forecaster = DemandForecaster(ForecastConfig(lookback_days=10, horizon_days=30))
    # y = 20 - x over 10 days: next days 10..29 positive, 20..39 clipped.
    series = _series([20 - x for x in range(10)])

    result = forecaster.forecast(series)

    assert result.slope == pytest.approx(-1.0)
    assert result.predicted_quantity_next_30_days == pytest.approx(sum(20 - i for i in range(10, 20)))


def test_average_includes_zero_fill_days(forecaster):
    series = _series([6] * 10 + [0] * 50)
    assert forecaster.forecast(series).avg_daily_sales == pytest.approx(1.0)


@pytest.mark.parametrize(
    "slope, expected",
    [
        (0.051, Trend.UP),
        (0.05, Trend.STABLE),
        (0.0, Trend.STABLE),
        (-0.05, Trend.STABLE),
        (-0.051, Trend.DOWN),
    ],
)
def test_trend_thresholds(forecaster, slope, expected):
    assert forecaster.classify_trend(slope) == expected


def test_flat_series_is_stable(forecaster):
    result = forecaster.forecast(_series([3] * 60))
    assert result.trend == Trend.STABLE
    assert result.slope == pytest.approx(0.0)
    assert result.predicted_quantity_next_30_days == pytest.approx(90.0)


@pytest.mark.parametrize(
    "record_count, expected",
    [(5, 0.1), (25, 0.5), (47, 0.94), (48, 0.95), (500, 0.95)],
)
def test_confidence_heuristic_is_capped(forecaster, record_count, expected):
    series = _series([1] * 60, record_count=record_count)
    assert forecaster.forecast(series).confidence == pytest.approx(expected)


def test_single_day_window_is_degenerate():
    forecaster = DemandForecaster(ForecastConfig(lookback_days=1, min_sale_records=1))
    result = forecaster.forecast(_series([7], record_count=7))
    assert result.slope == 0
    assert result.intercept == 0
    assert result.predicted_quantity_next_30_days == 0
    assert result.trend == Trend.STABLE


def test_forecast_many_keeps_order(forecaster):
    results = forecaster.forecast_many([_series([1] * 60, product_id="A"), _series([], product_id="B")])
    assert [r.product_id for r in results] == ["A", "B"]
    assert results[1].trend == Trend.INSUFFICIENT_DATA


def test_custom_threshold_from_config():
    forecaster = DemandForecaster(ForecastConfig(trend_slope_threshold=1.0))
    series = _series([0.5 * x for x in range(60)])
    assert forecaster.forecast(series).trend == Trend.STABLE
