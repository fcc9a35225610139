"""
Configuration classes for the inventory signal engine.
Holds the policy thresholds of every component in a type-safe, extensible way.
The values are business policy, not derived constants; override them per
deployment through the constructor or ``SIGNAL_*`` environment variables.
"""

import os
from dataclasses import dataclass, field

from utils.env import load_project_dotenv


@dataclass
class ForecastConfig:
    lookback_days: int = 60
    horizon_days: int = 30
    min_sale_records: int = 5  # Below this the forecast is INSUFFICIENT_DATA
    trend_slope_threshold: float = 0.05  # Raw units/day, same for every product
    confidence_divisor: float = 50.0  # confidence = records / divisor
    confidence_cap: float = 0.95


@dataclass
class StockPolicyConfig:
    min_avg_daily_sales: float = 0.1  # At or below this no recommendation is made
    critical_days: int = 7
    low_days: int = 14
    overstock_days: int = 60
    safety_cover_days: int = 14  # Reorder point = avg daily sales * safety days
    target_cover_multiplier: int = 2  # Order up to multiplier * reorder point


@dataclass
class PricingConfig:
    overstock_price_factor: float = 0.9
    critical_price_factor: float = 1.05
    # Automatic markdowns for deep overstock: step_percent off per step_days
    # beyond base_days, capped at max_percent.
    auto_markdown_min_days: int = 120  # Days of stock must exceed this
    auto_markdown_base_days: int = 90
    auto_markdown_step_days: int = 15
    auto_markdown_step_percent: int = 5
    auto_markdown_max_percent: int = 25


@dataclass
class MarginGuardConfig:
    default_min_margin_percent: float = 10.0
    aggressive_discount_ratio: float = 0.5  # Share of undiscounted profit a discount may consume
    discount_precision: int = 4
    price_precision: int = 2
    alternatives: list[str] = field(
        default_factory=lambda: [
            "Offer 3 interest-free installments instead of a direct discount.",
            "Waive shipping on orders above a minimum amount.",
            "Apply the discount only to cash or bank transfer payments (no POS commission).",
        ]
    )


@dataclass
class AnomalyConfig:
    recent_days: int = 7
    baseline_days: int = 28
    min_baseline_weekly_sales: float = 5.0
    drop_percent: float = -50.0
    severe_drop_percent: float = -75.0
    spike_percent: float = 100.0
    deadstock_days: int = 90
    min_margin_samples: int = 10
    margin_z_threshold: float = -2.0
    severe_margin_z_threshold: float = -3.0


@dataclass
class InsightConfig:
    catalog_limit: int = 50
    max_concurrency: int = 10
    top_trending: int = 5
    top_critical: int = 10
    top_alerts: int = 10
    explained_forecasts: int = 3


@dataclass
class NotificationConfig:
    timeout_seconds: float = 5.0
    webhook_url: str | None = None


@dataclass
class EngineConfig:
    forecast: ForecastConfig = field(default_factory=ForecastConfig)
    stock_policy: StockPolicyConfig = field(default_factory=StockPolicyConfig)
    pricing: PricingConfig = field(default_factory=PricingConfig)
    margin_guard: MarginGuardConfig = field(default_factory=MarginGuardConfig)
    anomaly: AnomalyConfig = field(default_factory=AnomalyConfig)
    insight: InsightConfig = field(default_factory=InsightConfig)
    notification: NotificationConfig = field(default_factory=NotificationConfig)

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Build a config, overriding defaults from ``SIGNAL_*`` environment variables."""
        load_project_dotenv()
        config = cls()
        config.forecast.lookback_days = _env_int("SIGNAL_LOOKBACK_DAYS", config.forecast.lookback_days)
        config.forecast.min_sale_records = _env_int("SIGNAL_MIN_SALE_RECORDS", config.forecast.min_sale_records)
        config.forecast.trend_slope_threshold = _env_float(
            "SIGNAL_TREND_SLOPE_THRESHOLD", config.forecast.trend_slope_threshold
        )
        config.margin_guard.default_min_margin_percent = _env_float(
            "SIGNAL_MIN_MARGIN_PERCENT", config.margin_guard.default_min_margin_percent
        )
        config.insight.catalog_limit = _env_int("SIGNAL_CATALOG_LIMIT", config.insight.catalog_limit)
        config.insight.max_concurrency = _env_int("SIGNAL_MAX_CONCURRENCY", config.insight.max_concurrency)
        config.notification.webhook_url = os.getenv("SIGNAL_ALERT_WEBHOOK_URL", config.notification.webhook_url)
        return config


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"Environment variable {name} must be an integer, got {raw!r}") from e


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ValueError(f"Environment variable {name} must be a number, got {raw!r}") from e


# Example usage:
# config = EngineConfig.from_env()
# forecaster = DemandForecaster(config.forecast)
