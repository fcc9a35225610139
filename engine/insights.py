"""
Insight aggregation.

Composes forecasts, stock recommendations, anomalies and pricing suggestions
into a dashboard summary. ``build_summary`` only counts and slices what the
other components already produced; ``InsightAggregator`` fetches the catalog
from the external services, fans out per product and joins before composing.
"""

import asyncio
import dataclasses
import logging
from collections.abc import Sequence
from datetime import datetime, timedelta, timezone

from config.config import EngineConfig, InsightConfig
from models.anomaly import AnomalyAlert
from models.enums import Severity, Trend, Urgency
from models.forecast import ForecastResult
from models.insight import InsightCounts, InsightReport, InsightSummary
from models.inventory import StockPosition, StockRecommendation
from models.pricing import PricingSuggestion
from models.sales import DailySeries, SaleRecord
from utils.dates import to_utc_naive

from .anomaly import AnomalyDetector
from .explanations import TrendExplainer
from .forecasting import DemandForecaster
from .pricing import PricingAdvisor
from .sales_history import aggregate_daily_sales
from .stock_policy import StockPolicyEngine

logger = logging.getLogger(__name__)


def build_summary(
    forecasts: Sequence[ForecastResult],
    recommendations: Sequence[StockRecommendation],
    anomalies: Sequence[AnomalyAlert],
    pricing_suggestions: Sequence[PricingSuggestion] = (),
    config: InsightConfig | None = None,
    total_products: int | None = None,
) -> InsightSummary:
    config = config or InsightConfig()
    trending_up = [f for f in forecasts if f.trend == Trend.UP]
    trending_down = [f for f in forecasts if f.trend == Trend.DOWN]
    critical = [r for r in recommendations if r.urgency == Urgency.CRITICAL]
    high_alerts = [a for a in anomalies if a.severity == Severity.HIGH]

    top_trending = sorted(trending_up, key=lambda f: f.trend_percent, reverse=True)[: config.top_trending]

    return InsightSummary(
        counts=InsightCounts(
            total_products=total_products if total_products is not None else len(forecasts),
            trending_up=len(trending_up),
            trending_down=len(trending_down),
            critical_stock_items=len(critical),
            high_priority_alerts=len(high_alerts),
        ),
        top_trending=top_trending,
        critical_stock=critical[: config.top_critical],
        high_alerts=high_alerts[: config.top_alerts],
        pricing_suggestions=list(pricing_suggestions),
    )


class InsightAggregator:
    """
    Runs the whole signal pipeline over a capped catalog.

    Args:
        sales_ledger: Provides ``async get_sales(product_id, start, end)``.
        inventory_service: Provides ``async list_positions(limit)``.
        config: Engine configuration; defaults are used when omitted.
        explainer: Optional TrendExplainer for the top moving products.
    """

    def __init__(
        self,
        sales_ledger,
        inventory_service,
        config: EngineConfig | None = None,
        explainer: TrendExplainer | None = None,
    ):
        self.sales_ledger = sales_ledger
        self.inventory_service = inventory_service
        self.config = config or EngineConfig()
        self.explainer = explainer
        self.forecaster = DemandForecaster(self.config.forecast)
        self.stock_policy = StockPolicyEngine(self.config.stock_policy)
        self.anomaly_detector = AnomalyDetector(self.config.anomaly)
        self.pricing_advisor = PricingAdvisor(self.config.pricing)

    async def _analyze_product(
        self,
        position: StockPosition,
        as_of: datetime,
        semaphore: asyncio.Semaphore,
    ) -> tuple[StockPosition, list[SaleRecord], DailySeries, ForecastResult, datetime | None]:
        lookback = self.config.forecast.lookback_days
        deadstock_days = self.config.anomaly.deadstock_days
        window_start = as_of - timedelta(days=lookback)
        last_sale = None
        async with semaphore:
            records = await self.sales_ledger.get_sales(position.product_id, window_start, as_of)
            series = aggregate_daily_sales(records, position.product_id, as_of, lookback)
            # Idle stock: look further back to tell slow-moving from deadstock.
            if series.total_quantity == 0 and position.current_stock > 0 and deadstock_days > lookback:
                older = await self.sales_ledger.get_sales(
                    position.product_id, as_of - timedelta(days=deadstock_days), window_start
                )
                if older:
                    last_sale = max(to_utc_naive(r.occurred_at) for r in older)
        return position, records, series, self.forecaster.forecast(series), last_sale

    async def analyze(self, as_of: datetime | None = None) -> InsightReport:
        as_of = to_utc_naive(as_of or datetime.now(timezone.utc))
        positions = await self.inventory_service.list_positions(limit=self.config.insight.catalog_limit)
        logger.info(f"Analyzing {len(positions)} product(s) as of {as_of.isoformat()}")

        semaphore = asyncio.Semaphore(self.config.insight.max_concurrency)
        results = await asyncio.gather(
            *(self._analyze_product(p, as_of, semaphore) for p in positions),
            return_exceptions=True,
        )

        analyzed: list[StockPosition] = []
        all_records: list[SaleRecord] = []
        series_by_product: dict[str, DailySeries] = {}
        forecasts: list[ForecastResult] = []
        last_sales: dict[str, datetime] = {}
        skipped: list[str] = []
        for position, result in zip(positions, results):
            if isinstance(result, BaseException):
                logger.error(f"Skipping {position.product_id}: {type(result).__name__}: {result}")
                skipped.append(position.product_id)
                continue
            _, records, series, forecast, last_sale = result
            analyzed.append(position)
            all_records.extend(records)
            series_by_product[position.product_id] = series
            forecasts.append(forecast)
            if last_sale is not None:
                last_sales[position.product_id] = last_sale

        if self.explainer is not None:
            forecasts = await self._explain_top(forecasts, {p.product_id: p.product_name for p in analyzed})

        forecast_by_product = {f.product_id: f for f in forecasts}
        recommendations = self.stock_policy.recommend_all(
            (p, forecast_by_product[p.product_id]) for p in analyzed
        )
        # Negative stock is checked on the whole catalog, including skipped products.
        anomalies = self.anomaly_detector.detect(
            positions,
            series_by_product=series_by_product,
            records=all_records,
            as_of=as_of,
            last_sales=last_sales,
        )
        pricing = self.pricing_advisor.suggest(recommendations)
        adjustments = self.pricing_advisor.automatic_adjustments(recommendations)

        with_data = [f for f in forecasts if f.has_data]
        summary = build_summary(
            with_data,
            recommendations,
            anomalies,
            pricing,
            config=self.config.insight,
            total_products=len(positions),
        )
        return InsightReport(
            as_of=as_of,
            forecasts=forecasts,
            recommendations=recommendations,
            anomalies=anomalies,
            pricing_suggestions=pricing,
            summary=summary,
            price_adjustments=adjustments,
            skipped_products=skipped,
        )

    async def collect(self, as_of: datetime | None = None) -> InsightSummary:
        report = await self.analyze(as_of)
        return report.summary

    async def _explain_top(
        self, forecasts: list[ForecastResult], names: dict[str, str]
    ) -> list[ForecastResult]:
        moving = sorted(
            (f for f in forecasts if f.trend in (Trend.UP, Trend.DOWN)),
            key=lambda f: f.predicted_quantity_next_30_days,
            reverse=True,
        )[: self.config.insight.explained_forecasts]
        if not moving:
            return forecasts

        texts = await asyncio.gather(
            *(self.explainer.explain(f, names.get(f.product_id, f.product_id)) for f in moving)
        )
        explained = {f.product_id: text for f, text in zip(moving, texts) if text}
        return [
            dataclasses.replace(f, explanation=explained[f.product_id]) if f.product_id in explained else f
            for f in forecasts
        ]
