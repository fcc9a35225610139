"""
Anomaly detection over inventory snapshots and sales history.

The required check is negative stock: stock must never be negative, and any
observed negative value is reported as a HIGH severity stock error. The
remaining checks flag sales shifts, slow-moving stock and margin outliers.
"""

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime, timedelta

from config.config import AnomalyConfig
from models.anomaly import AnomalyAlert
from models.enums import SEVERITY_ORDER, AnomalyType, Severity
from models.inventory import StockPosition
from models.sales import DailySeries, SaleRecord
from utils.dates import latest, to_utc_naive
from utils.stats import mean, population_std, z_score

logger = logging.getLogger(__name__)


class AnomalyDetector:
    def __init__(self, config: AnomalyConfig | None = None):
        self.config = config or AnomalyConfig()

    def detect_negative_stock(self, positions: Iterable[StockPosition]) -> list[AnomalyAlert]:
        alerts = []
        for position in positions:
            if position.current_stock < 0:
                logger.warning(
                    f"Negative stock for {position.product_id} ({position.product_name}): "
                    f"{position.current_stock}"
                )
                alerts.append(
                    AnomalyAlert(
                        type=AnomalyType.STOCK_ERROR,
                        severity=Severity.HIGH,
                        product_id=position.product_id,
                        product_name=position.product_name,
                        message=f"Negative stock detected ({position.current_stock} units)",
                        value=position.current_stock,
                    )
                )
        return alerts

    def detect_sales_shifts(
        self,
        series_list: Iterable[DailySeries],
        names: Mapping[str, str] | None = None,
    ) -> list[AnomalyAlert]:
        """Compare the last week against the weekly average of the weeks before it."""
        cfg = self.config
        names = names or {}
        needed = cfg.recent_days + cfg.baseline_days
        alerts = []
        for series in series_list:
            if len(series) < needed:
                logger.debug(f"Series for {series.product_id} too short for shift detection")
                continue
            recent = sum(series.last_days(cfg.recent_days))
            baseline = series.quantities[-needed : -cfg.recent_days]
            baseline_weekly = sum(baseline) / (cfg.baseline_days / cfg.recent_days)
            if baseline_weekly <= cfg.min_baseline_weekly_sales:
                continue

            change_percent = (recent - baseline_weekly) / baseline_weekly * 100
            name = names.get(series.product_id, series.product_id)
            if change_percent < cfg.drop_percent:
                alerts.append(
                    AnomalyAlert(
                        type=AnomalyType.SALES_DROP,
                        severity=Severity.HIGH if change_percent < cfg.severe_drop_percent else Severity.MEDIUM,
                        product_id=series.product_id,
                        product_name=name,
                        message=f"Sales drop: {change_percent:.0f}% vs weekly average",
                        value=recent,
                        expected_value=baseline_weekly,
                    )
                )
            elif change_percent > cfg.spike_percent:
                alerts.append(
                    AnomalyAlert(
                        type=AnomalyType.SALES_SPIKE,
                        severity=Severity.LOW,
                        product_id=series.product_id,
                        product_name=name,
                        message=f"Sales spike: +{change_percent:.0f}% vs weekly average",
                        value=recent,
                        expected_value=baseline_weekly,
                    )
                )
        return alerts

    def detect_slow_moving(
        self,
        positions: Iterable[StockPosition],
        series_by_product: Mapping[str, DailySeries],
        as_of: datetime,
        last_sales: Mapping[str, datetime] | None = None,
    ) -> list[AnomalyAlert]:
        """
        Stock on hand with no sales in the window.

        The last sale is the latest of ``StockPosition.last_sold_at`` and
        ``last_sales[product_id]`` (typically read from the ledger beyond the
        window). Without any known sale inside ``deadstock_days`` the product
        is deadstock; otherwise it is slow-moving.
        """
        last_sales = last_sales or {}
        deadstock_cutoff = to_utc_naive(as_of) - timedelta(days=self.config.deadstock_days)
        alerts = []
        for position in positions:
            series = series_by_product.get(position.product_id)
            if series is None or position.current_stock <= 0 or series.total_quantity > 0:
                continue

            last_sold_at = latest(position.last_sold_at, last_sales.get(position.product_id))
            is_deadstock = last_sold_at is None or last_sold_at < deadstock_cutoff
            if is_deadstock:
                message = (
                    f"No sales in {self.config.deadstock_days}+ days. Stock: {position.current_stock}"
                )
            else:
                message = f"No sales in {len(series)} days. Stock: {position.current_stock}"
            alerts.append(
                AnomalyAlert(
                    type=AnomalyType.DEADSTOCK if is_deadstock else AnomalyType.SLOW_MOVING,
                    severity=Severity.HIGH if is_deadstock else Severity.MEDIUM,
                    product_id=position.product_id,
                    product_name=position.product_name,
                    message=message,
                    value=position.current_stock,
                )
            )
        return alerts

    def detect_margin_outliers(
        self,
        records: Iterable[SaleRecord],
        names: Mapping[str, str] | None = None,
    ) -> list[AnomalyAlert]:
        """Flag sale lines whose margin on price is far below the population mean."""
        cfg = self.config
        names = names or {}
        margins = [
            (r.product_id, (r.unit_price - r.unit_cost) / r.unit_price * 100)
            for r in records
            if r.unit_price and r.unit_cost is not None
        ]
        if len(margins) < cfg.min_margin_samples:
            return []

        values = [m for _, m in margins]
        mu = mean(values)
        sigma = population_std(values)

        alerts = []
        for product_id, margin in margins:
            z = z_score(margin, mu, sigma)
            if z < cfg.margin_z_threshold:
                alerts.append(
                    AnomalyAlert(
                        type=AnomalyType.MARGIN,
                        severity=Severity.HIGH if z < cfg.severe_margin_z_threshold else Severity.MEDIUM,
                        product_id=product_id,
                        product_name=names.get(product_id, product_id),
                        message=f"Abnormally low margin: {margin:.1f}%",
                        value=margin,
                        expected_value=mu,
                        z_score=z,
                    )
                )
        return alerts

    def detect(
        self,
        positions: Iterable[StockPosition],
        series_by_product: Mapping[str, DailySeries] | None = None,
        records: Iterable[SaleRecord] | None = None,
        as_of: datetime | None = None,
        last_sales: Mapping[str, datetime] | None = None,
    ) -> list[AnomalyAlert]:
        """Run every check and return alerts ordered HIGH, MEDIUM, LOW."""
        positions = list(positions)
        series_by_product = series_by_product or {}
        names = {p.product_id: p.product_name for p in positions}

        alerts = self.detect_negative_stock(positions)
        alerts.extend(self.detect_sales_shifts(series_by_product.values(), names))
        if as_of is not None:
            alerts.extend(self.detect_slow_moving(positions, series_by_product, as_of, last_sales))
        if records is not None:
            alerts.extend(self.detect_margin_outliers(records, names))

        alerts.sort(key=lambda a: SEVERITY_ORDER[a.severity])
        logger.info(f"Anomaly detection produced {len(alerts)} alert(s)")
        return alerts
