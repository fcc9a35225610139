from datetime import datetime, timedelta

import numpy as np
import pandas as pd

from models.inventory import StockPosition
from models.sales import SaleRecord

BEVERAGE_NAMES = [
    "Malbec Reserva 750ml",
    "IPA Craft Beer 473ml",
    "Fernet 1L",
    "Cola 2.25L",
    "Tonic Water 1.5L",
    "Gin London Dry 700ml",
    "Sparkling Water 500ml",
    "Torrontes 750ml",
    "Vermouth Rosso 1L",
    "Energy Drink 473ml",
]


def generate_synthetic_sales(
    as_of: datetime,
    num_products: int = 10,
    days: int = 60,
    seed: int = 42,
    base_daily_lambda_range: tuple[float, float] = (0.5, 8.0),
    trend_per_day_range: tuple[float, float] = (-0.05, 0.08),
    stock_days_range: tuple[int, int] = (0, 90),
    price_range: tuple[float, float] = (1500.0, 25000.0),
    cost_ratio_range: tuple[float, float] = (0.45, 0.75),
    negative_stock_products: int = 1,
) -> tuple[list[SaleRecord], list[StockPosition]]:
    """
    Generates a synthetic beverage catalog with daily sales history.

    Args:
        as_of: End of the sales window (exclusive).
        num_products: Number of products to simulate.
        days: Length of the sales history in days.
        seed: Random seed for reproducibility.
        base_daily_lambda_range: Range for each product's initial Poisson mean of units per day.
        trend_per_day_range: Range for the relative daily change of the mean.
        stock_days_range: Current stock is drawn as this many days of average demand.
        price_range: Unit price range.
        cost_ratio_range: Unit cost as a fraction of price.
        negative_stock_products: How many products (from the end of the catalog) get negative stock.

    Returns:
        A tuple containing:
        - records: one SaleRecord per product per day with sales (midday timestamps).
        - positions: one StockPosition per product.
    """
    rng = np.random.default_rng(seed)
    window_start = as_of - timedelta(days=days)
    records: list[SaleRecord] = []
    positions: list[StockPosition] = []

    for i in range(num_products):
        product_id = f"P{i + 1:03d}"
        name = BEVERAGE_NAMES[i % len(BEVERAGE_NAMES)]
        base = rng.uniform(*base_daily_lambda_range)
        trend = rng.uniform(*trend_per_day_range)
        price = round(float(rng.uniform(*price_range)), 2)
        cost = round(price * float(rng.uniform(*cost_ratio_range)), 2)

        lambdas = np.clip(base * (1 + trend * np.arange(days)), 0, None)
        daily_units = rng.poisson(lambdas)
        last_sold_at = None
        for day, units in enumerate(daily_units):
            if units <= 0:
                continue
            occurred_at = window_start + timedelta(days=day, hours=12)
            last_sold_at = occurred_at
            records.append(
                SaleRecord(
                    product_id=product_id,
                    quantity=int(units),
                    occurred_at=occurred_at,
                    unit_price=price,
                    unit_cost=cost,
                )
            )

        avg_daily = float(daily_units.mean())
        stock = int(round(avg_daily * rng.integers(*stock_days_range)))
        if i >= num_products - negative_stock_products:
            stock = -int(rng.integers(1, 10))
        positions.append(
            StockPosition(
                product_id=product_id,
                product_name=name,
                current_stock=stock,
                unit_price=price,
                unit_cost=cost,
                last_sold_at=last_sold_at,
            )
        )

    return records, positions


def records_to_frame(records: list[SaleRecord]) -> pd.DataFrame:
    """Sale records as a DataFrame with one row per record, sorted by time."""
    frame = pd.DataFrame(
        [r.model_dump() for r in records],
        columns=["product_id", "quantity", "occurred_at", "unit_price", "unit_cost"],
    )
    return frame.sort_values(["occurred_at", "product_id"], ignore_index=True)
