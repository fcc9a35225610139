from datetime import datetime, timedelta

import pandas as pd
import pytest
from pandas.api.types import is_datetime64_any_dtype, is_integer_dtype

from utils.data_generation import BEVERAGE_NAMES, generate_synthetic_sales, records_to_frame

AS_OF = datetime(2024, 3, 1)
TEST_DAYS = 30
TEST_NUM_PRODUCTS = 4
TEST_SEED = 123


@pytest.fixture(scope="module")
def generated_data():
    return generate_synthetic_sales(AS_OF, num_products=TEST_NUM_PRODUCTS, days=TEST_DAYS, seed=TEST_SEED)


def test_one_position_per_product(generated_data):
    _, positions = generated_data
    assert [p.product_id for p in positions] == ["P001", "P002", "P003", "P004"]
    assert [p.product_name for p in positions] == BEVERAGE_NAMES[:TEST_NUM_PRODUCTS]


def test_records_fall_inside_the_window(generated_data):
    records, _ = generated_data
    window_start = AS_OF - timedelta(days=TEST_DAYS)
    assert records
    assert all(window_start <= r.occurred_at < AS_OF for r in records)
    assert all(r.quantity > 0 for r in records)


def test_at_most_one_record_per_product_per_day(generated_data):
    records, _ = generated_data
    keys = [(r.product_id, r.occurred_at.date()) for r in records]
    assert len(keys) == len(set(keys))


def test_costs_below_prices(generated_data):
    records, positions = generated_data
    assert all(p.unit_cost < p.unit_price for p in positions)
    assert all(r.unit_cost < r.unit_price for r in records)


def test_last_products_get_negative_stock(generated_data):
    _, positions = generated_data
    assert positions[-1].current_stock < 0
    assert all(p.current_stock >= 0 for p in positions[:-1])


def test_last_sold_at_matches_latest_record(generated_data):
    records, positions = generated_data
    for position in positions:
        dates = [r.occurred_at for r in records if r.product_id == position.product_id]
        assert position.last_sold_at == (max(dates) if dates else None)


def test_reproducibility_with_seed():
    first = generate_synthetic_sales(AS_OF, num_products=2, days=10, seed=1)
    second = generate_synthetic_sales(AS_OF, num_products=2, days=10, seed=1)
    third = generate_synthetic_sales(AS_OF, num_products=2, days=10, seed=2)
    assert first == second
    assert first != third


def test_records_to_frame(generated_data):
    records, _ = generated_data
    frame = records_to_frame(records)

    assert isinstance(frame, pd.DataFrame)
    assert len(frame) == len(records)
    assert list(frame.columns) == ["product_id", "quantity", "occurred_at", "unit_price", "unit_cost"]
    assert is_datetime64_any_dtype(frame["occurred_at"])
    assert is_integer_dtype(frame["quantity"])
    assert frame["occurred_at"].is_monotonic_increasing


def test_records_to_frame_empty():
    frame = records_to_frame([])
    assert frame.empty
    assert "quantity" in frame.columns
