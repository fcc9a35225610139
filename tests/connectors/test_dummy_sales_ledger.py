from datetime import datetime, timedelta, timezone

import pytest

from connectors.dummy_sales_ledger import DummySalesLedger
from models.sales import SaleRecord

T0 = datetime(2024, 1, 1)


def _sale(day: int, product_id: str = "P1", quantity: int = 1) -> SaleRecord:
    return SaleRecord(product_id=product_id, quantity=quantity, occurred_at=T0 + timedelta(days=day))


@pytest.fixture
def ledger() -> DummySalesLedger:
    """Ledger with records deliberately out of order."""
    return DummySalesLedger([_sale(5), _sale(1), _sale(3, "P2"), _sale(10)], latency=0)


@pytest.mark.asyncio
async def test_get_sales_is_half_open_and_sorted(ledger):
    records = await ledger.get_sales("P1", T0 + timedelta(days=1), T0 + timedelta(days=10))
    assert [r.occurred_at for r in records] == [T0 + timedelta(days=1), T0 + timedelta(days=5)]


@pytest.mark.asyncio
async def test_get_sales_filters_by_product(ledger):
    records = await ledger.get_sales("P2", T0, T0 + timedelta(days=30))
    assert [r.product_id for r in records] == ["P2"]


@pytest.mark.asyncio
async def test_unknown_product_has_no_sales(ledger):
    assert await ledger.get_sales("NOPE", T0, T0 + timedelta(days=30)) == []
    assert await ledger.get_last_sale("NOPE") is None


@pytest.mark.asyncio
async def test_add_and_get_last_sale(ledger):
    ledger.add(_sale(20, quantity=4))
    last = await ledger.get_last_sale("P1")
    assert last.occurred_at == T0 + timedelta(days=20)
    assert last.quantity == 4


@pytest.mark.asyncio
async def test_get_sales_mixes_aware_records_and_naive_bounds():
    aware = SaleRecord(
        product_id="P1", quantity=2, occurred_at=(T0 + timedelta(days=2)).replace(tzinfo=timezone.utc)
    )
    ledger = DummySalesLedger([aware, _sale(4)], latency=0)

    records = await ledger.get_sales("P1", T0, T0 + timedelta(days=3))

    assert records == [aware]
    assert (await ledger.get_last_sale("P1")).occurred_at == T0 + timedelta(days=4)
