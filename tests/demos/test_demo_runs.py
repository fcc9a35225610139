import pytest

from demos.inventory_insights_demo import run_inventory_insights_demo
from demos.margin_guard_demo import run_margin_guard_demo
from models.enums import EvaluationStatus


@pytest.mark.asyncio
async def test_inventory_insights_demo_runs():
    report = await run_inventory_insights_demo(num_products=6, seed=7)
    assert report.summary.counts.total_products == 6
    assert len(report.forecasts) == 6
    assert report.skipped_products == []
    # The synthetic catalog always ends with a negative-stock product.
    assert any(a.product_id == "P006" for a in report.anomalies)


@pytest.mark.asyncio
async def test_margin_guard_demo_runs():
    results = await run_margin_guard_demo()
    assert [r.status for r in results.values()] == [
        EvaluationStatus.APPROVED,
        EvaluationStatus.RISKY,
        EvaluationStatus.BLOCKED,
    ]
