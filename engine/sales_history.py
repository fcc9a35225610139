"""
Sales history aggregation.

Turns the sale records of one product into a fixed-length daily quantity
series over a lookback window, zero-filling days without sales.
"""

import logging
from collections.abc import Iterable
from datetime import datetime, timedelta

import pandas as pd

from models.enums import RejectionReason
from models.sales import DailySeries, RejectedRecord, SaleRecord
from utils.dates import to_utc_naive

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)


def aggregate_daily_sales(
    records: Iterable[SaleRecord],
    product_id: str,
    as_of: datetime,
    lookback_days: int = 60,
) -> DailySeries:
    """
    Build the daily series for ``product_id`` over the ``lookback_days`` days
    ending at ``as_of``.

    Day ``i`` covers ``[window_start + i days, window_start + (i+1) days)``
    where ``window_start = as_of - lookback_days``. Records that fall outside
    the window, or belong to another product, are returned in
    ``DailySeries.rejected`` rather than dropped.

    Timezone-aware timestamps are converted to UTC; naive ones are taken as
    UTC already, so ``window_start`` is always naive UTC.
    """
    if lookback_days < 1:
        raise ValueError(f"lookback_days must be at least 1, got {lookback_days}")

    as_of = to_utc_naive(as_of)
    window_start = as_of - timedelta(days=lookback_days)
    day_indices: list[int] = []
    quantities: list[int] = []
    rejected: list[RejectedRecord] = []

    for record in records:
        if record.product_id != product_id:
            rejected.append(RejectedRecord(record, RejectionReason.PRODUCT_MISMATCH))
            continue
        day_index = (to_utc_naive(record.occurred_at) - window_start) // ONE_DAY
        if day_index < 0:
            rejected.append(RejectedRecord(record, RejectionReason.BEFORE_WINDOW))
        elif day_index >= lookback_days:
            rejected.append(RejectedRecord(record, RejectionReason.AFTER_WINDOW))
        else:
            day_indices.append(day_index)
            quantities.append(record.quantity)

    if rejected:
        logger.warning(
            f"Rejected {len(rejected)} sale record(s) for product {product_id} "
            f"outside window starting {window_start.isoformat()} ({lookback_days} days)"
        )

    daily = (
        pd.Series(quantities, index=day_indices, dtype="int64")
        .groupby(level=0)
        .sum()
        .reindex(range(lookback_days), fill_value=0)
    )
    logger.debug(
        f"Aggregated {len(quantities)} record(s) for product {product_id} "
        f"into {lookback_days} days ({int(daily.sum())} units)"
    )

    return DailySeries(
        product_id=product_id,
        window_start=window_start,
        quantities=tuple(int(q) for q in daily.to_numpy()),
        record_count=len(quantities),
        rejected=tuple(rejected),
    )
