"""
Module: connectors.dummy_sales_ledger

Provides a dummy in-memory sales ledger for testing and demos.
"""

import asyncio
import logging
from collections.abc import Iterable
from datetime import datetime

from models.sales import SaleRecord
from utils.dates import to_utc_naive

logger = logging.getLogger(__name__)


class DummySalesLedger:
    """
    Read-only sales ledger keyed by product.
    """

    def __init__(self, records: Iterable[SaleRecord] | None = None, latency: float = 0.01):
        self._records: dict[str, list[SaleRecord]] = {}
        self.latency = latency
        for record in records or []:
            self._records.setdefault(record.product_id, []).append(record)

    def add(self, record: SaleRecord) -> None:
        self._records.setdefault(record.product_id, []).append(record)

    async def get_sales(self, product_id: str, start: datetime, end: datetime) -> list[SaleRecord]:
        """
        Return the product's sale records with ``start <= occurred_at < end``,
        oldest first. Naive and aware timestamps are compared as UTC.
        """
        await asyncio.sleep(self.latency)
        start, end = to_utc_naive(start), to_utc_naive(end)
        records = [
            r
            for r in self._records.get(product_id, [])
            if start <= to_utc_naive(r.occurred_at) < end
        ]
        records.sort(key=lambda r: to_utc_naive(r.occurred_at))
        logger.debug(f"Ledger returned {len(records)} record(s) for {product_id}")
        return records

    async def get_last_sale(self, product_id: str) -> SaleRecord | None:
        await asyncio.sleep(self.latency)
        records = self._records.get(product_id, [])
        if not records:
            return None
        return max(records, key=lambda r: to_utc_naive(r.occurred_at))
