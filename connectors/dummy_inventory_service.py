"""
Module: connectors.dummy_inventory_service

Provides a dummy in-memory inventory service returning stock positions.
"""

import asyncio
import logging
from collections.abc import Iterable

from models.inventory import StockPosition

logger = logging.getLogger(__name__)


class DummyInventoryService:
    """
    Read-only inventory service. Positions are listed in insertion order.
    """

    def __init__(self, positions: Iterable[StockPosition] | None = None, latency: float = 0.01):
        self._positions: dict[str, StockPosition] = {}
        self.latency = latency
        for position in positions or []:
            self._positions[position.product_id] = position

    def upsert(self, position: StockPosition) -> None:
        self._positions[position.product_id] = position

    async def get_position(self, product_id: str) -> StockPosition | None:
        """Get the stock position for a product."""
        await asyncio.sleep(self.latency)
        return self._positions.get(product_id)

    async def list_positions(self, limit: int | None = None) -> list[StockPosition]:
        """List stock positions, capped at ``limit`` products."""
        await asyncio.sleep(self.latency)
        positions = list(self._positions.values())
        if limit is not None:
            positions = positions[:limit]
        logger.debug(f"Inventory service listed {len(positions)} position(s)")
        return positions
