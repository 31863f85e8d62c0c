"""Event handlers for Warehouse domain events."""

from __future__ import annotations

import structlog

from modules.warehouse.events import StockPlaced
from shared.domain.bus import IEventHandler

logger = structlog.get_logger(__name__)


class StockPlacedHandler(IEventHandler[StockPlaced]):
    def handle(self, event: StockPlaced) -> None:
        logger.info(
            "warehouse.event.stock_placed",
            stock_placement_id=event.aggregate_id,
            order_id=event.order_id,
            warehouse_id=event.warehouse_id,
            total_price=event.total_price,
        )


stock_placed_handler = StockPlacedHandler()
