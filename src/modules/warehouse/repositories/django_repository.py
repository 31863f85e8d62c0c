"""Django ORM implementation of the StockPlacement repository."""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog

from modules.warehouse.models import StockPlacement
from modules.warehouse.repositories.interfaces import IStockPlacementRepository

logger = structlog.get_logger(__name__)


class StockPlacementDjangoRepository(IStockPlacementRepository):
    """Concrete ledger repository backed by Django ORM."""

    def create(self, data: Dict[str, Any]) -> StockPlacement:
        placement = StockPlacement.objects.create(
            warehouse_id=data["warehouse_id"],
            product_id=data["product_id"],
            order_id=data["order_id"],
            amount=data["amount"],
            price=data["price"],
            created_at=data["created_at"],
        )
        logger.info(
            "stock_placement.created",
            stock_placement_id=placement.id,
            order_id=placement.order_id,
        )
        return placement

    def get_by_id(self, id: int) -> Optional[StockPlacement]:
        """Return ``None`` for non-existent or non-numeric IDs."""
        try:
            return StockPlacement.objects.filter(id=id).first()
        except (ValueError, TypeError):
            return None
