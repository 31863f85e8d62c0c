"""Asynchronous entry point for the fulfillment use case."""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from celery import shared_task
from django.conf import settings

from modules.warehouse.dtos import AddProductToWarehouseDTO
from modules.warehouse.services import build_fulfillment_service

logger = structlog.get_logger(__name__)


@shared_task(name="warehouse.place_stock")
def place_stock(
    product_id: int,
    warehouse_id: int,
    amount: int,
    strategy: Optional[str] = None,
) -> Dict[str, Any]:
    """Run one fulfillment request and return the serialised result.

    ``strategy`` defaults to ``settings.FULFILLMENT_DEFAULT_STRATEGY``.
    Business rejections and storage failures come back in the result;
    they are not raised, so Celery never retries them.
    """
    strategy_name = strategy or settings.FULFILLMENT_DEFAULT_STRATEGY
    service = build_fulfillment_service(strategy_name)
    result = service.add_product(
        AddProductToWarehouseDTO(
            product_id=product_id,
            warehouse_id=warehouse_id,
            amount=amount,
        )
    )
    logger.info(
        "place_stock.completed",
        strategy=strategy_name,
        outcome=result.outcome.value,
    )
    return result.model_dump(mode="json")
