"""Django ORM implementation of the catalog lookups.

Error handling follows the Null Object pattern: a missing product is
reported as ``None`` and a missing warehouse as ``False``.  The caller
decides how to translate that into a rejection.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

import structlog

from modules.catalog.models import Product, Warehouse
from modules.catalog.repositories.interfaces import ICatalogRepository

logger = structlog.get_logger(__name__)


class CatalogDjangoRepository(ICatalogRepository):
    """Concrete catalog repository backed by Django ORM."""

    def get_product_price(self, product_id: int) -> Optional[Decimal]:
        price = (
            Product.objects.filter(id=product_id)
            .values_list("price", flat=True)
            .first()
        )
        if price is None:
            logger.info("catalog.product_not_found", product_id=product_id)
        return price

    def warehouse_exists(self, warehouse_id: int) -> bool:
        exists = Warehouse.objects.filter(id=warehouse_id).exists()
        if not exists:
            logger.info("catalog.warehouse_not_found", warehouse_id=warehouse_id)
        return exists
