"""Direct-transaction strategy: the fulfillment flow run from Python.

Steps, each short-circuiting on failure:
1. Catalog lookup: the product must exist (its price is not used here)
   and so must the warehouse.
2. Order matching: oldest open order with the exact product and amount,
   created strictly before ``now``; the unit price snapshot comes with it.
3. ``FulfillmentTransaction`` with that snapshot price.
"""

from __future__ import annotations

from datetime import datetime

import structlog
from django.db import DatabaseError

from modules.catalog.repositories.interfaces import ICatalogRepository
from modules.orders.repositories.interfaces import IOrderRepository
from modules.warehouse.constants import FulfillmentStrategyName
from modules.warehouse.dtos import AddProductToWarehouseDTO
from modules.warehouse.exceptions import (
    NoMatchingOrder,
    ProductNotFound,
    StorageFailure,
    WarehouseNotFound,
)
from modules.warehouse.fulfillment import FulfillmentTransaction
from modules.warehouse.strategies.interfaces import IFulfillmentStrategy

logger = structlog.get_logger(__name__)


class DirectTransactionStrategy(IFulfillmentStrategy):
    name = FulfillmentStrategyName.DIRECT.value

    def __init__(
        self,
        catalog_repository: ICatalogRepository,
        order_repository: IOrderRepository,
        fulfillment_transaction: FulfillmentTransaction,
    ) -> None:
        self._catalog_repo = catalog_repository
        self._order_repo = order_repository
        self._transaction = fulfillment_transaction

    def execute(self, request: AddProductToWarehouseDTO, now: datetime) -> int:
        try:
            if self._catalog_repo.get_product_price(request.product_id) is None:
                raise ProductNotFound(f"Product {request.product_id} not found.")
            if not self._catalog_repo.warehouse_exists(request.warehouse_id):
                raise WarehouseNotFound(f"Warehouse {request.warehouse_id} not found.")

            match = self._order_repo.find_fulfillable(
                request.product_id, request.amount, as_of=now
            )
        except DatabaseError as exc:
            logger.error("fulfillment.lookup_failed", error=str(exc))
            raise StorageFailure(str(exc)) from exc

        if match is None:
            raise NoMatchingOrder(
                f"No open order for product {request.product_id} "
                f"with amount {request.amount}."
            )

        return self._transaction.fulfill(
            order_id=match.order_id,
            warehouse_id=request.warehouse_id,
            product_id=request.product_id,
            amount=request.amount,
            snapshot_price=match.unit_price,
            now=now,
        )
