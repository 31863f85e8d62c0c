"""Warehouse service layer (Use Cases).

``FulfillmentService`` is the single entry point for placing stock
against an order.  Each request moves through
``Validating -> MatchingOrder -> Committing`` and ends as one
``FulfillmentResult``: Succeeded, Rejected (with a reason) or Failed.

Business rules enforced:
- Amount must be greater than zero (checked here, for every strategy).
- Product and warehouse must exist.
- Only the oldest open order with the exact product and amount created
  strictly before the request time is eligible.
- An order is fulfilled at most once (conditional update; a lost race is
  ``Rejected(conflict)``, never a second placement).
- Ledger total is ``amount * unit price`` as read when the order matched.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable

import structlog
from django.utils import timezone

from modules.catalog.repositories.django_repository import CatalogDjangoRepository
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.warehouse.constants import FulfillmentStrategyName
from modules.warehouse.dtos import AddProductToWarehouseDTO, FulfillmentResult
from modules.warehouse.exceptions import (
    FulfillmentRejected,
    InvalidAmount,
    StorageFailure,
)
from modules.warehouse.fulfillment import FulfillmentTransaction
from modules.warehouse.repositories.django_repository import (
    StockPlacementDjangoRepository,
)
from modules.warehouse.strategies import (
    DirectTransactionStrategy,
    IFulfillmentStrategy,
    StoredProcedureStrategy,
)

logger = structlog.get_logger(__name__)


class FulfillmentService:
    """Application service for the add-product-to-warehouse use case.

    Receives its execution strategy via constructor injection (DIP).  The
    clock is injectable so tests can pin the request time.
    """

    def __init__(
        self,
        strategy: IFulfillmentStrategy,
        clock: Callable[[], datetime] = timezone.now,
    ) -> None:
        self._strategy = strategy
        self._clock = clock

    @property
    def strategy(self) -> IFulfillmentStrategy:
        return self._strategy

    def add_product(self, request: AddProductToWarehouseDTO) -> FulfillmentResult:
        """Fulfil the oldest matching order by placing stock in a warehouse.

        Never raises for business or storage errors; inspect the returned
        ``FulfillmentResult`` instead.
        """
        log = logger.bind(
            strategy=self._strategy.name,
            product_id=request.product_id,
            warehouse_id=request.warehouse_id,
            amount=request.amount,
        )
        log.info("fulfillment.started")

        try:
            if request.amount <= 0:
                raise InvalidAmount()
            now = self._clock()
            stock_placement_id = self._strategy.execute(request, now)
        except FulfillmentRejected as exc:
            log.info("fulfillment.rejected", reason=exc.reason.value, detail=str(exc))
            return FulfillmentResult.rejected(exc.reason, str(exc))
        except StorageFailure as exc:
            log.error("fulfillment.failed", detail=str(exc))
            return FulfillmentResult.failed(str(exc))

        log.info("fulfillment.succeeded", stock_placement_id=stock_placement_id)
        return FulfillmentResult.succeeded(stock_placement_id)


# ---------------------------------------------------------------------------
# Wiring
# ---------------------------------------------------------------------------


def build_strategy(name: str) -> IFulfillmentStrategy:
    """Instantiate a strategy by name (``direct`` or ``procedure``)."""
    if name == FulfillmentStrategyName.DIRECT:
        order_repository = OrderDjangoRepository()
        return DirectTransactionStrategy(
            catalog_repository=CatalogDjangoRepository(),
            order_repository=order_repository,
            fulfillment_transaction=FulfillmentTransaction(
                order_repository=order_repository,
                stock_placement_repository=StockPlacementDjangoRepository(),
            ),
        )
    if name == FulfillmentStrategyName.PROCEDURE:
        return StoredProcedureStrategy()
    raise ValueError(f"Unknown fulfillment strategy {name!r}.")


def build_fulfillment_service(name: str) -> FulfillmentService:
    return FulfillmentService(strategy=build_strategy(name))
