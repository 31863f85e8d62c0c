"""Fulfillment transaction: the only writer of ``fulfilled_at`` and the ledger.

One call is one unit of work, run under ``transaction.atomic()``:

1. Conditionally mark the order fulfilled (``fulfilled_at IS NULL``
   compare-and-set).  Zero affected rows means another request won the
   race; ``FulfillmentConflict`` is raised and the unit rolls back.
2. Append the StockPlacement with ``price = amount * snapshot_price``.
3. Record ``StockPlaced`` in the transactional outbox.

Any database error rolls the whole unit back and is re-raised as
``StorageFailure``.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

import structlog
from django.db import DatabaseError, transaction

from modules.core.models import OutboxEvent
from modules.core.outbox import record_event
from modules.orders.repositories.interfaces import IOrderRepository
from modules.warehouse.constants import STOCK_PLACEMENT_TOPIC
from modules.warehouse.events import StockPlaced
from modules.warehouse.exceptions import FulfillmentConflict, StorageFailure
from modules.warehouse.models import StockPlacement
from modules.warehouse.repositories.interfaces import IStockPlacementRepository

logger = structlog.get_logger(__name__)


class FulfillmentTransaction:
    def __init__(
        self,
        order_repository: IOrderRepository,
        stock_placement_repository: IStockPlacementRepository,
    ) -> None:
        self._order_repo = order_repository
        self._placement_repo = stock_placement_repository

    def fulfill(
        self,
        *,
        order_id: int,
        warehouse_id: int,
        product_id: int,
        amount: int,
        snapshot_price: Decimal,
        now: datetime,
    ) -> int:
        """Fulfil ``order_id`` and return the new stock placement id.

        Raises:
            FulfillmentConflict: the order was already fulfilled at write time.
            StorageFailure: the database failed; nothing was persisted.
        """
        log = logger.bind(
            order_id=order_id,
            warehouse_id=warehouse_id,
            product_id=product_id,
            amount=amount,
        )
        total = amount * snapshot_price

        try:
            with transaction.atomic():
                if not self._order_repo.mark_fulfilled(order_id, now):
                    log.warning("fulfillment.conflict")
                    raise FulfillmentConflict(
                        f"Order {order_id} was fulfilled by a concurrent request."
                    )

                placement = self._placement_repo.create(
                    {
                        "warehouse_id": warehouse_id,
                        "product_id": product_id,
                        "order_id": order_id,
                        "amount": amount,
                        "price": total,
                        "created_at": now,
                    }
                )

                record_stock_placed(placement)
        except DatabaseError as exc:
            log.error("fulfillment.storage_failure", error=str(exc))
            raise StorageFailure(str(exc)) from exc

        log.info(
            "fulfillment.committed",
            stock_placement_id=placement.id,
            total=str(total),
        )
        return placement.id


def record_stock_placed(placement: StockPlacement) -> OutboxEvent:
    """Write the ``StockPlaced`` event for ``placement`` to the outbox.

    Shared by both strategies so the event is identical whichever one
    committed the placement.  Must run inside the fulfillment's atomic
    block.
    """
    return record_event(
        StockPlaced(
            aggregate_id=str(placement.id),
            order_id=placement.order_id,
            warehouse_id=placement.warehouse_id,
            product_id=placement.product_id,
            amount=placement.amount,
            total_price=str(placement.price),
        ),
        topic=STOCK_PLACEMENT_TOPIC,
    )
