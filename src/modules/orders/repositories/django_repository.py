"""Django ORM implementation of the Order repository.

Satisfies ``IOrderRepository`` using Django's QuerySet API.

Concurrency control on fulfillment is a compare-and-set: the UPDATE is
filtered on ``fulfilled_at IS NULL`` and the affected row count tells
the caller whether it won.  The matching query takes no lock, so two
requests may select the same order; only one of them can then flip it.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

import structlog

from modules.orders.dtos import OrderMatch
from modules.orders.models import Order
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Fulfillment
    # ------------------------------------------------------------------

    def find_fulfillable(
        self, product_id: int, amount: int, as_of: datetime
    ) -> Optional[OrderMatch]:
        """Oldest-first match on product, exact amount and open state.

        The product price is joined in the same query so the snapshot is
        taken at selection time.
        """
        row = (
            Order.objects.filter(
                product_id=product_id,
                amount=amount,
                fulfilled_at__isnull=True,
                created_at__lt=as_of,
            )
            .order_by("created_at", "id")
            .values("id", "product__price")
            .first()
        )
        log = logger.bind(product_id=product_id, amount=amount)
        if row is None:
            log.info("order.no_fulfillable_match")
            return None

        log.info("order.matched", order_id=row["id"])
        return OrderMatch(order_id=row["id"], unit_price=row["product__price"])

    def mark_fulfilled(self, order_id: int, fulfilled_at: datetime) -> bool:
        updated = Order.objects.filter(
            id=order_id,
            fulfilled_at__isnull=True,
        ).update(fulfilled_at=fulfilled_at)

        if updated == 0:
            logger.warning("order.already_fulfilled", order_id=order_id)
            return False

        logger.info("order.fulfilled", order_id=order_id)
        return True
