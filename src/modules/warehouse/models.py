"""StockPlacement model: the warehouse ledger.

Business rules implemented:
- Each placement satisfies exactly one order.  One placement per order
  is guaranteed by the fulfillment transaction (the order's
  ``fulfilled_at`` gate), not by a unique index.
- ``price`` is the line total ``amount * unit price``, where the unit
  price is the snapshot taken when the order was matched.
- Append-only: rows are never updated or deleted by the application.
"""

from __future__ import annotations

from django.core.validators import MinValueValidator
from django.db import models


class StockPlacement(models.Model):
    warehouse = models.ForeignKey(
        "catalog.Warehouse",
        on_delete=models.PROTECT,
        related_name="stock_placements",
    )
    product = models.ForeignKey(
        "catalog.Product",
        on_delete=models.PROTECT,
        related_name="stock_placements",
    )
    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.PROTECT,
        related_name="stock_placements",
    )
    amount = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    price = models.DecimalField(max_digits=14, decimal_places=2)
    created_at = models.DateTimeField()

    class Meta:
        db_table = "stock_placements"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(
                fields=["warehouse", "-created_at"],
                name="placements_wh_created_idx",
            ),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(amount__gte=1),
                name="placements_amount_positive",
            ),
        ]

    def __str__(self) -> str:
        return (
            f"Placement #{self.pk}: {self.amount} x product {self.product_id} "
            f"-> warehouse {self.warehouse_id} (order {self.order_id})"
        )
