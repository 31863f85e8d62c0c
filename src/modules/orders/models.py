"""Order model.

Orders are created upstream (outside this service) in an unfulfilled
state and wait for stock to be placed for them.

Business rules implemented:
- Requested amount is a positive integer (DB check constraint).
- ``fulfilled_at`` is the fulfillment gate: ``NULL`` means the order is
  still open, any value makes the order terminal.  It is written only by
  ``FulfillmentTransaction`` through a conditional update.
- ``created_at`` is settable (defaults to now) because orders are
  imported with their original creation time.
"""

from __future__ import annotations

from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone


class Order(models.Model):
    product = models.ForeignKey(
        "catalog.Product",
        on_delete=models.PROTECT,
        related_name="orders",
    )
    amount = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    created_at = models.DateTimeField(default=timezone.now)
    fulfilled_at = models.DateTimeField(null=True, blank=True, default=None)

    class Meta:
        db_table = "orders"
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(
                fields=["product", "amount", "created_at"],
                name="orders_match_idx",
            ),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(amount__gte=1),
                name="orders_amount_positive",
            ),
        ]

    @property
    def is_fulfilled(self) -> bool:
        return self.fulfilled_at is not None

    def __str__(self) -> str:
        state = "fulfilled" if self.is_fulfilled else "open"
        return f"Order #{self.pk} ({self.amount} x product {self.product_id}, {state})"
