"""Product and Warehouse models.

Both are reference data for the fulfillment flow: the flow only reads a
product's unit price and checks that a warehouse exists.  Neither is
written by the fulfillment transaction.

Business rules implemented:
- Product price must be greater than zero (DB check constraint).
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import TimestampedModel


class Product(TimestampedModel):
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )

    class Meta:
        db_table = "products"
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gt=0),
                name="products_price_positive",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.price})"


class Warehouse(TimestampedModel):
    name = models.CharField(max_length=255)
    address = models.CharField(max_length=255, blank=True, default="")

    class Meta:
        db_table = "warehouses"
        ordering = ["id"]

    def __str__(self) -> str:
        return self.name
