"""Catalog lookup contract.

Existence checks for products and warehouses, used by the fulfillment
flow before any order matching happens.  Both methods are pure reads.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional


class ICatalogRepository(ABC):
    @abstractmethod
    def get_product_price(self, product_id: int) -> Optional[Decimal]:
        """Return the product's current unit price, or ``None`` if it does not exist."""

    @abstractmethod
    def warehouse_exists(self, warehouse_id: int) -> bool:
        """Return ``True`` when a warehouse with this id exists."""
