"""Domain events for the Warehouse bounded context."""

from __future__ import annotations

from dataclasses import dataclass

from shared.domain.events import DomainEvent


@dataclass(frozen=True, kw_only=True)
class StockPlaced(DomainEvent):
    """Raised when an order is fulfilled by a new stock placement.

    ``aggregate_id`` is the stock placement id.  ``total_price`` is the
    decimal total rendered as a string.
    """

    order_id: int
    warehouse_id: int
    product_id: int
    amount: int
    total_price: str
