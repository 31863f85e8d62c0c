"""Order DTOs.

``OrderMatch`` is the Order Matcher's output: the selected order and the
product unit price read in the same query.  The price travels with the
match into the fulfillment transaction, which never re-reads it.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class OrderMatch(BaseModel):
    """Immutable result of a successful order match."""

    model_config = ConfigDict(frozen=True)

    order_id: int
    unit_price: Decimal
