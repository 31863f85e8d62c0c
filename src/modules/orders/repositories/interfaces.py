"""Order repository interface.

Declares only the two operations the fulfillment flow needs: selecting
the order to fulfil and flipping it to fulfilled.

The Service Layer depends exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from modules.orders.dtos import OrderMatch


class IOrderRepository(ABC):
    """Repository contract for orders awaiting fulfillment."""

    @abstractmethod
    def find_fulfillable(
        self, product_id: int, amount: int, as_of: datetime
    ) -> Optional[OrderMatch]:
        """Select the oldest open order for exactly this product and amount.

        Only orders created strictly before ``as_of`` qualify.  Returns
        ``None`` when nothing matches.
        """

    @abstractmethod
    def mark_fulfilled(self, order_id: int, fulfilled_at: datetime) -> bool:
        """Set ``fulfilled_at`` only if the order is still open.

        Returns ``False`` when the order was already fulfilled (or does
        not exist) at write time.  Must run inside the caller's atomic
        block.
        """
