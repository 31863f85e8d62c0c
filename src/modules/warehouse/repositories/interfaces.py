"""Stock placement repository interface.

Extends ``IRepository[StockPlacement]`` with the append operation used
by the fulfillment transaction.  ``get_by_id`` serves the read endpoint
and the stored-procedure strategy.  The ledger is append-only, so the
contract has no update or delete.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.warehouse.models import StockPlacement


class IStockPlacementRepository(IRepository["StockPlacement"]):
    @abstractmethod
    def create(self, data: Dict[str, Any]) -> StockPlacement:
        """Insert a ledger entry and return it with its assigned id.

        ``data`` keys: ``warehouse_id``, ``product_id``, ``order_id``,
        ``amount``, ``price``, ``created_at``.  Must run inside the
        caller's atomic block.
        """
