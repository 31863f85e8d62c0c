"""Fulfillment strategy contract.

A strategy runs the validate / match / commit part of a fulfillment
request.  ``FulfillmentService`` depends only on this interface, so the
in-process transaction and the database-side procedure are
interchangeable.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from modules.warehouse.dtos import AddProductToWarehouseDTO


class IFulfillmentStrategy(ABC):
    name: str

    @abstractmethod
    def execute(self, request: AddProductToWarehouseDTO, now: datetime) -> int:
        """Fulfil one order for ``request`` and return the new stock placement id.

        ``now`` is both the matching cut-off (orders created strictly
        before it qualify) and the fulfillment timestamp.

        Raises:
            FulfillmentRejected: a business rule rejected the request.
            StorageFailure: the database failed; nothing was persisted.
        """
