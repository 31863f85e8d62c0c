"""Fulfillment domain exceptions.

Raised by the execution strategies.  ``FulfillmentService`` catches them
and turns them into a ``FulfillmentResult``:

- ``FulfillmentRejected`` subclasses are caller-correctable input errors,
  each carrying the ``RejectionReason`` reported to the client.
- ``StorageFailure`` is an infrastructure error; the unit of work has
  already been rolled back when it is raised.
"""

from __future__ import annotations

from typing import Dict, Optional, Type

from modules.warehouse.constants import RejectionReason


class FulfillmentRejected(Exception):
    """Base class for business-rule violations of the fulfillment flow."""

    reason: RejectionReason

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.reason.label)


class InvalidAmount(FulfillmentRejected):
    """The requested amount is zero or negative."""

    reason = RejectionReason.INVALID_AMOUNT


class ProductNotFound(FulfillmentRejected):
    """The referenced product does not exist."""

    reason = RejectionReason.UNKNOWN_PRODUCT


class WarehouseNotFound(FulfillmentRejected):
    """The referenced warehouse does not exist."""

    reason = RejectionReason.UNKNOWN_WAREHOUSE


class NoMatchingOrder(FulfillmentRejected):
    """No open order matches the product and amount."""

    reason = RejectionReason.NO_MATCHING_ORDER


class FulfillmentConflict(FulfillmentRejected):
    """The matched order was fulfilled by a concurrent request first."""

    reason = RejectionReason.CONFLICT


class StorageFailure(Exception):
    """The database failed while reading or committing the fulfillment."""


_REJECTIONS: Dict[str, Type[FulfillmentRejected]] = {
    cls.reason.value: cls
    for cls in (
        InvalidAmount,
        ProductNotFound,
        WarehouseNotFound,
        NoMatchingOrder,
        FulfillmentConflict,
    )
}


def rejection_for_reason(
    reason: str, message: str = ""
) -> Optional[FulfillmentRejected]:
    """Build the exception for a reason code, or ``None`` if the code is unknown."""
    exc_class = _REJECTIONS.get(reason)
    if exc_class is None:
        return None
    return exc_class(message)
