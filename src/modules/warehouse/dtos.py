"""Warehouse DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.  DTOs are
immutable (``frozen=True``).

- ``AddProductToWarehouseDTO``: input for one fulfillment request.
- ``FulfillmentResult``: outcome of a request
  (``Succeeded(id)`` / ``Rejected(reason)`` / ``Failed(detail)``).
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict

from modules.warehouse.constants import FulfillmentOutcome, RejectionReason


class AddProductToWarehouseDTO(BaseModel):
    """Immutable DTO for a fulfillment request.

    ``amount`` is deliberately not range-checked here: a non-positive
    amount is a business rejection (``invalid-amount``) reported by the
    service, not a malformed request.
    """

    model_config = ConfigDict(frozen=True)

    product_id: int
    warehouse_id: int
    amount: int


class FulfillmentResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    outcome: FulfillmentOutcome
    stock_placement_id: Optional[int] = None
    reason: Optional[RejectionReason] = None
    detail: str = ""

    @classmethod
    def succeeded(cls, stock_placement_id: int) -> FulfillmentResult:
        return cls(
            outcome=FulfillmentOutcome.SUCCEEDED,
            stock_placement_id=stock_placement_id,
        )

    @classmethod
    def rejected(cls, reason: RejectionReason, detail: str = "") -> FulfillmentResult:
        return cls(
            outcome=FulfillmentOutcome.REJECTED,
            reason=reason,
            detail=detail or reason.label,
        )

    @classmethod
    def failed(cls, detail: str) -> FulfillmentResult:
        return cls(outcome=FulfillmentOutcome.FAILED, detail=detail)

    @property
    def is_succeeded(self) -> bool:
        return self.outcome == FulfillmentOutcome.SUCCEEDED

    @property
    def is_rejected(self) -> bool:
        return self.outcome == FulfillmentOutcome.REJECTED

    @property
    def is_failed(self) -> bool:
        return self.outcome == FulfillmentOutcome.FAILED
