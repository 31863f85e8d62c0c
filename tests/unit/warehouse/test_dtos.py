"""Unit tests for warehouse DTOs and exceptions."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from modules.warehouse.constants import FulfillmentOutcome, RejectionReason
from modules.warehouse.dtos import AddProductToWarehouseDTO, FulfillmentResult
from modules.warehouse.exceptions import (
    FulfillmentConflict,
    InvalidAmount,
    NoMatchingOrder,
    rejection_for_reason,
)

pytestmark = pytest.mark.unit


class TestAddProductToWarehouseDTO:
    def test_non_positive_amount_is_accepted(self):
        dto = AddProductToWarehouseDTO(product_id=1, warehouse_id=1, amount=0)
        assert dto.amount == 0

    def test_frozen(self):
        dto = AddProductToWarehouseDTO(product_id=1, warehouse_id=1, amount=1)
        with pytest.raises(ValidationError):
            dto.amount = 2


class TestFulfillmentResult:
    def test_succeeded(self):
        result = FulfillmentResult.succeeded(7)
        assert result.outcome == FulfillmentOutcome.SUCCEEDED
        assert result.stock_placement_id == 7
        assert result.is_succeeded
        assert not result.is_rejected
        assert not result.is_failed

    def test_rejected_defaults_detail_to_reason_label(self):
        result = FulfillmentResult.rejected(RejectionReason.NO_MATCHING_ORDER)
        assert result.is_rejected
        assert result.reason == RejectionReason.NO_MATCHING_ORDER
        assert result.detail == "No matching order to fulfill."
        assert result.stock_placement_id is None

    def test_failed(self):
        result = FulfillmentResult.failed("connection reset")
        assert result.is_failed
        assert result.detail == "connection reset"
        assert result.reason is None

    def test_json_dump(self):
        data = FulfillmentResult.rejected(RejectionReason.CONFLICT).model_dump(
            mode="json"
        )
        assert data["outcome"] == "REJECTED"
        assert data["reason"] == "conflict"


class TestRejections:
    def test_default_message_is_reason_label(self):
        assert str(InvalidAmount()) == "Amount must be greater than zero."

    def test_custom_message(self):
        exc = NoMatchingOrder("nothing for product 3")
        assert str(exc) == "nothing for product 3"
        assert exc.reason == RejectionReason.NO_MATCHING_ORDER

    def test_rejection_for_reason(self):
        exc = rejection_for_reason("conflict")
        assert isinstance(exc, FulfillmentConflict)

    def test_rejection_for_unknown_reason(self):
        assert rejection_for_reason("out-of-stock") is None

    @pytest.mark.parametrize("reason", list(RejectionReason))
    def test_every_reason_has_an_exception(self, reason):
        assert rejection_for_reason(reason.value).reason == reason
