"""Warehouse domain constants.

Outcome and rejection vocabularies of the fulfillment use case, shared by
the service facade, both execution strategies, the API layer and the
database-side procedure (which reports rejections as
``FULFILLMENT:<reason>``).
"""

from django.db import models


class FulfillmentOutcome(models.TextChoices):
    SUCCEEDED = "SUCCEEDED", "Succeeded"
    REJECTED = "REJECTED", "Rejected"
    FAILED = "FAILED", "Failed"


class RejectionReason(models.TextChoices):
    INVALID_AMOUNT = "invalid-amount", "Amount must be greater than zero."
    UNKNOWN_PRODUCT = "unknown-product", "Product does not exist."
    UNKNOWN_WAREHOUSE = "unknown-warehouse", "Warehouse does not exist."
    NO_MATCHING_ORDER = "no-matching-order", "No matching order to fulfill."
    CONFLICT = "conflict", "Order is no longer available."


class FulfillmentStrategyName(models.TextChoices):
    DIRECT = "direct", "Direct transaction"
    PROCEDURE = "procedure", "Stored procedure"


DEFAULT_PROCEDURE_NAME = "add_product_to_warehouse"

PROCEDURE_ERROR_MARKER = "FULFILLMENT:"

STOCK_PLACEMENT_TOPIC = "warehouse"
