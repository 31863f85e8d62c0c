"""Warehouse DRF serializers for API input/output.

The serializer operates at the Interface layer (API Views).  Business
logic lives in the Service Layer, which receives Pydantic DTOs from
``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.warehouse.models import StockPlacement


class AddProductToWarehouseSerializer(serializers.Serializer):
    """Validates the fulfillment request payload.

    Only types are checked; ``amount <= 0`` is reported by the service as
    ``invalid-amount``.
    """

    product_id = serializers.IntegerField()
    warehouse_id = serializers.IntegerField()
    amount = serializers.IntegerField()


class StockPlacementSerializer(serializers.ModelSerializer):
    class Meta:
        model = StockPlacement
        fields = [
            "id",
            "warehouse_id",
            "product_id",
            "order_id",
            "amount",
            "price",
            "created_at",
        ]
        read_only_fields = fields
