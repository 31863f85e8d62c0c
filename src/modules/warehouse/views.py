"""Warehouse API views.

Exposes ``FulfillmentService`` via HTTP using DRF ViewSets.  Both
endpoints accept the same payload and differ only in the execution
strategy; the ``FulfillmentResult`` is translated into an HTTP response
here.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter
from rest_framework.mixins import ListModelMixin
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.pagination import StandardResultsSetPagination
from modules.warehouse.constants import FulfillmentStrategyName, RejectionReason
from modules.warehouse.dtos import AddProductToWarehouseDTO, FulfillmentResult
from modules.warehouse.filters import StockPlacementFilter
from modules.warehouse.models import StockPlacement
from modules.warehouse.repositories.django_repository import (
    StockPlacementDjangoRepository,
)
from modules.warehouse.serializers import (
    AddProductToWarehouseSerializer,
    StockPlacementSerializer,
)
from modules.warehouse.services import build_fulfillment_service

REJECTION_STATUS = {
    RejectionReason.INVALID_AMOUNT: status.HTTP_400_BAD_REQUEST,
    RejectionReason.UNKNOWN_PRODUCT: status.HTTP_404_NOT_FOUND,
    RejectionReason.UNKNOWN_WAREHOUSE: status.HTTP_404_NOT_FOUND,
    RejectionReason.NO_MATCHING_ORDER: status.HTTP_409_CONFLICT,
    RejectionReason.CONFLICT: status.HTTP_409_CONFLICT,
}


def _result_response(result: FulfillmentResult) -> Response:
    if result.is_succeeded:
        return Response(
            {"new_id": result.stock_placement_id},
            status=status.HTTP_201_CREATED,
        )
    if result.is_rejected:
        return Response(
            {"detail": result.detail, "code": result.reason.value},
            status=REJECTION_STATUS[result.reason],
        )
    return Response(
        {"detail": result.detail, "code": "storage-failure"},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


class WarehouseViewSet(GenericViewSet):
    """Fulfillment endpoints.

    ``POST /api/v1/warehouse/manual/`` runs the direct transaction,
    ``POST /api/v1/warehouse/proc/`` the database-side procedure.
    """

    serializer_class = AddProductToWarehouseSerializer

    @action(detail=False, methods=["post"], url_path="manual")
    def manual(self, request: Request) -> Response:
        return self._fulfill(request, FulfillmentStrategyName.DIRECT)

    @action(detail=False, methods=["post"], url_path="proc")
    def procedure(self, request: Request) -> Response:
        return self._fulfill(request, FulfillmentStrategyName.PROCEDURE)

    def _fulfill(self, request: Request, strategy: str) -> Response:
        serializer = AddProductToWarehouseSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        dto = AddProductToWarehouseDTO(**serializer.validated_data)
        result = build_fulfillment_service(strategy).add_product(dto)
        return _result_response(result)


class StockPlacementViewSet(ListModelMixin, GenericViewSet):
    """Read-only access to the stock placement ledger."""

    queryset = StockPlacement.objects.all()
    serializer_class = StockPlacementSerializer
    pagination_class = StandardResultsSetPagination
    filterset_class = StockPlacementFilter
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    ordering_fields = ["created_at", "price", "amount"]
    ordering = ["-created_at", "-id"]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._repo = StockPlacementDjangoRepository()

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/stock-placements/{pk}/"""
        placement = self._repo.get_by_id(pk) if pk is not None else None
        if placement is None:
            return Response(
                {"detail": "Stock placement not found."},
                status=status.HTTP_404_NOT_FOUND,
            )
        return Response(StockPlacementSerializer(placement).data)
