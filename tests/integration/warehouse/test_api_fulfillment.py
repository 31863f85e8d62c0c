"""Integration tests for the fulfillment endpoints.

``POST /api/v1/warehouse/manual/`` runs the direct strategy.
``POST /api/v1/warehouse/proc/`` runs the database procedure; on SQLite
it always answers 500 since no procedure can be installed there.
"""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal
from unittest import mock

import pytest
from django.db import DatabaseError, connection

from modules.core.models import OutboxEvent
from modules.warehouse.exceptions import WarehouseNotFound
from modules.warehouse.models import StockPlacement
from modules.warehouse.repositories.django_repository import (
    StockPlacementDjangoRepository,
)

pytestmark = pytest.mark.integration

MANUAL_URL = "/api/v1/warehouse/manual/"
PROC_URL = "/api/v1/warehouse/proc/"


def _post(client, url, product_id, warehouse_id, amount):
    return client.post(
        url,
        {"product_id": product_id, "warehouse_id": warehouse_id, "amount": amount},
        format="json",
    )


class TestManualEndpoint:
    def test_created(self, api_client, product, warehouse, make_order):
        order = make_order(product, 4, age=timedelta(days=1))

        response = _post(api_client, MANUAL_URL, product.id, warehouse.id, 4)

        assert response.status_code == 201
        new_id = response.json()["new_id"]
        placement = StockPlacement.objects.get(id=new_id)
        assert placement.order_id == order.id
        assert placement.price == Decimal("102.00")
        order.refresh_from_db()
        assert order.fulfilled_at == placement.created_at

    def test_invalid_amount(self, api_client, product, warehouse):
        response = _post(api_client, MANUAL_URL, product.id, warehouse.id, 0)

        assert response.status_code == 400
        assert response.json() == {
            "detail": "Amount must be greater than zero.",
            "code": "invalid-amount",
        }

    def test_unknown_product(self, api_client, warehouse):
        response = _post(api_client, MANUAL_URL, 999999, warehouse.id, 1)

        assert response.status_code == 404
        assert response.json()["code"] == "unknown-product"

    def test_unknown_warehouse(self, api_client, product):
        response = _post(api_client, MANUAL_URL, product.id, 999999, 1)

        assert response.status_code == 404
        assert response.json()["code"] == "unknown-warehouse"

    def test_no_matching_order(self, api_client, product, warehouse, make_order):
        make_order(product, 2)

        response = _post(api_client, MANUAL_URL, product.id, warehouse.id, 3)

        assert response.status_code == 409
        assert response.json()["code"] == "no-matching-order"
        assert StockPlacement.objects.count() == 0

    def test_second_request_for_single_order(
        self, api_client, product, warehouse, make_order
    ):
        make_order(product, 1)

        first = _post(api_client, MANUAL_URL, product.id, warehouse.id, 1)
        second = _post(api_client, MANUAL_URL, product.id, warehouse.id, 1)

        assert first.status_code == 201
        assert second.status_code == 409
        assert second.json()["code"] == "no-matching-order"
        assert StockPlacement.objects.count() == 1

    def test_storage_failure(self, api_client, product, warehouse, make_order):
        order = make_order(product, 1)

        with mock.patch.object(
            StockPlacementDjangoRepository,
            "create",
            side_effect=DatabaseError("disk I/O error"),
        ):
            response = _post(api_client, MANUAL_URL, product.id, warehouse.id, 1)

        assert response.status_code == 500
        assert response.json()["code"] == "storage-failure"
        order.refresh_from_db()
        assert order.fulfilled_at is None
        assert OutboxEvent.objects.count() == 0

    @pytest.mark.parametrize(
        "payload",
        [
            {"warehouse_id": 1, "amount": 1},
            {"product_id": "abc", "warehouse_id": 1, "amount": 1},
            {"product_id": 1, "warehouse_id": 1, "amount": 1.5},
        ],
    )
    def test_malformed_payload(self, api_client, payload):
        response = api_client.post(MANUAL_URL, payload, format="json")
        assert response.status_code == 400

    def test_get_not_allowed(self, api_client):
        assert api_client.get(MANUAL_URL).status_code == 405


class TestProcEndpoint:
    def test_invalid_amount_rejected_before_procedure(self, api_client):
        response = _post(api_client, PROC_URL, 1, 1, -1)

        assert response.status_code == 400
        assert response.json()["code"] == "invalid-amount"

    def test_procedure_rejection_maps_to_status(self, api_client, product, warehouse):
        with mock.patch(
            "modules.warehouse.strategies.procedure.StoredProcedureStrategy.execute",
            side_effect=WarehouseNotFound(),
        ):
            response = _post(api_client, PROC_URL, product.id, warehouse.id, 1)

        assert response.status_code == 404
        assert response.json()["code"] == "unknown-warehouse"

    def test_procedure_success(self, api_client, product, warehouse):
        with mock.patch(
            "modules.warehouse.strategies.procedure.StoredProcedureStrategy.execute",
            return_value=77,
        ):
            response = _post(api_client, PROC_URL, product.id, warehouse.id, 1)

        assert response.status_code == 201
        assert response.json() == {"new_id": 77}

    @pytest.mark.skipif(
        connection.vendor != "sqlite", reason="procedure is installed on this vendor"
    )
    def test_unavailable_on_sqlite(self, api_client, product, warehouse, make_order):
        make_order(product, 1)

        response = _post(api_client, PROC_URL, product.id, warehouse.id, 1)

        assert response.status_code == 500
        assert response.json()["code"] == "storage-failure"


@pytest.mark.skipif(
    connection.vendor not in ("postgresql", "mysql"),
    reason="requires a database with the fulfillment procedure installed",
)
class TestProcEndpointWithProcedure:
    def test_created(self, api_client, product, warehouse, make_order):
        order = make_order(product, 2, age=timedelta(days=1))

        response = _post(api_client, PROC_URL, product.id, warehouse.id, 2)

        assert response.status_code == 201
        placement = StockPlacement.objects.get(id=response.json()["new_id"])
        assert placement.order_id == order.id
        assert placement.price == Decimal("51.00")

        event = OutboxEvent.objects.get(aggregate_id=str(placement.id))
        assert event.event_type == "StockPlaced"
        assert event.payload["order_id"] == order.id
        assert event.payload["total_price"] == "51.00"

    def test_no_matching_order(self, api_client, product, warehouse):
        response = _post(api_client, PROC_URL, product.id, warehouse.id, 2)

        assert response.status_code == 409
        assert response.json()["code"] == "no-matching-order"

    def test_unknown_product(self, api_client, warehouse):
        response = _post(api_client, PROC_URL, 999999, warehouse.id, 2)

        assert response.status_code == 404
        assert response.json()["code"] == "unknown-product"

    def test_rejection_records_no_event(self, api_client, product, warehouse):
        _post(api_client, PROC_URL, product.id, warehouse.id, 2)

        assert not OutboxEvent.objects.exists()
