"""Integration tests for the stock placement ledger endpoints."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from modules.catalog.models import Warehouse
from modules.warehouse.models import StockPlacement

pytestmark = pytest.mark.integration

LIST_URL = "/api/v1/stock-placements/"


@pytest.fixture()
def placements(product, warehouse, make_order):
    other = Warehouse.objects.create(name="North", address="42 Harbour Road")
    now = timezone.now()
    created = []
    for index, target in enumerate([warehouse, warehouse, other]):
        order = make_order(product, index + 1, fulfilled_at=now)
        created.append(
            StockPlacement.objects.create(
                warehouse=target,
                product=product,
                order=order,
                amount=index + 1,
                price=Decimal("25.50") * (index + 1),
                created_at=now - timedelta(hours=3 - index),
            )
        )
    return created


class TestListStockPlacements:
    def test_paginated_newest_first(self, api_client, placements):
        response = api_client.get(LIST_URL)

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 3
        assert [row["id"] for row in data["results"]] == [
            p.id for p in reversed(placements)
        ]

    def test_fields(self, api_client, placements):
        row = api_client.get(LIST_URL).json()["results"][-1]

        assert set(row) == {
            "id",
            "warehouse_id",
            "product_id",
            "order_id",
            "amount",
            "price",
            "created_at",
        }
        assert row["price"] == "25.50"

    def test_filter_by_warehouse(self, api_client, placements, warehouse):
        data = api_client.get(LIST_URL, {"warehouse": warehouse.id}).json()
        assert data["count"] == 2

    def test_filter_by_order(self, api_client, placements):
        data = api_client.get(LIST_URL, {"order": placements[1].order_id}).json()
        assert [row["id"] for row in data["results"]] == [placements[1].id]

    def test_ordering_by_price(self, api_client, placements):
        data = api_client.get(LIST_URL, {"ordering": "price"}).json()
        prices = [row["price"] for row in data["results"]]
        assert prices == ["25.50", "51.00", "76.50"]

    def test_page_size(self, api_client, placements):
        data = api_client.get(LIST_URL, {"page_size": 2}).json()
        assert len(data["results"]) == 2
        assert data["next"] is not None


class TestRetrieveStockPlacement:
    def test_retrieve(self, api_client, placements):
        placement = placements[0]

        response = api_client.get(f"{LIST_URL}{placement.id}/")

        assert response.status_code == 200
        assert response.json()["order_id"] == placement.order_id

    def test_not_found(self, api_client):
        response = api_client.get(f"{LIST_URL}999999/")

        assert response.status_code == 404
        assert response.json() == {"detail": "Stock placement not found."}
