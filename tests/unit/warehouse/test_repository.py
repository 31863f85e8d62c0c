"""Unit tests for StockPlacementDjangoRepository and the ledger model."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

import pytest
from django.db import IntegrityError, transaction
from django.utils import timezone

from modules.warehouse.models import StockPlacement
from modules.warehouse.repositories.django_repository import (
    StockPlacementDjangoRepository,
)

pytestmark = pytest.mark.unit


@pytest.fixture()
def repo():
    return StockPlacementDjangoRepository()


@pytest.fixture()
def placement_data(product, warehouse, make_order):
    order = make_order(product, 2, fulfilled_at=timezone.now())
    return {
        "warehouse_id": warehouse.id,
        "product_id": product.id,
        "order_id": order.id,
        "amount": 2,
        "price": Decimal("51.00"),
        "created_at": timezone.now(),
    }


class TestCreate:
    def test_persists_all_fields(self, repo, placement_data):
        placement = repo.create(placement_data)
        placement.refresh_from_db()

        assert placement.order_id == placement_data["order_id"]
        assert placement.price == Decimal("51.00")
        assert placement.created_at == placement_data["created_at"]

    def test_amount_must_be_positive(self, repo, placement_data):
        placement_data["amount"] = 0
        with pytest.raises(IntegrityError):
            with transaction.atomic():
                repo.create(placement_data)


class TestRead:
    def test_get_by_id(self, repo, placement_data):
        placement = repo.create(placement_data)
        assert repo.get_by_id(placement.id) == placement

    @pytest.mark.parametrize("bad_id", [999999, "abc"])
    def test_get_by_id_missing(self, repo, bad_id):
        assert repo.get_by_id(bad_id) is None

    def test_ledger_ordering_newest_first(self, repo, placement_data):
        first = repo.create(placement_data)
        placement_data["created_at"] = first.created_at + timedelta(minutes=1)
        second = repo.create(placement_data)

        assert list(StockPlacement.objects.all()) == [second, first]
