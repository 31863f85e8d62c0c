from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from rest_framework.test import APIClient

from modules.catalog.models import Product, Warehouse
from modules.orders.models import Order


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def product():
    return Product.objects.create(name="Pallet Jack", price=Decimal("25.50"))


@pytest.fixture()
def warehouse():
    return Warehouse.objects.create(name="Central", address="1 Logistics Way")


@pytest.fixture()
def make_order():
    """Factory for open orders created in the past (so they are matchable)."""

    def _make(product, amount, age=timedelta(hours=1), **overrides):
        fields = {
            "product": product,
            "amount": amount,
            "created_at": timezone.now() - age,
        }
        fields.update(overrides)
        return Order.objects.create(**fields)

    return _make
