"""Unit tests for the Order model."""

from __future__ import annotations

import pytest
from django.db import IntegrityError, transaction
from django.utils import timezone

from modules.orders.models import Order

pytestmark = pytest.mark.unit


class TestOrder:
    def test_new_order_is_open(self, product):
        order = Order.objects.create(product=product, amount=2)
        assert order.fulfilled_at is None
        assert order.is_fulfilled is False
        assert order.created_at is not None

    def test_str_shows_state(self, product):
        order = Order.objects.create(
            product=product, amount=2, fulfilled_at=timezone.now()
        )
        assert "fulfilled" in str(order)

    def test_amount_must_be_positive(self, product):
        with pytest.raises(IntegrityError):
            with transaction.atomic():
                Order.objects.create(product=product, amount=0)
