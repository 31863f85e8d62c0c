"""Integration tests for the Celery configuration and tasks."""

from datetime import timedelta
from decimal import Decimal

import pytest

from modules.core.models import EventStatus, OutboxEvent
from modules.warehouse.models import StockPlacement

pytestmark = pytest.mark.integration


@pytest.fixture(autouse=True)
def _celery_eager(settings):
    """Run tasks synchronously in the test process."""
    settings.CELERY_TASK_ALWAYS_EAGER = True
    settings.CELERY_TASK_EAGER_PROPAGATES = True


class TestCeleryConfig:
    def test_celery_app_exported_from_init(self):
        from config import celery_app

        assert celery_app.main == "warehouse"

    def test_celery_serializer_is_json(self, settings):
        assert settings.CELERY_TASK_SERIALIZER == "json"
        assert settings.CELERY_RESULT_SERIALIZER == "json"
        assert settings.CELERY_ACCEPT_CONTENT == ["json"]

    def test_outbox_relay_is_scheduled(self, settings):
        schedule = settings.CELERY_BEAT_SCHEDULE["publish-outbox-events"]
        assert schedule["task"] == "core.publish_outbox_events"


class TestPlaceStockTask:
    def test_succeeded(self, product, warehouse, make_order):
        order = make_order(product, 3, age=timedelta(days=1))
        from modules.warehouse.tasks import place_stock

        result = place_stock.apply(
            kwargs={
                "product_id": product.id,
                "warehouse_id": warehouse.id,
                "amount": 3,
            }
        )

        assert result.successful()
        payload = result.result
        assert payload["outcome"] == "SUCCEEDED"
        placement = StockPlacement.objects.get(id=payload["stock_placement_id"])
        assert placement.order_id == order.id
        assert placement.price == Decimal("76.50")

    def test_rejection_is_returned_not_raised(self, product, warehouse):
        from modules.warehouse.tasks import place_stock

        result = place_stock.apply(
            kwargs={
                "product_id": product.id,
                "warehouse_id": warehouse.id,
                "amount": 3,
            }
        )

        assert result.successful()
        assert result.result["outcome"] == "REJECTED"
        assert result.result["reason"] == "no-matching-order"

    def test_explicit_strategy(self, product, warehouse, settings):
        settings.FULFILLMENT_DEFAULT_STRATEGY = "direct"
        from modules.warehouse.tasks import place_stock

        result = place_stock.apply(
            kwargs={
                "product_id": product.id,
                "warehouse_id": warehouse.id,
                "amount": 0,
                "strategy": "procedure",
            }
        )

        assert result.result["reason"] == "invalid-amount"


class TestOutboxRelayTask:
    def test_fulfillment_event_is_relayed(self, product, warehouse, make_order):
        make_order(product, 1, age=timedelta(days=1))
        from modules.core.tasks import publish_outbox_events
        from modules.warehouse.tasks import place_stock

        place_stock.apply(
            kwargs={
                "product_id": product.id,
                "warehouse_id": warehouse.id,
                "amount": 1,
            }
        )
        result = publish_outbox_events.apply()

        assert result.result == {"published": 1, "failed": 0}
        assert OutboxEvent.objects.get().status == EventStatus.PUBLISHED
