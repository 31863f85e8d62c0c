"""Asynchronous tasks of the core module."""

from __future__ import annotations

from typing import Dict

import structlog
from celery import shared_task

from modules.core.models import EventStatus, OutboxEvent
from shared.domain.events import event_type_for
from shared.infrastructure.bus import event_bus

logger = structlog.get_logger(__name__)


@shared_task(name="core.publish_outbox_events")
def publish_outbox_events(batch_size: int = 100) -> Dict[str, int]:
    """Relay pending outbox rows to the in-process event bus.

    Rows are processed oldest first.  A row whose event type is unknown,
    or whose handler raises, is marked ``FAILED`` with the error and its
    retry counter incremented; the remaining rows are still processed.
    """
    pending = OutboxEvent.objects.filter(status=EventStatus.PENDING).order_by(
        "created_at", "id"
    )[:batch_size]

    published = 0
    failed = 0
    for outbox_event in pending:
        log = logger.bind(
            outbox_event_id=str(outbox_event.id),
            event_type=outbox_event.event_type,
        )
        event_class = event_type_for(outbox_event.event_type)
        try:
            if event_class is None:
                raise LookupError(f"Unknown event type {outbox_event.event_type!r}.")
            event_bus.publish(event_class.from_payload(outbox_event.payload))
        except Exception as exc:  # noqa: BLE001 - failure is recorded on the row
            outbox_event.mark_as_failed(str(exc))
            log.error("outbox.publish_failed", error=str(exc))
            failed += 1
            continue

        outbox_event.mark_as_published()
        log.info("outbox.published")
        published += 1

    return {"published": published, "failed": failed}
