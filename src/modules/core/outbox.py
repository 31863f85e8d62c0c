"""Writing domain events to the transactional outbox.

``record_event`` must be called inside the same ``transaction.atomic()``
block as the business change that produced the event.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict
from uuid import UUID

import structlog

from modules.core.models import OutboxEvent
from shared.domain.events import DomainEvent

logger = structlog.get_logger(__name__)


def record_event(event: DomainEvent, topic: str) -> OutboxEvent:
    outbox_event = OutboxEvent.objects.create(
        event_type=event.event_name,
        aggregate_id=event.aggregate_id,
        payload=serialize_event_payload(event),
        topic=topic,
    )
    logger.info(
        "outbox.event_recorded",
        event_type=event.event_name,
        aggregate_id=event.aggregate_id,
        topic=topic,
    )
    return outbox_event


def serialize_event_payload(event: DomainEvent) -> Dict[str, Any]:
    data = asdict(event)
    normalized = _normalize_for_json(data)
    return json.loads(json.dumps(normalized))


def _normalize_for_json(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, list):
        return [_normalize_for_json(item) for item in value]
    if isinstance(value, dict):
        return {key: _normalize_for_json(val) for key, val in value.items()}
    return value
