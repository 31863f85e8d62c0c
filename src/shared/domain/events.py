"""Domain event primitives for the modular monolith."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional, Type
from uuid import UUID, uuid4

_EVENT_TYPES: Dict[str, Type["DomainEvent"]] = {}


@dataclass(frozen=True)
class DomainEvent:
    """Base domain event (immutable).

    ``aggregate_id`` is kept as a string so integer and UUID keys
    serialise the same way into the outbox.  Every subclass is registered
    by class name, which is also its ``event_name`` and the outbox
    ``event_type``.
    """

    aggregate_id: str
    event_id: UUID = field(default_factory=uuid4)
    occurred_on: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    event_name: str = field(init=False)

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        _EVENT_TYPES[cls.__name__] = cls

    def __post_init__(self) -> None:
        object.__setattr__(self, "event_name", self.__class__.__name__)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "DomainEvent":
        """Rebuild an event from its outbox JSON payload."""
        data = dict(payload)
        data.pop("event_name", None)
        data["event_id"] = UUID(data["event_id"])
        data["occurred_on"] = datetime.fromisoformat(data["occurred_on"])
        return cls(**data)


def event_type_for(event_name: str) -> Optional[Type[DomainEvent]]:
    return _EVENT_TYPES.get(event_name)
