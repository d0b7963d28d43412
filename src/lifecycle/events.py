"""Event sink — публикация доменных событий для presentation layer."""

from typing import List, Protocol

from src.core.domain.events import DomainEvent, EventType


class EventSink(Protocol):
    """Получатель доменных событий."""

    def emit(self, event: DomainEvent) -> None:
        ...


class InMemoryEventSink:
    """Event sink с полной историей (append-only)."""

    def __init__(self):
        self.events: List[DomainEvent] = []

    def emit(self, event: DomainEvent) -> None:
        self.events.append(event)

    def of_type(self, event_type: EventType) -> List[DomainEvent]:
        return [e for e in self.events if e.event_type == event_type]

    def record_ids(self, event_type: EventType) -> List[int]:
        return [e.record_id for e in self.of_type(event_type)]
