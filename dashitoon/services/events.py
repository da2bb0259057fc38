"""
In-process domain event dispatch.

Handlers are awaited in subscription order inside the publishing request;
an exception raised by a handler propagates to the publisher.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, List, Protocol, Type

from dashitoon.core.logging_config import get_logger
from dashitoon.core.models.domain.events import DomainEvent

logger = get_logger(__name__)


class EventHandler(Protocol):
    async def handle(self, event: DomainEvent) -> None: ...


class EventPublisher:
    """Routes domain events to the handlers subscribed to their type (or a base type)."""

    def __init__(self) -> None:
        self._handlers: Dict[Type[DomainEvent], List[EventHandler]] = defaultdict(list)

    def subscribe(self, event_type: Type[DomainEvent], handler: EventHandler) -> None:
        self._handlers[event_type].append(handler)

    def handlers_for(self, event: DomainEvent) -> List[EventHandler]:
        handlers: List[EventHandler] = []
        for event_type in type(event).__mro__:
            handlers.extend(self._handlers.get(event_type, []))
        return handlers

    async def publish(self, event: DomainEvent) -> None:
        handlers = self.handlers_for(event)
        logger.debug(f"Publishing {type(event).__name__} to {len(handlers)} handler(s)")
        for handler in handlers:
            await handler.handle(event)
