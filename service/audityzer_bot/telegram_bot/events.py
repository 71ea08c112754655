"""
Domain events emitted by the dispatcher for external subscribers.

Each event kind is its own class; subscribers register per class:

    bus = EventBus()
    bus.subscribe(AuditRequestEvent, lambda e: start_audit(e.contract_address))

Delivery is synchronous and in-process. Async subscribers are awaited in turn.
"""

import inspect
from collections import defaultdict
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Type, TypeVar, Union

from .logging_config import bot_logger as logger


@dataclass(frozen=True)
class MessageEvent:
    chat_id: int
    text: str
    user_id: int
    username: Optional[str] = None


@dataclass(frozen=True)
class CallbackEvent:
    chat_id: int
    data: str
    user_id: int


@dataclass(frozen=True)
class AuditRequestEvent:
    chat_id: int
    contract_address: str


@dataclass(frozen=True)
class StatsRequestEvent:
    chat_id: int
    user_id: int


@dataclass(frozen=True)
class ErrorEvent:
    cause: BaseException


DomainEvent = Union[MessageEvent, CallbackEvent, AuditRequestEvent, StatsRequestEvent, ErrorEvent]

E = TypeVar("E", MessageEvent, CallbackEvent, AuditRequestEvent, StatsRequestEvent, ErrorEvent)
Subscriber = Callable[[E], Union[None, Awaitable[None]]]


class EventBus:
    """In-process fan-out of domain events to subscribers."""

    def __init__(self):
        self._subscribers: dict[type, list[Callable]] = defaultdict(list)

    def subscribe(self, event_type: Type[E], handler: Subscriber) -> None:
        self._subscribers[event_type].append(handler)

    def unsubscribe(self, event_type: Type[E], handler: Subscriber) -> None:
        handlers = self._subscribers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    async def emit(self, event: DomainEvent) -> None:
        """
        Deliver an event to every subscriber of its class.

        A failing subscriber is logged and skipped; it never affects the
        emitter or the remaining subscribers.
        """
        for handler in list(self._subscribers.get(type(event), [])):
            try:
                result = handler(event)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.error(f"Subscriber {handler!r} failed for {type(event).__name__}: {e}", exc_info=True)
