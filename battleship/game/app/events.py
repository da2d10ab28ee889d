"""Domain events and the in-process event bus that delivers them."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import asdict, dataclass
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

TEvent = TypeVar("TEvent")
EventHandler = Callable[[Any], None]


@dataclass(frozen=True, slots=True)
class GameEvent:
    """Base class of all match notifications."""

    match_id: str

    @property
    def name(self) -> str:
        return type(self).__name__

    def as_payload(self) -> dict[str, object]:
        return {"event": self.name, **asdict(self)}


@dataclass(frozen=True, slots=True)
class MatchCreated(GameEvent):
    pass


@dataclass(frozen=True, slots=True)
class ShipsPlaced(GameEvent):
    pass


@dataclass(frozen=True, slots=True)
class ShotProposed(GameEvent):
    x: int
    y: int


@dataclass(frozen=True, slots=True)
class ShotFired(GameEvent):
    x: int
    y: int
    result: str


@dataclass(frozen=True, slots=True)
class Winner(GameEvent):
    pass


@dataclass(frozen=True, slots=True)
class MatchEnded(GameEvent):
    pass


@dataclass(frozen=True, slots=True)
class Subscription:
    """Opaque subscription token."""

    id: int


class EventBus:
    """Simple in-process pub/sub; delivery is fire-and-forget for publishers."""

    def __init__(self) -> None:
        self._next_id = 1
        self._subscriptions: dict[int, tuple[type[object], EventHandler]] = {}

    def subscribe(
        self,
        event_type: type[TEvent],
        handler: Callable[[TEvent], None],
    ) -> Subscription:
        """Subscribe handler for an event type."""
        sub_id = self._next_id
        self._next_id += 1
        self._subscriptions[sub_id] = (event_type, handler)
        return Subscription(sub_id)

    def unsubscribe(self, subscription: Subscription) -> None:
        """Remove a subscription if present."""
        self._subscriptions.pop(subscription.id, None)

    def publish(self, event: object) -> int:
        """Publish one event and return number of invoked handlers.

        A failing handler is logged and skipped; remaining handlers still run and
        the publisher never sees the error.
        """
        invoked = 0
        for subscribed_type, handler in tuple(self._subscriptions.values()):
            if not isinstance(event, subscribed_type):
                continue
            invoked += 1
            try:
                handler(event)
            except Exception:
                logger.exception("event_handler_failed event=%s", type(event).__name__)
        return invoked


class RecordingSink:
    """Collects every published game event, in order."""

    def __init__(self, bus: EventBus) -> None:
        self.events: list[GameEvent] = []
        self._subscription = bus.subscribe(GameEvent, self.events.append)

    def names(self) -> list[str]:
        return [event.name for event in self.events]
