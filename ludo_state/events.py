"""
Change notifications emitted by the engine.

Renderers subscribe to an EventBus and receive discrete, ordered event
records instead of touching engine state directly. Nothing here knows about
any UI technology.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Protocol, Type, TypeVar, Union, runtime_checkable

from loguru import logger

from .types import BoardCell, Color


@dataclass(frozen=True, slots=True)
class PieceMoved:
    color: Color
    index: int
    cell: BoardCell
    final: bool = True  # False for intermediate steps of a move


@dataclass(frozen=True, slots=True)
class TurnChanged:
    color: Color


@dataclass(frozen=True, slots=True)
class DiceRolled:
    value: int  # 0 when the dice is cleared for the next player


@dataclass(frozen=True, slots=True)
class StatusMessage:
    text: str


@dataclass(frozen=True, slots=True)
class GameWon:
    color: Color


Event = Union[PieceMoved, TurnChanged, DiceRolled, StatusMessage, GameWon]
E = TypeVar("E")


@runtime_checkable
class GameObserver(Protocol):
    def notify(self, event: Event) -> None:
        ...


Subscriber = Union[GameObserver, Callable[[Event], None]]


@dataclass(slots=True)
class EventBus:
    """Delivers events to subscribers in emission order."""

    _subscribers: List[Subscriber] = field(default_factory=list)

    def subscribe(self, subscriber: Subscriber) -> Subscriber:
        self._subscribers.append(subscriber)
        return subscriber

    def unsubscribe(self, subscriber: Subscriber) -> None:
        if subscriber in self._subscribers:
            self._subscribers.remove(subscriber)

    def emit(self, event: Event) -> None:
        logger.trace(f"emit {event}")
        for subscriber in list(self._subscribers):
            if isinstance(subscriber, GameObserver):
                subscriber.notify(event)
            else:
                subscriber(event)


@dataclass(slots=True)
class EventRecorder:
    """Observer that keeps every event it receives."""

    events: List[Event] = field(default_factory=list)

    def notify(self, event: Event) -> None:
        self.events.append(event)

    def of_type(self, kind: Type[E]) -> List[E]:
        return [e for e in self.events if isinstance(e, kind)]

    def messages(self) -> List[str]:
        return [e.text for e in self.of_type(StatusMessage)]

    def clear(self) -> None:
        self.events.clear()
