from __future__ import annotations

from collections import deque
from typing import Protocol, Sequence

from hexclaim.core.events import BoardEvent, EventType


class Presenter(Protocol):
    async def publish(self, event: BoardEvent) -> None:  # pragma: no cover
        ...


class EventLog:
    """Keeps published events in memory (bounded when `maxlen` is set)."""

    def __init__(self, maxlen: int | None = None) -> None:
        self.events: deque[BoardEvent] = deque(maxlen=maxlen)

    async def publish(self, event: BoardEvent) -> None:
        self.events.append(event)

    def of_type(self, type: EventType) -> list[BoardEvent]:
        return [e for e in self.events if e.type == type]

    def clear(self) -> None:
        self.events.clear()


class FanoutPresenter:
    def __init__(self, presenters: Sequence[Presenter]) -> None:
        self.presenters = list(presenters)

    async def publish(self, event: BoardEvent) -> None:
        for p in self.presenters:
            await p.publish(event)
