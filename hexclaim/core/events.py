from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Literal

EventType = Literal[
    "OWNER_CHANGED",
    "PROTECTION_CHANGED",
    "SELECTABLE_CHANGED",
    "ACTIVE_PLAYER_CHANGED",
]


@dataclass(frozen=True, slots=True)
class BoardEvent:
    type: EventType
    round: int
    payload: dict[str, Any]
    ts: datetime

    @staticmethod
    def now(*, type: EventType, round: int, payload: dict[str, Any]) -> "BoardEvent":
        return BoardEvent(type=type, round=round, payload=payload, ts=datetime.now(timezone.utc))

    def to_payload(self) -> dict[str, Any]:
        return {"type": self.type, "round": self.round, "ts": self.ts.isoformat(), **self.payload}
