from __future__ import annotations

import asyncio
import logging

from fastapi import WebSocket

from hexclaim.core.events import BoardEvent

logger = logging.getLogger(__name__)


class BoardHub:
    """Pushes board events to every WebSocket watching the board.

    Implements the Presenter protocol, so a controller can publish straight into it.
    Sockets that fail on send are dropped.
    """

    def __init__(self) -> None:
        self._sockets: set[WebSocket] = set()
        self._lock = asyncio.Lock()

    @property
    def watchers(self) -> int:
        return len(self._sockets)

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        async with self._lock:
            self._sockets.add(websocket)

    async def disconnect(self, websocket: WebSocket) -> None:
        async with self._lock:
            self._sockets.discard(websocket)

    async def publish(self, event: BoardEvent) -> None:
        async with self._lock:
            sockets = list(self._sockets)
        if not sockets:
            return

        payload = event.to_payload()
        for ws in sockets:
            try:
                await ws.send_json(payload)
            except Exception:
                logger.debug("Dropping board watcher after failed %s send", event.type)
                await self.disconnect(ws)


hub = BoardHub()
