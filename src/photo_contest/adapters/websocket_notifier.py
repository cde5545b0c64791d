"""WebSocket fan-out of ledger events."""

import asyncio
import logging
from dataclasses import dataclass, field

from fastapi import WebSocket

from photo_contest.domain.events import LedgerEvent
from photo_contest.services.notifier import Notifier

_logger = logging.getLogger(__name__)


@dataclass
class WebSocketHub(Notifier):
    """Tracks connected viewers and broadcasts events to all of them.

    Viewers get no backlog on connect; they are expected to fetch /photos and
    /votes before trusting subsequent events.
    """

    connections: list[WebSocket] = field(default_factory=list)
    send_timeout: float = 5.0

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self.connections.append(websocket)
        _logger.info("Viewer connected: viewers=%s", len(self.connections))

    def disconnect(self, websocket: WebSocket) -> None:
        if websocket in self.connections:
            self.connections.remove(websocket)
        _logger.info("Viewer disconnected: viewers=%s", len(self.connections))

    async def notify(self, event: LedgerEvent) -> None:
        """Send the event to every viewer at once, dropping the ones that fail.

        Each send is bounded by ``send_timeout`` so a viewer that stopped
        reading cannot hold up the mutation that triggered the event.
        """
        message = event.as_message()
        viewers = list(self.connections)
        results = await asyncio.gather(
            *(self._send(websocket, message) for websocket in viewers)
        )
        for websocket, delivered in zip(viewers, results, strict=True):
            if not delivered:
                _logger.warning(
                    "Dropping viewer after failed send", extra={"event": event.name}
                )
                self.disconnect(websocket)

    async def _send(self, websocket: WebSocket, message: dict[str, object]) -> bool:
        try:
            await asyncio.wait_for(
                websocket.send_json(message), timeout=self.send_timeout
            )
        except Exception:
            return False
        return True

    async def close(self) -> None:
        """Close every open viewer connection."""
        for websocket in list(self.connections):
            try:
                await asyncio.wait_for(
                    websocket.close(), timeout=self.send_timeout
                )
            except Exception:
                _logger.debug("Viewer already closed")
            self.disconnect(websocket)
