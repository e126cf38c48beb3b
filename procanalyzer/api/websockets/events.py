"""Real-time WebSocket feed of analysis ticks.

Every subscribed client gets its own bounded queue and writer task. A client
that falls behind loses its oldest queued ticks rather than its connection;
only the newest state matters to a live view.
"""

import asyncio
import json
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from ...models import TickUpdate
from ...utils.logging import get_logger

logger = get_logger("websocket.analysis")

router = APIRouter()


def _message(kind: str, data, timestamp: datetime | None = None) -> str:
    return json.dumps({
        "type": kind,
        "data": data,
        "timestamp": (timestamp or datetime.now(timezone.utc)).isoformat(),
    })


@dataclass
class _Client:
    queue: asyncio.Queue
    writer: asyncio.Task | None = None
    dropped: int = 0
    last_sent: float = field(default_factory=time.monotonic)


class ConnectionManager:
    """Fan-out of TickUpdates to connected WebSocket clients."""

    def __init__(self, max_connections: int = 100, queue_size: int = 50, heartbeat_interval: int = 30):
        self._clients: dict[WebSocket, _Client] = {}
        self._max_connections = max_connections
        self._queue_size = queue_size
        self._heartbeat_interval = heartbeat_interval

    @property
    def connection_count(self) -> int:
        return len(self._clients)

    async def connect(self, websocket: WebSocket) -> bool:
        """Accept the socket unless the feed is full (then close with 1013)."""
        if len(self._clients) >= self._max_connections:
            await websocket.close(code=1013)
            logger.warning("ws_connection_rejected", clients=len(self._clients))
            return False
        await websocket.accept()
        client = _Client(queue=asyncio.Queue(maxsize=self._queue_size))
        client.writer = asyncio.create_task(self._writer(websocket, client))
        self._clients[websocket] = client
        logger.info("ws_client_connected", clients=len(self._clients))
        return True

    async def disconnect(self, websocket: WebSocket) -> None:
        client = self._clients.pop(websocket, None)
        if client is None:
            return
        if client.writer is not None and not client.writer.done():
            client.writer.cancel()
        try:
            await websocket.close()
        except Exception as e:
            logger.debug("ws_close_failed", error=str(e))
        logger.info("ws_client_disconnected", clients=len(self._clients), dropped=client.dropped)

    def send(self, websocket: WebSocket, text: str) -> None:
        client = self._clients.get(websocket)
        if client is not None:
            self._offer(client, text)

    def broadcast(self, text: str) -> None:
        for client in list(self._clients.values()):
            self._offer(client, text)

    async def publish_tick(self, update: TickUpdate) -> None:
        """ProcessMonitor observer. Serializes once, queues for every client."""
        if not self._clients:
            return
        kind = "tick" if update.ok else "tick_error"
        self.broadcast(_message(kind, update.to_dict(), update.timestamp))

    async def close_all(self) -> None:
        for websocket in list(self._clients):
            await self.disconnect(websocket)

    def _offer(self, client: _Client, text: str) -> None:
        if client.queue.full():
            client.queue.get_nowait()
            client.dropped += 1
            if client.dropped == 1 or client.dropped % 100 == 0:
                logger.warning("ws_client_lagging", dropped=client.dropped)
        client.queue.put_nowait(text)

    async def _writer(self, websocket: WebSocket, client: _Client) -> None:
        while True:
            try:
                text = await asyncio.wait_for(client.queue.get(), timeout=self._heartbeat_interval)
            except asyncio.TimeoutError:
                idle = round(time.monotonic() - client.last_sent, 1)
                text = _message("heartbeat", {"idle_seconds": idle})
            try:
                await websocket.send_text(text)
            except Exception as e:
                logger.debug("ws_send_failed", error=str(e))
                return
            client.last_sent = time.monotonic()


@router.websocket("/ws/analysis")
async def websocket_analysis(websocket: WebSocket):
    """Stream ``{"type", "data", "timestamp"}`` JSON: one "connected" message
    carrying the latest tick (or null), then one per tick."""
    manager: ConnectionManager = websocket.app.state.ws_manager
    if not await manager.connect(websocket):
        return

    current = websocket.app.state.monitor.get_current()
    manager.send(websocket, _message("connected", current.to_dict() if current else None))

    try:
        while True:
            # Inbound text is ignored; receiving is how a disconnect surfaces
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        await manager.disconnect(websocket)
