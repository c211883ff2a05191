from __future__ import annotations

import asyncio
import json
import logging
from enum import StrEnum
from typing import Awaitable, Callable

from fastapi import FastAPI, WebSocket
from starlette.endpoints import WebSocketEndpoint

from .broadcast import InMemoryBroadcast, _Subscriber

logger = logging.getLogger(__name__)


class ChannelName(StrEnum):
    HTML = "html"


def register_ws_routes(
    app: FastAPI,
    *,
    broadcast: InMemoryBroadcast,
    snapshot: Callable[[], dict],
    handle_message: Callable[[dict], Awaitable[None]],
) -> None:
    """
    Register the ``/ws`` route bridging the html channel to the socket.
    - snapshot: returns the message sent right after a client connects
    - handle_message: receives every decoded JSON message from the client
    """

    class PreviewWS(WebSocketEndpoint):
        encoding = "text"

        async def on_connect(self, ws: WebSocket):
            await ws.accept()
            # attach before the snapshot so no commit falls in between
            self._queue = broadcast.attach(ChannelName.HTML)
            await ws.send_text(json.dumps(snapshot()))
            self._forward_task = asyncio.create_task(self._forward(ws))

        async def on_receive(self, ws: WebSocket, data: str):
            try:
                msg = json.loads(data)
            except json.JSONDecodeError:
                logger.debug("ignoring non-JSON message %r", data)
                return
            await handle_message(msg)

        async def on_disconnect(self, ws: WebSocket, close_code: int):
            task = getattr(self, "_forward_task", None)
            if task is not None:
                task.cancel()
            queue = getattr(self, "_queue", None)
            if queue is not None:
                broadcast.detach(ChannelName.HTML, queue)

        async def _forward(self, ws: WebSocket):
            async for event in _Subscriber(self._queue):
                await ws.send_text(event.message)

    app.router.add_websocket_route("/ws", PreviewWS)
