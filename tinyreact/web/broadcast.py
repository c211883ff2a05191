from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from collections import defaultdict
import json
from typing import AsyncIterator, Dict, Set


class BroadcastEvent:
    def __init__(self, message: str):
        self.message = message


class _Subscriber:
    def __init__(self, queue: asyncio.Queue[BroadcastEvent]):
        self._queue = queue

    def __aiter__(self) -> "_Subscriber":
        return self

    async def __anext__(self) -> BroadcastEvent:
        return await self._queue.get()


class InMemoryBroadcast:
    """Fan-out of JSON messages to per-subscriber queues, one event loop only."""

    def __init__(self, maxsize: int = 1024) -> None:
        self._channels: Dict[str, Set[asyncio.Queue[BroadcastEvent]]] = defaultdict(set)
        self._maxsize = maxsize

    def attach(self, channel: str) -> asyncio.Queue[BroadcastEvent]:
        queue: asyncio.Queue[BroadcastEvent] = asyncio.Queue(maxsize=self._maxsize)
        self._channels[channel].add(queue)
        return queue

    def detach(self, channel: str, queue: asyncio.Queue[BroadcastEvent]) -> None:
        self._channels[channel].discard(queue)

    def subscriber_count(self, channel: str) -> int:
        return len(self._channels.get(channel, ()))

    async def publish(self, channel: str, message: dict) -> None:
        event = BroadcastEvent(json.dumps(message))
        for q in list(self._channels.get(channel, ())):
            try:
                q.put_nowait(event)
            except asyncio.QueueFull:
                await q.put(event)

    @asynccontextmanager
    async def subscribe(self, channel: str) -> AsyncIterator[_Subscriber]:
        queue = self.attach(channel)
        try:
            yield _Subscriber(queue)
        finally:
            self.detach(channel, queue)
