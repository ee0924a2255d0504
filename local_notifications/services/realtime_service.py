import asyncio
import json
from typing import Any, Mapping, Optional


def _encode(event_type: str, data: Any) -> str:
    return json.dumps({"type": event_type, "data": data}, separators=(",", ":"))


class StateBroadcaster:
    """Fans out service state changes to every connected listener."""

    def __init__(self) -> None:
        self._queues: set[asyncio.Queue[str]] = set()
        self._lock = asyncio.Lock()

    async def connect(self, snapshot: Optional[Mapping[str, Any]] = None) -> asyncio.Queue[str]:
        """Register a listener. Snapshot entries are queued ahead of live events."""
        queue: asyncio.Queue[str] = asyncio.Queue()
        for event_type, data in (snapshot or {}).items():
            queue.put_nowait(_encode(event_type, data))
        async with self._lock:
            self._queues.add(queue)
        return queue

    async def disconnect(self, queue: asyncio.Queue[str]) -> None:
        async with self._lock:
            self._queues.discard(queue)

    async def publish(self, event_type: str, data: Any) -> None:
        message = _encode(event_type, data)
        async with self._lock:
            queues = list(self._queues)
        for queue in queues:
            queue.put_nowait(message)

    @property
    def listener_count(self) -> int:
        return len(self._queues)
