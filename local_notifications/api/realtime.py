import asyncio
from typing import AsyncGenerator

from fastapi import APIRouter, Request
from fastapi.responses import StreamingResponse

from local_notifications.api.deps import BroadcasterDep, NotificationServiceDep

router = APIRouter()


@router.get("/stream")
async def stream_state(
    broadcaster: BroadcasterDep,
    service: NotificationServiceDep,
    request: Request,
) -> StreamingResponse:
    """
    Stream state changes as server-sent events.

    New listeners first receive the current state, then live updates.
    """
    queue = await broadcaster.connect(snapshot=service.state_snapshot())

    async def event_generator() -> AsyncGenerator[str, None]:
        try:
            yield 'data: {"type":"connected"}\n\n'
            while True:
                if await request.is_disconnected():
                    break
                try:
                    data = await asyncio.wait_for(queue.get(), timeout=15)
                except asyncio.TimeoutError:
                    yield ": keep-alive\n\n"
                    continue
                yield f"data: {data}\n\n"
        finally:
            await broadcaster.disconnect(queue)

    return StreamingResponse(event_generator(), media_type="text/event-stream")
