"""
Unit tests for StateBroadcaster.
"""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from local_notifications.api import realtime as realtime_api
from local_notifications.infrastructure.local.memory_backend import InMemoryNotificationBackend
from local_notifications.services.notification_service import NotificationService
from local_notifications.services.realtime_service import StateBroadcaster


@pytest.mark.asyncio
async def test_publish_reaches_every_listener():
    broadcaster = StateBroadcaster()
    first = await broadcaster.connect()
    second = await broadcaster.connect()

    await broadcaster.publish("last_error", "boom")

    for queue in (first, second):
        assert json.loads(queue.get_nowait()) == {"type": "last_error", "data": "boom"}


@pytest.mark.asyncio
async def test_disconnected_listener_gets_nothing():
    broadcaster = StateBroadcaster()
    queue = await broadcaster.connect()
    await broadcaster.disconnect(queue)

    await broadcaster.publish("pending_notifications", [])

    assert queue.empty()
    assert broadcaster.listener_count == 0


@pytest.mark.asyncio
async def test_snapshot_is_queued_before_live_events():
    broadcaster = StateBroadcaster()
    queue = await broadcaster.connect(snapshot={"last_error": None})

    await broadcaster.publish("last_error", "boom")

    assert json.loads(queue.get_nowait()) == {"type": "last_error", "data": None}
    assert json.loads(queue.get_nowait()) == {"type": "last_error", "data": "boom"}


@pytest.mark.asyncio
async def test_stream_starts_with_current_state(clock):
    broadcaster = StateBroadcaster()
    backend = InMemoryNotificationBackend(initial_status="authorized", clock=clock)
    service = NotificationService(backend=backend, broadcaster=broadcaster, clock=clock)
    await service.start()
    request = MagicMock()
    request.is_disconnected = AsyncMock(return_value=False)

    response = await realtime_api.stream_state(
        broadcaster=broadcaster, service=service, request=request
    )
    events = response.body_iterator
    frames = [await events.__anext__() for _ in range(4)]
    await events.aclose()

    assert frames[0] == 'data: {"type":"connected"}\n\n'
    payloads = [json.loads(frame.removeprefix("data: ")) for frame in frames[1:]]
    assert payloads == [
        {"type": "authorization_status", "data": "Authorized"},
        {"type": "pending_notifications", "data": []},
        {"type": "last_error", "data": None},
    ]
    assert broadcaster.listener_count == 0
