"""
Unit tests for the in-memory notification backend.
"""

import pytest

from local_notifications.core.exceptions import BackendError
from local_notifications.infrastructure.local.memory_backend import InMemoryNotificationBackend
from local_notifications.models.enums import AuthorizationOption
from local_notifications.models.trigger import (
    CalendarTrigger,
    DateComponents,
    NotificationContent,
    NotificationTrigger,
    PendingNotificationRequest,
    TimeIntervalTrigger,
)

OPTIONS = {AuthorizationOption.ALERT, AuthorizationOption.SOUND, AuthorizationOption.BADGE}


def _calendar_request(identifier: str, day: int = 3, title: str = "Standup") -> PendingNotificationRequest:
    return PendingNotificationRequest(
        identifier=identifier,
        content=NotificationContent(title=title, body="Daily sync"),
        trigger=CalendarTrigger(
            date_components=DateComponents(year=2026, month=3, day=day, hour=9, minute=0)
        ),
    )


@pytest.fixture
def backend(clock):
    return InMemoryNotificationBackend(initial_status="authorized", clock=clock)


class TestAuthorization:
    """Tests for the simulated permission prompt."""

    @pytest.mark.asyncio
    async def test_first_request_uses_configured_answer(self, clock):
        backend = InMemoryNotificationBackend(authorization_response="provisional", clock=clock)

        granted = await backend.request_authorization(OPTIONS)
        settings = await backend.get_authorization_settings()

        assert granted is True
        assert settings.authorization_status == "provisional"

    @pytest.mark.asyncio
    async def test_decision_is_not_prompted_again(self, clock):
        backend = InMemoryNotificationBackend(authorization_response="denied", clock=clock)

        assert await backend.request_authorization(OPTIONS) is False
        assert await backend.request_authorization(OPTIONS) is False
        assert backend.prompt_count == 1

    @pytest.mark.asyncio
    async def test_out_of_band_change(self, backend):
        backend.set_authorization_status("denied")
        settings = await backend.get_authorization_settings()
        assert settings.authorization_status == "denied"


class TestPendingRequests:
    """Tests for the pending store."""

    @pytest.mark.asyncio
    async def test_add_and_list(self, backend):
        await backend.add_pending_request(_calendar_request("a"))
        pending = await backend.get_pending_requests()
        assert [p.identifier for p in pending] == ["a"]

    @pytest.mark.asyncio
    async def test_same_identifier_replaces(self, backend):
        await backend.add_pending_request(_calendar_request("a", title="Old"))
        await backend.add_pending_request(_calendar_request("a", title="New"))

        pending = await backend.get_pending_requests()
        assert len(pending) == 1
        assert pending[0].content.title == "New"

    @pytest.mark.asyncio
    async def test_remove_is_idempotent(self, backend):
        await backend.add_pending_request(_calendar_request("a"))

        await backend.remove_pending_requests({"a", "missing"})
        await backend.remove_pending_requests({"a"})

        assert await backend.get_pending_requests() == []

    @pytest.mark.asyncio
    async def test_remove_all(self, backend):
        await backend.add_pending_request(_calendar_request("a"))
        await backend.add_pending_request(_calendar_request("b", day=4))

        await backend.remove_all_pending_requests()

        assert await backend.get_pending_requests() == []

    @pytest.mark.asyncio
    async def test_short_repeating_interval_rejected(self, backend):
        request = PendingNotificationRequest(
            identifier="fast",
            content=NotificationContent(title="Fast", body="Too fast"),
            trigger=TimeIntervalTrigger(time_interval=30, repeats=True),
        )
        with pytest.raises(BackendError):
            await backend.add_pending_request(request)

    @pytest.mark.asyncio
    async def test_fired_requests_are_dropped(self, backend, clock):
        await backend.add_pending_request(_calendar_request("tomorrow", day=3))
        await backend.add_pending_request(_calendar_request("later", day=5))

        clock.advance(days=2)

        pending = await backend.get_pending_requests()
        assert [p.identifier for p in pending] == ["later"]

    @pytest.mark.asyncio
    async def test_unknown_trigger_kinds_are_kept(self, backend):
        request = PendingNotificationRequest(
            identifier="geo",
            content=NotificationContent(title="Arrived", body="Welcome"),
            trigger=NotificationTrigger(repeats=False),
        )
        await backend.add_pending_request(request)

        pending = await backend.get_pending_requests()
        assert [p.identifier for p in pending] == ["geo"]
