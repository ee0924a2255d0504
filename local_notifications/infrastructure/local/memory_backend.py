"""
In-memory implementation of the notification backend.

Stands in for the platform notification store when running locally and in
tests. Requests are kept in a dict keyed by identifier; requests whose
trigger can no longer fire are dropped when the pending set is listed.
"""

from __future__ import annotations

import asyncio
from datetime import datetime
from typing import Callable

from local_notifications.core.exceptions import BackendError
from local_notifications.core.logger import setup_logger
from local_notifications.interfaces.notification_backend import INotificationBackend
from local_notifications.models.enums import AuthorizationOption
from local_notifications.models.trigger import (
    MIN_REPEATING_INTERVAL_SECONDS,
    CalendarTrigger,
    NotificationSettings,
    PendingNotificationRequest,
    TimeIntervalTrigger,
)
from local_notifications.utils.datetime_utils import now_utc

logger = setup_logger(__name__)

_GRANTED_STATUSES = {"authorized", "provisional", "ephemeral"}


class InMemoryNotificationBackend(INotificationBackend):
    """Process-local notification store."""

    def __init__(
        self,
        authorization_response: str = "authorized",
        initial_status: str = "notDetermined",
        clock: Callable[[], datetime] = now_utc,
    ):
        self._authorization_response = authorization_response
        self._status = initial_status
        self._clock = clock
        self._requests: dict[str, PendingNotificationRequest] = {}
        self._lock = asyncio.Lock()
        self.prompt_count = 0

    async def request_authorization(self, options: set[AuthorizationOption]) -> bool:
        async with self._lock:
            # Only the first request prompts; after that the decision sticks
            # until changed out-of-band via set_authorization_status().
            if self._status == "notDetermined":
                self.prompt_count += 1
                self._status = self._authorization_response
                logger.info(
                    f"Authorization prompt ({', '.join(sorted(o.value for o in options))}) "
                    f"answered: {self._status}"
                )
            return self._status in _GRANTED_STATUSES

    async def get_authorization_settings(self) -> NotificationSettings:
        return NotificationSettings(authorization_status=self._status)

    def set_authorization_status(self, status: str) -> None:
        """Change the permission out-of-band, like the user toggling it in system settings."""
        self._status = status

    async def add_pending_request(self, request: PendingNotificationRequest) -> None:
        trigger = request.trigger
        if (
            isinstance(trigger, TimeIntervalTrigger)
            and trigger.repeats
            and trigger.time_interval < MIN_REPEATING_INTERVAL_SECONDS
        ):
            raise BackendError(
                "time interval must be at least 60 if repeating",
                details={"identifier": request.identifier},
            )
        async with self._lock:
            self._requests[request.identifier] = request

    async def remove_pending_requests(self, identifiers: set[str]) -> None:
        async with self._lock:
            for identifier in identifiers:
                self._requests.pop(identifier, None)

    async def remove_all_pending_requests(self) -> None:
        async with self._lock:
            self._requests.clear()

    async def get_pending_requests(self) -> list[PendingNotificationRequest]:
        now = self._clock()
        async with self._lock:
            for identifier in [
                identifier
                for identifier, request in self._requests.items()
                if self._has_fired(request, now)
            ]:
                logger.debug(f"Dropping fired notification {identifier}")
                del self._requests[identifier]
            return list(self._requests.values())

    @staticmethod
    def _has_fired(request: PendingNotificationRequest, now: datetime) -> bool:
        trigger = request.trigger
        if isinstance(trigger, (CalendarTrigger, TimeIntervalTrigger)):
            return trigger.next_trigger_date(now) is None
        return False
