"""
Notification scheduling service.

Owns the notification permission state, turns NotificationRequests into
calendar triggers on the notification backend, and keeps an in-memory
mirror of what the backend has pending. Every change is published to the
StateBroadcaster so listeners can follow along.

Mutating calls never patch state optimistically: after the backend
confirms, the pending set is reloaded from the backend as a whole.
"""

from __future__ import annotations

import asyncio
from datetime import datetime
from typing import Any, Callable, Mapping, Optional

from pydantic import ValidationError

from local_notifications.core.exceptions import (
    AuthorizationDeniedError,
    CancellationFailedError,
    InvalidDateError,
    NotificationError,
    RetrievalFailedError,
    SchedulingFailedError,
)
from local_notifications.core.logger import setup_logger
from local_notifications.interfaces.notification_backend import INotificationBackend
from local_notifications.interfaces.repeat_interval_store import IRepeatIntervalStore
from local_notifications.models.enums import (
    AuthorizationOption,
    AuthorizationStatus,
    NotificationActionIdentifier,
    RepeatInterval,
)
from local_notifications.models.notification import (
    NotificationRequest,
    NotificationResponseOutcome,
)
from local_notifications.models.trigger import (
    CalendarTrigger,
    DateComponents,
    NotificationContent,
    PendingNotificationRequest,
    TimeIntervalTrigger,
)
from local_notifications.services.realtime_service import StateBroadcaster
from local_notifications.utils.datetime_utils import calendar_components, now_utc

logger = setup_logger(__name__)

AUTHORIZATION_OPTIONS = frozenset(
    {AuthorizationOption.ALERT, AuthorizationOption.SOUND, AuthorizationOption.BADGE}
)
DEEP_LINK_KEY = "deepLink"
DEFAULT_SOUND = "default"
TRIGGER_FIELDS = ("year", "month", "day", "hour", "minute", "fold")


def _describe(exc: Exception) -> str:
    """Platform detail for an error message."""
    return getattr(exc, "message", None) or str(exc) or exc.__class__.__name__


class NotificationService:
    """
    Schedules, lists and cancels local notifications.

    Features:
    - Permission request and status tracking
    - Scheduling with date / permission preconditions
    - Pending set reconstruction from backend triggers, sorted by fire date
    - Transient error message that clears itself after a fixed delay

    One instance per application; create it in the composition root and
    inject it where needed.
    """

    def __init__(
        self,
        backend: INotificationBackend,
        repeat_interval_store: Optional[IRepeatIntervalStore] = None,
        broadcaster: Optional[StateBroadcaster] = None,
        calendar_timezone: str = "UTC",
        error_display_seconds: float = 3.0,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._backend = backend
        self._repeat_interval_store = repeat_interval_store
        self._broadcaster = broadcaster
        self._calendar_timezone = calendar_timezone
        self._error_display_seconds = error_display_seconds
        self._clock = clock

        self._authorization_status = AuthorizationStatus.NOT_DETERMINED
        self._pending: list[NotificationRequest] = []
        self._last_error: Optional[str] = None
        self._error_epoch = 0
        self._clear_tasks: set[asyncio.Task] = set()

    # ===========================================
    # Observable state
    # ===========================================

    @property
    def authorization_status(self) -> AuthorizationStatus:
        return self._authorization_status

    @property
    def pending_notifications(self) -> list[NotificationRequest]:
        """Pending requests, ascending by fire date."""
        return list(self._pending)

    @property
    def last_error(self) -> Optional[str]:
        return self._last_error

    def state_snapshot(self) -> dict[str, Any]:
        """Current state keyed by the event types it is published under."""
        return {
            "authorization_status": self._authorization_status.value,
            "pending_notifications": [r.model_dump(mode="json") for r in self._pending],
            "last_error": self._last_error,
        }

    # ===========================================
    # Lifecycle
    # ===========================================

    async def start(self) -> None:
        """Pick up the current permission and pending set."""
        await self.check_authorization_status()

    async def aclose(self) -> None:
        """Cancel outstanding error-clear timers."""
        tasks = list(self._clear_tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._clear_tasks.clear()

    # ===========================================
    # Authorization
    # ===========================================

    async def request_authorization(self) -> bool:
        """
        Ask the user for permission to show notifications.

        The status is refreshed from the backend afterwards instead of being
        derived from the granted flag, since provisional and ephemeral grants
        are distinct statuses.

        Returns:
            bool: whether the backend reported the permission as granted
        """
        try:
            granted = await self._backend.request_authorization(set(AUTHORIZATION_OPTIONS))
        except Exception as e:
            await self.handle_error(SchedulingFailedError(_describe(e)))
            return False

        await self.check_authorization_status()
        return granted

    async def check_authorization_status(self) -> AuthorizationStatus:
        """Refresh the cached permission status, then reload the pending set."""
        try:
            settings = await self._backend.get_authorization_settings()
        except Exception as e:
            await self.handle_error(RetrievalFailedError(_describe(e)))
            return self._authorization_status

        status = AuthorizationStatus.from_system(settings.authorization_status)
        if status != self._authorization_status:
            logger.info(
                f"Authorization status changed: {self._authorization_status.value} -> {status.value}"
            )
            self._authorization_status = status
            await self._publish("authorization_status", status.value)

        await self.load_pending_notifications()
        return status

    # ===========================================
    # Scheduling
    # ===========================================

    def build_trigger(self, request: NotificationRequest) -> CalendarTrigger:
        """
        Calendar trigger for the request's fire date, to the minute.

        Recurrence granularity is not encoded here: the trigger matches
        year, month, day, hour and minute whatever the repeat interval.
        """
        components = calendar_components(
            request.date, self._calendar_timezone, fields=TRIGGER_FIELDS
        )
        return CalendarTrigger(
            date_components=DateComponents(**components),
            timezone=self._calendar_timezone,
            repeats=request.repeats,
        )

    async def schedule_notification(self, request: NotificationRequest) -> None:
        """
        Schedule a notification with the backend.

        Raises:
            AuthorizationDeniedError: current status does not allow scheduling
            InvalidDateError: request.date, to the minute, is not in the future
            SchedulingFailedError: the backend refused the request
        """
        # Trusts the cached status; call check_authorization_status() first
        # to pick up changes made in system settings.
        if not self._authorization_status.can_schedule:
            error = AuthorizationDeniedError()
            await self.handle_error(error)
            raise error

        # Triggers fire on the minute, so the check applies to the truncated date
        if request.date.replace(second=0, microsecond=0) <= self._clock():
            error = InvalidDateError()
            await self.handle_error(error)
            raise error

        pending_request = PendingNotificationRequest(
            identifier=request.id,
            content=NotificationContent(
                title=request.title,
                body=request.body,
                sound=DEFAULT_SOUND,
                category_identifier=request.category_identifier or "",
                user_info=dict(request.user_info),
            ),
            trigger=self.build_trigger(request),
        )

        try:
            await self._backend.add_pending_request(pending_request)
        except Exception as e:
            error = SchedulingFailedError(_describe(e))
            await self.handle_error(error)
            raise error from e

        logger.info(f"Scheduled notification {request.id} for {request.date.isoformat()}")
        await self._remember_interval(request)
        await self.load_pending_notifications()

    # ===========================================
    # Cancellation
    # ===========================================

    async def cancel_notification(self, notification_id: str) -> None:
        """
        Cancel one pending notification. Unknown ids are not an error.

        Raises:
            CancellationFailedError: the backend failed to remove the request
        """
        try:
            await self._backend.remove_pending_requests({notification_id})
        except Exception as e:
            error = CancellationFailedError(_describe(e))
            await self.handle_error(error)
            raise error from e

        logger.info(f"Cancelled notification {notification_id}")
        await self._forget_interval(notification_id)
        await self.load_pending_notifications()

    async def cancel_all_notifications(self) -> None:
        """
        Cancel every pending notification.

        Raises:
            CancellationFailedError: the backend failed to remove the requests
        """
        try:
            await self._backend.remove_all_pending_requests()
        except Exception as e:
            error = CancellationFailedError(_describe(e))
            await self.handle_error(error)
            raise error from e

        logger.info("Cancelled all notifications")
        if self._repeat_interval_store is not None:
            try:
                await self._repeat_interval_store.clear()
            except Exception as e:
                logger.warning(f"Failed to clear stored repeat intervals: {e}")
        await self.load_pending_notifications()

    # ===========================================
    # Retrieval
    # ===========================================

    async def load_pending_notifications(self) -> list[NotificationRequest]:
        """
        Rebuild the pending set from the backend.

        Entries whose trigger kind is unknown, that will not fire again, or
        whose content is not a valid request are skipped. A backend failure
        is recorded in last_error and leaves the previous set in place.
        """
        try:
            pending = await self._backend.get_pending_requests()
        except Exception as e:
            await self.handle_error(RetrievalFailedError(_describe(e)))
            return self.pending_notifications

        intervals = await self._stored_intervals()
        now = self._clock()

        requests: list[NotificationRequest] = []
        for item in pending:
            request = self._reconstruct(item, intervals, now)
            if request is not None:
                requests.append(request)
        requests.sort(key=lambda r: (r.date, r.id))

        self._pending = requests
        await self._publish(
            "pending_notifications", [r.model_dump(mode="json") for r in requests]
        )

        if self._repeat_interval_store is not None:
            try:
                await self._repeat_interval_store.retain(item.identifier for item in pending)
            except Exception as e:
                logger.warning(f"Failed to prune stored repeat intervals: {e}")

        return self.pending_notifications

    def _reconstruct(
        self,
        item: PendingNotificationRequest,
        intervals: Mapping[str, RepeatInterval],
        now: datetime,
    ) -> Optional[NotificationRequest]:
        trigger = item.trigger
        # The backend does not keep the user's interval; without a stored
        # value it is guessed from the trigger kind.
        if isinstance(trigger, TimeIntervalTrigger):
            guessed = RepeatInterval.MINUTE
        elif isinstance(trigger, CalendarTrigger):
            guessed = RepeatInterval.DAY
        else:
            logger.warning(
                f"Skipping pending notification {item.identifier}: unsupported trigger "
                f"{type(trigger).__name__}"
            )
            return None

        next_date = trigger.next_trigger_date(now)
        if next_date is None:
            logger.debug(f"Skipping pending notification {item.identifier}: no next fire date")
            return None

        content = item.content
        user_info = content.user_info
        if not all(isinstance(k, str) and isinstance(v, str) for k, v in user_info.items()):
            user_info = {}

        try:
            return NotificationRequest(
                id=item.identifier,
                title=content.title,
                body=content.body,
                date=next_date,
                repeats=trigger.repeats,
                repeat_interval=intervals.get(item.identifier, guessed) if trigger.repeats else None,
                category_identifier=content.category_identifier or None,
                user_info=user_info,
            )
        except ValidationError as e:
            logger.warning(f"Skipping malformed pending notification {item.identifier}: {e}")
            return None

    # ===========================================
    # Repeat interval side store
    # ===========================================

    async def _stored_intervals(self) -> dict[str, RepeatInterval]:
        if self._repeat_interval_store is None:
            return {}
        try:
            return await self._repeat_interval_store.get_all()
        except Exception as e:
            logger.warning(f"Failed to read stored repeat intervals: {e}")
            return {}

    async def _remember_interval(self, request: NotificationRequest) -> None:
        if self._repeat_interval_store is None:
            return
        try:
            if request.repeat_interval is not None:
                await self._repeat_interval_store.set(request.id, request.repeat_interval)
            else:
                await self._repeat_interval_store.delete(request.id)
        except Exception as e:
            logger.warning(f"Failed to store repeat interval for {request.id}: {e}")

    async def _forget_interval(self, notification_id: str) -> None:
        if self._repeat_interval_store is None:
            return
        try:
            await self._repeat_interval_store.delete(notification_id)
        except Exception as e:
            logger.warning(f"Failed to delete repeat interval for {notification_id}: {e}")

    # ===========================================
    # Error Handling
    # ===========================================

    async def handle_error(self, error: NotificationError) -> None:
        """
        Show an error message and clear it after the display delay.

        Each error bumps the epoch; a clear only runs if no newer error
        arrived in the meantime.
        """
        self._error_epoch += 1
        epoch = self._error_epoch
        self._last_error = error.message
        logger.warning(f"Notification error: {error.message}")
        await self._publish("last_error", error.message)

        task = asyncio.create_task(self._clear_error_later(epoch))
        self._clear_tasks.add(task)
        task.add_done_callback(self._clear_tasks.discard)

    async def _clear_error_later(self, epoch: int) -> None:
        await asyncio.sleep(self._error_display_seconds)
        if epoch != self._error_epoch:
            return
        self._last_error = None
        await self._publish("last_error", None)

    # ===========================================
    # Notification responses
    # ===========================================

    def handle_deep_link(self, user_info: Mapping[str, Any]) -> Optional[str]:
        """Deep link path carried in a notification's user info, if any."""
        deep_link = user_info.get(DEEP_LINK_KEY)
        return deep_link if isinstance(deep_link, str) else None

    def handle_notification_response(
        self,
        identifier: str,
        action_identifier: str,
        user_info: Mapping[str, Any],
    ) -> NotificationResponseOutcome:
        """Interpret the user's interaction with a delivered notification."""
        try:
            action = NotificationActionIdentifier(action_identifier)
        except ValueError:
            logger.debug(f"Unknown action identifier {action_identifier!r} for {identifier}")
            action = None

        if action == NotificationActionIdentifier.ACCEPT:
            logger.info(f"Accept action tapped for {identifier}")
        elif action == NotificationActionIdentifier.DECLINE:
            logger.info(f"Decline action tapped for {identifier}")

        return NotificationResponseOutcome(
            identifier=identifier,
            action=action,
            deep_link=self.handle_deep_link(user_info),
        )

    async def _publish(self, event_type: str, data: Any) -> None:
        if self._broadcaster is not None:
            await self._broadcaster.publish(event_type, data)
