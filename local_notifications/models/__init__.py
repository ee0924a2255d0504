"""Pydantic models (schemas) for the application."""

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
    NotificationSettings,
    NotificationTrigger,
    PendingNotificationRequest,
    TimeIntervalTrigger,
)

__all__ = [
    "AuthorizationOption",
    "AuthorizationStatus",
    "NotificationActionIdentifier",
    "RepeatInterval",
    "NotificationRequest",
    "NotificationResponseOutcome",
    "CalendarTrigger",
    "DateComponents",
    "NotificationContent",
    "NotificationSettings",
    "NotificationTrigger",
    "PendingNotificationRequest",
    "TimeIntervalTrigger",
]
