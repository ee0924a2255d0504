"""Abstract interfaces for infrastructure abstraction."""

from local_notifications.interfaces.notification_backend import INotificationBackend
from local_notifications.interfaces.repeat_interval_store import IRepeatIntervalStore

__all__ = [
    "INotificationBackend",
    "IRepeatIntervalStore",
]
