"""
Dependency injection for API endpoints.

This module is the composition root: it builds the single notification
service of the application and the infrastructure it runs on, based on
environment configuration.
"""

from functools import lru_cache
from typing import Annotated, Optional

from fastapi import Depends

from local_notifications.core.config import get_settings
from local_notifications.interfaces.notification_backend import INotificationBackend
from local_notifications.interfaces.repeat_interval_store import IRepeatIntervalStore
from local_notifications.services.notification_service import NotificationService
from local_notifications.services.realtime_service import StateBroadcaster


@lru_cache()
def get_notification_backend() -> INotificationBackend:
    """Get notification backend instance."""
    from local_notifications.infrastructure.local.memory_backend import (
        InMemoryNotificationBackend,
    )

    settings = get_settings()
    return InMemoryNotificationBackend(
        authorization_response=settings.SIMULATED_AUTHORIZATION_RESPONSE
    )


@lru_cache()
def get_repeat_interval_store() -> Optional[IRepeatIntervalStore]:
    """Get repeat interval store instance, or None when persistence is disabled."""
    settings = get_settings()
    if not settings.PERSIST_REPEAT_INTERVALS:
        return None
    from local_notifications.infrastructure.local.repeat_interval_store import (
        SqliteRepeatIntervalStore,
    )

    return SqliteRepeatIntervalStore()


@lru_cache()
def get_state_broadcaster() -> StateBroadcaster:
    """Get state broadcaster instance."""
    return StateBroadcaster()


@lru_cache()
def get_notification_service() -> NotificationService:
    """Get the application's notification service."""
    settings = get_settings()
    return NotificationService(
        backend=get_notification_backend(),
        repeat_interval_store=get_repeat_interval_store(),
        broadcaster=get_state_broadcaster(),
        calendar_timezone=settings.CALENDAR_TIMEZONE,
        error_display_seconds=settings.ERROR_DISPLAY_SECONDS,
    )


# ===========================================
# Type aliases for dependency injection
# ===========================================

NotificationServiceDep = Annotated[NotificationService, Depends(get_notification_service)]
BroadcasterDep = Annotated[StateBroadcaster, Depends(get_state_broadcaster)]
