"""
Notification backend interface.

The platform's local notification store: permission handling and the set
of pending requests. Implementations raise BackendError on platform failure.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from local_notifications.models.enums import AuthorizationOption
from local_notifications.models.trigger import NotificationSettings, PendingNotificationRequest


class INotificationBackend(ABC):
    """Abstract interface for the platform notification store."""

    @abstractmethod
    async def request_authorization(self, options: set[AuthorizationOption]) -> bool:
        """Prompt for permission. Returns whether it was granted."""
        pass

    @abstractmethod
    async def get_authorization_settings(self) -> NotificationSettings:
        """Get current notification settings."""
        pass

    @abstractmethod
    async def add_pending_request(self, request: PendingNotificationRequest) -> None:
        """Add a request. An existing request with the same identifier is replaced."""
        pass

    @abstractmethod
    async def remove_pending_requests(self, identifiers: set[str]) -> None:
        """Remove requests by identifier. Unknown identifiers are ignored."""
        pass

    @abstractmethod
    async def remove_all_pending_requests(self) -> None:
        """Remove every pending request."""
        pass

    @abstractmethod
    async def get_pending_requests(self) -> list[PendingNotificationRequest]:
        """List requests that have not fired yet."""
        pass
