"""
Custom exceptions for the notification service.

Each NotificationError carries a human-readable message suitable for
showing to the user as-is.
"""

from typing import Any, Optional


class NotificationError(Exception):
    """Base exception for notification operations."""

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class AuthorizationDeniedError(NotificationError):
    """Scheduling attempted without notification permission."""

    def __init__(self):
        super().__init__(
            "Notification permission was denied. Please enable notifications in Settings."
        )


class InvalidDateError(NotificationError):
    """Fire date is not in the future."""

    def __init__(self):
        super().__init__("The scheduled date must be in the future.")


class SchedulingFailedError(NotificationError):
    """Backend refused to add a request (also used for authorization failures)."""

    def __init__(self, detail: str):
        super().__init__(f"Failed to schedule notification: {detail}", details=detail)
        self.detail = detail


class CancellationFailedError(NotificationError):
    """Backend failed to remove pending requests."""

    def __init__(self, detail: str):
        super().__init__(f"Failed to cancel notification: {detail}", details=detail)
        self.detail = detail


class RetrievalFailedError(NotificationError):
    """Backend failed to enumerate pending requests."""

    def __init__(self, detail: str):
        super().__init__(f"Failed to retrieve notifications: {detail}", details=detail)
        self.detail = detail


class BackendError(NotificationError):
    """Platform failure raised by a notification backend."""

    pass
