"""
Enum definitions for the application.

These enums are used across models and provide type-safe status/interval values.
"""

from enum import Enum

from local_notifications.core.logger import setup_logger

logger = setup_logger(__name__)


class AuthorizationStatus(str, Enum):
    """Permission level the user granted for notifications."""

    NOT_DETERMINED = "Not Determined"
    DENIED = "Denied"
    AUTHORIZED = "Authorized"
    PROVISIONAL = "Provisional"
    EPHEMERAL = "Ephemeral"

    @property
    def can_schedule(self) -> bool:
        return self in (
            AuthorizationStatus.AUTHORIZED,
            AuthorizationStatus.PROVISIONAL,
            AuthorizationStatus.EPHEMERAL,
        )

    @classmethod
    def from_system(cls, raw: str) -> "AuthorizationStatus":
        """
        Map a backend-reported status to the domain enum.

        Unknown values (e.g. states added by newer platforms) fold to
        NOT_DETERMINED.
        """
        status = _SYSTEM_STATUS_MAP.get(raw)
        if status is None:
            logger.warning(f"Unknown authorization status from backend: {raw!r}")
            return cls.NOT_DETERMINED
        return status


_SYSTEM_STATUS_MAP = {
    "notDetermined": AuthorizationStatus.NOT_DETERMINED,
    "denied": AuthorizationStatus.DENIED,
    "authorized": AuthorizationStatus.AUTHORIZED,
    "provisional": AuthorizationStatus.PROVISIONAL,
    "ephemeral": AuthorizationStatus.EPHEMERAL,
}


class RepeatInterval(str, Enum):
    """Recurrence granularity of a repeating notification (always every 1 unit)."""

    MINUTE = "Minute"
    HOUR = "Hour"
    DAY = "Day"
    WEEK = "Week"


class AuthorizationOption(str, Enum):
    """Capabilities requested when asking for permission."""

    ALERT = "alert"
    SOUND = "sound"
    BADGE = "badge"


class TriggerKind(str, Enum):
    """Shape of a backend trigger."""

    CALENDAR = "calendar"
    TIME_INTERVAL = "time_interval"


class NotificationActionIdentifier(str, Enum):
    """Action identifiers reported when the user interacts with a notification."""

    DEFAULT = "DEFAULT_ACTION"
    DISMISS = "DISMISS_ACTION"
    ACCEPT = "ACCEPT_ACTION"
    DECLINE = "DECLINE_ACTION"
