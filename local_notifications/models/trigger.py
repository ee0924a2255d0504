"""
Backend-level notification representations.

These mirror what the platform notification store keeps for a pending
request: its content and the trigger that decides when it fires.
"""

from datetime import datetime, timedelta
from typing import Annotated, Any, Optional, Union

from pydantic import BaseModel, Discriminator, Field, Tag, field_validator

from local_notifications.models.enums import TriggerKind
from local_notifications.utils.datetime_utils import (
    ensure_utc,
    next_matching_date,
    now_utc,
)

# Platforms refuse repeating interval triggers below one minute
MIN_REPEATING_INTERVAL_SECONDS = 60.0


class DateComponents(BaseModel):
    """Calendar fields a calendar trigger matches against. None = unspecified."""

    year: Optional[int] = Field(None, ge=1)
    month: Optional[int] = Field(None, ge=1, le=12)
    day: Optional[int] = Field(None, ge=1, le=31)
    hour: Optional[int] = Field(None, ge=0, le=23)
    minute: Optional[int] = Field(None, ge=0, le=59)
    second: Optional[int] = Field(None, ge=0, le=59)
    weekday: Optional[int] = Field(None, ge=1, le=7, description="ISO weekday, 1=Mon")
    fold: int = Field(0, ge=0, le=1, description="Occurrence of a repeated local time")

    def specified(self) -> dict[str, int]:
        return self.model_dump(exclude_none=True, exclude={"fold"})


class NotificationTrigger(BaseModel):
    """Base trigger. Concrete backends may carry kinds the service does not know."""

    repeats: bool = False

    def next_trigger_date(self, after: Optional[datetime] = None) -> Optional[datetime]:
        return None


class CalendarTrigger(NotificationTrigger):
    """Fires when the clock matches the given date components."""

    kind: TriggerKind = TriggerKind.CALENDAR
    date_components: DateComponents
    timezone: str = "UTC"

    def next_trigger_date(self, after: Optional[datetime] = None) -> Optional[datetime]:
        return next_matching_date(
            self.date_components.model_dump(),
            after or now_utc(),
            self.timezone,
        )


class TimeIntervalTrigger(NotificationTrigger):
    """Fires a fixed number of seconds after it was scheduled, optionally repeating."""

    kind: TriggerKind = TriggerKind.TIME_INTERVAL
    time_interval: float = Field(..., gt=0, description="Seconds until first fire")
    reference_date: datetime = Field(default_factory=now_utc)

    @field_validator("reference_date")
    @classmethod
    def _normalize_reference(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    def next_trigger_date(self, after: Optional[datetime] = None) -> Optional[datetime]:
        after = ensure_utc(after) if after else now_utc()
        interval = timedelta(seconds=self.time_interval)
        first = self.reference_date + interval
        if first > after:
            return first
        if not self.repeats:
            return None
        elapsed = (after - first) // interval
        return first + interval * (elapsed + 1)


_OTHER_TRIGGER = "other"


def _trigger_tag(value: Any) -> str:
    kind = value.get("kind") if isinstance(value, dict) else getattr(value, "kind", None)
    try:
        return TriggerKind(kind).value
    except ValueError:
        return _OTHER_TRIGGER


# Known kinds validate to their own class; anything else stays a plain trigger
AnyTrigger = Annotated[
    Union[
        Annotated[CalendarTrigger, Tag(TriggerKind.CALENDAR.value)],
        Annotated[TimeIntervalTrigger, Tag(TriggerKind.TIME_INTERVAL.value)],
        Annotated[NotificationTrigger, Tag(_OTHER_TRIGGER)],
    ],
    Discriminator(_trigger_tag),
]


class NotificationContent(BaseModel):
    """Displayed content of a pending request."""

    title: str = ""
    body: str = ""
    sound: Optional[str] = "default"
    category_identifier: str = ""
    user_info: dict[str, Any] = Field(default_factory=dict)


class PendingNotificationRequest(BaseModel):
    """A request as held by the backend's pending store."""

    identifier: str
    content: NotificationContent
    trigger: Optional[AnyTrigger] = None


class NotificationSettings(BaseModel):
    """Backend notification settings. Status is the raw platform value."""

    authorization_status: str = "notDetermined"
