"""
Notification model definitions.

A NotificationRequest is what a user schedules: content plus the moment
it first fires and, optionally, how often it repeats.
"""

from datetime import datetime
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from local_notifications.models.enums import NotificationActionIdentifier, RepeatInterval
from local_notifications.utils.datetime_utils import ensure_utc


def _new_request_id() -> str:
    return str(uuid4()).upper()


class NotificationRequest(BaseModel):
    """A scheduled or to-be-scheduled local notification."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_request_id, min_length=1)
    title: str = Field(..., min_length=1, description="Notification title")
    body: str = Field(..., min_length=1, description="Notification body")
    date: datetime = Field(..., description="First fire date (minute resolution)")
    repeats: bool = False
    repeat_interval: Optional[RepeatInterval] = None
    category_identifier: Optional[str] = Field(
        None, description="Predefined action set (accept/decline)"
    )
    user_info: dict[str, str] = Field(
        default_factory=dict, description="Caller metadata, e.g. deepLink"
    )

    @field_validator("date")
    @classmethod
    def _normalize_date(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    @field_validator("category_identifier")
    @classmethod
    def _empty_category_is_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None

    @model_validator(mode="after")
    def _check_repeat_interval(self) -> "NotificationRequest":
        if self.repeats and self.repeat_interval is None:
            raise ValueError("repeat_interval is required when repeats is true")
        if not self.repeats and self.repeat_interval is not None:
            raise ValueError("repeat_interval must be empty when repeats is false")
        return self


class NotificationResponseOutcome(BaseModel):
    """What the app should do after the user tapped a delivered notification."""

    identifier: str
    action: Optional[NotificationActionIdentifier] = None
    deep_link: Optional[str] = None
