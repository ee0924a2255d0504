"""
Unit tests for backend trigger models.
"""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from local_notifications.models.trigger import (
    CalendarTrigger,
    DateComponents,
    NotificationTrigger,
    PendingNotificationRequest,
    TimeIntervalTrigger,
)

NOW = datetime(2026, 3, 2, 9, 0, 30, tzinfo=timezone.utc)


class TestTimeIntervalTrigger:
    """Tests for TimeIntervalTrigger.next_trigger_date."""

    def test_first_fire(self):
        trigger = TimeIntervalTrigger(time_interval=120, reference_date=NOW)
        assert trigger.next_trigger_date(NOW) == NOW + timedelta(seconds=120)

    def test_one_shot_after_firing(self):
        trigger = TimeIntervalTrigger(time_interval=120, reference_date=NOW)
        assert trigger.next_trigger_date(NOW + timedelta(seconds=120)) is None

    def test_repeating_rolls_forward(self):
        trigger = TimeIntervalTrigger(time_interval=60, reference_date=NOW, repeats=True)
        assert trigger.next_trigger_date(NOW + timedelta(seconds=150)) == NOW + timedelta(
            seconds=180
        )

    def test_interval_must_be_positive(self):
        with pytest.raises(ValidationError):
            TimeIntervalTrigger(time_interval=0)


class TestCalendarTrigger:
    """Tests for CalendarTrigger.next_trigger_date."""

    def test_matches_components(self):
        trigger = CalendarTrigger(
            date_components=DateComponents(year=2026, month=3, day=3, hour=9, minute=0)
        )
        assert trigger.next_trigger_date(NOW) == datetime(2026, 3, 3, 9, 0, tzinfo=timezone.utc)

    def test_out_of_range_components_rejected(self):
        with pytest.raises(ValidationError):
            DateComponents(hour=24)

    def test_specified_fields(self):
        assert DateComponents(hour=9, minute=0).specified() == {"hour": 9, "minute": 0}


def test_base_trigger_never_fires():
    assert NotificationTrigger(repeats=True).next_trigger_date(NOW) is None


class TestPendingRequestTrigger:
    """Tests for rebuilding pending requests from plain data."""

    def _from_dict(self, trigger: dict) -> PendingNotificationRequest:
        return PendingNotificationRequest.model_validate(
            {"identifier": "n-1", "content": {"title": "Standup"}, "trigger": trigger}
        )

    def test_calendar_kind_restores_subclass(self):
        request = self._from_dict(
            {"kind": "calendar", "repeats": True, "date_components": {"hour": 9, "minute": 0}}
        )
        assert isinstance(request.trigger, CalendarTrigger)
        assert request.trigger.next_trigger_date(NOW) == datetime(
            2026, 3, 3, 9, 0, tzinfo=timezone.utc
        )

    def test_time_interval_kind_restores_subclass(self):
        request = self._from_dict(
            {"kind": "time_interval", "time_interval": 120, "reference_date": NOW.isoformat()}
        )
        assert isinstance(request.trigger, TimeIntervalTrigger)
        assert request.trigger.next_trigger_date(NOW) == NOW + timedelta(minutes=2)

    def test_dumped_request_validates_back_to_same_trigger(self):
        original = PendingNotificationRequest(
            identifier="n-1",
            content={"title": "Standup"},
            trigger=CalendarTrigger(date_components=DateComponents(hour=9, minute=0)),
        )
        restored = PendingNotificationRequest.model_validate(original.model_dump(mode="json"))
        assert restored.trigger == original.trigger

    def test_unknown_kind_stays_plain_trigger(self):
        request = self._from_dict({"kind": "location", "repeats": False})
        assert type(request.trigger) is NotificationTrigger
