"""
Timezone-aware datetime utilities.

This module provides utilities for working with timezone-aware datetimes
and for matching calendar components against a timeline, ensuring
consistent handling across the application.
"""

from datetime import date, datetime, time, timedelta, timezone
from typing import Iterable, Optional
from zoneinfo import ZoneInfo

# UTC timezone constant
UTC = timezone.utc

# Ordered coarse -> fine. Weekday constrains at day granularity.
CALENDAR_FIELDS = ("year", "month", "day", "hour", "minute", "second")
_FIELD_MINIMUMS = {"month": 1, "day": 1, "hour": 0, "minute": 0, "second": 0}

# Upper bound on how far ahead a calendar match is searched. Eight years
# covers a Feb 29 match from any starting point.
_SEARCH_HORIZON_DAYS = 366 * 8


def now_utc() -> datetime:
    """
    Get current UTC datetime (timezone-aware).

    Returns:
        datetime: Current UTC time with tzinfo set to UTC
    """
    return datetime.now(UTC)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Ensure datetime is timezone-aware and in UTC.

    Args:
        dt: datetime to convert (can be None, naive, or timezone-aware)

    Returns:
        Optional[datetime]: UTC timezone-aware datetime, or None if input is None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        # Naive datetime - assume UTC
        return dt.replace(tzinfo=UTC)

    # Already timezone-aware - convert to UTC
    return dt.astimezone(UTC)


def calendar_components(
    dt: datetime,
    tz_name: str,
    fields: Iterable[str] = ("year", "month", "day", "hour", "minute"),
) -> dict[str, int]:
    """
    Break a datetime into calendar components in the given time zone.

    Fields not listed are left out, which is how second-level precision is
    dropped from fire dates. "weekday" is the ISO weekday and "fold" tells
    the two occurrences of a repeated wall-clock time apart.

    Example:
        >>> calendar_components(datetime(2026, 3, 1, 9, 30, 15, tzinfo=UTC), "UTC")
        {'year': 2026, 'month': 3, 'day': 1, 'hour': 9, 'minute': 30}
    """
    local = ensure_utc(dt).astimezone(ZoneInfo(tz_name))
    components: dict[str, int] = {}
    for field in fields:
        if field == "weekday":
            components[field] = local.isoweekday()
        elif field == "fold":
            components[field] = local.fold
        else:
            components[field] = getattr(local, field)
    return components


def _resolve_fixed_fields(components: dict[str, Optional[int]]) -> Optional[dict[str, int]]:
    """
    Fill unspecified fields finer than the finest specified one with their minimum.

    Coarser unspecified fields stay wildcards. Returns None when nothing is
    specified, since such components never identify a moment.
    """
    specified = {k: v for k, v in components.items() if v is not None}
    if not specified:
        return None

    finest = -1
    for index, field in enumerate(CALENDAR_FIELDS):
        if field in specified:
            finest = index
    if "weekday" in specified:
        finest = max(finest, CALENDAR_FIELDS.index("day"))

    for field in CALENDAR_FIELDS[finest + 1:]:
        specified.setdefault(field, _FIELD_MINIMUMS[field])
    return specified


def _day_matches(day: date, fixed: dict[str, int]) -> bool:
    if "year" in fixed and day.year != fixed["year"]:
        return False
    if "month" in fixed and day.month != fixed["month"]:
        return False
    if "day" in fixed and day.day != fixed["day"]:
        return False
    if "weekday" in fixed and day.isoweekday() != fixed["weekday"]:
        return False
    return True


def next_matching_date(
    components: dict[str, Optional[int]],
    after: datetime,
    tz_name: str,
) -> Optional[datetime]:
    """
    Find the first moment strictly after `after` matching the components.

    Args:
        components: calendar fields (year, month, day, hour, minute, second,
            weekday as ISO 1=Mon..7=Sun); None means "not specified". An
            optional "fold" picks the occurrence of an ambiguous local time.
        after: lower bound (exclusive)
        tz_name: IANA time zone the components are expressed in

    Returns:
        Optional[datetime]: matching moment in UTC, or None if there is none
    """
    fold = components.get("fold") or 0
    fixed = _resolve_fixed_fields({k: v for k, v in components.items() if k != "fold"})
    if fixed is None:
        return None

    tz = ZoneInfo(tz_name)
    after = ensure_utc(after)
    local_after = after.astimezone(tz)
    start = local_after.date()

    if "year" in fixed:
        if fixed["year"] < start.year:
            return None
        if fixed["year"] > start.year:
            start = date(fixed["year"], 1, 1)

    hours = [fixed["hour"]] if "hour" in fixed else range(24)
    minutes = [fixed["minute"]] if "minute" in fixed else range(60)
    seconds = [fixed["second"]] if "second" in fixed else range(60)

    for offset in range(_SEARCH_HORIZON_DAYS):
        day = start + timedelta(days=offset)
        if "year" in fixed and day.year > fixed["year"]:
            return None
        if not _day_matches(day, fixed):
            continue
        for hour in hours:
            for minute in minutes:
                for second in seconds:
                    candidate = datetime.combine(
                        day, time(hour, minute, second, fold=fold), tzinfo=tz
                    ).astimezone(UTC)
                    # Same-zone comparisons ignore fold, so compare in UTC
                    if candidate > after:
                        return candidate
    return None
