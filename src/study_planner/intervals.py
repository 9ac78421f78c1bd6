"""Interval utilities and the instant-parsing boundary.

All engine arithmetic works on whole minutes between datetimes on one
timeline. Aware datetimes are normalised to UTC here, once.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Iterable

from study_planner.types import CalendarEvent, InvalidInputError


def parse_instant(value: datetime | str, name: str) -> datetime:
    """Convert an ISO-8601 string or datetime to an instant.

    A trailing 'Z' means UTC. Aware values are converted to UTC; naive
    values are returned unchanged.

    Raises InvalidInputError if value cannot be parsed.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(text)
        except ValueError:
            raise InvalidInputError(name, f"unparsable instant {value!r}") from None
    else:
        raise InvalidInputError(
            name, f"expected ISO-8601 string or datetime, got {type(value).__name__}"
        )

    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)
    return dt


def format_instant(dt: datetime) -> str:
    """ISO-8601 text for an instant, 'Z' suffix for UTC."""
    text = dt.isoformat()
    if text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text


def duration_minutes(a: datetime, b: datetime) -> int:
    """Signed whole minutes from a to b (truncated toward zero)."""
    return int((b - a).total_seconds() / 60)


def add_minutes(instant: datetime, minutes: int) -> datetime:
    return instant + timedelta(minutes=minutes)


def overlaps(
    a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime
) -> bool:
    """True iff half-open intervals [a_start, a_end) and [b_start, b_end) intersect."""
    return a_start < b_end and b_start < a_end


def within_range(
    start: datetime,
    end: datetime,
    range_start: datetime,
    range_end: datetime,
    inclusive: bool = False,
) -> bool:
    """Whether [start, end) lies inside the range.

    By default both bounds are exclusive: an interval touching range_start
    or range_end is rejected. Pass inclusive=True to accept it.
    """
    if inclusive:
        return start >= range_start and end <= range_end
    return start > range_start and end < range_end


def sort_by_start(events: Iterable[CalendarEvent]) -> list[CalendarEvent]:
    """New list sorted by start. Stable: ties keep input order."""
    return sorted(events, key=lambda e: e.start)

