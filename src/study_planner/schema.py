"""Input validation for raw (JSON-shaped) scheduling requests.

Keys follow the camelCase request contract:
{
    "rangeStart": "...", "rangeEnd": "...", "timezone": "...",
    "fixedEvents": [ {"id", "title", "start", "end", "type", ...}, ... ],
    "assignments": [ {"id", "title", "dueDate", "estimatedDurationMinutes",
                      "priority", "minBlockDuration"?}, ... ],
    "constraints": { "workDayStart", "workDayEnd", "minBufferMinutes",
                     "maxDailyStudyMinutes"?, "preferredStudyTimes"? }
}
"""

from __future__ import annotations

from datetime import time

from study_planner.intervals import parse_instant
from study_planner.types import EventCategory, InvalidInputError, Priority

_CATEGORIES = {c.value for c in EventCategory}
_PRIORITIES = {p.value for p in Priority}
_META_KEYS = ("courseId", "assignmentId", "originalTemplateId")


def parse_clock_time(text: str) -> time:
    """Parse 'HH:MM' to a time. Raises ValueError."""
    if not isinstance(text, str):
        raise ValueError(f"expected 'HH:MM' string, got {text!r}")
    parts = text.split(":")
    if len(parts) != 2 or not all(p.isdigit() for p in parts):
        raise ValueError(f"expected 'HH:MM', got {text!r}")
    return time(int(parts[0]), int(parts[1]))


def _instant_error(value, label: str) -> str | None:
    try:
        parse_instant(value, label)
    except InvalidInputError as e:
        return f"{label}: {e.reason}"
    return None


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_constraints(constraints: dict) -> list[str]:
    """Validate constraints. Returns list of error messages (empty = valid).

    Checks:
    - workDayStart/workDayEnd parse as HH:MM
    - minBufferMinutes, if present, is a non-negative integer
    - maxDailyStudyMinutes, if present, is a non-negative integer
    - preferredStudyTimes, if present, is a list of objects with parseable start/end

    Optional keys set to null mean "use the default".
    """
    errors: list[str] = []

    if not isinstance(constraints, dict):
        return [f"constraints: expected object, got {type(constraints).__name__}"]

    for key in ("workDayStart", "workDayEnd"):
        if key not in constraints:
            continue
        try:
            parse_clock_time(constraints[key])
        except ValueError as e:
            errors.append(f"constraints.{key}: {e}")

    buffer = constraints.get("minBufferMinutes")
    if buffer is not None and (not _is_int(buffer) or buffer < 0):
        errors.append(
            f"constraints.minBufferMinutes: must be a non-negative integer, got {buffer!r}"
        )

    cap = constraints.get("maxDailyStudyMinutes")
    if cap is not None and (not _is_int(cap) or cap < 0):
        errors.append(
            f"constraints.maxDailyStudyMinutes: must be a non-negative integer, got {cap!r}"
        )

    windows = constraints.get("preferredStudyTimes")
    if windows is None:
        windows = []
    elif not isinstance(windows, list):
        errors.append(
            f"constraints.preferredStudyTimes: expected list, got {type(windows).__name__}"
        )
        windows = []

    for i, window in enumerate(windows):
        if not isinstance(window, dict):
            errors.append(f"constraints.preferredStudyTimes[{i}]: expected object")
            continue
        for key in ("start", "end"):
            try:
                parse_clock_time(window.get(key))
            except ValueError as e:
                errors.append(f"constraints.preferredStudyTimes[{i}].{key}: {e}")

    return errors


def validate_fixed_events(events: list) -> list[str]:
    """Validate fixed events. Returns list of error messages.

    Checks:
    - each entry has id, title, start, end
    - start/end parse as instants and start < end
    - type, if present, is a known category
    - meta, if present, is an object of string ids
    """
    errors: list[str] = []

    if not isinstance(events, list):
        return [f"fixedEvents: expected list, got {type(events).__name__}"]

    for i, event in enumerate(events):
        label = f"fixedEvents[{i}]"
        if not isinstance(event, dict):
            errors.append(f"{label}: expected object")
            continue

        missing = [k for k in ("id", "title", "start", "end") if k not in event]
        if missing:
            errors.append(f"{label}: missing {', '.join(repr(k) for k in missing)}")
            continue

        start_err = _instant_error(event["start"], f"{label}.start")
        end_err = _instant_error(event["end"], f"{label}.end")
        errors.extend(e for e in (start_err, end_err) if e)
        if not start_err and not end_err:
            start = parse_instant(event["start"], "start")
            end = parse_instant(event["end"], "end")
            if (start.tzinfo is None) != (end.tzinfo is None):
                errors.append(f"{label}: start and end mix aware and naive instants")
            elif start >= end:
                errors.append(f"{label}: start {event['start']} is not before end {event['end']}")

        category = event.get("type", EventCategory.OTHER.value)
        if str(category).lower() not in _CATEGORIES:
            errors.append(f"{label}: unknown type {category!r}")

        meta = event.get("meta")
        if meta is not None and not isinstance(meta, dict):
            errors.append(f"{label}.meta: expected object, got {type(meta).__name__}")
        elif meta:
            for key in _META_KEYS:
                value = meta.get(key)
                if value is not None and not isinstance(value, str):
                    errors.append(f"{label}.meta.{key}: expected string, got {value!r}")

    return errors


def validate_work_items(items: list) -> list[str]:
    """Validate assignments. Returns list of error messages.

    Checks:
    - each entry has id, title, dueDate, estimatedDurationMinutes, priority
    - dueDate parses, durations are positive integers
    - priority is HIGH, MEDIUM or LOW
    """
    errors: list[str] = []

    if not isinstance(items, list):
        return [f"assignments: expected list, got {type(items).__name__}"]

    required = ("id", "title", "dueDate", "estimatedDurationMinutes", "priority")
    for i, item in enumerate(items):
        label = f"assignments[{i}]"
        if not isinstance(item, dict):
            errors.append(f"{label}: expected object")
            continue

        missing = [k for k in required if k not in item]
        if missing:
            errors.append(f"{label}: missing {', '.join(repr(k) for k in missing)}")
            continue

        due_err = _instant_error(item["dueDate"], f"{label}.dueDate")
        if due_err:
            errors.append(due_err)

        estimate = item["estimatedDurationMinutes"]
        if not _is_int(estimate) or estimate <= 0:
            errors.append(
                f"{label}: estimatedDurationMinutes must be a positive integer, got {estimate!r}"
            )

        chunk = item.get("minBlockDuration")
        if chunk is not None and (not _is_int(chunk) or chunk <= 0):
            errors.append(
                f"{label}: minBlockDuration must be a positive integer, got {chunk!r}"
            )

        priority = item["priority"]
        if not isinstance(priority, str) or priority not in _PRIORITIES:
            errors.append(f"{label}: unknown priority {priority!r}")

    return errors


def validate_request(data: dict) -> list[str]:
    """Validate a whole request. Returns list of error messages."""
    if not isinstance(data, dict):
        return [f"request: expected object, got {type(data).__name__}"]

    errors: list[str] = []
    for key in ("rangeStart", "rangeEnd"):
        if key not in data:
            errors.append(f"request: missing {key!r}")
            continue
        err = _instant_error(data[key], key)
        if err:
            errors.append(err)

    if not errors:
        start = parse_instant(data["rangeStart"], "rangeStart")
        end = parse_instant(data["rangeEnd"], "rangeEnd")
        if (start.tzinfo is None) != (end.tzinfo is None):
            errors.append("request: rangeStart and rangeEnd mix aware and naive instants")
        elif start >= end:
            errors.append(
                f"request: rangeStart {data['rangeStart']} is not before "
                f"rangeEnd {data['rangeEnd']}"
            )

    errors.extend(validate_fixed_events(data.get("fixedEvents", [])))
    errors.extend(validate_work_items(data.get("assignments", [])))
    errors.extend(validate_constraints(data.get("constraints", {})))
    return errors
