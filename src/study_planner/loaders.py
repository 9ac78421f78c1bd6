"""Data loading: JSON request documents in, JSON-ready result dicts out."""

from __future__ import annotations

import json
from pathlib import Path

from study_planner.intervals import format_instant, parse_instant
from study_planner.schema import validate_request
from study_planner.types import (
    CalendarEvent,
    Constraints,
    EventCategory,
    EventLink,
    InvalidInputError,
    Priority,
    SchedulingRequest,
    SchedulingResult,
    WorkItem,
)

_LINK_KEYS = {
    "courseId": "course_id",
    "assignmentId": "assignment_id",
    "originalTemplateId": "original_template_id",
}


def _event_from_dict(data: dict) -> CalendarEvent:
    meta = data.get("meta") or {}
    link = None
    if meta:
        link = EventLink(**{attr: meta.get(key) for key, attr in _LINK_KEYS.items()})
    return CalendarEvent(
        event_id=str(data["id"]),
        title=data["title"],
        start=parse_instant(data["start"], "start"),
        end=parse_instant(data["end"], "end"),
        category=EventCategory(str(data.get("type", "other")).lower()),
        locked=bool(data.get("isLocked", True)),
        location=data.get("location"),
        link=link,
    )


def _item_from_dict(data: dict) -> WorkItem:
    chunk = data.get("minBlockDuration")
    return WorkItem(
        item_id=str(data["id"]),
        title=data["title"],
        due=parse_instant(data["dueDate"], "dueDate"),
        estimated_minutes=data["estimatedDurationMinutes"],
        priority=Priority(data["priority"]),
        min_chunk_minutes=WorkItem.min_chunk_minutes if chunk is None else chunk,
    )


def _constraints_from_dict(data: dict) -> Constraints:
    defaults = Constraints()
    buffer = data.get("minBufferMinutes")
    return Constraints(
        work_day_start=data.get("workDayStart", defaults.work_day_start),
        work_day_end=data.get("workDayEnd", defaults.work_day_end),
        min_buffer_minutes=defaults.min_buffer_minutes if buffer is None else buffer,
        max_daily_study_minutes=data.get("maxDailyStudyMinutes"),
        preferred_study_times=tuple(
            (w["start"], w["end"]) for w in data.get("preferredStudyTimes") or []
        ),
    )


def request_from_dict(data: dict, source: str = "request") -> SchedulingRequest:
    """Build a SchedulingRequest from the camelCase request contract.

    Raises InvalidInputError listing every validation problem.
    """
    errors = validate_request(data)
    if errors:
        raise InvalidInputError(
            source,
            f"{len(errors)} validation error(s):\n"
            + "\n".join(f"  - {e}" for e in errors),
            messages=errors,
        )

    return SchedulingRequest(
        range_start=parse_instant(data["rangeStart"], "rangeStart"),
        range_end=parse_instant(data["rangeEnd"], "rangeEnd"),
        fixed_events=tuple(_event_from_dict(e) for e in data.get("fixedEvents", [])),
        work_items=tuple(_item_from_dict(a) for a in data.get("assignments", [])),
        constraints=_constraints_from_dict(data.get("constraints", {})),
        timezone=data.get("timezone", "UTC"),
    )


def load_request_json(path: str | Path) -> SchedulingRequest:
    """Load a SchedulingRequest from a JSON file.

    Raises InvalidInputError if validation fails.
    """
    path = Path(path)
    with open(path) as f:
        data = json.load(f)
    return request_from_dict(data, source=path.name)


def _event_to_dict(event: CalendarEvent) -> dict:
    out = {
        "id": event.event_id,
        "title": event.title,
        "start": format_instant(event.start),
        "end": format_instant(event.end),
        "type": event.category.value.upper(),
        "isLocked": event.locked,
    }
    if event.location is not None:
        out["location"] = event.location
    if event.link is not None:
        meta = {
            key: getattr(event.link, attr)
            for key, attr in _LINK_KEYS.items()
            if getattr(event.link, attr) is not None
        }
        if meta:
            out["meta"] = meta
    return out


def _item_to_dict(item: WorkItem) -> dict:
    return {
        "id": item.item_id,
        "title": item.title,
        "dueDate": format_instant(item.due),
        "estimatedDurationMinutes": item.estimated_minutes,
        "priority": item.priority.value,
        "minBlockDuration": item.min_chunk_minutes,
    }


def result_to_dict(result: SchedulingResult) -> dict:
    """Serialise a SchedulingResult to the camelCase result contract."""
    out = {
        "plannedEvents": [_event_to_dict(e) for e in result.planned_events],
        "unassignedTasks": [_item_to_dict(t) for t in result.unassigned_tasks],
        "metrics": {
            "allocatedStudyMinutes": result.metrics.allocated_study_minutes,
            "tasksCompleted": result.metrics.tasks_completed,
            "scheduleUtilization": result.metrics.schedule_utilization,
        },
    }
    if result.errors:
        out["errors"] = list(result.errors)
    return out
