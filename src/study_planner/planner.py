"""Plan assembler: the engine entry point.

Request → check → free blocks → allocation → merge + sort → result.
Single pass, no I/O, no state kept between calls.
"""

from __future__ import annotations

import logging
from datetime import datetime

from study_planner.allocator import allocate_work_items
from study_planner.free_blocks import find_free_blocks
from study_planner.intervals import sort_by_start, within_range
from study_planner.schema import parse_clock_time
from study_planner.types import (
    InvalidInputError,
    OverlappingEventsError,
    PlanMetrics,
    Priority,
    SchedulingRequest,
    SchedulingResult,
)

logger = logging.getLogger(__name__)


def _instants(request: SchedulingRequest) -> list[tuple[str, datetime]]:
    found = [("range_start", request.range_start), ("range_end", request.range_end)]
    for event in request.fixed_events:
        found.append((f"fixed_events[{event.event_id}].start", event.start))
        found.append((f"fixed_events[{event.event_id}].end", event.end))
    for item in request.work_items:
        found.append((f"work_items[{item.item_id}].due", item.due))
    return found


def check_request(request: SchedulingRequest) -> None:
    """Fail fast on malformed input. Raises InvalidInputError.

    Checks:
    - all instants are datetimes, either all naive or all aware
    - range_start < range_end
    - every fixed event has start < end, ids are unique, none overlap
      (touching is fine)
    - every work item has positive estimate and minimum chunk
    - buffer is non-negative, constraint times parse as HH:MM
    """
    instants = _instants(request)
    for name, value in instants:
        if not isinstance(value, datetime):
            raise InvalidInputError(name, f"expected datetime, got {type(value).__name__}")
    awareness = {value.tzinfo is not None for _, value in instants}
    if len(awareness) > 1:
        raise InvalidInputError(
            "instants", "mix of timezone-aware and naive datetimes"
        )

    if request.range_start >= request.range_end:
        raise InvalidInputError(
            "range_end",
            f"range end {request.range_end.isoformat()} is not after "
            f"range start {request.range_start.isoformat()}",
        )

    seen: set[str] = set()
    for event in request.fixed_events:
        if event.start >= event.end:
            raise InvalidInputError(
                f"fixed_events[{event.event_id}]", "start is not before end"
            )
        if event.event_id in seen:
            raise InvalidInputError(
                f"fixed_events[{event.event_id}]", "duplicate event id"
            )
        seen.add(event.event_id)

    ordered = sort_by_start(request.fixed_events)
    for prev, curr in zip(ordered, ordered[1:]):
        if curr.start < prev.end:
            raise OverlappingEventsError(prev.event_id, curr.event_id)

    for item in request.work_items:
        if not isinstance(item.priority, Priority):
            raise InvalidInputError(
                f"work_items[{item.item_id}]", f"unknown priority {item.priority!r}"
            )
        if item.estimated_minutes <= 0:
            raise InvalidInputError(
                f"work_items[{item.item_id}]",
                f"estimated minutes must be positive, got {item.estimated_minutes}",
            )
        if item.min_chunk_minutes <= 0:
            raise InvalidInputError(
                f"work_items[{item.item_id}]",
                f"minimum chunk must be positive, got {item.min_chunk_minutes}",
            )

    constraints = request.constraints
    if constraints.min_buffer_minutes < 0:
        raise InvalidInputError(
            "constraints.min_buffer_minutes",
            f"must be non-negative, got {constraints.min_buffer_minutes}",
        )
    if (
        constraints.max_daily_study_minutes is not None
        and constraints.max_daily_study_minutes < 0
    ):
        raise InvalidInputError(
            "constraints.max_daily_study_minutes",
            f"must be non-negative, got {constraints.max_daily_study_minutes}",
        )
    clocks = [
        ("constraints.work_day_start", constraints.work_day_start),
        ("constraints.work_day_end", constraints.work_day_end),
    ]
    for i, (start, end) in enumerate(constraints.preferred_study_times):
        clocks.append((f"constraints.preferred_study_times[{i}].start", start))
        clocks.append((f"constraints.preferred_study_times[{i}].end", end))
    for name, text in clocks:
        try:
            parse_clock_time(text)
        except ValueError as e:
            raise InvalidInputError(name, str(e)) from None


def generate_weekly_plan(request: SchedulingRequest) -> SchedulingResult:
    """Compute free time and fill it with work items.

    Returns the merged schedule (fixed events unchanged plus generated
    study events, sorted by start), the unplaced remainders in processing
    order, and metrics. Running out of free time is not an error.

    Raises InvalidInputError (or OverlappingEventsError) on malformed input,
    before any work is done.
    """
    check_request(request)

    for event in request.fixed_events:
        if not within_range(
            event.start, event.end, request.range_start, request.range_end,
            inclusive=True,
        ):
            logger.debug("fixed event %r extends beyond the planning range", event.event_id)

    blocks = find_free_blocks(
        request.fixed_events,
        request.range_start,
        request.range_end,
        buffer_minutes=request.constraints.min_buffer_minutes,
    )
    free_minutes = sum(b.duration_minutes for b in blocks)

    allocation = allocate_work_items(blocks, request.work_items)

    planned = sort_by_start([*request.fixed_events, *allocation.generated])

    allocated = allocation.allocated_minutes
    utilization = min(1.0, allocated / free_minutes) if free_minutes > 0 else 0.0
    metrics = PlanMetrics(
        allocated_study_minutes=allocated,
        tasks_completed=len(request.work_items) - len(allocation.unassigned),
        schedule_utilization=utilization,
    )

    logger.debug(
        "plan: %d events (%d generated), %d unassigned, %d/%d free min used",
        len(planned),
        len(allocation.generated),
        len(allocation.unassigned),
        allocated,
        free_minutes,
    )
    return SchedulingResult(
        planned_events=tuple(planned),
        unassigned_tasks=tuple(allocation.unassigned),
        metrics=metrics,
    )
