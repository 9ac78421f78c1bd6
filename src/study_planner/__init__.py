"""study-planner: Greedy allocation of backlog work into free calendar time."""

from study_planner.allocator import Allocation, allocate_work_items, processing_order
from study_planner.free_blocks import MIN_FREE_BLOCK_MINUTES, find_free_blocks
from study_planner.intervals import duration_minutes, overlaps, within_range
from study_planner.planner import check_request, generate_weekly_plan
from study_planner.types import (
    CalendarEvent,
    Constraints,
    EventCategory,
    EventLink,
    FreeBlock,
    InvalidInputError,
    OverlappingEventsError,
    PlanMetrics,
    Priority,
    SchedulingRequest,
    SchedulingResult,
    WorkItem,
)

__all__ = [
    "Allocation",
    "CalendarEvent",
    "Constraints",
    "EventCategory",
    "EventLink",
    "FreeBlock",
    "InvalidInputError",
    "MIN_FREE_BLOCK_MINUTES",
    "OverlappingEventsError",
    "PlanMetrics",
    "Priority",
    "SchedulingRequest",
    "SchedulingResult",
    "WorkItem",
    "allocate_work_items",
    "check_request",
    "duration_minutes",
    "find_free_blocks",
    "generate_weekly_plan",
    "overlaps",
    "processing_order",
    "within_range",
]
