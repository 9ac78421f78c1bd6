"""Shared types: calendar events, work items, request/result and error kinds."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum


class EventCategory(str, Enum):
    """Closed set of calendar event categories."""

    CLASS = "class"
    PRACTICE = "practice"
    GAME = "game"
    MEAL = "meal"
    SLEEP = "sleep"
    TRAVEL = "travel"
    STUDY = "study"
    RECOVERY = "recovery"
    OTHER = "other"


class Priority(str, Enum):
    """Discrete work item priority. Only the ordering matters."""

    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"

    @property
    def rank(self) -> int:
        return {"HIGH": 3, "MEDIUM": 2, "LOW": 1}[self.value]


@dataclass(frozen=True)
class EventLink:
    """Optional linkage metadata carried for collaborators."""

    course_id: str | None = None
    assignment_id: str | None = None
    original_template_id: str | None = None


@dataclass(frozen=True)
class CalendarEvent:
    """An occupied interval [start, end) on the planning timeline.

    Caller-supplied fixed events and generated study events share this type.
    ``locked`` is advisory metadata; the engine never moves any event.
    """

    event_id: str
    title: str
    start: datetime
    end: datetime
    category: EventCategory = EventCategory.OTHER
    locked: bool = True
    location: str | None = None
    link: EventLink | None = None

    @property
    def duration_minutes(self) -> int:
        return int((self.end - self.start).total_seconds()) // 60


@dataclass(frozen=True)
class WorkItem:
    """A unit of backlog work, divisible into chunks of min_chunk_minutes.

    ``due`` orders items of equal priority; it is not a placement constraint.
    """

    item_id: str
    title: str
    due: datetime
    estimated_minutes: int
    priority: Priority = Priority.MEDIUM
    min_chunk_minutes: int = 30


@dataclass(frozen=True)
class Constraints:
    """User scheduling constraints.

    Only min_buffer_minutes drives allocation. The workday window, daily cap
    and preferred times are validated and carried for collaborators.
    """

    work_day_start: str = "06:00"
    work_day_end: str = "22:00"
    min_buffer_minutes: int = 0
    max_daily_study_minutes: int | None = None
    preferred_study_times: tuple[tuple[str, str], ...] = ()


@dataclass
class FreeBlock:
    """Unallocated time [start, end). Shrinks from the front as it is consumed."""

    start: datetime
    end: datetime

    @property
    def duration_minutes(self) -> int:
        return int((self.end - self.start).total_seconds()) // 60

    def consume(self, minutes: int) -> tuple[datetime, datetime]:
        """Take minutes from the front. Returns the consumed (start, end)."""
        taken_start = self.start
        taken_end = taken_start + timedelta(minutes=minutes)
        self.start = taken_end
        return taken_start, taken_end


@dataclass(frozen=True)
class SchedulingRequest:
    """Engine input. ``timezone`` is informational; instants are pre-normalised."""

    range_start: datetime
    range_end: datetime
    fixed_events: tuple[CalendarEvent, ...] = ()
    work_items: tuple[WorkItem, ...] = ()
    constraints: Constraints = field(default_factory=Constraints)
    timezone: str = "UTC"


@dataclass(frozen=True)
class PlanMetrics:
    allocated_study_minutes: int = 0
    tasks_completed: int = 0
    schedule_utilization: float = 0.0


@dataclass(frozen=True)
class SchedulingResult:
    """Engine output.

    Invariants:
        - planned_events is sorted by start and contains every fixed event
        - unassigned_tasks carry remaining (unplaced) minutes only
        - 0 <= metrics.schedule_utilization <= 1
    """

    planned_events: tuple[CalendarEvent, ...] = ()
    unassigned_tasks: tuple[WorkItem, ...] = ()
    metrics: PlanMetrics = field(default_factory=PlanMetrics)
    errors: tuple[str, ...] = ()

    @classmethod
    def from_error(cls, exc: InvalidInputError) -> SchedulingResult:
        """Empty result carrying the diagnostics of a rejected request."""
        return cls(errors=tuple(exc.messages))


class InvalidInputError(ValueError):
    """Raised when a request is malformed. No partial result is produced."""

    def __init__(self, field: str, reason: str, messages: list[str] | None = None) -> None:
        self.field = field
        self.reason = reason
        self.messages = list(messages) if messages else [f"{field}: {reason}"]
        super().__init__(f"Invalid input: {field}: {reason}")


class OverlappingEventsError(InvalidInputError):
    """Raised when two fixed events occupy the same time."""

    def __init__(self, first_id: str, second_id: str) -> None:
        self.first_id = first_id
        self.second_id = second_id
        super().__init__(
            "fixed_events",
            f"events {first_id!r} and {second_id!r} overlap",
        )
