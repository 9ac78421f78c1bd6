"""Shared test fixtures and data loading for study-planner.

All test data lives in data/fixtures/ as JSON files.  This module loads
that data and exposes helper functions + pytest fixtures for the tests.

Reference week: Mon 2025-01-06 through Sun 2025-01-12, UTC.
Instants in scenario files are written as "<day> <HH:MM>", e.g. "mon 09:00".
"""

from __future__ import annotations

import json
from datetime import date, datetime, timedelta
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
FIXTURES_DIR = Path(__file__).resolve().parent.parent / "data" / "fixtures"
SCENARIOS_DIR = FIXTURES_DIR / "scenarios"
REQUESTS_DIR = FIXTURES_DIR / "requests"


# ---------------------------------------------------------------------------
# Data loaders
# ---------------------------------------------------------------------------
def _load_json(path: Path):
    with open(path) as f:
        return json.load(f)


_reference = _load_json(FIXTURES_DIR / "reference.json")


# ---------------------------------------------------------------------------
# Reference constants derived from reference.json
# ---------------------------------------------------------------------------
EPOCH = datetime.fromisoformat(_reference["epoch"])
MINUTES_PER_DAY = _reference["minutes_per_day"]

# Day lookup:  DAYS["mon"] → {"date": date(...), "offset": 0, ...}
DAYS: dict[str, dict] = {}
for _d in _reference["days"]:
    DAYS[_d["name"]] = {
        "date": date.fromisoformat(_d["date"]),
        "offset": _d["day_offset"],
        "weekday": _d["weekday"],
    }


# ---------------------------------------------------------------------------
# Convenience helpers (importable by test modules)
# ---------------------------------------------------------------------------
def dt(day: str, time_label: str) -> datetime:
    """Aware UTC datetime from day name and HH:MM label.

    >>> dt("mon", "09:00")
    datetime(2025, 1, 6, 9, 0, tzinfo=timezone.utc)
    """
    hours, minutes = (int(p) for p in time_label.split(":"))
    return EPOCH + timedelta(minutes=DAYS[day]["offset"] + hours * 60 + minutes)


def at(label: str) -> datetime:
    """Datetime from a scenario label such as "tue 13:30"."""
    day, time_label = label.split()
    return dt(day, time_label)


def make_event(event_id: str, start: str, end: str, category: str = "class",
               title: str | None = None):
    """Build a fixed CalendarEvent from scenario labels."""
    from study_planner.types import CalendarEvent, EventCategory

    return CalendarEvent(
        event_id=event_id,
        title=title or event_id,
        start=at(start),
        end=at(end),
        category=EventCategory(category),
    )


def make_item(item_id: str, minutes: int, priority: str = "MEDIUM",
              due: str = "fri 17:00", min_chunk: int = 30):
    """Build a WorkItem from scenario values."""
    from study_planner.types import Priority, WorkItem

    return WorkItem(
        item_id=item_id,
        title=item_id,
        due=at(due),
        estimated_minutes=minutes,
        priority=Priority(priority),
        min_chunk_minutes=min_chunk,
    )


def events_from_json(specs: list[dict]):
    return [
        make_event(e["id"], e["start"], e["end"], e.get("category", "class"))
        for e in specs
    ]


def items_from_json(specs: list[dict]):
    return [
        make_item(i["id"], i["minutes"], i["priority"], i["due"],
                  i.get("min_chunk", 30))
        for i in specs
    ]


def make_request(range_labels: list[str], events=(), items=(), buffer: int = 0):
    """Build a SchedulingRequest over a labelled range."""
    from study_planner.types import Constraints, SchedulingRequest

    return SchedulingRequest(
        range_start=at(range_labels[0]),
        range_end=at(range_labels[1]),
        fixed_events=tuple(events),
        work_items=tuple(items),
        constraints=Constraints(min_buffer_minutes=buffer),
    )


# ---------------------------------------------------------------------------
# Scenario loader
# ---------------------------------------------------------------------------
def load_scenarios(name: str):
    """Load a scenario file from data/fixtures/scenarios/{name}.json."""
    return _load_json(SCENARIOS_DIR / f"{name}.json")


def load_request_data(name: str) -> dict:
    """Load a raw request document from data/fixtures/requests/{name}.json."""
    return _load_json(REQUESTS_DIR / f"{name}.json")


# ---------------------------------------------------------------------------
# pytest fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def epoch() -> datetime:
    return EPOCH


@pytest.fixture
def morning_with_class():
    """Mon 08:00-12:00 with one class 09:00-10:00, no buffer."""
    return make_request(
        ["mon 08:00", "mon 12:00"],
        events=[make_event("E1", "mon 09:00", "mon 10:00")],
    )


@pytest.fixture
def athlete_week_path() -> Path:
    return REQUESTS_DIR / "athlete_week.json"
