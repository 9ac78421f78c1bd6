#!/usr/bin/env python
"""Visual verification report for study-planner.

Run:  python scripts/verify.py

Produces a formatted report showing:
  1. Reference data (epoch, day/offset table)
  2. Free-block scenarios  -- input/output tables
  3. Allocation scenarios  -- input/output tables
  4. Planner scenarios     -- schedule tables + ASCII day view
  5. The sample request document planned end to end
"""

from __future__ import annotations

import json
import sys
from datetime import datetime, timedelta
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths and data loading
# ---------------------------------------------------------------------------
ROOT = Path(__file__).resolve().parent.parent
FIXTURES = ROOT / "data" / "fixtures"
SCENARIOS = FIXTURES / "scenarios"

sys.path.insert(0, str(ROOT / "src"))

from study_planner.allocator import allocate_work_items
from study_planner.debug import show_plan
from study_planner.free_blocks import find_free_blocks
from study_planner.loaders import load_request_json
from study_planner.planner import generate_weekly_plan
from study_planner.types import (
    CalendarEvent,
    Constraints,
    EventCategory,
    FreeBlock,
    InvalidInputError,
    Priority,
    SchedulingRequest,
    SchedulingResult,
    WorkItem,
)


def _load(path: Path):
    with open(path) as f:
        return json.load(f)


_ref = _load(FIXTURES / "reference.json")

EPOCH = datetime.fromisoformat(_ref["epoch"])
DAY_OFFSETS = {d["name"]: d["day_offset"] for d in _ref["days"]}
DAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------
WIDTH = 90


def banner(title: str):
    print()
    print("=" * WIDTH)
    print(f"  {title}")
    print("=" * WIDTH)


def heading(title: str):
    print()
    print(f"  {title}")
    print(f"  {'-' * (len(title) + 2)}")


def table(headers: list[str], rows: list[list[str]], indent: int = 4):
    """Print a formatted table with auto-sized columns."""
    col_widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            col_widths[i] = max(col_widths[i], len(cell))

    pad = " " * indent
    fmt = pad + "  ".join(f"{{:<{w}}}" for w in col_widths)
    sep = pad + "  ".join("-" * w for w in col_widths)

    print(fmt.format(*headers))
    print(sep)
    for row in rows:
        padded = row + [""] * (len(headers) - len(row))
        print(fmt.format(*padded))


def _at(label: str) -> datetime:
    day, clock = label.split()
    hours, minutes = (int(p) for p in clock.split(":"))
    return EPOCH + timedelta(minutes=DAY_OFFSETS[day] + hours * 60 + minutes)


def _fmt(dt: datetime) -> str:
    """Format datetime as 'Mon 09:00'."""
    return f"{DAY_NAMES[dt.weekday()]} {dt.strftime('%H:%M')}"


def _events(specs: list[dict]) -> list[CalendarEvent]:
    return [
        CalendarEvent(
            event_id=e["id"], title=e["id"], start=_at(e["start"]), end=_at(e["end"]),
            category=EventCategory(e.get("category", "class")),
        )
        for e in specs
    ]


def _items(specs: list[dict]) -> list[WorkItem]:
    return [
        WorkItem(
            item_id=i["id"], title=i["id"], due=_at(i["due"]),
            estimated_minutes=i["minutes"], priority=Priority(i["priority"]),
            min_chunk_minutes=i.get("min_chunk", 30),
        )
        for i in specs
    ]


def _schedule_rows(result: SchedulingResult) -> list[list[str]]:
    return [
        [e.event_id, e.category.value, _fmt(e.start), _fmt(e.end), str(e.duration_minutes)]
        for e in result.planned_events
    ]


# ---------------------------------------------------------------------------
# Section 1: Reference Data
# ---------------------------------------------------------------------------
def section_reference():
    banner("REFERENCE DATA")
    print(f"\n    Epoch:          {EPOCH.strftime('%A %Y-%m-%d %H:%M %Z')}")
    print(f"    Minutes/day:    {_ref['minutes_per_day']}")

    heading("Day / Offset Mapping")
    rows = [[d["name"], d["date"], str(d["day_offset"])] for d in _ref["days"]]
    table(["Name", "Date", "Offset (min)"], rows)


# ---------------------------------------------------------------------------
# Section 2: Free-Block Finder
# ---------------------------------------------------------------------------
def section_free_blocks():
    banner("FREE-BLOCK FINDER")

    data = _load(SCENARIOS / "free_blocks.json")
    heading("Function: find_free_blocks(events, start, end, buffer) -> [FreeBlock]")
    print("    Gaps under 30 minutes are dropped; buffer applies on both sides.\n")

    rows = []
    for s in data["find_free_blocks"]:
        blocks = find_free_blocks(
            _events(s["events"]), _at(s["range"][0]), _at(s["range"][1]), s["buffer"]
        )
        expected = [(_at(a), _at(b)) for a, b in s["expected"]]
        got = [(b.start, b.end) for b in blocks]
        rows.append([
            s["id"],
            str(s["buffer"]),
            ", ".join(f"{_fmt(a)}-{b.strftime('%H:%M')}" for a, b in got) or "(none)",
            "PASS" if got == expected else "FAIL",
        ])
    table(["Scenario", "Buffer", "Free blocks", "Check"], rows)


# ---------------------------------------------------------------------------
# Section 3: Task Allocator
# ---------------------------------------------------------------------------
def section_allocator():
    banner("TASK ALLOCATOR")

    data = _load(SCENARIOS / "allocator.json")
    heading("Function: allocate_work_items(blocks, items) -> Allocation")
    print("    Priority desc, due asc; first block that holds the minimum chunk.\n")

    rows = []
    for s in data["allocate_work_items"]:
        blocks = [FreeBlock(start=_at(a), end=_at(b)) for a, b in s["blocks"]]
        result = allocate_work_items(blocks, _items(s["items"]))
        expected_ids = [g["id"] for g in s["expected_generated"]]
        got_ids = [e.event_id for e in result.generated]
        rows.append([
            s["id"],
            ", ".join(got_ids) or "(none)",
            ", ".join(f"{t.item_id}:{t.estimated_minutes}" for t in result.unassigned) or "-",
            "PASS" if got_ids == expected_ids else "FAIL",
        ])
    table(["Scenario", "Generated", "Unassigned", "Check"], rows)


# ---------------------------------------------------------------------------
# Section 4: Plan Assembler
# ---------------------------------------------------------------------------
def section_planner():
    banner("PLAN ASSEMBLER")

    data = _load(SCENARIOS / "planner.json")
    for s in data["generate_weekly_plan"]:
        heading(f"Scenario: {s['id']}")
        print(f"    {s['notes']}\n")

        request = SchedulingRequest(
            range_start=_at(s["range"][0]),
            range_end=_at(s["range"][1]),
            fixed_events=tuple(_events(s["events"])),
            work_items=tuple(_items(s["items"])),
            constraints=Constraints(min_buffer_minutes=s["buffer"]),
        )
        result = generate_weekly_plan(request)
        table(["Event", "Category", "Start", "End", "Min"], _schedule_rows(result))

        m = result.metrics
        print(f"\n    allocated={m.allocated_study_minutes} min  "
              f"completed={m.tasks_completed}  "
              f"utilization={m.schedule_utilization:.2f}")
        if result.unassigned_tasks:
            left = ", ".join(
                f"{t.item_id} ({t.estimated_minutes} min)" for t in result.unassigned_tasks
            )
            print(f"    unassigned: {left}")
        print()
        show_plan(result, request.range_start, request.range_end)


# ---------------------------------------------------------------------------
# Section 5: Sample request document
# ---------------------------------------------------------------------------
def section_request_file():
    banner("SAMPLE REQUEST: requests/athlete_week.json")

    path = FIXTURES / "requests" / "athlete_week.json"
    try:
        request = load_request_json(path)
        result = generate_weekly_plan(request)
    except InvalidInputError as e:
        result = SchedulingResult.from_error(e)
        for message in result.errors:
            print(f"    error: {message}")
        return

    table(["Event", "Category", "Start", "End", "Min"], _schedule_rows(result))
    print()
    show_plan(result, request.range_start, request.range_end)


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------
def main():
    banner("STUDY-PLANNER   --  VISUAL VERIFICATION REPORT")
    print(f"    Generated: {datetime.now().strftime('%Y-%m-%d %H:%M')}")
    print(f"    Fixture data: {FIXTURES.relative_to(ROOT)}/")

    section_reference()
    section_free_blocks()
    section_allocator()
    section_planner()
    section_request_file()

    banner("END OF REPORT")
    print()


if __name__ == "__main__":
    main()
