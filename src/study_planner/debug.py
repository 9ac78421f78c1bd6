"""ASCII visualisation for development-time verification.

This module is dev-only and not imported by production code.
"""

from __future__ import annotations

from datetime import datetime, time, timedelta

from study_planner.types import CalendarEvent, EventCategory, SchedulingResult

_CHARS_PER_DAY = 48
_MINUTES_PER_CHAR = 30


def _study_item(event: CalendarEvent) -> str | None:
    """Work item id a study event is linked to, or None."""
    if event.category is EventCategory.STUDY and event.link is not None:
        return event.link.assignment_id
    return None


def show_plan(
    result: SchedulingResult,
    range_start: datetime,
    range_end: datetime,
) -> str:
    """Print ASCII week view of a plan.

    Legend: '.' = free, '#' = fixed event, 'A'-'Z' = study (by work item),
    ' ' = outside the planning range.
    Each row is one day, each char = 30 minutes. A cell shows whatever
    occupies any part of it, study taking precedence over fixed events.
    Returns the string and also prints to stdout.
    """
    lines: list[str] = []
    day_names = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

    # Build label map: assignment id -> letter
    item_labels: dict[str, str] = {}
    label_chars = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    for event in result.planned_events:
        item_id = _study_item(event)
        if item_id is not None and item_id not in item_labels:
            item_labels[item_id] = label_chars[len(item_labels) % len(label_chars)]

    header_hours = "".join(f"{h:02d}" if h % 3 == 0 else "  " for h in range(24))
    lines.append(f"{'':>16s}  {header_hours}")

    current_date = range_start.date()
    last_date = (range_end - timedelta(microseconds=1)).date()
    while current_date <= last_date:
        label = f"{day_names[current_date.weekday()]} {current_date.strftime('%d %b')}"
        midnight = datetime.combine(current_date, time(0, 0), tzinfo=range_start.tzinfo)

        row = []
        for char_idx in range(_CHARS_PER_DAY):
            cell_start = midnight + timedelta(minutes=char_idx * _MINUTES_PER_CHAR)
            cell_end = cell_start + timedelta(minutes=_MINUTES_PER_CHAR)

            if cell_end <= range_start or cell_start >= range_end:
                row.append(" ")
                continue

            char = "."
            for event in result.planned_events:
                if event.start < cell_end and cell_start < event.end:
                    item_id = _study_item(event)
                    if item_id is not None:
                        char = item_labels[item_id]
                        break
                    char = "#"
            row.append(char)

        lines.append(f"{label:>16s}  {''.join(row)}")
        current_date += timedelta(days=1)

    if item_labels:
        legend_parts = [f"{v}={k}" for k, v in item_labels.items()]
        lines.append(f"\nLegend: . = free, # = fixed, {', '.join(legend_parts)}")

    result_text = "\n".join(lines)
    print(result_text)
    return result_text
