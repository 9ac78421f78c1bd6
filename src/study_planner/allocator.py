"""Task allocator: greedy first-fit of work items into free blocks.

Items are taken in a fixed priority order and each one consumes free time
from the front of the earliest blocks that can hold its minimum chunk. There
is no backtracking and no best-fit search: an earlier block always wins over
a later one, regardless of size.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Iterable

from study_planner.types import (
    CalendarEvent,
    EventCategory,
    EventLink,
    FreeBlock,
    WorkItem,
)

logger = logging.getLogger(__name__)


@dataclass
class Allocation:
    """Outcome of one allocation pass.

    Invariants:
        - for each item, minutes in generated + remaining minutes in
          unassigned == item.estimated_minutes
        - unassigned is in processing order
    """

    generated: list[CalendarEvent] = field(default_factory=list)
    unassigned: list[WorkItem] = field(default_factory=list)

    @property
    def allocated_minutes(self) -> int:
        return sum(e.duration_minutes for e in self.generated)


def processing_order(items: Iterable[WorkItem]) -> list[WorkItem]:
    """Sort items by priority (HIGH first), then earliest due. Stable."""
    return sorted(items, key=lambda item: (-item.priority.rank, item.due))


def _study_event(item: WorkItem, block_index: int, start, end) -> CalendarEvent:
    return CalendarEvent(
        event_id=f"gen_{item.item_id}_{block_index}",
        title=f"Study: {item.title}",
        start=start,
        end=end,
        category=EventCategory.STUDY,
        locked=False,
        link=EventLink(assignment_id=item.item_id),
    )


def allocate_work_items(
    blocks: list[FreeBlock],
    items: Iterable[WorkItem],
) -> Allocation:
    """Fill free blocks with work items in processing order.

    For each item, walk the blocks in list order. A block shorter than the
    item's min_chunk_minutes is skipped; otherwise min(block, remaining)
    minutes are taken from its front and the block shrinks in place.
    Scanning stops once the item is fully placed.

    Partially placed items keep their generated events and are also
    reported in ``unassigned`` carrying only the leftover minutes.

    Args:
        blocks: Free blocks in timeline order. Mutated: starts advance.
        items: Backlog. Not mutated.

    Returns:
        Allocation with generated study events and unplaced remainders.
    """
    result = Allocation()

    for item in processing_order(items):
        remaining = item.estimated_minutes

        for index, block in enumerate(blocks):
            if remaining <= 0:
                break

            available = block.duration_minutes
            if available < item.min_chunk_minutes:
                continue

            taken = min(available, remaining)
            start, end = block.consume(taken)
            result.generated.append(_study_event(item, index, start, end))
            remaining -= taken

        if remaining > 0:
            logger.debug(
                "work item %r: %d/%d min could not be placed",
                item.item_id,
                remaining,
                item.estimated_minutes,
            )
            result.unassigned.append(replace(item, estimated_minutes=remaining))

    return result
