"""Free-block finder: the negative space between fixed events."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable

from study_planner.intervals import add_minutes, duration_minutes, sort_by_start
from study_planner.types import CalendarEvent, FreeBlock

logger = logging.getLogger(__name__)

# Gaps shorter than this are not worth a study session.
MIN_FREE_BLOCK_MINUTES = 30


def find_free_blocks(
    events: Iterable[CalendarEvent],
    range_start: datetime,
    range_end: datetime,
    buffer_minutes: int = 0,
    min_block_minutes: int = MIN_FREE_BLOCK_MINUTES,
) -> list[FreeBlock]:
    """Return ordered, disjoint free blocks in [range_start, range_end).

    Walks the events in start order with a cursor. Before each event the
    gap [cursor, event.start - buffer) becomes a block if it is at least
    min_block_minutes long; the cursor then jumps to event.end + buffer.
    Buffers are applied per event, never summed, so two events closer than
    2 * buffer simply leave no block between them.

    The cursor never moves backwards and block ends are clipped to
    range_end, so events outside the range cannot produce blocks outside it.

    Args:
        events: Fixed events. Not mutated.
        range_start: Inclusive start of the planning range.
        range_end: Exclusive end of the planning range.
        buffer_minutes: Spacing kept before and after every event.
        min_block_minutes: Shortest gap kept as a block.

    Returns:
        FreeBlocks sorted by start. Empty if the range has no usable gap.
    """
    blocks: list[FreeBlock] = []
    cursor = range_start

    for event in sort_by_start(events):
        proposed_end = min(add_minutes(event.start, -buffer_minutes), range_end)
        if duration_minutes(cursor, proposed_end) >= min_block_minutes:
            blocks.append(FreeBlock(start=cursor, end=proposed_end))
        cursor = max(cursor, add_minutes(event.end, buffer_minutes))

    if duration_minutes(cursor, range_end) >= min_block_minutes:
        blocks.append(FreeBlock(start=cursor, end=range_end))

    logger.debug(
        "found %d free blocks (%d min) in [%s, %s) with %d min buffer",
        len(blocks),
        sum(b.duration_minutes for b in blocks),
        range_start.isoformat(),
        range_end.isoformat(),
        buffer_minutes,
    )
    return blocks
