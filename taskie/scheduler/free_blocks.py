from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date, datetime, tzinfo

from .models import Constraint, FreeBlock, SchedulingSettings


logger = logging.getLogger(__name__)

FreeBlockMap = dict[date, list[FreeBlock]]


def generate_free_blocks(
    settings: SchedulingSettings,
    constraints: Iterable[Constraint],
    now: datetime,
) -> FreeBlockMap:
    """Build the ordered free blocks of every day in the horizon.

    Each day starts from its work window, is clipped to ``now`` when it is
    the current day, and has every constraint starting on that day carved
    out of it. The returned mapping is fresh on every call and keeps the
    horizon's chronological order.
    """

    now = _align(now, settings.tz)
    normalized = [
        Constraint(
            start=_align(constraint.start, settings.tz),
            end=_align(constraint.end, settings.tz),
            label=constraint.label,
            constraint_id=constraint.constraint_id,
        )
        for constraint in constraints
    ]

    blocks_by_day: FreeBlockMap = {}
    for day in settings.horizon():
        day_constraints = sorted(
            (item for item in normalized if settings.local_date(item.start) == day),
            key=lambda item: item.start,
        )
        blocks_by_day[day] = _free_blocks_for_day(settings, day, day_constraints, now)

    logger.debug(
        "Generated free blocks for %d day(s): %s",
        len(blocks_by_day),
        {day.isoformat(): sum(block.remaining_minutes for block in blocks) for day, blocks in blocks_by_day.items()},
    )
    return blocks_by_day


def _free_blocks_for_day(
    settings: SchedulingSettings,
    day: date,
    day_constraints: list[Constraint],
    now: datetime,
) -> list[FreeBlock]:
    day_start, day_end = settings.window_for(day)

    if settings.local_date(now) == day and now > day_start:
        day_start = min(now, day_end)

    blocks: list[FreeBlock] = []
    cursor = day_start
    for constraint in day_constraints:
        if constraint.start >= day_end:
            # Sorted input: this and every later constraint lie past the window.
            break
        if cursor < constraint.start:
            _append_block(blocks, cursor, constraint.start)
        cursor = max(cursor, constraint.end)

    if cursor < day_end:
        _append_block(blocks, cursor, day_end)
    return blocks


def _append_block(blocks: list[FreeBlock], start: datetime, end: datetime) -> None:
    block = FreeBlock(start=start, end=end)
    if block.remaining_minutes > 0:
        blocks.append(block)


def _align(timestamp: datetime, tz: tzinfo | None) -> datetime:
    """Bring ``timestamp`` into the same awareness as the work windows."""

    if tz is None:
        if timestamp.tzinfo is not None:
            return timestamp.astimezone().replace(tzinfo=None)
        return timestamp
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=tz)
    return timestamp.astimezone(tz)


__all__ = ["FreeBlockMap", "generate_free_blocks"]
