"""Manual timeline adjustments applied to stored tasks.

These edits never feed back into the scheduler; a later run overwrites
the times of tasks it places again.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, tzinfo

from taskie.db import models
from taskie.db.base import as_utc


logger = logging.getLogger(__name__)

DEFAULT_SNAP_MINUTES = 15


def snap_minutes(minutes_delta: int, step: int = DEFAULT_SNAP_MINUTES) -> int:
    """Round a drag offset to the nearest ``step``, halves rounding away from zero."""

    if step <= 0:
        raise ValueError("step must be positive")
    sign = -1 if minutes_delta < 0 else 1
    remainder = sign * (abs(minutes_delta) % step)
    snapped = minutes_delta - remainder
    if abs(remainder) * 2 >= step:
        snapped += sign * step
    return snapped


def moved_interval(
    start: datetime,
    duration_minutes: int,
    minutes_delta: int,
    *,
    target_date: date | None = None,
    step: int = DEFAULT_SNAP_MINUTES,
    tz: tzinfo | None = None,
) -> tuple[datetime, datetime]:
    """Shift ``start`` by the snapped delta, optionally onto ``target_date``.

    With ``tz`` set, the day comparison and the time of day kept on the
    target date are those of the local calendar in ``tz``. Naive stored
    timestamps are read as UTC.
    """

    if tz is not None:
        start = as_utc(start).astimezone(tz)
    new_start = start + timedelta(minutes=snap_minutes(minutes_delta, step))
    if target_date is not None and target_date != start.date():
        new_start = datetime.combine(target_date, new_start.time(), tzinfo=new_start.tzinfo)
    return new_start, new_start + timedelta(minutes=duration_minutes)


def move_task(
    task: models.Task,
    minutes_delta: int,
    *,
    target_date: date | None = None,
    step: int = DEFAULT_SNAP_MINUTES,
    tz: tzinfo | None = None,
) -> models.Task:
    task.scheduled_start, task.scheduled_end = moved_interval(
        task.scheduled_start,
        task.duration_minutes,
        minutes_delta,
        target_date=target_date,
        step=step,
        tz=tz,
    )
    if tz is not None:
        task.scheduled_start, task.scheduled_end = as_utc(task.scheduled_start), as_utc(task.scheduled_end)
    logger.debug("Moved task %s to %s", task.id, task.scheduled_start.isoformat())
    return task


def snooze_task(task: models.Task, days: int = 1) -> models.Task:
    task.scheduled_start = task.scheduled_start + timedelta(days=days)
    task.scheduled_end = task.scheduled_end + timedelta(days=days)
    return task


def toggle_status(task: models.Task) -> models.Task:
    task.status = "todo" if task.status == "done" else "done"
    return task


def accept_auto_schedule(task: models.Task) -> models.Task:
    task.auto_scheduled = False
    return task


__all__ = [
    "DEFAULT_SNAP_MINUTES",
    "accept_auto_schedule",
    "move_task",
    "moved_interval",
    "snap_minutes",
    "snooze_task",
    "toggle_status",
]
