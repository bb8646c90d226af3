from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from .models import TaskInput


def placement_key(task: TaskInput) -> tuple[bool, date, int, int]:
    """Sort key deciding the order in which tasks claim free capacity.

    Date-pinned tasks go first (earliest date first), then higher importance,
    then longer duration so the large tasks are packed before the small ones.
    """

    return (
        task.desired_date is None,
        task.desired_date or date.min,
        -task.importance,
        -task.duration_minutes,
    )


def order_tasks(tasks: Iterable[TaskInput]) -> list[TaskInput]:
    return sorted(tasks, key=placement_key)


__all__ = ["order_tasks", "placement_key"]
