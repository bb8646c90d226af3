from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from datetime import date, datetime

from .free_blocks import FreeBlockMap, generate_free_blocks
from .models import Constraint, FreeBlock, ScheduledTask, ScheduleResult, SchedulingSettings, TaskInput
from .ordering import order_tasks


logger = logging.getLogger(__name__)


class GreedyScheduler:
    """First-fit-decreasing scheduler over daily free blocks.

    Tasks are placed in a single forward pass. Each placement shrinks the
    block it lands in, and nothing is moved once placed, so the packing is
    greedy rather than optimal.
    """

    def __init__(
        self,
        settings: SchedulingSettings,
        constraints: Iterable[Constraint] = (),
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.settings = settings
        self.constraints: tuple[Constraint, ...] = tuple(constraints)
        self._clock = clock or (lambda: datetime.now(settings.tz))

    def schedule(self, tasks: Iterable[TaskInput]) -> ScheduleResult:
        free_blocks = generate_free_blocks(self.settings, self.constraints, self._clock())
        horizon = list(free_blocks)

        scheduled: list[ScheduledTask] = []
        unscheduled: list[TaskInput] = []
        warnings: list[str] = []

        for task in order_tasks(tasks):
            pinned = task.desired_date is not None and task.desired_date in free_blocks
            candidate_days = [task.desired_date] if pinned else horizon

            placement = self._place(task, candidate_days, free_blocks)
            auto_scheduled = task.desired_date is None
            if placement is None and pinned:
                placement = self._place(task, horizon, free_blocks)
                auto_scheduled = True
                if placement is not None:
                    logger.info(
                        "Task %s did not fit on %s, relocated to %s",
                        task.label,
                        task.desired_date.isoformat(),
                        placement[0].date().isoformat(),
                    )

            if placement is None:
                message = (
                    f"Could not place task {task.label}: {task.duration_minutes} minutes "
                    "exceed every free block in the horizon"
                )
                logger.warning(message)
                warnings.append(message)
                unscheduled.append(task)
                continue

            start, end = placement
            scheduled.append(
                ScheduledTask(task=task, scheduled_start=start, scheduled_end=end, auto_scheduled=auto_scheduled)
            )

        logger.info(
            "Scheduled %d task(s) over %d day(s), %d left unscheduled",
            len(scheduled),
            len(horizon),
            len(unscheduled),
        )
        return ScheduleResult(scheduled=scheduled, unscheduled=unscheduled, warnings=warnings)

    def schedule_tasks(self, tasks: Iterable[TaskInput]) -> list[ScheduledTask]:
        return self.schedule(tasks).scheduled

    def _place(
        self,
        task: TaskInput,
        days: Sequence[date],
        free_blocks: FreeBlockMap,
    ) -> tuple[datetime, datetime] | None:
        block = _first_fit(task.duration_minutes, days, free_blocks)
        if block is None:
            return None
        return block.consume(task.duration_minutes)


def _first_fit(minutes: int, days: Sequence[date], free_blocks: FreeBlockMap) -> FreeBlock | None:
    for day in days:
        for block in free_blocks[day]:
            if block.fits(minutes):
                return block
    return None


__all__ = ["GreedyScheduler"]
