from .free_blocks import FreeBlockMap, generate_free_blocks
from .greedy import GreedyScheduler
from .models import (
    Constraint,
    FreeBlock,
    ScheduledTask,
    ScheduleResult,
    SchedulingConfigError,
    SchedulingSettings,
    TaskInput,
    parse_time_of_day,
)
from .ordering import order_tasks, placement_key

__all__ = [
    "Constraint",
    "FreeBlock",
    "FreeBlockMap",
    "GreedyScheduler",
    "ScheduleResult",
    "ScheduledTask",
    "SchedulingConfigError",
    "SchedulingSettings",
    "TaskInput",
    "generate_free_blocks",
    "order_tasks",
    "parse_time_of_day",
    "placement_key",
]
