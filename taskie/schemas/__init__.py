from .constraint import ConstraintCollection, ConstraintCreate, ConstraintRead
from .schedule import ScheduleRunRequest, ScheduleRunResponse
from .task import (
    ParseResult,
    ScheduledTaskRead,
    TaskBase,
    TaskCollection,
    TaskExtractionError,
    TaskMove,
    normalize_task_date,
)

__all__ = [
    "ConstraintCollection",
    "ConstraintCreate",
    "ConstraintRead",
    "ParseResult",
    "ScheduleRunRequest",
    "ScheduleRunResponse",
    "ScheduledTaskRead",
    "TaskBase",
    "TaskCollection",
    "TaskExtractionError",
    "TaskMove",
    "normalize_task_date",
]
