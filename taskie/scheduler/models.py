from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Literal


TaskContext = Literal["phone", "pc", "home", "outside", "any"]
EnergyLevel = Literal["low", "medium", "high"]
Flexibility = Literal["fixed", "flexible"]


class SchedulingConfigError(ValueError):
    """Raised when scheduling settings cannot describe a valid horizon."""


def parse_time_of_day(value: str | time, *, field_name: str = "time") -> time:
    """Parse an ``HH:MM`` string into a :class:`datetime.time`."""

    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)
    if not isinstance(value, str):
        raise SchedulingConfigError(f"{field_name} must be an HH:MM string, got {value!r}")

    parts = value.strip().split(":")
    if len(parts) != 2 or not all(part.isdigit() for part in parts):
        raise SchedulingConfigError(f"{field_name} must use the HH:MM format, got {value!r}")
    hours, minutes = (int(part) for part in parts)
    if not (0 <= hours <= 23 and 0 <= minutes <= 59):
        raise SchedulingConfigError(f"{field_name} is out of range: {value!r}")
    return time(hours, minutes)


@dataclass(frozen=True, slots=True)
class SchedulingSettings:
    """Work window and horizon for one scheduling engine.

    ``work_start``/``work_end`` accept ``HH:MM`` strings and ``base_date``
    accepts a datetime, both normalized on construction.
    """

    work_start: time
    work_end: time
    days_to_schedule: int
    base_date: date
    tz: tzinfo | None = None

    def __post_init__(self) -> None:
        work_start = parse_time_of_day(self.work_start, field_name="work_start")
        work_end = parse_time_of_day(self.work_end, field_name="work_end")
        if work_start >= work_end:
            raise SchedulingConfigError("work_start must be earlier than work_end")
        if isinstance(self.days_to_schedule, bool) or not isinstance(self.days_to_schedule, int):
            raise SchedulingConfigError("days_to_schedule must be an integer")
        if self.days_to_schedule <= 0:
            raise SchedulingConfigError("days_to_schedule must be positive")

        base_date = self.base_date
        if isinstance(base_date, datetime):
            base_date = base_date.date()
        elif not isinstance(base_date, date):
            raise SchedulingConfigError(f"base_date must be a date, got {base_date!r}")

        object.__setattr__(self, "work_start", work_start)
        object.__setattr__(self, "work_end", work_end)
        object.__setattr__(self, "base_date", base_date)

    def horizon(self) -> list[date]:
        return [self.base_date + timedelta(days=offset) for offset in range(self.days_to_schedule)]

    def window_for(self, day: date) -> tuple[datetime, datetime]:
        """Return the absolute work window for ``day``."""

        return (
            datetime.combine(day, self.work_start, tzinfo=self.tz),
            datetime.combine(day, self.work_end, tzinfo=self.tz),
        )

    def local_date(self, timestamp: datetime) -> date:
        """Calendar date of ``timestamp`` in the settings timezone."""

        if self.tz is not None and timestamp.tzinfo is not None:
            return timestamp.astimezone(self.tz).date()
        return timestamp.date()


@dataclass(frozen=True, slots=True)
class Constraint:
    """Fixed busy interval that must never be scheduled over."""

    start: datetime
    end: datetime
    label: str = ""
    constraint_id: str | None = None

    @property
    def duration_minutes(self) -> int:
        return _whole_minutes(self.end - self.start)


@dataclass(slots=True)
class FreeBlock:
    """Contiguous free interval inside one day's work window.

    Blocks shrink from the front as tasks are placed, so ``remaining_minutes``
    always matches ``end - start``.
    """

    start: datetime
    end: datetime
    remaining_minutes: int = field(init=False)

    def __post_init__(self) -> None:
        self.remaining_minutes = _whole_minutes(self.end - self.start)

    def fits(self, minutes: int) -> bool:
        return self.remaining_minutes >= minutes

    def consume(self, minutes: int) -> tuple[datetime, datetime]:
        """Take ``minutes`` off the front of the block and return the taken interval."""

        if not self.fits(minutes):
            raise ValueError(f"block of {self.remaining_minutes} minutes cannot hold {minutes} minutes")
        taken_start = self.start
        taken_end = taken_start + timedelta(minutes=minutes)
        self.start = taken_end
        self.remaining_minutes -= minutes
        return taken_start, taken_end


@dataclass(frozen=True, slots=True)
class TaskInput:
    title: str
    duration_minutes: int
    importance: int = 3
    context: TaskContext = "any"
    energy: EnergyLevel = "medium"
    flexibility: Flexibility = "flexible"
    desired_date: date | None = None
    # Stored and returned but never read by placement.
    deadline: time | None = None
    id: str | None = None

    def __post_init__(self) -> None:
        if self.duration_minutes <= 0:
            raise ValueError("duration_minutes must be positive")
        if not (1 <= self.importance <= 5):
            raise ValueError("importance must be between 1 and 5")

    @property
    def label(self) -> str:
        return f"{self.title!r} ({self.id})" if self.id else repr(self.title)


@dataclass(frozen=True, slots=True)
class ScheduledTask:
    task: TaskInput
    scheduled_start: datetime
    scheduled_end: datetime
    auto_scheduled: bool

    @property
    def duration_minutes(self) -> int:
        return self.task.duration_minutes


@dataclass(slots=True)
class ScheduleResult:
    scheduled: list[ScheduledTask]
    unscheduled: list[TaskInput]
    warnings: list[str]


def _whole_minutes(delta: timedelta) -> int:
    return math.floor(delta.total_seconds() / 60)


__all__ = [
    "Constraint",
    "EnergyLevel",
    "Flexibility",
    "FreeBlock",
    "ScheduleResult",
    "ScheduledTask",
    "SchedulingConfigError",
    "SchedulingSettings",
    "TaskContext",
    "TaskInput",
    "parse_time_of_day",
]
