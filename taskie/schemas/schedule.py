from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, Field, field_validator

from .task import ScheduledTaskRead, TaskBase


class ScheduleRunRequest(BaseModel):
    tasks: list[TaskBase]
    work_start: str | None = None
    work_end: str | None = None
    days_to_schedule: int | None = Field(default=None, gt=0)
    base_date: date | None = None
    persist: bool = True
    label: str | None = None

    @field_validator("tasks")
    @classmethod
    def _unique_ids(cls, tasks: list[TaskBase]) -> list[TaskBase]:
        seen: set[str] = set()
        for task in tasks:
            if task.id is None:
                continue
            if task.id in seen:
                raise ValueError(f"duplicate task id {task.id!r}")
            seen.add(task.id)
        return tasks


class ScheduleRunResponse(BaseModel):
    run_id: str | None = None
    scheduled_tasks: list[ScheduledTaskRead]
    unscheduled_tasks: list[TaskBase]
    warnings: list[str]
    count: int
    metrics: dict
    runtime_ms: float | None = None
    generated_at: datetime
