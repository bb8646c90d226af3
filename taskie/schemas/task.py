from __future__ import annotations

import logging
import re
from datetime import date, datetime, time
from typing import Any, Literal

from dateutil import parser as date_parser
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from taskie.scheduler.models import ScheduledTask, TaskInput


logger = logging.getLogger(__name__)

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class TaskExtractionError(ValueError):
    """Raised when a task extractor payload cannot be turned into tasks."""


def normalize_task_date(value: Any) -> date | None:
    """Collapse the accepted desired-date spellings into one ``date``.

    Accepts ``YYYY-MM-DD``, ISO datetimes (the date part is kept) and looser
    human formats. Anything unparsable becomes ``None`` so the task is
    treated as undated.
    """

    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    try:
        if "T" in text:
            return date.fromisoformat(text.split("T", 1)[0])
        if _ISO_DATE.match(text):
            return date.fromisoformat(text)
        return date_parser.parse(text).date()
    except (ValueError, OverflowError):
        logger.warning("Ignoring unparsable desired date %r", value)
        return None


class TaskBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(validation_alias=AliasChoices("title", "titre"))
    duration_minutes: int = Field(gt=0, validation_alias=AliasChoices("duration_minutes", "duree_estimee"))
    importance: int = Field(default=3, ge=1, le=5)
    context: Literal["phone", "pc", "home", "outside", "any"] = Field(
        default="any", validation_alias=AliasChoices("context", "contexte")
    )
    energy: Literal["low", "medium", "high"] = Field(
        default="medium", validation_alias=AliasChoices("energy", "energie")
    )
    flexibility: Literal["fixed", "flexible"] = Field(
        default="flexible", validation_alias=AliasChoices("flexibility", "flexibilite")
    )
    desired_date: date | None = Field(default=None, validation_alias=AliasChoices("desired_date", "date"))
    deadline: time | None = None
    id: str | None = None

    @field_validator("desired_date", mode="before")
    @classmethod
    def _normalize_desired_date(cls, value: Any) -> date | None:
        return normalize_task_date(value)

    def to_task_input(self) -> TaskInput:
        return TaskInput(
            title=self.title,
            duration_minutes=self.duration_minutes,
            importance=self.importance,
            context=self.context,
            energy=self.energy,
            flexibility=self.flexibility,
            desired_date=self.desired_date,
            deadline=self.deadline,
            id=self.id,
        )

    @classmethod
    def from_task_input(cls, task: TaskInput) -> TaskBase:
        return cls(
            title=task.title,
            duration_minutes=task.duration_minutes,
            importance=task.importance,
            context=task.context,
            energy=task.energy,
            flexibility=task.flexibility,
            desired_date=task.desired_date,
            deadline=task.deadline,
            id=task.id,
        )


class ScheduledTaskRead(TaskBase):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str | None = None
    scheduled_start: datetime
    scheduled_end: datetime
    auto_scheduled: bool
    status: Literal["todo", "done"] = "todo"

    @classmethod
    def from_scheduled(cls, scheduled: ScheduledTask, *, status: str = "todo") -> ScheduledTaskRead:
        base = TaskBase.from_task_input(scheduled.task)
        return cls(
            **base.model_dump(),
            scheduled_start=scheduled.scheduled_start,
            scheduled_end=scheduled.scheduled_end,
            auto_scheduled=scheduled.auto_scheduled,
            status=status,
        )


class TaskCollection(BaseModel):
    items: list[ScheduledTaskRead]


class TaskMove(BaseModel):
    minutes_delta: int = 0
    target_date: date | None = None


class ParseResult(BaseModel):
    """Payload produced by the task extractor: tasks plus clarifying questions."""

    tasks: list[TaskBase]
    questions: list[str] = Field(default_factory=list)

    @field_validator("questions", mode="before")
    @classmethod
    def _default_questions(cls, value: Any) -> list[str]:
        return [] if value is None else value

    @classmethod
    def from_payload(cls, payload: Any) -> ParseResult:
        try:
            if isinstance(payload, (str, bytes)):
                return cls.model_validate_json(payload)
            return cls.model_validate(payload)
        except ValidationError as exc:
            raise TaskExtractionError(f"Invalid task extractor payload: {exc.error_count()} error(s)") from exc
