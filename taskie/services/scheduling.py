from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace
from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo

from sqlalchemy.orm import Session

from taskie.core.config import Settings, get_settings
from taskie.db.base import as_utc
from taskie.repositories import constraints as constraints_repo
from taskie.repositories import schedule_runs as runs_repo
from taskie.repositories import tasks as tasks_repo
from taskie.scheduler import Constraint, GreedyScheduler, ScheduleResult, SchedulingSettings, TaskInput


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SchedulingMetrics:
    scheduled_count: int
    unscheduled_count: int
    auto_scheduled_count: int
    scheduled_minutes: int

    def to_dict(self) -> dict[str, int]:
        return {
            "scheduled_count": self.scheduled_count,
            "unscheduled_count": self.unscheduled_count,
            "auto_scheduled_count": self.auto_scheduled_count,
            "scheduled_minutes": self.scheduled_minutes,
        }


@dataclass(slots=True)
class SchedulingOutcome:
    result: ScheduleResult
    metrics: SchedulingMetrics
    run_id: str | None
    statuses: dict[str, str] = field(default_factory=dict)


class SchedulingService:
    """Loads the constraint snapshot, runs the engine and stores the outcome."""

    def __init__(
        self,
        app_settings: Settings | None = None,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.app_settings = app_settings or get_settings()
        self.tz = ZoneInfo(self.app_settings.scheduler_timezone)
        self._clock = clock

    def build_settings(
        self,
        *,
        work_start: str | None = None,
        work_end: str | None = None,
        days_to_schedule: int | None = None,
        base_date: date | None = None,
    ) -> SchedulingSettings:
        """Fill unspecified request values from the application settings."""

        if base_date is None:
            now = self._clock() if self._clock else datetime.now(self.tz)
            base_date = now.date()
        return SchedulingSettings(
            work_start=work_start or self.app_settings.work_start,
            work_end=work_end or self.app_settings.work_end,
            days_to_schedule=days_to_schedule or self.app_settings.days_to_schedule,
            base_date=base_date,
            tz=self.tz,
        )

    def load_constraints(self, session: Session, settings: SchedulingSettings) -> list[Constraint]:
        horizon_start = datetime.combine(settings.base_date, time.min, tzinfo=self.tz)
        horizon_end = horizon_start + timedelta(days=settings.days_to_schedule)
        rows = constraints_repo.list_constraints(
            session, starts_after=as_utc(horizon_start), starts_before=as_utc(horizon_end)
        )
        return [
            Constraint(
                start=as_utc(row.start_time),
                end=as_utc(row.end_time),
                label=row.title,
                constraint_id=row.id,
            )
            for row in rows
        ]

    def run(
        self,
        session: Session,
        tasks: Sequence[TaskInput],
        settings: SchedulingSettings,
        *,
        persist: bool = True,
        label: str | None = None,
    ) -> SchedulingOutcome:
        constraints = self.load_constraints(session, settings)
        scheduler = GreedyScheduler(settings, constraints, clock=self._clock)
        result = scheduler.schedule(tasks)
        metrics = _build_metrics(result)

        run_id: str | None = None
        statuses: dict[str, str] = {}
        if persist:
            run = runs_repo.create_run(
                session,
                label=label,
                base_date=settings.base_date,
                days_to_schedule=settings.days_to_schedule,
                metrics=metrics.to_dict(),
                warnings=result.warnings,
            )
            rows = tasks_repo.upsert_scheduled_tasks(session, result.scheduled, schedule_run_id=run.id)
            result.scheduled = [
                replace(item, task=replace(item.task, id=row.id)) for item, row in zip(result.scheduled, rows)
            ]
            statuses = {row.id: row.status for row in rows}
            run_id = run.id
            logger.info("Stored schedule run %s with %d task(s)", run.id, len(result.scheduled))

        if len(result.scheduled) < len(tasks):
            logger.warning("%d of %d task(s) could not be scheduled", len(result.unscheduled), len(tasks))
        return SchedulingOutcome(result=result, metrics=metrics, run_id=run_id, statuses=statuses)


def _build_metrics(result: ScheduleResult) -> SchedulingMetrics:
    return SchedulingMetrics(
        scheduled_count=len(result.scheduled),
        unscheduled_count=len(result.unscheduled),
        auto_scheduled_count=sum(1 for item in result.scheduled if item.auto_scheduled),
        scheduled_minutes=sum(item.duration_minutes for item in result.scheduled),
    )
