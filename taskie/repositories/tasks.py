from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.orm import Session

from taskie.db import models
from taskie.db.base import as_utc
from taskie.scheduler.models import ScheduledTask


logger = logging.getLogger(__name__)


def list_tasks(session: Session) -> list[models.Task]:
    statement = select(models.Task).order_by(models.Task.scheduled_start)
    return list(session.scalars(statement))


def get_task(session: Session, task_id: str) -> models.Task | None:
    return session.get(models.Task, task_id)


def upsert_scheduled_tasks(
    session: Session,
    scheduled_tasks: Iterable[ScheduledTask],
    *,
    schedule_run_id: str | None = None,
) -> list[models.Task]:
    """Insert or update tasks keyed by id.

    Tasks without an id get a fresh one. Existing rows keep their status so
    a rerun never reopens a task that was already marked done.
    """

    rows: list[models.Task] = []
    pending: dict[str, models.Task] = {}
    for scheduled in scheduled_tasks:
        task = scheduled.task
        row = None
        if task.id:
            if task.id in pending:
                logger.warning("Task id %s appears more than once; keeping the last placement", task.id)
            row = pending.get(task.id) or session.get(models.Task, task.id)
        if row is None:
            row = models.Task(status="todo")
            if task.id:
                row.id = task.id
            session.add(row)
        if task.id:
            pending[task.id] = row

        row.title = task.title
        row.duration_minutes = task.duration_minutes
        row.importance = task.importance
        row.context = task.context
        row.energy = task.energy
        row.flexibility = task.flexibility
        row.desired_date = task.desired_date
        row.deadline = task.deadline
        row.scheduled_start = as_utc(scheduled.scheduled_start)
        row.scheduled_end = as_utc(scheduled.scheduled_end)
        row.auto_scheduled = scheduled.auto_scheduled
        row.schedule_run_id = schedule_run_id
        rows.append(row)

    session.flush()
    return rows


def delete_task(session: Session, task_id: str) -> None:
    task = session.get(models.Task, task_id)
    if task is None:
        return
    session.delete(task)
