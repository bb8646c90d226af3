from __future__ import annotations

from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from taskie.db import models


def get_latest_run(session: Session) -> models.ScheduleRun | None:
    statement = select(models.ScheduleRun).order_by(models.ScheduleRun.created_at.desc()).limit(1)
    return session.scalars(statement).first()


def create_run(
    session: Session,
    *,
    label: str | None,
    base_date: date,
    days_to_schedule: int,
    metrics: dict | None = None,
    warnings: list[str] | None = None,
) -> models.ScheduleRun:
    run = models.ScheduleRun(
        label=label,
        base_date=base_date,
        days_to_schedule=days_to_schedule,
        metrics=metrics or {},
        warnings=warnings or [],
    )
    session.add(run)
    session.flush()
    return run
