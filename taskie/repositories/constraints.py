from __future__ import annotations

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from taskie.db import models
from taskie.db.base import as_utc


def list_constraints(
    session: Session,
    *,
    starts_after: datetime | None = None,
    starts_before: datetime | None = None,
) -> list[models.Constraint]:
    statement = select(models.Constraint).order_by(models.Constraint.start_time)
    if starts_after is not None:
        statement = statement.where(models.Constraint.start_time >= starts_after)
    if starts_before is not None:
        statement = statement.where(models.Constraint.start_time < starts_before)
    return list(session.scalars(statement))


def get_constraint(session: Session, constraint_id: str) -> models.Constraint | None:
    return session.get(models.Constraint, constraint_id)


def create_constraint(
    session: Session,
    *,
    title: str,
    start_time: datetime,
    end_time: datetime,
    metadata_payload: dict | None = None,
) -> models.Constraint:
    constraint = models.Constraint(
        title=title,
        start_time=as_utc(start_time),
        end_time=as_utc(end_time),
        metadata_payload=metadata_payload,
    )
    session.add(constraint)
    session.flush()
    return constraint


def delete_constraint(session: Session, constraint_id: str) -> None:
    constraint = session.get(models.Constraint, constraint_id)
    if constraint is None:
        return
    session.delete(constraint)
