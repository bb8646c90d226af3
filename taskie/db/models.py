from __future__ import annotations

import uuid
from datetime import date, datetime, time

from sqlalchemy import JSON, Boolean, Date, DateTime, ForeignKey, String, Time
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin


def _new_id() -> str:
    return str(uuid.uuid4())


class Task(Base, TimestampMixin):
    """Task placed on the timeline by a scheduling run."""

    __tablename__ = "tasks"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=_new_id)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    duration_minutes: Mapped[int] = mapped_column(nullable=False)
    importance: Mapped[int] = mapped_column(nullable=False, default=3)
    context: Mapped[str] = mapped_column(String(16), nullable=False, default="any")
    energy: Mapped[str] = mapped_column(String(16), nullable=False, default="medium")
    flexibility: Mapped[str] = mapped_column(String(16), nullable=False, default="flexible")
    desired_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    deadline: Mapped[time | None] = mapped_column(Time, nullable=True)
    scheduled_start: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    scheduled_end: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    auto_scheduled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="todo")
    schedule_run_id: Mapped[str | None] = mapped_column(
        ForeignKey("schedule_runs.id", ondelete="SET NULL"), nullable=True
    )

    schedule_run: Mapped[ScheduleRun | None] = relationship(back_populates="tasks")


class Constraint(Base, TimestampMixin):
    """Fixed busy interval the scheduler must leave untouched."""

    __tablename__ = "constraints"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=_new_id)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    end_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    metadata_payload: Mapped[dict | None] = mapped_column(JSON, nullable=True)


class ScheduleRun(Base, TimestampMixin):
    """Record of one scheduling pass and its metrics."""

    __tablename__ = "schedule_runs"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=_new_id)
    label: Mapped[str | None] = mapped_column(String(255), nullable=True)
    base_date: Mapped[date] = mapped_column(Date, nullable=False)
    days_to_schedule: Mapped[int] = mapped_column(nullable=False)
    metrics: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    warnings: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)

    tasks: Mapped[list[Task]] = relationship(back_populates="schedule_run")
