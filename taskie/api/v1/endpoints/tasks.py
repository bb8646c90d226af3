from __future__ import annotations

from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from taskie.core.config import get_settings
from taskie.db import models
from taskie.db.session import get_session
from taskie.repositories import tasks as tasks_repo
from taskie.schemas import ScheduledTaskRead, TaskCollection, TaskMove
from taskie.services import timeline

router = APIRouter()


def _get_task_or_404(session: Session, task_id: str) -> models.Task:
    task = tasks_repo.get_task(session, task_id)
    if task is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    return task


def _commit_and_read(session: Session, task: models.Task) -> ScheduledTaskRead:
    session.commit()
    session.refresh(task)
    return ScheduledTaskRead.model_validate(task)


@router.get("/", response_model=TaskCollection)
def list_tasks(session: Session = Depends(get_session)) -> TaskCollection:
    items = tasks_repo.list_tasks(session)
    return TaskCollection(items=[ScheduledTaskRead.model_validate(item) for item in items])


@router.get("/{task_id}", response_model=ScheduledTaskRead)
def get_task(task_id: str, session: Session = Depends(get_session)) -> ScheduledTaskRead:
    return ScheduledTaskRead.model_validate(_get_task_or_404(session, task_id))


@router.post("/{task_id}/move", response_model=ScheduledTaskRead)
def move_task(task_id: str, payload: TaskMove, session: Session = Depends(get_session)) -> ScheduledTaskRead:
    task = _get_task_or_404(session, task_id)
    settings = get_settings()
    timeline.move_task(
        task,
        payload.minutes_delta,
        target_date=payload.target_date,
        step=settings.snap_minutes,
        tz=ZoneInfo(settings.scheduler_timezone),
    )
    return _commit_and_read(session, task)


@router.post("/{task_id}/snooze", response_model=ScheduledTaskRead)
def snooze_task(task_id: str, session: Session = Depends(get_session)) -> ScheduledTaskRead:
    task = _get_task_or_404(session, task_id)
    timeline.snooze_task(task)
    return _commit_and_read(session, task)


@router.post("/{task_id}/toggle-status", response_model=ScheduledTaskRead)
def toggle_status(task_id: str, session: Session = Depends(get_session)) -> ScheduledTaskRead:
    task = _get_task_or_404(session, task_id)
    timeline.toggle_status(task)
    return _commit_and_read(session, task)


@router.post("/{task_id}/accept", response_model=ScheduledTaskRead)
def accept_auto_schedule(task_id: str, session: Session = Depends(get_session)) -> ScheduledTaskRead:
    task = _get_task_or_404(session, task_id)
    timeline.accept_auto_schedule(task)
    return _commit_and_read(session, task)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_task(task_id: str, session: Session = Depends(get_session)) -> Response:
    _get_task_or_404(session, task_id)
    tasks_repo.delete_task(session, task_id)
    session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
