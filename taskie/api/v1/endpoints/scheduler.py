from __future__ import annotations

import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from taskie.db.session import get_session
from taskie.repositories import schedule_runs as runs_repo
from taskie.scheduler import SchedulingConfigError
from taskie.schemas import ScheduledTaskRead, ScheduleRunRequest, ScheduleRunResponse, TaskBase
from taskie.services.scheduling import SchedulingService

router = APIRouter()


def get_scheduling_service() -> SchedulingService:
    return SchedulingService()


@router.post("/run", response_model=ScheduleRunResponse, status_code=status.HTTP_202_ACCEPTED)
def run_schedule(
    payload: ScheduleRunRequest,
    session: Session = Depends(get_session),
    service: SchedulingService = Depends(get_scheduling_service),
) -> ScheduleRunResponse:
    try:
        settings = service.build_settings(
            work_start=payload.work_start,
            work_end=payload.work_end,
            days_to_schedule=payload.days_to_schedule,
            base_date=payload.base_date,
        )
    except SchedulingConfigError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc

    start_time = time.perf_counter()
    outcome = service.run(
        session,
        [task.to_task_input() for task in payload.tasks],
        settings,
        persist=payload.persist,
        label=payload.label,
    )
    session.commit()
    runtime_ms = (time.perf_counter() - start_time) * 1000

    result = outcome.result
    return ScheduleRunResponse(
        run_id=outcome.run_id,
        scheduled_tasks=[
            ScheduledTaskRead.from_scheduled(item, status=outcome.statuses.get(item.task.id or "", "todo"))
            for item in result.scheduled
        ],
        unscheduled_tasks=[TaskBase.from_task_input(item) for item in result.unscheduled],
        warnings=result.warnings,
        count=len(result.scheduled),
        metrics=outcome.metrics.to_dict(),
        runtime_ms=runtime_ms,
        generated_at=datetime.now(timezone.utc),
    )


@router.get("/latest")
def latest_run(session: Session = Depends(get_session)) -> dict:
    run = runs_repo.get_latest_run(session)
    if run is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No schedule run recorded")
    return {
        "run_id": run.id,
        "label": run.label,
        "base_date": run.base_date.isoformat(),
        "days_to_schedule": run.days_to_schedule,
        "metrics": run.metrics or {},
        "warnings": run.warnings or [],
        "task_ids": [task.id for task in run.tasks],
    }
