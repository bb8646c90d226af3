from __future__ import annotations

import json
from datetime import date, datetime, time, timedelta, timezone

import pytest
from pydantic import ValidationError

from taskie.schemas import (
    ConstraintCreate,
    ParseResult,
    ScheduleRunRequest,
    TaskBase,
    TaskExtractionError,
    normalize_task_date,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("2026-02-21", date(2026, 2, 21)),
        ("2026-02-21T14:30:00.000Z", date(2026, 2, 21)),
        ("February 21, 2026", date(2026, 2, 21)),
        (datetime(2026, 2, 21, 8, 0), date(2026, 2, 21)),
        (date(2026, 2, 21), date(2026, 2, 21)),
        (None, None),
        ("", None),
        ("2026-02-30", None),
        ("someday soon", None),
    ],
)
def test_normalize_task_date(raw, expected) -> None:
    assert normalize_task_date(raw) == expected


def test_malformed_desired_date_becomes_undated_task() -> None:
    task = TaskBase(title="Call bank", duration_minutes=15, desired_date="not a date").to_task_input()

    assert task.desired_date is None


def test_task_base_validates_ranges() -> None:
    with pytest.raises(ValueError):
        TaskBase(title="Nothing", duration_minutes=0)
    with pytest.raises(ValueError):
        TaskBase(title="Too important", duration_minutes=10, importance=6)


def test_parse_result_accepts_extractor_payload() -> None:
    payload = json.dumps(
        {
            "tasks": [
                {
                    "titre": "Appeler le garage",
                    "duree_estimee": 20,
                    "importance": 4,
                    "deadline": "17:00",
                    "contexte": "phone",
                    "energie": "low",
                    "flexibilite": "flexible",
                    "date": "2026-02-21T00:00:00Z",
                },
                {"title": "Groceries", "duration_minutes": 45, "context": "outside"},
            ],
            "questions": None,
        }
    )

    result = ParseResult.from_payload(payload)

    first, second = result.tasks
    assert first.title == "Appeler le garage"
    assert first.duration_minutes == 20
    assert first.context == "phone"
    assert first.deadline == time(17, 0)
    assert first.desired_date == date(2026, 2, 21)
    assert second.desired_date is None
    assert result.questions == []


def test_parse_result_rejects_invalid_payload() -> None:
    with pytest.raises(TaskExtractionError):
        ParseResult.from_payload({"tasks": [{"title": "No duration"}]})
    with pytest.raises(TaskExtractionError):
        ParseResult.from_payload("not json")


def test_schedule_request_rejects_duplicate_task_ids() -> None:
    tasks = [{"title": "A", "duration_minutes": 30, "id": "same"}, {"title": "B", "duration_minutes": 45, "id": "same"}]

    with pytest.raises(ValidationError):
        ScheduleRunRequest(tasks=tasks)

    request = ScheduleRunRequest(tasks=[{"title": "A", "duration_minutes": 30}, {"title": "B", "duration_minutes": 45}])
    assert len(request.tasks) == 2


def test_constraint_times_are_stored_in_utc() -> None:
    constraint = ConstraintCreate(
        title="Dentist",
        start_time="2026-02-20T13:00:00+01:00",
        end_time="2026-02-20T14:00:00+01:00",
    )

    assert constraint.start_time == datetime(2026, 2, 20, 12, 0, tzinfo=timezone.utc)
    assert constraint.start_time.utcoffset() == timedelta(0)
