from __future__ import annotations

from datetime import date, datetime, timedelta
from itertools import combinations

import pytest

from taskie.scheduler import (
    Constraint,
    GreedyScheduler,
    SchedulingConfigError,
    SchedulingSettings,
    TaskInput,
    order_tasks,
)

BASE_DATE = date(2026, 2, 20)


def _ts(day: int, hour: int, minute: int = 0) -> datetime:
    return datetime(2026, 2, day, hour, minute)


def _scheduler(constraints=(), *, days: int = 3, now: datetime | None = None) -> GreedyScheduler:
    settings = SchedulingSettings(work_start="09:00", work_end="18:00", days_to_schedule=days, base_date=BASE_DATE)
    fixed_now = now or datetime(2026, 2, 19, 23, 0)
    return GreedyScheduler(settings, constraints, clock=lambda: fixed_now)


def _by_id(scheduled):
    return {item.task.id: item for item in scheduled}


def test_single_task_lands_at_start_of_first_day() -> None:
    scheduled = _scheduler().schedule_tasks([TaskInput(title="T1", duration_minutes=60, id="1")])

    assert len(scheduled) == 1
    assert scheduled[0].scheduled_start == _ts(20, 9)
    assert scheduled[0].scheduled_end == _ts(20, 10)
    assert scheduled[0].auto_scheduled is True


def test_task_moves_to_next_day_when_first_day_is_full() -> None:
    tasks = [
        TaskInput(title="Big rock", duration_minutes=500, importance=5, id="1"),
        TaskInput(title="Does not fit day one", duration_minutes=60, importance=4, id="2"),
    ]

    placed = _by_id(_scheduler().schedule_tasks(tasks))

    assert (placed["1"].scheduled_start, placed["1"].scheduled_end) == (_ts(20, 9), _ts(20, 17, 20))
    assert (placed["2"].scheduled_start, placed["2"].scheduled_end) == (_ts(21, 9), _ts(21, 10))


def test_desired_dates_pin_tasks_to_their_day() -> None:
    tasks = [
        TaskInput(title="Tomorrow", duration_minutes=60, importance=3, desired_date=date(2026, 2, 21), id="1"),
        TaskInput(title="Today", duration_minutes=60, importance=5, desired_date=date(2026, 2, 20), id="2"),
    ]

    placed = _by_id(_scheduler().schedule_tasks(tasks))

    assert placed["1"].scheduled_start == _ts(21, 9)
    assert placed["2"].scheduled_start == _ts(20, 9)
    assert placed["1"].auto_scheduled is False
    assert placed["2"].auto_scheduled is False


def test_task_larger_than_any_block_is_dropped_with_warning() -> None:
    lunch = [Constraint(start=_ts(day, 12), end=_ts(day, 13), label="Lunch") for day in (20, 21, 22)]
    tasks = [
        TaskInput(title="Fits", duration_minutes=120, id="ok"),
        TaskInput(title="Marathon", duration_minutes=400, id="too-big"),
    ]

    result = _scheduler(lunch).schedule(tasks)

    assert len(result.scheduled) == len(tasks) - 1
    assert [task.id for task in result.unscheduled] == ["too-big"]
    assert len(result.warnings) == 1
    assert "Marathon" in result.warnings[0]


def test_schedule_tasks_drops_silently() -> None:
    scheduled = _scheduler(days=1).schedule_tasks([TaskInput(title="Too long", duration_minutes=600)])

    assert scheduled == []


def test_full_requested_day_falls_back_to_other_days() -> None:
    offsite = Constraint(start=_ts(21, 9), end=_ts(21, 18), label="Offsite")
    task = TaskInput(title="Pinned", duration_minutes=60, desired_date=date(2026, 2, 21), id="pinned")

    placed = _scheduler([offsite]).schedule_tasks([task])

    assert placed[0].scheduled_start == _ts(20, 9)
    assert placed[0].auto_scheduled is True


def test_fallback_after_requested_day_is_consumed() -> None:
    tasks = [
        TaskInput(title="Fills day", duration_minutes=500, importance=5, desired_date=date(2026, 2, 20), id="a"),
        TaskInput(title="Same day", duration_minutes=60, importance=2, desired_date=date(2026, 2, 20), id="b"),
    ]

    placed = _by_id(_scheduler().schedule_tasks(tasks))

    assert placed["a"].auto_scheduled is False
    assert placed["b"].scheduled_start == _ts(21, 9)
    assert placed["b"].auto_scheduled is True


def test_pinned_task_that_fits_nowhere_is_dropped() -> None:
    task = TaskInput(title="Retreat", duration_minutes=600, desired_date=date(2026, 2, 21), id="retreat")

    result = _scheduler().schedule([task])

    assert result.scheduled == []
    assert result.unscheduled == [task]
    assert len(result.warnings) == 1
    assert "Retreat" in result.warnings[0]


def test_date_outside_horizon_searches_whole_horizon() -> None:
    task = TaskInput(title="Next month", duration_minutes=30, desired_date=date(2026, 3, 20), id="x")

    placed = _scheduler().schedule_tasks([task])

    assert placed[0].scheduled_start == _ts(20, 9)
    assert placed[0].auto_scheduled is False


def test_tasks_skip_constraints_and_use_first_fitting_block() -> None:
    meeting = Constraint(start=_ts(20, 10), end=_ts(20, 11), label="Meeting")
    tasks = [
        TaskInput(title="Long", duration_minutes=120, importance=3, id="long"),
        TaskInput(title="Short", duration_minutes=45, importance=3, id="short"),
    ]

    placed = _by_id(_scheduler([meeting]).schedule_tasks(tasks))

    assert placed["long"].scheduled_start == _ts(20, 11)
    assert placed["short"].scheduled_start == _ts(20, 9)


def test_result_invariants_hold_for_busy_horizon() -> None:
    constraints = [
        Constraint(start=_ts(20, 12), end=_ts(20, 13), label="Lunch"),
        Constraint(start=_ts(21, 9, 30), end=_ts(21, 11), label="Dentist"),
        Constraint(start=_ts(22, 15), end=_ts(22, 16, 45), label="Review"),
    ]
    durations = [15, 30, 45, 60, 90, 120, 150, 200, 240, 25, 35, 75, 95, 180, 20]
    tasks = [
        TaskInput(
            title=f"Task {index}",
            duration_minutes=duration,
            importance=index % 5 + 1,
            desired_date=date(2026, 2, 21) if index % 4 == 0 else None,
            id=str(index),
        )
        for index, duration in enumerate(durations)
    ]

    result = _scheduler(constraints).schedule(tasks)

    assert len(result.scheduled) + len(result.unscheduled) == len(tasks)
    for item in result.scheduled:
        assert item.scheduled_end - item.scheduled_start == timedelta(minutes=item.task.duration_minutes)
        day = item.scheduled_start.date()
        assert datetime(day.year, day.month, day.day, 9) <= item.scheduled_start
        assert item.scheduled_end <= datetime(day.year, day.month, day.day, 18)
        for constraint in constraints:
            assert item.scheduled_end <= constraint.start or item.scheduled_start >= constraint.end

    for first, second in combinations(result.scheduled, 2):
        if first.scheduled_start.date() == second.scheduled_start.date():
            assert first.scheduled_end <= second.scheduled_start or second.scheduled_end <= first.scheduled_start


def test_now_clips_first_day() -> None:
    scheduled = _scheduler(now=_ts(20, 14, 10)).schedule_tasks([TaskInput(title="Late start", duration_minutes=30)])

    assert scheduled[0].scheduled_start == _ts(20, 14, 10)


def test_ordering_puts_dated_tasks_first_then_importance_then_duration() -> None:
    tasks = [
        TaskInput(title="flex-small", duration_minutes=30, importance=3),
        TaskInput(title="flex-big", duration_minutes=90, importance=3),
        TaskInput(title="flex-important", duration_minutes=15, importance=5),
        TaskInput(title="dated-late", duration_minutes=30, importance=5, desired_date=date(2026, 2, 22)),
        TaskInput(title="dated-early", duration_minutes=30, importance=1, desired_date=date(2026, 2, 20)),
    ]

    ordered = [task.title for task in order_tasks(tasks)]

    assert ordered == ["dated-early", "dated-late", "flex-important", "flex-big", "flex-small"]


def test_ordering_is_stable_for_equal_keys() -> None:
    tasks = [TaskInput(title=f"same-{index}", duration_minutes=30, importance=2) for index in range(4)]

    assert [task.title for task in order_tasks(tasks)] == ["same-0", "same-1", "same-2", "same-3"]


def test_scheduler_does_not_reuse_capacity_between_calls() -> None:
    scheduler = _scheduler(days=1)
    task = TaskInput(title="Repeat", duration_minutes=540)

    assert len(scheduler.schedule_tasks([task])) == 1
    assert len(scheduler.schedule_tasks([task])) == 1


@pytest.mark.parametrize(
    ("work_start", "work_end", "days"),
    [
        ("18:00", "09:00", 3),
        ("09:00", "09:00", 3),
        ("9h", "18:00", 3),
        ("09:00", "25:00", 3),
        ("09:00", "18:00", 0),
        ("09:00", "18:00", -2),
    ],
)
def test_invalid_settings_fail_fast(work_start: str, work_end: str, days: int) -> None:
    with pytest.raises(SchedulingConfigError):
        SchedulingSettings(work_start=work_start, work_end=work_end, days_to_schedule=days, base_date=BASE_DATE)


def test_settings_accept_datetime_base_date() -> None:
    settings = SchedulingSettings(
        work_start="08:30", work_end="12:00", days_to_schedule=2, base_date=datetime(2026, 2, 20, 0, 0)
    )

    assert settings.horizon() == [date(2026, 2, 20), date(2026, 2, 21)]
    assert settings.window_for(date(2026, 2, 20)) == (_ts(20, 8, 30), _ts(20, 12))
