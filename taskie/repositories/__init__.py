"""Data access layer repositories."""

from . import constraints, schedule_runs, tasks

__all__ = [
    "constraints",
    "schedule_runs",
    "tasks",
]
