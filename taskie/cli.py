from __future__ import annotations

from datetime import datetime, time, timedelta
from zoneinfo import ZoneInfo

from sqlalchemy.orm import Session

from taskie.core.config import get_settings
from taskie.db.initializer import create_database_schema
from taskie.db.session import SessionLocal
from taskie.repositories import constraints as constraints_repo


def seed_lunch_breaks(days: int = 7, *, start: time = time(12, 0), minutes: int = 60) -> int:
    """Block a daily lunch break for the coming ``days`` days."""

    tz = ZoneInfo(get_settings().scheduler_timezone)
    today = datetime.now(tz).date()

    with SessionLocal() as session:  # type: Session
        for offset in range(days):
            break_start = datetime.combine(today + timedelta(days=offset), start, tzinfo=tz)
            constraints_repo.create_constraint(
                session,
                title="Lunch break",
                start_time=break_start,
                end_time=break_start + timedelta(minutes=minutes),
                metadata_payload={"source": "cli"},
            )
        session.commit()
    return days


if __name__ == "__main__":
    create_database_schema()
    seeded = seed_lunch_breaks()
    print(f"Seeded {seeded} lunch break constraint(s)")
