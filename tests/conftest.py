from __future__ import annotations

import os
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

_DB_PATH = Path(tempfile.mkdtemp(prefix="taskie-tests-")) / "taskie_test.db"

os.environ["APP_ENV"] = "test"
os.environ["DATABASE_URL"] = f"sqlite:///{_DB_PATH}"
os.environ["SCHEDULER_TIMEZONE"] = "UTC"
os.environ["WORK_START"] = "09:00"
os.environ["WORK_END"] = "18:00"
os.environ["DAYS_TO_SCHEDULE"] = "7"

from taskie.db import models  # noqa: E402
from taskie.db.base import Base  # noqa: E402
from taskie.db.session import SessionLocal, engine  # noqa: E402
from taskie.main import create_app  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def create_test_database() -> Generator[None, None, None]:
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    engine.dispose()


@pytest.fixture()
def session_scope() -> Generator:
    session = SessionLocal()
    try:
        yield session
        session.commit()
    finally:
        session.rollback()
        for model in (models.Task, models.ScheduleRun, models.Constraint):
            session.query(model).delete()
        session.commit()
        session.close()


@pytest.fixture()
def client() -> Generator[TestClient, None, None]:
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client
