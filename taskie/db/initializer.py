from __future__ import annotations

from taskie.db import models  # noqa: F401
from taskie.db.base import Base
from taskie.db.session import engine


def create_database_schema() -> None:
    """Create core tables if they do not exist."""

    Base.metadata.create_all(bind=engine)


__all__ = ["create_database_schema"]
