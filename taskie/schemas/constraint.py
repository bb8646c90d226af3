from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from taskie.db.base import as_utc


class ConstraintBase(BaseModel):
    title: str
    start_time: datetime
    end_time: datetime
    metadata_payload: dict | None = None

    @field_validator("start_time", "end_time")
    @classmethod
    def _to_utc(cls, value: datetime) -> datetime:
        # SQLite drops offsets, so every stored timestamp is UTC.
        return as_utc(value)

    @model_validator(mode="after")
    def _check_interval(self) -> ConstraintBase:
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self


class ConstraintCreate(ConstraintBase):
    pass


class ConstraintRead(ConstraintBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: datetime
    updated_at: datetime


class ConstraintCollection(BaseModel):
    items: list[ConstraintRead]
