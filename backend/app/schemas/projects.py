from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import field_validator, model_validator
from sqlmodel import Field, SQLModel

from app.models.projects import as_utc


class ProjectCreate(SQLModel):
    name: str = Field(min_length=1, max_length=256)
    customer_name: str = Field(min_length=1, max_length=256)
    executor_name: str = Field(min_length=1, max_length=256)
    start_time: datetime
    end_time: datetime
    priority: int
    director_id: UUID
    employee_ids: list[UUID] = Field(default_factory=list)

    @field_validator("start_time", "end_time")
    @classmethod
    def _normalize_to_utc(cls, value: datetime) -> datetime:
        return as_utc(value)

    @model_validator(mode="after")
    def _check_time_window(self) -> "ProjectCreate":
        if self.end_time < self.start_time:
            raise ValueError("end_time must not be earlier than start_time")
        return self


class ProjectRead(SQLModel):
    id: UUID
    name: str
    customer_name: str
    executor_name: str
    start_time: datetime
    end_time: datetime
    priority: int
    director_id: UUID
    employee_ids: list[UUID] = Field(default_factory=list)
    objective_ids: list[UUID] = Field(default_factory=list)
