from __future__ import annotations

from datetime import datetime, timezone
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import DateTime
from sqlalchemy.types import TypeDecorator
from sqlmodel import Field, SQLModel


def as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC; aware ones are converted to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class _UTCDateTime(TypeDecorator):
    """Timezone-aware column that always binds and returns UTC values."""

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: Any, dialect: Any) -> datetime | None:
        if value is None:
            return None
        return as_utc(value)

    def process_result_value(self, value: Any, dialect: Any) -> datetime | None:
        if value is None:
            return None
        return as_utc(value)


class Project(SQLModel, table=True):
    __tablename__ = "projects"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=256, index=True)
    customer_name: str = Field(max_length=256)
    executor_name: str = Field(max_length=256)

    # Directors cannot be deleted while they still run a project.
    director_id: UUID = Field(foreign_key="employees.id", ondelete="RESTRICT", index=True)

    start_time: datetime = Field(sa_type=_UTCDateTime)
    end_time: datetime = Field(sa_type=_UTCDateTime)
    priority: int


class EmployeeProject(SQLModel, table=True):
    __tablename__ = "employee_projects"

    employee_id: UUID = Field(foreign_key="employees.id", primary_key=True, ondelete="CASCADE")
    project_id: UUID = Field(foreign_key="projects.id", primary_key=True, ondelete="CASCADE")
