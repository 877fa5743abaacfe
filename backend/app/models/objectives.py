from __future__ import annotations

from enum import IntEnum
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import Integer
from sqlalchemy.types import TypeDecorator
from sqlmodel import Field, SQLModel


class ObjectiveStatus(IntEnum):
    TODO = 0
    IN_PROGRESS = 1
    DONE = 2


class _StatusType(TypeDecorator):
    """Store ``ObjectiveStatus`` as its ordinal so ORDER BY follows the enum order."""

    impl = Integer
    cache_ok = True

    def process_bind_param(self, value: Any, dialect: Any) -> int | None:
        if value is None:
            return None
        return int(value)

    def process_result_value(self, value: Any, dialect: Any) -> ObjectiveStatus | None:
        if value is None:
            return None
        return ObjectiveStatus(value)


class Objective(SQLModel, table=True):
    __tablename__ = "objectives"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=256, index=True)

    author_id: UUID = Field(foreign_key="employees.id", ondelete="RESTRICT", index=True)
    executor_id: UUID | None = Field(
        default=None, foreign_key="employees.id", ondelete="SET NULL", index=True
    )

    status: ObjectiveStatus = Field(default=ObjectiveStatus.TODO, sa_type=_StatusType)
    comment: str | None = Field(default=None, max_length=256)
    priority: int

    project_id: UUID | None = Field(
        default=None, foreign_key="projects.id", ondelete="SET NULL", index=True
    )
