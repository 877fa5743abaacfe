from __future__ import annotations

from typing import Any
from uuid import UUID

from pydantic import field_validator
from sqlmodel import Field, SQLModel

from app.models.objectives import ObjectiveStatus


class ObjectiveCreate(SQLModel):
    name: str = Field(min_length=1, max_length=256)
    executor_id: UUID | None = None
    status: ObjectiveStatus = ObjectiveStatus.TODO
    comment: str | None = Field(default=None, max_length=256)
    priority: int
    project_id: UUID | None = None


class ObjectiveUpdate(SQLModel):
    """Partial update; ``comment`` and ``project_id`` may be cleared with null."""

    name: str | None = Field(default=None, min_length=1, max_length=256)
    comment: str | None = Field(default=None, max_length=256)
    priority: int | None = None
    project_id: UUID | None = None

    @field_validator("name", "priority")
    @classmethod
    def _reject_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("must not be null")
        return value


class ObjectiveRead(SQLModel):
    id: UUID
    name: str
    author_id: UUID
    executor_id: UUID | None = None
    status: ObjectiveStatus
    comment: str | None = None
    priority: int
    project_id: UUID | None = None


class ObjectiveStatusUpdate(SQLModel):
    status: ObjectiveStatus


class ObjectiveExecutorUpdate(SQLModel):
    executor_id: UUID
