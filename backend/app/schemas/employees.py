from __future__ import annotations

from uuid import UUID

from sqlmodel import Field, SQLModel


class EmployeeCreate(SQLModel):
    first_name: str = Field(min_length=1, max_length=256)
    last_name: str = Field(min_length=1, max_length=256)
    patronymic: str | None = Field(default=None, max_length=256)
    mail: str = Field(min_length=1, max_length=256)
    user_id: str | None = Field(default=None, max_length=450)


class EmployeeUpdate(SQLModel):
    first_name: str | None = Field(default=None, min_length=1, max_length=256)
    last_name: str | None = Field(default=None, min_length=1, max_length=256)
    patronymic: str | None = Field(default=None, max_length=256)
    mail: str | None = Field(default=None, min_length=1, max_length=256)
    user_id: str | None = Field(default=None, max_length=450)


class EmployeeRead(SQLModel):
    id: UUID
    first_name: str
    last_name: str
    patronymic: str | None = None
    mail: str


class EmployeeProjectsUpdate(SQLModel):
    project_ids: list[UUID] = Field(default_factory=list)
