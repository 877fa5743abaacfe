from __future__ import annotations

from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel


class Employee(SQLModel, table=True):
    __tablename__ = "employees"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    first_name: str = Field(max_length=256)
    last_name: str = Field(max_length=256, index=True)
    patronymic: str | None = Field(default=None, max_length=256)
    mail: str = Field(max_length=256)

    # External identity (the gateway's user id) used to resolve the caller.
    user_id: str | None = Field(default=None, max_length=450, index=True)
