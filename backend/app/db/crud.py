"""Small persistence helpers shared by the stores."""

from __future__ import annotations

from typing import Any, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, SQLModel

ModelT = TypeVar("ModelT", bound=SQLModel)


def get_by_id(session: Session, model: type[ModelT], obj_id: Any) -> ModelT | None:
    if obj_id is None:
        return None
    return session.get(model, obj_id)


def commit(session: Session) -> None:
    """Commit the unit of work; on integrity errors roll back and re-raise."""
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        raise


def save(session: Session, obj: ModelT) -> ModelT:
    session.add(obj)
    commit(session)
    session.refresh(obj)
    return obj


def delete(session: Session, obj: SQLModel) -> None:
    session.delete(obj)
    commit(session)
