from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID

from sqlalchemy.orm import aliased
from sqlmodel import Session, col, select

from app.db import crud
from app.models.employees import Employee
from app.models.objectives import Objective, ObjectiveStatus
from app.models.projects import Project

SORT_KEYS = frozenset({"name", "status", "priority", "author", "executor", "project"})


@dataclass(frozen=True)
class ObjectiveFilters:
    statuses: list[ObjectiveStatus] = field(default_factory=list)
    priorities: list[int] = field(default_factory=list)
    name: str | None = None
    author_id: UUID | None = None
    executor_id: UUID | None = None
    project_id: UUID | None = None


def get_by_id(session: Session, objective_id: UUID) -> Objective | None:
    return crud.get_by_id(session, Objective, objective_id)


def get_by_id_for_executor(
    session: Session, objective_id: UUID, executor_id: UUID | None
) -> Objective | None:
    if executor_id is None:
        return None
    statement = select(Objective).where(
        col(Objective.id) == objective_id,
        col(Objective.executor_id) == executor_id,
    )
    return session.exec(statement).first()


def add(session: Session, objective: Objective) -> Objective:
    return crud.save(session, objective)


def update(session: Session, objective: Objective) -> Objective:
    return crud.save(session, objective)


def delete(session: Session, objective_id: UUID) -> bool:
    objective = get_by_id(session, objective_id)
    if objective is None:
        return False
    crud.delete(session, objective)
    return True


def list_by_executor(session: Session, employee_id: UUID) -> list[Objective]:
    statement = (
        select(Objective)
        .where(col(Objective.executor_id) == employee_id)
        .order_by(col(Objective.priority).asc(), col(Objective.id).asc())
    )
    return list(session.exec(statement).all())


def list_by_project_director(session: Session, director_id: UUID) -> list[Objective]:
    statement = (
        select(Objective)
        .join(Project, col(Project.id) == col(Objective.project_id))
        .where(col(Project.director_id) == director_id)
        .order_by(col(Objective.priority).asc(), col(Objective.id).asc())
    )
    return list(session.exec(statement).all())


def list_all(
    session: Session,
    filters: ObjectiveFilters | None = None,
    sort_by: str | None = None,
    ascending: bool = True,
) -> list[Objective]:
    """Filtered listing; unknown sort keys fall back to id, which is also the tie-break."""
    filters = filters or ObjectiveFilters()
    statement = select(Objective)

    if filters.statuses:
        statement = statement.where(col(Objective.status).in_(filters.statuses))
    if filters.priorities:
        statement = statement.where(col(Objective.priority).in_(filters.priorities))
    if filters.name:
        statement = statement.where(col(Objective.name).contains(filters.name, autoescape=True))
    if filters.author_id is not None:
        statement = statement.where(col(Objective.author_id) == filters.author_id)
    if filters.executor_id is not None:
        statement = statement.where(col(Objective.executor_id) == filters.executor_id)
    if filters.project_id is not None:
        statement = statement.where(col(Objective.project_id) == filters.project_id)

    key = (sort_by or "").lower()
    if key == "author":
        author = aliased(Employee)
        statement = statement.outerjoin(author, author.id == Objective.author_id)
        sort_column = author.last_name
    elif key == "executor":
        executor = aliased(Employee)
        statement = statement.outerjoin(executor, executor.id == Objective.executor_id)
        sort_column = executor.last_name
    elif key == "project":
        statement = statement.outerjoin(Project, col(Project.id) == col(Objective.project_id))
        sort_column = col(Project.name)
    elif key in SORT_KEYS:
        sort_column = col(getattr(Objective, key))
    else:
        sort_column = col(Objective.id)

    statement = statement.order_by(
        sort_column.asc() if ascending else sort_column.desc(),
        col(Objective.id).asc(),
    )
    return list(session.exec(statement).all())
