from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from sqlalchemy import delete as sa_delete
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, col, select

from app.db import crud
from app.models.objectives import Objective
from app.models.projects import EmployeeProject, Project

_SORT_COLUMNS = {
    "name": Project.name,
    "starttime": Project.start_time,
    "priority": Project.priority,
}
DEFAULT_SORT = "starttime"


@dataclass(frozen=True)
class ProjectFilters:
    name: str | None = None
    customer_name: str | None = None
    executor_name: str | None = None
    start_time_from: datetime | None = None
    start_time_to: datetime | None = None
    priorities: list[int] = field(default_factory=list)
    director_id: UUID | None = None


def get_by_id(session: Session, project_id: UUID) -> Project | None:
    return crud.get_by_id(session, Project, project_id)


def add(session: Session, project: Project, employee_ids: Iterable[UUID] = ()) -> Project:
    """Insert the project together with its initial roster in one commit."""
    session.add(project)
    try:
        session.flush()
        for employee_id in set(employee_ids):
            session.add(EmployeeProject(employee_id=employee_id, project_id=project.id))
        session.commit()
    except IntegrityError:
        session.rollback()
        raise
    session.refresh(project)
    return project


def update(
    session: Session, project: Project, employee_ids: Iterable[UUID] | None = None
) -> Project:
    """Persist field changes and, when given, the new roster in one commit."""
    session.add(project)
    try:
        if employee_ids is not None:
            _diff_members(session, project.id, employee_ids)
        session.commit()
    except IntegrityError:
        session.rollback()
        raise
    session.refresh(project)
    return project


def delete(session: Session, project_id: UUID) -> bool:
    project = get_by_id(session, project_id)
    if project is None:
        return False
    session.execute(sa_delete(EmployeeProject).where(col(EmployeeProject.project_id) == project_id))
    crud.delete(session, project)
    return True


def _link(session: Session, project_id: UUID, employee_id: UUID) -> EmployeeProject | None:
    return session.get(EmployeeProject, (employee_id, project_id))


def add_member(session: Session, project_id: UUID, employee_id: UUID) -> None:
    if _link(session, project_id, employee_id) is not None:
        return
    session.add(EmployeeProject(employee_id=employee_id, project_id=project_id))
    crud.commit(session)


def remove_member(session: Session, project_id: UUID, employee_id: UUID) -> None:
    link = _link(session, project_id, employee_id)
    if link is None:
        return
    crud.delete(session, link)


def replace_members(session: Session, project_id: UUID, employee_ids: Iterable[UUID]) -> None:
    """Diff the roster against ``employee_ids``.

    Links missing from ``employee_ids`` are removed, new ones are added and links
    present on both sides are left untouched.
    """
    _diff_members(session, project_id, employee_ids)
    crud.commit(session)


def _diff_members(session: Session, project_id: UUID, employee_ids: Iterable[UUID]) -> None:
    wanted = set(employee_ids)
    existing = session.exec(
        select(EmployeeProject).where(col(EmployeeProject.project_id) == project_id)
    ).all()
    current = {link.employee_id for link in existing}

    for link in existing:
        if link.employee_id not in wanted:
            session.delete(link)
    for employee_id in wanted - current:
        session.add(EmployeeProject(employee_id=employee_id, project_id=project_id))


def member_ids(session: Session, project_id: UUID) -> list[UUID]:
    statement = (
        select(EmployeeProject.employee_id)
        .where(col(EmployeeProject.project_id) == project_id)
        .order_by(col(EmployeeProject.employee_id).asc())
    )
    return list(session.exec(statement).all())


def member_project_ids(session: Session, employee_id: UUID) -> set[UUID]:
    statement = select(EmployeeProject.project_id).where(
        col(EmployeeProject.employee_id) == employee_id
    )
    return set(session.exec(statement).all())


def objective_ids(session: Session, project_id: UUID) -> list[UUID]:
    statement = (
        select(Objective.id)
        .where(col(Objective.project_id) == project_id)
        .order_by(col(Objective.id).asc())
    )
    return list(session.exec(statement).all())


def attach_objective(session: Session, project_id: UUID, objective: Objective) -> Objective:
    objective.project_id = project_id
    return crud.save(session, objective)


def detach_objective(session: Session, project_id: UUID, objective: Objective) -> Objective:
    if objective.project_id == project_id:
        objective.project_id = None
        return crud.save(session, objective)
    return objective


def list_by_director(session: Session, director_id: UUID) -> list[Project]:
    statement = (
        select(Project)
        .where(col(Project.director_id) == director_id)
        .order_by(col(Project.start_time).asc(), col(Project.id).asc())
    )
    return list(session.exec(statement).all())


def list_by_member(session: Session, employee_id: UUID) -> list[Project]:
    statement = (
        select(Project)
        .join(EmployeeProject, col(EmployeeProject.project_id) == col(Project.id))
        .where(col(EmployeeProject.employee_id) == employee_id)
        .order_by(col(Project.start_time).asc(), col(Project.id).asc())
    )
    return list(session.exec(statement).all())


def list_all(
    session: Session,
    filters: ProjectFilters | None = None,
    sort_by: str | None = None,
    ascending: bool = True,
) -> list[Project]:
    filters = filters or ProjectFilters()
    statement = select(Project)

    if filters.name:
        statement = statement.where(col(Project.name).contains(filters.name, autoescape=True))
    if filters.customer_name:
        statement = statement.where(
            col(Project.customer_name).contains(filters.customer_name, autoescape=True)
        )
    if filters.executor_name:
        statement = statement.where(
            col(Project.executor_name).contains(filters.executor_name, autoescape=True)
        )
    if filters.start_time_from is not None:
        statement = statement.where(col(Project.start_time) >= filters.start_time_from)
    if filters.start_time_to is not None:
        statement = statement.where(col(Project.start_time) <= filters.start_time_to)
    if filters.priorities:
        statement = statement.where(col(Project.priority).in_(filters.priorities))
    if filters.director_id is not None:
        statement = statement.where(col(Project.director_id) == filters.director_id)

    sort_column = col(_SORT_COLUMNS.get((sort_by or DEFAULT_SORT).lower(), Project.start_time))
    statement = statement.order_by(
        sort_column.asc() if ascending else sort_column.desc(),
        col(Project.id).asc(),
    )
    return list(session.exec(statement).all())
