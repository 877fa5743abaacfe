from __future__ import annotations

from collections.abc import Iterable
from uuid import UUID

from sqlmodel import Session, col, select

from app.db import crud
from app.models.employees import Employee
from app.models.projects import EmployeeProject


def get_by_id(session: Session, employee_id: UUID) -> Employee | None:
    return crud.get_by_id(session, Employee, employee_id)


def list_all(session: Session) -> list[Employee]:
    statement = select(Employee).order_by(
        col(Employee.last_name).asc(), col(Employee.first_name).asc(), col(Employee.id).asc()
    )
    return list(session.exec(statement).all())


def add(session: Session, employee: Employee) -> Employee:
    return crud.save(session, employee)


def update(session: Session, employee: Employee) -> Employee:
    return crud.save(session, employee)


def delete(session: Session, employee_id: UUID) -> bool:
    employee = get_by_id(session, employee_id)
    if employee is None:
        return False
    crud.delete(session, employee)
    return True


def resolve_employee_id_for_identity(session: Session, user_id: str | None) -> UUID | None:
    if not user_id:
        return None
    statement = select(Employee.id).where(col(Employee.user_id) == user_id).limit(1)
    return session.exec(statement).first()


def replace_projects(session: Session, employee_id: UUID, project_ids: Iterable[UUID]) -> None:
    """Make the employee's project links match ``project_ids``; unchanged links stay."""
    wanted = set(project_ids)
    existing = session.exec(
        select(EmployeeProject).where(col(EmployeeProject.employee_id) == employee_id)
    ).all()
    current = {link.project_id for link in existing}

    for link in existing:
        if link.project_id not in wanted:
            session.delete(link)
    for project_id in wanted - current:
        session.add(EmployeeProject(employee_id=employee_id, project_id=project_id))
    crud.commit(session)

