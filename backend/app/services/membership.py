"""Employee-in-project membership checks.

These answer authorization questions, so a missing objective or project is a
plain ``False``: the checks fail closed instead of raising.
"""

from __future__ import annotations

from uuid import UUID

from sqlmodel import Session, col, select

from app.models.projects import EmployeeProject
from app.stores import objectives as objective_store
from app.stores import projects as project_store


def is_employee_member_of_project(session: Session, employee_id: UUID, project_id: UUID) -> bool:
    statement = (
        select(EmployeeProject.employee_id)
        .where(
            col(EmployeeProject.employee_id) == employee_id,
            col(EmployeeProject.project_id) == project_id,
        )
        .limit(1)
    )
    return session.exec(statement).first() is not None


def is_employee_member_of_objectives_project(
    session: Session, objective_id: UUID, employee_id: UUID
) -> bool:
    objective = objective_store.get_by_id(session, objective_id)
    if objective is None or objective.project_id is None:
        return False
    return is_employee_member_of_project(session, employee_id, objective.project_id)


def project_ids_of_employee(session: Session, employee_id: UUID) -> set[UUID]:
    return project_store.member_project_ids(session, employee_id)
