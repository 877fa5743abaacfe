from __future__ import annotations

from collections.abc import Callable
from uuid import UUID

from fastapi import Depends, Header, HTTPException, status
from sqlmodel import Session

from app.core.auth import (
    EMPLOYEE_OR_ABOVE,
    MANAGER_OR_ABOVE,
    CallerContext,
    Role,
    parse_roles,
    verify_local_token,
)
from app.db.session import get_session
from app.models.employees import Employee
from app.models.objectives import Objective
from app.models.projects import Project
from app.stores import employees as employee_store
from app.stores import objectives as objective_store
from app.stores import projects as project_store

SESSION_DEP = Depends(get_session)


def get_caller_context(
    session: Session = SESSION_DEP,
    authorization: str | None = Header(default=None),
    x_user_id: str | None = Header(default=None),
    x_user_roles: str | None = Header(default=None),
) -> CallerContext:
    if not verify_local_token(authorization):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    if not x_user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    return CallerContext(
        identity=x_user_id,
        roles=parse_roles(x_user_roles),
        employee_id=employee_store.resolve_employee_id_for_identity(session, x_user_id),
    )


CALLER_DEP = Depends(get_caller_context)


def require_roles(allowed: frozenset[Role]) -> Callable[[CallerContext], CallerContext]:
    def _dependency(caller: CallerContext = CALLER_DEP) -> CallerContext:
        if not caller.has_any(allowed):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN)
        return caller

    return _dependency


DIRECTOR_DEP = Depends(require_roles(frozenset({Role.DIRECTOR})))
MANAGER_DEP = Depends(require_roles(MANAGER_OR_ABOVE))
EMPLOYEE_DEP = Depends(require_roles(EMPLOYEE_OR_ABOVE))


def require_employee_id(caller: CallerContext) -> UUID:
    """Callers acting on "their own" data must map to an Employee record."""
    if caller.employee_id is None:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN)
    return caller.employee_id


def require_project_scope(caller: CallerContext, project: Project) -> None:
    """Directors act on any project; project managers only on projects they direct."""
    if caller.is_director:
        return
    if caller.employee_id is None or project.director_id != caller.employee_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN)


def get_employee_or_404(employee_id: UUID, session: Session = SESSION_DEP) -> Employee:
    employee = employee_store.get_by_id(session, employee_id)
    if employee is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Employee not found")
    return employee


def get_project_or_404(project_id: UUID, session: Session = SESSION_DEP) -> Project:
    project = project_store.get_by_id(session, project_id)
    if project is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    return project


def get_objective_or_404(objective_id: UUID, session: Session = SESSION_DEP) -> Objective:
    objective = objective_store.get_by_id(session, objective_id)
    if objective is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Objective not found")
    return objective
