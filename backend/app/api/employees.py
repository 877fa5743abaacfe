from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from app.api.deps import (
    DIRECTOR_DEP,
    MANAGER_DEP,
    SESSION_DEP,
    get_employee_or_404,
)
from app.core.auth import CallerContext
from app.core.logging import get_logger
from app.models.employees import Employee
from app.schemas.common import OkResponse
from app.schemas.employees import (
    EmployeeCreate,
    EmployeeProjectsUpdate,
    EmployeeRead,
    EmployeeUpdate,
)
from app.stores import employees as employee_store

router = APIRouter(prefix="/employees", tags=["employees"])
logger = get_logger(__name__)

EMPLOYEE_DEP = Depends(get_employee_or_404)


@router.get("", response_model=list[EmployeeRead])
def list_employees(session: Session = SESSION_DEP, caller: CallerContext = MANAGER_DEP):
    return employee_store.list_all(session)


@router.get("/{employee_id}", response_model=EmployeeRead)
def get_employee(employee: Employee = EMPLOYEE_DEP, caller: CallerContext = MANAGER_DEP):
    return employee


@router.post("", response_model=EmployeeRead, status_code=status.HTTP_201_CREATED)
def create_employee(
    payload: EmployeeCreate,
    session: Session = SESSION_DEP,
    caller: CallerContext = DIRECTOR_DEP,
):
    try:
        employee = employee_store.add(session, Employee(**payload.model_dump()))
    except IntegrityError:
        raise HTTPException(status_code=409, detail="Employee create violates constraints")

    logger.info("employee.created employee_id=%s by=%s", employee.id, caller.identity)
    return employee


@router.put("/{employee_id}", response_model=EmployeeRead)
def update_employee(
    payload: EmployeeUpdate,
    employee: Employee = EMPLOYEE_DEP,
    session: Session = SESSION_DEP,
    caller: CallerContext = DIRECTOR_DEP,
):
    data = payload.model_dump(exclude_unset=True)
    for k, v in data.items():
        setattr(employee, k, v)

    try:
        employee = employee_store.update(session, employee)
    except IntegrityError:
        raise HTTPException(status_code=409, detail="Employee update violates constraints")

    logger.info("employee.updated employee_id=%s fields=%s", employee.id, sorted(data))
    return employee


@router.delete("/{employee_id}", response_model=OkResponse)
def delete_employee(
    employee: Employee = EMPLOYEE_DEP,
    session: Session = SESSION_DEP,
    caller: CallerContext = DIRECTOR_DEP,
):
    employee_id = employee.id
    try:
        employee_store.delete(session, employee_id)
    except IntegrityError:
        # Still an objective author or a project director.
        raise HTTPException(
            status_code=409,
            detail="Employee is still referenced by objectives or projects",
        )

    logger.info("employee.deleted employee_id=%s by=%s", employee_id, caller.identity)
    return OkResponse()


@router.put("/{employee_id}/projects", response_model=OkResponse)
def update_employee_projects(
    payload: EmployeeProjectsUpdate,
    employee: Employee = EMPLOYEE_DEP,
    session: Session = SESSION_DEP,
    caller: CallerContext = DIRECTOR_DEP,
):
    try:
        employee_store.replace_projects(session, employee.id, payload.project_ids)
    except IntegrityError:
        raise HTTPException(status_code=409, detail="Unknown project id in project_ids")
    return OkResponse()
