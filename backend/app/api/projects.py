"""Project CRUD, roster management and per-caller project listings."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from app.api.deps import (
    DIRECTOR_DEP,
    EMPLOYEE_DEP,
    MANAGER_DEP,
    SESSION_DEP,
    get_employee_or_404,
    get_objective_or_404,
    get_project_or_404,
    require_employee_id,
    require_project_scope,
)
from app.core.auth import CallerContext
from app.core.logging import get_logger
from app.models.employees import Employee
from app.models.objectives import Objective
from app.models.projects import Project
from app.schemas.common import OkResponse
from app.schemas.projects import ProjectCreate, ProjectRead
from app.stores import projects as project_store
from app.stores.projects import ProjectFilters

router = APIRouter(prefix="/projects", tags=["projects"])
logger = get_logger(__name__)

PROJECT_DEP = Depends(get_project_or_404)
EMPLOYEE_PATH_DEP = Depends(get_employee_or_404)
OBJECTIVE_PATH_DEP = Depends(get_objective_or_404)
PRIORITIES_QUERY = Query(default=None)


def _to_project_read(session: Session, project: Project) -> ProjectRead:
    return ProjectRead(
        id=project.id,
        name=project.name,
        customer_name=project.customer_name,
        executor_name=project.executor_name,
        start_time=project.start_time,
        end_time=project.end_time,
        priority=project.priority,
        director_id=project.director_id,
        employee_ids=project_store.member_ids(session, project.id),
        objective_ids=project_store.objective_ids(session, project.id),
    )


def _to_project_reads(session: Session, projects: list[Project]) -> list[ProjectRead]:
    return [_to_project_read(session, project) for project in projects]


@router.get("", response_model=list[ProjectRead])
def list_projects(
    name: str | None = None,
    customer_name: str | None = None,
    executor_name: str | None = None,
    start_time_from: datetime | None = None,
    start_time_to: datetime | None = None,
    priorities: list[int] | None = PRIORITIES_QUERY,
    director_id: UUID | None = None,
    sort_by: str | None = None,
    is_sort_ascending: bool = True,
    session: Session = SESSION_DEP,
    caller: CallerContext = DIRECTOR_DEP,
) -> list[ProjectRead]:
    filters = ProjectFilters(
        name=name,
        customer_name=customer_name,
        executor_name=executor_name,
        start_time_from=start_time_from,
        start_time_to=start_time_to,
        priorities=priorities or [],
        director_id=director_id,
    )
    projects = project_store.list_all(session, filters, sort_by, is_sort_ascending)
    return _to_project_reads(session, projects)


@router.get("/my-projects", response_model=list[ProjectRead])
def list_my_projects(
    session: Session = SESSION_DEP,
    caller: CallerContext = MANAGER_DEP,
) -> list[ProjectRead]:
    employee_id = require_employee_id(caller)
    return _to_project_reads(session, project_store.list_by_director(session, employee_id))


@router.get("/assigned-projects", response_model=list[ProjectRead])
def list_assigned_projects(
    session: Session = SESSION_DEP,
    caller: CallerContext = EMPLOYEE_DEP,
) -> list[ProjectRead]:
    employee_id = require_employee_id(caller)
    return _to_project_reads(session, project_store.list_by_member(session, employee_id))


@router.get("/{project_id}", response_model=ProjectRead)
def get_project(
    project: Project = PROJECT_DEP,
    session: Session = SESSION_DEP,
    caller: CallerContext = DIRECTOR_DEP,
) -> ProjectRead:
    return _to_project_read(session, project)


@router.post("", response_model=ProjectRead, status_code=status.HTTP_201_CREATED)
def create_project(
    payload: ProjectCreate,
    session: Session = SESSION_DEP,
    caller: CallerContext = DIRECTOR_DEP,
) -> ProjectRead:
    data = payload.model_dump(exclude={"employee_ids"})
    try:
        project = project_store.add(session, Project(**data), payload.employee_ids)
    except IntegrityError:
        raise HTTPException(
            status_code=409,
            detail="Project director or roster references an unknown employee",
        )

    logger.info(
        "project.created project_id=%s members=%s by=%s",
        project.id,
        len(payload.employee_ids),
        caller.identity,
    )
    return _to_project_read(session, project)


@router.put("/{project_id}", response_model=ProjectRead)
def update_project(
    payload: ProjectCreate,
    project: Project = PROJECT_DEP,
    session: Session = SESSION_DEP,
    caller: CallerContext = DIRECTOR_DEP,
) -> ProjectRead:
    for k, v in payload.model_dump(exclude={"employee_ids"}).items():
        setattr(project, k, v)

    try:
        project = project_store.update(session, project, payload.employee_ids)
    except IntegrityError:
        raise HTTPException(
            status_code=409,
            detail="Project director or roster references an unknown employee",
        )

    logger.info("project.updated project_id=%s by=%s", project.id, caller.identity)
    return _to_project_read(session, project)


@router.delete("/{project_id}", response_model=OkResponse)
def delete_project(
    project: Project = PROJECT_DEP,
    session: Session = SESSION_DEP,
    caller: CallerContext = DIRECTOR_DEP,
) -> OkResponse:
    project_id = project.id
    project_store.delete(session, project_id)
    logger.info("project.deleted project_id=%s by=%s", project_id, caller.identity)
    return OkResponse()


@router.post("/{project_id}/employees/{employee_id}", response_model=OkResponse)
def add_employee_to_project(
    project: Project = PROJECT_DEP,
    employee: Employee = EMPLOYEE_PATH_DEP,
    session: Session = SESSION_DEP,
    caller: CallerContext = MANAGER_DEP,
) -> OkResponse:
    require_project_scope(caller, project)
    project_store.add_member(session, project.id, employee.id)
    return OkResponse()


@router.delete("/{project_id}/employees/{employee_id}", response_model=OkResponse)
def remove_employee_from_project(
    project: Project = PROJECT_DEP,
    employee: Employee = EMPLOYEE_PATH_DEP,
    session: Session = SESSION_DEP,
    caller: CallerContext = MANAGER_DEP,
) -> OkResponse:
    require_project_scope(caller, project)
    project_store.remove_member(session, project.id, employee.id)
    return OkResponse()


@router.post("/{project_id}/objectives/{objective_id}", response_model=OkResponse)
def add_objective_to_project(
    project: Project = PROJECT_DEP,
    objective: Objective = OBJECTIVE_PATH_DEP,
    session: Session = SESSION_DEP,
    caller: CallerContext = MANAGER_DEP,
) -> OkResponse:
    require_project_scope(caller, project)
    project_store.attach_objective(session, project.id, objective)
    return OkResponse()


@router.delete("/{project_id}/objectives/{objective_id}", response_model=OkResponse)
def remove_objective_from_project(
    project: Project = PROJECT_DEP,
    objective: Objective = OBJECTIVE_PATH_DEP,
    session: Session = SESSION_DEP,
    caller: CallerContext = MANAGER_DEP,
) -> OkResponse:
    require_project_scope(caller, project)
    project_store.detach_objective(session, project.id, objective)
    return OkResponse()
