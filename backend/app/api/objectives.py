"""Objective endpoints.

Role gates live here; relationship checks (project membership, who may change a
status) are delegated to ``app.services.objective_workflow``.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from app.api.deps import (
    EMPLOYEE_DEP,
    MANAGER_DEP,
    SESSION_DEP,
    get_objective_or_404,
    require_employee_id,
)
from app.core.auth import CallerContext
from app.core.errors import PolicyViolationError
from app.core.logging import get_logger
from app.models.objectives import Objective, ObjectiveStatus
from app.schemas.common import MembershipRead, OkResponse
from app.schemas.objectives import (
    ObjectiveCreate,
    ObjectiveExecutorUpdate,
    ObjectiveRead,
    ObjectiveStatusUpdate,
    ObjectiveUpdate,
)
from app.services import membership, objective_workflow
from app.stores import objectives as objective_store
from app.stores.objectives import ObjectiveFilters

router = APIRouter(prefix="/objectives", tags=["objectives"])
logger = get_logger(__name__)

OBJECTIVE_DEP = Depends(get_objective_or_404)
STATUSES_QUERY = Query(default=None)
PRIORITIES_QUERY = Query(default=None)


def _to_read(objective: Objective) -> ObjectiveRead:
    return ObjectiveRead.model_validate(objective)


@router.get("", response_model=list[ObjectiveRead])
def list_objectives(
    statuses: list[ObjectiveStatus] | None = STATUSES_QUERY,
    priorities: list[int] | None = PRIORITIES_QUERY,
    name: str | None = None,
    author_id: UUID | None = None,
    executor_id: UUID | None = None,
    project_id: UUID | None = None,
    sort_by: str | None = None,
    is_sort_ascending: bool = True,
    session: Session = SESSION_DEP,
    caller: CallerContext = MANAGER_DEP,
) -> list[ObjectiveRead]:
    filters = ObjectiveFilters(
        statuses=statuses or [],
        priorities=priorities or [],
        name=name,
        author_id=author_id,
        executor_id=executor_id,
        project_id=project_id,
    )
    objectives = objective_store.list_all(session, filters, sort_by, is_sort_ascending)
    return [_to_read(o) for o in objectives]


@router.get("/my-objectives", response_model=list[ObjectiveRead])
def list_my_objectives(
    session: Session = SESSION_DEP,
    caller: CallerContext = EMPLOYEE_DEP,
) -> list[ObjectiveRead]:
    employee_id = require_employee_id(caller)
    return [_to_read(o) for o in objective_store.list_by_executor(session, employee_id)]


@router.get("/managed", response_model=list[ObjectiveRead])
def list_managed_objectives(
    session: Session = SESSION_DEP,
    caller: CallerContext = MANAGER_DEP,
) -> list[ObjectiveRead]:
    employee_id = require_employee_id(caller)
    return [_to_read(o) for o in objective_store.list_by_project_director(session, employee_id)]


@router.get("/{objective_id}", response_model=ObjectiveRead)
def get_objective(
    objective: Objective = OBJECTIVE_DEP,
    caller: CallerContext = EMPLOYEE_DEP,
) -> ObjectiveRead:
    return _to_read(objective)


@router.post("", response_model=ObjectiveRead, status_code=status.HTTP_201_CREATED)
def create_objective(
    payload: ObjectiveCreate,
    session: Session = SESSION_DEP,
    caller: CallerContext = MANAGER_DEP,
) -> ObjectiveRead:
    author_id = require_employee_id(caller)

    if payload.executor_id is not None:
        if payload.project_id is None or not membership.is_employee_member_of_project(
            session, payload.executor_id, payload.project_id
        ):
            raise PolicyViolationError("Employee is not assigned to the project")

    objective = Objective(**payload.model_dump(), author_id=author_id)
    try:
        objective = objective_store.add(session, objective)
    except IntegrityError:
        raise HTTPException(status_code=409, detail="Objective references an unknown project")

    logger.info("objective.created objective_id=%s author_id=%s", objective.id, author_id)
    return _to_read(objective)


@router.put("/{objective_id}", response_model=ObjectiveRead)
def update_objective(
    payload: ObjectiveUpdate,
    objective: Objective = OBJECTIVE_DEP,
    session: Session = SESSION_DEP,
    caller: CallerContext = MANAGER_DEP,
) -> ObjectiveRead:
    data = payload.model_dump(exclude_unset=True)
    for k, v in data.items():
        setattr(objective, k, v)

    try:
        objective = objective_store.update(session, objective)
    except IntegrityError:
        raise HTTPException(status_code=409, detail="Objective references an unknown project")
    return _to_read(objective)


@router.delete("/{objective_id}", response_model=OkResponse)
def delete_objective(
    objective: Objective = OBJECTIVE_DEP,
    session: Session = SESSION_DEP,
    caller: CallerContext = MANAGER_DEP,
) -> OkResponse:
    objective_id = objective.id
    objective_store.delete(session, objective_id)
    logger.info("objective.deleted objective_id=%s by=%s", objective_id, caller.identity)
    return OkResponse()


@router.post("/{objective_id}/executor/{employee_id}", response_model=ObjectiveRead)
def assign_executor(
    objective_id: UUID,
    employee_id: UUID,
    session: Session = SESSION_DEP,
    caller: CallerContext = MANAGER_DEP,
) -> ObjectiveRead:
    return _to_read(objective_workflow.assign_executor(session, objective_id, employee_id))


@router.put("/{objective_id}/executor", response_model=ObjectiveRead)
def update_executor(
    objective_id: UUID,
    payload: ObjectiveExecutorUpdate,
    session: Session = SESSION_DEP,
    caller: CallerContext = MANAGER_DEP,
) -> ObjectiveRead:
    try:
        objective = objective_workflow.update_executor(session, objective_id, payload.executor_id)
    except IntegrityError:
        raise HTTPException(status_code=409, detail="Executor references an unknown employee")
    return _to_read(objective)


@router.put("/{objective_id}/status", response_model=ObjectiveRead)
def update_status(
    objective_id: UUID,
    payload: ObjectiveStatusUpdate,
    session: Session = SESSION_DEP,
    caller: CallerContext = EMPLOYEE_DEP,
) -> ObjectiveRead:
    changed = objective_workflow.update_status(
        session,
        objective_id,
        payload.status,
        actor_employee_id=caller.employee_id,
        actor_is_director=caller.is_director,
    )
    if not changed:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not allowed to change the status of this objective",
        )
    objective = objective_store.get_by_id(session, objective_id)
    return _to_read(objective)


@router.get("/{objective_id}/members/{employee_id}", response_model=MembershipRead)
def is_member(
    objective_id: UUID,
    employee_id: UUID,
    session: Session = SESSION_DEP,
    caller: CallerContext = MANAGER_DEP,
) -> MembershipRead:
    return MembershipRead(is_member=objective_workflow.is_member(session, objective_id, employee_id))
