"""Executor assignment and status changes for objectives.

Role gating (which roles may call what) happens at the HTTP layer. This module
owns the relationship checks: whether an employee may be assigned to an
objective's project, and whether a given actor may change an objective's
status.
"""

from __future__ import annotations

from uuid import UUID

from sqlmodel import Session

from app.core.errors import NotFoundError, PolicyViolationError
from app.core.logging import get_logger
from app.models.objectives import Objective, ObjectiveStatus
from app.models.projects import Project
from app.services import membership
from app.stores import employees as employee_store
from app.stores import objectives as objective_store
from app.stores import projects as project_store

logger = get_logger(__name__)


def _require_objective(session: Session, objective_id: UUID) -> Objective:
    objective = objective_store.get_by_id(session, objective_id)
    if objective is None:
        raise NotFoundError("Objective")
    return objective


def assign_executor(session: Session, objective_id: UUID, employee_id: UUID) -> Objective:
    """Assign ``employee_id`` as executor; the employee must belong to the objective's project."""
    objective = _require_objective(session, objective_id)
    if employee_store.get_by_id(session, employee_id) is None:
        raise NotFoundError("Employee")
    if not membership.is_employee_member_of_objectives_project(session, objective_id, employee_id):
        logger.warning(
            "objective.executor.rejected objective_id=%s employee_id=%s", objective_id, employee_id
        )
        raise PolicyViolationError("Employee is not assigned to the project")

    objective.executor_id = employee_id
    objective = objective_store.update(session, objective)
    logger.info("objective.executor.assigned objective_id=%s employee_id=%s", objective_id, employee_id)
    return objective


def update_executor(session: Session, objective_id: UUID, employee_id: UUID) -> Objective:
    """Set the executor without the project membership check done by ``assign_executor``.

    Only the objective is looked up here; an unknown employee id is rejected by
    the executor foreign key when the change is committed.
    """
    objective = _require_objective(session, objective_id)
    objective.executor_id = employee_id
    objective = objective_store.update(session, objective)
    logger.info("objective.executor.updated objective_id=%s employee_id=%s", objective_id, employee_id)
    return objective


def can_change_status(
    objective: Objective,
    project: Project | None,
    *,
    actor_employee_id: UUID | None,
    actor_is_director: bool,
) -> bool:
    if actor_is_director:
        return True
    if actor_employee_id is None:
        return False
    if objective.executor_id == actor_employee_id:
        return True
    return project is not None and project.director_id == actor_employee_id


def update_status(
    session: Session,
    objective_id: UUID,
    status: ObjectiveStatus,
    *,
    actor_employee_id: UUID | None,
    actor_is_director: bool,
) -> bool:
    """Change the status if the actor may; returns False (and writes nothing) otherwise.

    Any status may follow any other: there is no transition graph.
    """
    objective = _require_objective(session, objective_id)

    project = None
    if (
        not actor_is_director
        and actor_employee_id is not None
        and objective.executor_id != actor_employee_id
        and objective.project_id is not None
    ):
        # Only needed for the project director check.
        project = project_store.get_by_id(session, objective.project_id)

    allowed = can_change_status(
        objective,
        project,
        actor_employee_id=actor_employee_id,
        actor_is_director=actor_is_director,
    )
    if not allowed:
        logger.warning(
            "objective.status.denied objective_id=%s actor_employee_id=%s",
            objective_id,
            actor_employee_id,
        )
        return False

    objective.status = status
    objective_store.update(session, objective)
    logger.info("objective.status.changed objective_id=%s status=%s", objective_id, status.name)
    return True


def is_member(session: Session, objective_id: UUID, employee_id: UUID) -> bool:
    return membership.is_employee_member_of_objectives_project(session, objective_id, employee_id)
