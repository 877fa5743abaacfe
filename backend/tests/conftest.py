# ruff: noqa

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from app.db.session import create_db_engine, get_session, init_db
from app.main import app
from app.models import Employee, Objective, ObjectiveStatus, Project
from app.stores import employees as employee_store
from app.stores import objectives as objective_store
from app.stores import projects as project_store


@pytest.fixture()
def engine():
    db_engine = create_db_engine("sqlite://")
    init_db(db_engine)
    try:
        yield db_engine
    finally:
        db_engine.dispose()


@pytest.fixture()
def session(engine):
    with Session(engine) as db_session:
        yield db_session


@pytest.fixture()
def client(session):
    app.dependency_overrides[get_session] = lambda: session
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def make_employee(session):
    def _make(last_name: str = "Ivanov", *, first_name: str = "Ivan", user_id: str | None = None) -> Employee:
        employee = Employee(
            first_name=first_name,
            last_name=last_name,
            mail=f"{last_name.lower()}@example.com",
            user_id=user_id,
        )
        return employee_store.add(session, employee)

    return _make


@pytest.fixture()
def make_project(session):
    def _make(
        director: Employee,
        members: Iterable[Employee] = (),
        *,
        name: str = "Apollo",
        priority: int = 1,
        start_time: datetime = datetime(2026, 1, 10, tzinfo=timezone.utc),
    ) -> Project:
        project = Project(
            name=name,
            customer_name="Acme",
            executor_name="Initech",
            director_id=director.id,
            start_time=start_time,
            end_time=datetime(2026, 6, 30, tzinfo=timezone.utc),
            priority=priority,
        )
        return project_store.add(session, project, [m.id for m in members])

    return _make


@pytest.fixture()
def make_objective(session):
    def _make(
        author: Employee,
        project: Project | None = None,
        executor: Employee | None = None,
        *,
        name: str = "Write report",
        priority: int = 1,
        status: ObjectiveStatus = ObjectiveStatus.TODO,
    ) -> Objective:
        objective = Objective(
            name=name,
            author_id=author.id,
            executor_id=executor.id if executor else None,
            project_id=project.id if project else None,
            priority=priority,
            status=status,
        )
        return objective_store.add(session, objective)

    return _make
