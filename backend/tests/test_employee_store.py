# ruff: noqa

from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from app.services import membership
from app.stores import employees as employee_store
from app.stores import objectives as objective_store
from app.stores import projects as project_store


def test_resolve_identity(session, make_employee):
    employee = make_employee(user_id="auth0|42")
    make_employee("Nobody")

    assert employee_store.resolve_employee_id_for_identity(session, "auth0|42") == employee.id
    assert employee_store.resolve_employee_id_for_identity(session, "auth0|missing") is None
    assert employee_store.resolve_employee_id_for_identity(session, None) is None


def test_list_all_sorted_by_last_name(session, make_employee):
    make_employee("Smirnov")
    make_employee("Antonov")
    assert [e.last_name for e in employee_store.list_all(session)] == ["Antonov", "Smirnov"]


def test_missing_employee(session):
    assert employee_store.get_by_id(session, uuid4()) is None
    assert employee_store.delete(session, uuid4()) is False


def test_delete_cascades_membership_and_clears_executor(session, make_employee, make_project, make_objective):
    director = make_employee("Director")
    worker = make_employee("Worker")
    project = make_project(director, [worker])
    objective = make_objective(director, project, worker)

    assert employee_store.delete(session, worker.id) is True

    assert membership.project_ids_of_employee(session, worker.id) == set()
    assert project_store.member_ids(session, project.id) == []
    assert objective_store.get_by_id(session, objective.id).executor_id is None


def test_delete_objective_author_is_restricted(session, make_employee, make_objective):
    author = make_employee("Author")
    make_objective(author)

    with pytest.raises(IntegrityError):
        employee_store.delete(session, author.id)
    assert employee_store.get_by_id(session, author.id) is not None


def test_delete_project_director_is_restricted(session, make_employee, make_project):
    director = make_employee("Director")
    make_project(director)

    with pytest.raises(IntegrityError):
        employee_store.delete(session, director.id)


def test_replace_projects_from_employee_side(session, make_employee, make_project):
    director = make_employee("Director")
    worker = make_employee("Worker")
    a = make_project(director, [worker], name="A")
    b = make_project(director, name="B")
    c = make_project(director, name="C")

    employee_store.replace_projects(session, worker.id, [b.id, c.id])
    assert membership.project_ids_of_employee(session, worker.id) == {b.id, c.id}

    employee_store.replace_projects(session, worker.id, [b.id, c.id])
    assert membership.project_ids_of_employee(session, worker.id) == {b.id, c.id}
    assert a.id not in project_store.member_project_ids(session, worker.id)
