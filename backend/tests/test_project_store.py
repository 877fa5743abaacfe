# ruff: noqa

from datetime import datetime, timezone
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError
from sqlmodel import col, select

from app.models import EmployeeProject, Project
from app.stores import objectives as objective_store
from app.stores import projects as project_store
from app.stores.projects import ProjectFilters


def _links(session, project_id):
    return session.exec(
        select(EmployeeProject).where(col(EmployeeProject.project_id) == project_id)
    ).all()


def test_add_member_twice_keeps_one_row(session, make_employee, make_project):
    director = make_employee("Director")
    member = make_employee("Member")
    project = make_project(director)

    project_store.add_member(session, project.id, member.id)
    project_store.add_member(session, project.id, member.id)

    assert [link.employee_id for link in _links(session, project.id)] == [member.id]


def test_replace_members_diffs_roster(session, make_employee, make_project):
    director = make_employee("Director")
    a = make_employee("Alpha")
    b = make_employee("Bravo")
    c = make_employee("Charlie")
    project = make_project(director, [a, b])

    project_store.replace_members(session, project.id, [b.id, c.id])

    assert set(project_store.member_ids(session, project.id)) == {b.id, c.id}


def test_replace_members_is_idempotent(session, make_employee, make_project):
    director = make_employee("Director")
    a = make_employee("Alpha")
    b = make_employee("Bravo")
    project = make_project(director)

    project_store.replace_members(session, project.id, [a.id, b.id])
    first = sorted(project_store.member_ids(session, project.id))
    project_store.replace_members(session, project.id, [a.id, b.id])
    second = sorted(project_store.member_ids(session, project.id))

    assert first == second == sorted([a.id, b.id])
    assert len(_links(session, project.id)) == 2


def test_replace_members_with_empty_set_clears_roster(session, make_employee, make_project):
    director = make_employee("Director")
    project = make_project(director, [make_employee("Alpha")])
    project_store.replace_members(session, project.id, [])
    assert project_store.member_ids(session, project.id) == []


def test_add_with_unknown_director_is_rejected(session, make_employee, make_project):
    project = Project(
        name="Ghost",
        customer_name="Acme",
        executor_name="Initech",
        director_id=uuid4(),
        start_time=datetime(2026, 1, 1),
        end_time=datetime(2026, 2, 1),
        priority=1,
    )
    with pytest.raises(IntegrityError):
        project_store.add(session, project)


def test_delete_project_cascades_membership_and_detaches_objectives(
    session, make_employee, make_project, make_objective
):
    director = make_employee("Director")
    member = make_employee("Member")
    project = make_project(director, [member])
    objective = make_objective(director, project, member)
    project_id = project.id

    assert project_store.delete(session, project_id) is True

    assert project_store.get_by_id(session, project_id) is None
    assert _links(session, project_id) == []
    assert objective_store.get_by_id(session, objective.id).project_id is None


def test_delete_missing_project_returns_false(session):
    assert project_store.delete(session, uuid4()) is False


def test_attach_and_detach_objective(session, make_employee, make_project, make_objective):
    director = make_employee("Director")
    project = make_project(director)
    other = make_project(director, name="Other")
    objective = make_objective(director)

    project_store.attach_objective(session, project.id, objective)
    assert project_store.objective_ids(session, project.id) == [objective.id]

    # Detaching from a project the objective is not in leaves it alone.
    project_store.detach_objective(session, other.id, objective)
    assert objective_store.get_by_id(session, objective.id).project_id == project.id

    project_store.detach_objective(session, project.id, objective)
    assert objective_store.get_by_id(session, objective.id).project_id is None


def test_list_by_director_and_member(session, make_employee, make_project):
    director = make_employee("Director")
    other_director = make_employee("Other")
    member = make_employee("Member")
    mine = make_project(director, [member], name="Mine")
    make_project(other_director, name="Theirs")

    assert [p.id for p in project_store.list_by_director(session, director.id)] == [mine.id]
    assert [p.id for p in project_store.list_by_member(session, member.id)] == [mine.id]
    assert project_store.member_project_ids(session, member.id) == {mine.id}


def test_list_all_defaults_to_start_time(session, make_employee, make_project):
    director = make_employee("Director")
    late = make_project(director, name="Late", start_time=datetime(2026, 3, 1))
    early = make_project(director, name="Early", start_time=datetime(2026, 1, 1))

    assert [p.id for p in project_store.list_all(session)] == [early.id, late.id]
    assert [p.id for p in project_store.list_all(session, ascending=False)] == [late.id, early.id]


def test_list_all_filters_and_sorts(session, make_employee, make_project):
    director = make_employee("Director")
    other = make_employee("Other")
    a = make_project(director, name="Bridge", priority=2)
    b = make_project(director, name="Airport", priority=1)
    make_project(other, name="Bridge repair", priority=3)

    by_name = project_store.list_all(session, ProjectFilters(director_id=director.id), sort_by="name")
    assert [p.id for p in by_name] == [b.id, a.id]

    named = project_store.list_all(session, ProjectFilters(name="Bridge"), sort_by="priority")
    assert [p.name for p in named] == ["Bridge", "Bridge repair"]

    prioritized = project_store.list_all(session, ProjectFilters(priorities=[1, 3]), sort_by="PRIORITY")
    assert [p.priority for p in prioritized] == [1, 3]


def test_list_all_start_time_window(session, make_employee, make_project):
    director = make_employee("Director")
    make_project(director, name="Jan", start_time=datetime(2026, 1, 5))
    feb = make_project(director, name="Feb", start_time=datetime(2026, 2, 5))
    make_project(director, name="Mar", start_time=datetime(2026, 3, 5))

    window = ProjectFilters(start_time_from=datetime(2026, 2, 1), start_time_to=datetime(2026, 2, 28))
    assert [p.id for p in project_store.list_all(session, window)] == [feb.id]


def test_name_filters_treat_wildcards_literally(session, make_employee, make_project):
    director = make_employee("Director")
    make_project(director, name="Apollo")
    discount = make_project(director, name="50% off")

    found = project_store.list_all(session, ProjectFilters(name="%"))
    assert [p.id for p in found] == [discount.id]
    assert project_store.list_all(session, ProjectFilters(customer_name="_")) == []


def test_update_with_bad_roster_rolls_back_field_changes(session, make_employee, make_project):
    director = make_employee("Director")
    member = make_employee("Member")
    project = make_project(director, [member], name="Before")
    project_id = project.id

    project.name = "After"
    with pytest.raises(IntegrityError):
        project_store.update(session, project, [uuid4()])

    assert project_store.get_by_id(session, project_id).name == "Before"
    assert project_store.member_ids(session, project_id) == [member.id]


def test_update_applies_fields_and_roster_together(session, make_employee, make_project):
    director = make_employee("Director")
    old = make_employee("Old")
    new = make_employee("New")
    project = make_project(director, [old], name="Before")

    project.name = "After"
    project_store.update(session, project, [new.id])

    assert project_store.get_by_id(session, project.id).name == "After"
    assert project_store.member_ids(session, project.id) == [new.id]


def test_times_come_back_as_utc(session, make_employee, make_project):
    director = make_employee("Director")
    project = make_project(director, start_time=datetime(2026, 5, 1, 12))
    session.expire_all()

    stored = project_store.get_by_id(session, project.id)
    assert stored.start_time == datetime(2026, 5, 1, 12, tzinfo=timezone.utc)
