# ruff: noqa

from uuid import uuid4

from app.services import membership
from app.stores import projects as project_store


def test_member_of_project(session, make_employee, make_project):
    director = make_employee("Director")
    member = make_employee("Member")
    outsider = make_employee("Outsider")
    project = make_project(director, [member])

    assert membership.is_employee_member_of_project(session, member.id, project.id) is True
    assert membership.is_employee_member_of_project(session, outsider.id, project.id) is False


def test_director_is_not_implicitly_a_member(session, make_employee, make_project):
    director = make_employee("Director")
    project = make_project(director)
    assert membership.is_employee_member_of_project(session, director.id, project.id) is False


def test_unknown_ids_are_not_members(session, make_employee):
    employee = make_employee()
    assert membership.is_employee_member_of_project(session, employee.id, uuid4()) is False
    assert membership.is_employee_member_of_objectives_project(session, uuid4(), employee.id) is False


def test_objective_without_project_has_no_members(session, make_employee, make_objective):
    author = make_employee()
    objective = make_objective(author)
    assert membership.is_employee_member_of_objectives_project(session, objective.id, author.id) is False


def test_objectives_project_membership(session, make_employee, make_project, make_objective):
    director = make_employee("Director")
    member = make_employee("Member")
    objective = make_objective(director, make_project(director, [member]))
    assert membership.is_employee_member_of_objectives_project(session, objective.id, member.id) is True


def test_project_ids_of_employee(session, make_employee, make_project):
    director = make_employee("Director")
    member = make_employee("Member")
    first = make_project(director, [member], name="First")
    second = make_project(director, [member], name="Second")
    make_project(director, name="Third")

    assert membership.project_ids_of_employee(session, member.id) == {first.id, second.id}
    assert membership.project_ids_of_employee(session, director.id) == set()


def test_remove_member_then_not_member_and_repeat_is_noop(session, make_employee, make_project):
    director = make_employee("Director")
    member = make_employee("Member")
    project = make_project(director, [member])

    project_store.remove_member(session, project.id, member.id)
    assert membership.is_employee_member_of_project(session, member.id, project.id) is False

    project_store.remove_member(session, project.id, member.id)
    assert membership.is_employee_member_of_project(session, member.id, project.id) is False
