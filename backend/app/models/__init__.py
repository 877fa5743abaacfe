from app.models.employees import Employee
from app.models.objectives import Objective, ObjectiveStatus
from app.models.projects import EmployeeProject, Project

__all__ = [
    "Employee",
    "EmployeeProject",
    "Objective",
    "ObjectiveStatus",
    "Project",
]
