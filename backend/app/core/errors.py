"""Domain errors raised by services and translated to HTTP responses in ``app.main``."""

from __future__ import annotations


class DomainError(Exception):
    status_code = 400

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class NotFoundError(DomainError):
    """A referenced Employee, Project or Objective does not exist."""

    status_code = 404

    def __init__(self, entity: str) -> None:
        super().__init__(f"{entity} not found")
        self.entity = entity


class PolicyViolationError(DomainError):
    """The entities exist but the requested relationship is not allowed."""

    status_code = 400
