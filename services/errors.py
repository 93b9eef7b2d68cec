"""
services/errors.py
------------------
Business-level failures raised by the services and mapped to HTTP
statuses by the handlers.
"""


class TaskValidationError(ValueError):
    """Input rejected before reaching the database (HTTP 400)."""


class TaskNotFoundError(LookupError):
    """No task has the requested id (HTTP 404)."""

    def __init__(self, task_id: int):
        super().__init__(f"Task #{task_id} not found")
        self.task_id = task_id
