"""
services/task_service.py
------------------------
Business logic for tasks.
Validates input, then delegates persistence to the TaskRepository.
"""

import re
from typing import Optional

from models.task import (
    DESCRIPTION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    TITLE_MIN_LENGTH,
    Task,
)
from repositories.task_repo import TaskRepository
from services.errors import TaskNotFoundError, TaskValidationError
from utils.logger import get_logger

logger = get_logger(__name__)

_TASK_ID_RE = re.compile(r"-?[0-9]+")


def parse_task_id(raw_id) -> int:
    """
    Convert a path segment into a task id.

    Raises:
        TaskValidationError: If the value is not a plain run of ASCII digits,
            optionally negative.
    """
    raw = str(raw_id)
    if not _TASK_ID_RE.fullmatch(raw):
        raise TaskValidationError("Invalid task id")
    return int(raw)


def clean_title(title) -> str:
    """
    Trim and check a title.

    Raises:
        TaskValidationError: Missing, shorter than 3 or longer than 255 characters.
    """
    if not isinstance(title, str) or len(title.strip()) < TITLE_MIN_LENGTH:
        raise TaskValidationError(
            f"Task title must be at least {TITLE_MIN_LENGTH} characters"
        )
    title = title.strip()
    if len(title) > TITLE_MAX_LENGTH:
        raise TaskValidationError(
            f"Task title must be at most {TITLE_MAX_LENGTH} characters"
        )
    return title


def _check_description(description: Optional[str]) -> None:
    if description is not None and len(description) > DESCRIPTION_MAX_LENGTH:
        raise TaskValidationError(
            f"Task description must be at most {DESCRIPTION_MAX_LENGTH} characters"
        )


class TaskService:
    """
    Handles all business logic related to tasks.

    Validation failures and unknown ids are raised as TaskValidationError
    and TaskNotFoundError; database failures propagate from the db layer.
    """

    def __init__(self, repo: TaskRepository):
        self.repo = repo

    def check_health(self) -> bool:
        return self.repo.ping()

    def list_tasks(self) -> list[Task]:
        return self.repo.list_all()

    def create_task(self, title, description: Optional[str] = None) -> Task:
        """Create a task from a raw title (trimmed before storing)."""
        title = clean_title(title)
        _check_description(description)
        return self.repo.add(title, description)

    def update_task(
        self,
        raw_id,
        title: Optional[str] = None,
        description: Optional[str] = None,
        is_completed: Optional[bool] = None,
    ) -> Task:
        """
        Apply a partial update. Fields left as None are unchanged.

        Raises:
            TaskValidationError: Bad id, title or description.
            TaskNotFoundError: No task with this id.
        """
        task_id = parse_task_id(raw_id)
        if title is not None:
            title = clean_title(title)
        _check_description(description)

        task = self.repo.update(
            task_id, title=title, description=description, is_completed=is_completed
        )
        if task is None:
            raise TaskNotFoundError(task_id)
        logger.info(f"Updated task #{task_id}")
        return task

    def delete_task(self, raw_id) -> None:
        """
        Raises:
            TaskValidationError: Bad id.
            TaskNotFoundError: No task with this id.
        """
        task_id = parse_task_id(raw_id)
        if not self.repo.delete(task_id):
            raise TaskNotFoundError(task_id)
