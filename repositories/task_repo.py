"""
repositories/task_repo.py
-------------------------
Data access layer for tasks.
All SQL queries related to the `tasks` table live here.
"""

from typing import Optional

from db.executor import QueryExecutor
from models.task import Task
from utils.logger import get_logger

logger = get_logger(__name__)


class TaskRepository:
    """Repository for CRUD operations on the tasks table."""

    def __init__(self, executor: QueryExecutor):
        self.executor = executor

    # ── HEALTH ────────────────────────────────────────────

    def ping(self) -> bool:
        """Run a trivial query; provisions the schema on first use."""
        result = self.executor.execute("SELECT 1 AS connected;")
        return bool(result.rows and result.rows[0]["connected"] == 1)

    # ── CREATE ────────────────────────────────────────────

    def add(self, title: str, description: Optional[str] = None) -> Task:
        """
        Insert a new, not yet completed task.

        Returns:
            The stored Task with its id and created_at populated.
        """
        sql = """
            INSERT INTO tasks (title, description, is_completed)
            VALUES (%(title)s, %(description)s, FALSE)
            RETURNING *;
        """
        result = self.executor.execute(sql, {"title": title, "description": description})
        task = Task.from_row(result.rows[0])
        logger.info(f"Added task #{task.id}")
        return task

    # ── READ ──────────────────────────────────────────────

    def list_all(self) -> list[Task]:
        """All tasks, newest (highest id) first."""
        result = self.executor.execute("SELECT * FROM tasks ORDER BY id DESC;")
        return [Task.from_row(r) for r in result.rows]

    def get_by_id(self, task_id: int) -> Optional[Task]:
        result = self.executor.execute(
            "SELECT * FROM tasks WHERE id = %(id)s;", {"id": task_id}
        )
        row = result.first()
        return Task.from_row(row) if row else None

    # ── UPDATE ────────────────────────────────────────────

    def update(
        self,
        task_id: int,
        title: Optional[str] = None,
        description: Optional[str] = None,
        is_completed: Optional[bool] = None,
    ) -> Optional[Task]:
        """
        Update the given fields; fields left as None keep their value.
        updated_at is always refreshed.

        Returns:
            The updated Task, or None if no task has this id.
        """
        sql = """
            UPDATE tasks
            SET title = COALESCE(%(title)s, title),
                description = COALESCE(%(description)s, description),
                is_completed = COALESCE(%(is_completed)s, is_completed),
                updated_at = NOW()
            WHERE id = %(id)s
            RETURNING *;
        """
        result = self.executor.execute(sql, {
            "id": task_id,
            "title": title,
            "description": description,
            "is_completed": is_completed,
        })
        row = result.first()
        return Task.from_row(row) if row else None

    # ── DELETE ────────────────────────────────────────────

    def delete(self, task_id: int) -> bool:
        """
        Delete a task by id.

        Returns:
            True if a row was deleted, False otherwise.
        """
        result = self.executor.execute("DELETE FROM tasks WHERE id = %(id)s;", {"id": task_id})
        deleted = result.row_count > 0
        if deleted:
            logger.info(f"Deleted task #{task_id}")
        return deleted
