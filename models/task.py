"""
models/task.py
--------------
Domain model for a to-do task.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 1000


@dataclass
class Task:
    """
    Represents a single row of the tasks table.

    Attributes:
        id: Server-generated identity, never reused.
        title: Trimmed title, 3 to 255 characters.
        description: Optional free text, up to 1000 characters.
        is_completed: Completion flag (False on creation).
        created_at: Insertion timestamp, never changes.
        updated_at: Timestamp of the last update, None until the first one.
    """
    id: int
    title: str
    created_at: datetime
    description: Optional[str] = None
    is_completed: bool = False
    updated_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Task":
        """Build a Task from a column name → value mapping."""
        return cls(
            id=row["id"],
            title=row["title"],
            description=row.get("description"),
            is_completed=bool(row["is_completed"]),
            created_at=row["created_at"],
            updated_at=row.get("updated_at"),
        )

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation with the API's camelCase keys."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "isCompleted": self.is_completed,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __str__(self) -> str:
        mark = "x" if self.is_completed else " "
        return f"[{mark}] #{self.id} {self.title}"
