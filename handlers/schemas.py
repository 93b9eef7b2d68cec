"""
handlers/schemas.py
-------------------
Pydantic request bodies for the tasks API.
Only shape and types are checked here; length rules live in the service.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TaskCreate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None


class TaskUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    description: Optional[str] = None
    is_completed: Optional[bool] = Field(default=None, alias="isCompleted")
