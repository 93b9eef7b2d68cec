"""
handlers/dependencies.py
------------------------
FastAPI dependencies wiring the request handlers to the db layer.
The PoolManager lives on ``app.state``; handlers never touch a global.
"""

from fastapi import Depends, Request

from db.connection import PoolManager
from db.executor import QueryExecutor
from repositories.task_repo import TaskRepository
from services.task_service import TaskService


def get_pool_manager(request: Request) -> PoolManager:
    return request.app.state.pool_manager


def get_task_service(pool_manager: PoolManager = Depends(get_pool_manager)) -> TaskService:
    """Per-request TaskService on top of the shared pool."""
    return TaskService(TaskRepository(QueryExecutor(pool_manager)))
