"""
handlers/task_handler.py
------------------------
CRUD endpoints under /api/tasks.
Delegates all logic to TaskService. Validation errors (400) and unknown
ids (404) are mapped by the application's exception handlers; database
failures are answered here with a 500 naming the failed operation.
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from db.errors import DatabaseError
from handlers.dependencies import get_task_service
from handlers.schemas import TaskCreate, TaskUpdate
from services.task_service import TaskService
from utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


def _server_error(message: str, exc: Exception) -> JSONResponse:
    logger.error(f"{message}: {exc}")
    return JSONResponse(status_code=500, content={"error": message})


@router.get("")
def list_tasks(service: TaskService = Depends(get_task_service)):
    """Return every task, highest id first."""
    try:
        tasks = service.list_tasks()
    except DatabaseError as e:
        return _server_error("Failed to fetch tasks", e)
    return [t.to_dict() for t in tasks]


@router.post("", status_code=status.HTTP_201_CREATED)
def create_task(body: TaskCreate, service: TaskService = Depends(get_task_service)):
    try:
        task = service.create_task(body.title, body.description)
    except DatabaseError as e:
        return _server_error("Failed to create task", e)
    return task.to_dict()


@router.put("/{task_id}")
def update_task(
    task_id: str,
    body: TaskUpdate,
    service: TaskService = Depends(get_task_service),
):
    """Partial update; omitted fields keep their value."""
    try:
        task = service.update_task(
            task_id,
            title=body.title,
            description=body.description,
            is_completed=body.is_completed,
        )
    except DatabaseError as e:
        return _server_error("Failed to update task", e)
    return task.to_dict()


@router.delete("/{task_id}")
def delete_task(task_id: str, service: TaskService = Depends(get_task_service)):
    try:
        service.delete_task(task_id)
    except DatabaseError as e:
        return _server_error("Failed to delete task", e)
    return {"message": "Task deleted successfully"}
