"""
handlers/health_handler.py
--------------------------
GET /health: checks that the database answers a trivial query.
The first call also provisions the schema and opens the pool.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from db.errors import DatabaseError
from handlers.dependencies import get_task_service
from services.task_service import TaskService
from utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check(service: TaskService = Depends(get_task_service)):
    try:
        service.check_health()
    except DatabaseError as e:
        details = str(e.__cause__ or e)
        logger.error(f"Health check failed: {details}")
        return JSONResponse(
            status_code=500,
            content={"error": "Database connection failed", "details": details},
        )
    return {
        "status": "OK",
        "message": "Database connected successfully!",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
