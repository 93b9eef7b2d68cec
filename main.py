"""
main.py
-------
Entry point for the Taskify backend.

Responsibilities:
    - Build the FastAPI application and register all routers.
    - Own the PoolManager for the lifetime of the process. The pool is
      opened lazily by the first request and closed on shutdown.
    - Map domain errors to JSON error responses.
    - Run the server with uvicorn.
"""

from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import CORS_ORIGINS, HOST, PORT
from db.connection import PoolManager
from handlers import health_handler, task_handler
from services.errors import TaskNotFoundError, TaskValidationError
from utils.logger import get_logger

logger = get_logger(__name__)


def create_app(pool_manager: Optional[PoolManager] = None) -> FastAPI:
    """
    Build the application.

    Args:
        pool_manager: Pool owner shared by all requests. A default one,
            configured from the environment, is created when omitted.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        # ── Cleanup on shutdown ───────────────────────────
        logger.info("🛑 Shutting down gracefully...")
        app.state.pool_manager.close()

    app = FastAPI(title="Taskify Backend", version="1.0.0", lifespan=lifespan)
    app.state.pool_manager = pool_manager or PoolManager()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(TaskValidationError)
    async def task_validation_handler(request: Request, exc: TaskValidationError):
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @app.exception_handler(TaskNotFoundError)
    async def task_not_found_handler(request: Request, exc: TaskNotFoundError):
        return JSONResponse(status_code=404, content={"error": "Task not found"})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Rejected request body: {exc.errors()}")
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error: {exc}")
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    app.include_router(health_handler.router)
    app.include_router(task_handler.router)
    return app


def main() -> None:
    """Start the HTTP server."""
    logger.info(f"🚀 Taskify Backend running on http://localhost:{PORT}")
    logger.info(f"📊 Health: http://localhost:{PORT}/health")
    logger.info(f"📋 Tasks API: http://localhost:{PORT}/api/tasks")
    uvicorn.run(create_app(), host=HOST, port=PORT)


if __name__ == "__main__":
    main()
