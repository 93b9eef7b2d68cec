"""Shared fixtures: configs, a PoolManager over a FakePool, and an app client."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from config import DatabaseConfig
from db.connection import PoolManager
from handlers.dependencies import get_task_service
from main import create_app
from services.task_service import TaskService

from .fakes import FakePool, InMemoryTaskRepository


@pytest.fixture()
def base_config() -> DatabaseConfig:
    """Administrative target; never contacted by unit tests."""
    return DatabaseConfig(user="taskify", password="secret")


@pytest.fixture()
def app_config(base_config: DatabaseConfig) -> DatabaseConfig:
    return base_config.with_database("taskify_db")


@pytest.fixture()
def pool_manager(base_config: DatabaseConfig, app_config: DatabaseConfig) -> PoolManager:
    """PoolManager that provisions nothing and opens a FakePool."""
    return PoolManager(
        app_config=app_config,
        base_config=base_config,
        provisioner=lambda base, name: None,
        pool_factory=lambda config: FakePool(),
    )


@pytest.fixture()
def repo() -> InMemoryTaskRepository:
    return InMemoryTaskRepository()


@pytest.fixture()
def service(repo: InMemoryTaskRepository) -> TaskService:
    return TaskService(repo)


@pytest.fixture()
def client(pool_manager: PoolManager, service: TaskService):
    """
    TestClient over the real app with the TaskService swapped for one
    backed by the in-memory repository.
    """
    app = create_app(pool_manager)
    app.dependency_overrides[get_task_service] = lambda: service
    with TestClient(app) as c:
        yield c
