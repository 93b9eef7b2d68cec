"""Tests for repositories.task_repo: SQL shape and row mapping."""

from datetime import datetime, timezone

import pytest

from db.executor import QueryResult
from repositories.task_repo import TaskRepository

CREATED = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
UPDATED = datetime(2026, 1, 1, 12, 5, tzinfo=timezone.utc)


def row(id=1, title="Buy milk", is_completed=False, updated_at=None):
    return {
        "id": id,
        "title": title,
        "description": None,
        "is_completed": is_completed,
        "created_at": CREATED,
        "updated_at": updated_at,
    }


class ScriptedExecutor:
    """Records statements and answers with queued results."""

    def __init__(self, *results: QueryResult):
        self.results = list(results)
        self.calls = []

    def execute(self, statement, params=None):
        self.calls.append((statement, params))
        return self.results.pop(0)


def test_add_inserts_uncompleted_task():
    executor = ScriptedExecutor(QueryResult(rows=[row()], row_count=1))
    task = TaskRepository(executor).add("Buy milk")

    statement, params = executor.calls[0]
    assert "INSERT INTO tasks" in statement
    assert "RETURNING *" in statement
    assert params == {"title": "Buy milk", "description": None}
    assert task.id == 1
    assert task.is_completed is False
    assert task.updated_at is None


def test_list_all_orders_by_id_descending():
    executor = ScriptedExecutor(QueryResult(rows=[row(3), row(2), row(1)], row_count=3))
    tasks = TaskRepository(executor).list_all()

    assert "ORDER BY id DESC" in executor.calls[0][0]
    assert [t.id for t in tasks] == [3, 2, 1]


def test_update_keeps_omitted_fields_via_coalesce():
    updated = row(is_completed=True, updated_at=UPDATED)
    executor = ScriptedExecutor(QueryResult(rows=[updated], row_count=1))

    task = TaskRepository(executor).update(1, is_completed=True)

    statement, params = executor.calls[0]
    assert "COALESCE(%(title)s, title)" in statement
    assert "updated_at = NOW()" in statement
    assert params == {"id": 1, "title": None, "description": None, "is_completed": True}
    assert task.is_completed is True
    assert task.updated_at == UPDATED


def test_update_missing_task_returns_none():
    executor = ScriptedExecutor(QueryResult(rows=[], row_count=0))
    assert TaskRepository(executor).update(42, title="New title") is None


@pytest.mark.parametrize("row_count, expected", [(1, True), (0, False)])
def test_delete_reports_affected_rows(row_count, expected):
    executor = ScriptedExecutor(QueryResult(rows=[], row_count=row_count))

    assert TaskRepository(executor).delete(5) is expected
    assert executor.calls[0][1] == {"id": 5}


def test_get_by_id():
    executor = ScriptedExecutor(
        QueryResult(rows=[row(9)], row_count=1), QueryResult(rows=[], row_count=0)
    )
    repo = TaskRepository(executor)

    assert repo.get_by_id(9).id == 9
    assert repo.get_by_id(10) is None


def test_ping():
    executor = ScriptedExecutor(QueryResult(rows=[{"connected": 1}], row_count=1))
    assert TaskRepository(executor).ping() is True


def test_to_dict_uses_api_names():
    executor = ScriptedExecutor(QueryResult(rows=[row(updated_at=UPDATED)], row_count=1))
    data = TaskRepository(executor).get_by_id(1).to_dict()

    assert data == {
        "id": 1,
        "title": "Buy milk",
        "description": None,
        "isCompleted": False,
        "createdAt": CREATED.isoformat(),
        "updatedAt": UPDATED.isoformat(),
    }
