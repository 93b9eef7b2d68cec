"""Tests for db.executor: binding, result shape and error surfacing."""

import psycopg
import pytest
from psycopg.rows import dict_row

from db.connection import PoolManager
from db.errors import InvalidParameterError, ProvisioningError, QueryExecutionError
from db.executor import QueryExecutor, QueryResult, validate_params

from .fakes import FakeConnection, FakePool, FakePoolManager


def executor_for(conn: FakeConnection) -> tuple[QueryExecutor, FakePool]:
    pool = FakePool(conn)
    return QueryExecutor(FakePoolManager(pool)), pool


def test_returns_rows_and_count():
    conn = FakeConnection(rows=[{"id": 2, "title": "b"}, {"id": 1, "title": "a"}])
    executor, pool = executor_for(conn)

    result = executor.execute("SELECT * FROM tasks ORDER BY id DESC;")

    assert result.rows == [{"id": 2, "title": "b"}, {"id": 1, "title": "a"}]
    assert result.row_count == 2
    assert result.first() == {"id": 2, "title": "b"}
    assert conn.commits == 1
    assert pool.returned == 1


def test_uses_dict_rows():
    conn = FakeConnection()
    executor, _ = executor_for(conn)

    executor.execute("SELECT 1 AS connected;")

    assert conn.cursor_kwargs == [{"row_factory": dict_row}]


def test_named_parameters_passed_to_driver():
    conn = FakeConnection()
    executor, _ = executor_for(conn)
    statement = "UPDATE tasks SET title = %(title)s WHERE id = %(id)s;"

    executor.execute(statement, {"id": 7, "title": "x'; DROP TABLE tasks; --"})

    assert conn.executed == [(statement, {"id": 7, "title": "x'; DROP TABLE tasks; --"})]


def test_no_parameters_binds_nothing():
    conn = FakeConnection()
    executor, _ = executor_for(conn)

    executor.execute("SELECT 1;")

    assert conn.executed == [("SELECT 1;", None)]


def test_mutation_without_result_set():
    conn = FakeConnection(rowcount=1, returns_rows=False)
    executor, _ = executor_for(conn)

    result = executor.execute("DELETE FROM tasks WHERE id = %(id)s;", {"id": 1})

    assert result == QueryResult(rows=[], row_count=1)


@pytest.mark.parametrize("value", [1.5, b"bytes", [1], {"a": 1}, object()])
def test_unsupported_parameter_types_rejected(value):
    with pytest.raises(InvalidParameterError):
        validate_params({"v": value})


def test_supported_parameter_types_accepted():
    params = {"i": 3, "s": "text", "b": True, "n": None}
    assert validate_params(params) == params


def test_invalid_parameter_never_reaches_database():
    conn = FakeConnection()
    executor, pool = executor_for(conn)

    with pytest.raises(InvalidParameterError):
        executor.execute("SELECT %(v)s;", {"v": 1.5})

    assert pool.borrowed == 0
    assert conn.executed == []


def test_driver_error_rolls_back_and_surfaces_generic_error(caplog):
    conn = FakeConnection(error=psycopg.ProgrammingError('relation "tasks" does not exist'))
    executor, pool = executor_for(conn)

    with pytest.raises(QueryExecutionError) as excinfo:
        executor.execute("SELECT * FROM tasks;")

    assert isinstance(excinfo.value.__cause__, psycopg.Error)
    assert conn.rollbacks == 1
    assert conn.commits == 0
    assert pool.returned == 1
    assert 'relation "tasks" does not exist' in caplog.text


def test_checkout_failure_surfaces_generic_error():
    pool = FakePool(getconn_error=psycopg.OperationalError("server closed the connection"))
    executor = QueryExecutor(FakePoolManager(pool))

    with pytest.raises(QueryExecutionError):
        executor.execute("SELECT 1;")


def test_provisioning_failure_propagates(app_config, base_config):
    def provisioner(base, name):
        raise ProvisioningError("permission denied")

    manager = PoolManager(
        app_config=app_config,
        base_config=base_config,
        provisioner=provisioner,
        pool_factory=lambda config: FakePool(),
    )

    with pytest.raises(ProvisioningError):
        QueryExecutor(manager).execute("SELECT 1;")


def test_executor_goes_through_pool_manager(pool_manager):
    executor = QueryExecutor(pool_manager)

    executor.execute("SELECT 1;")

    assert pool_manager.is_open
    assert pool_manager.get_pool().returned == 1
