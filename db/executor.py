"""
db/executor.py
--------------
Runs parameterized SQL through the pool and normalizes the outcome.

Parameters are always bound by psycopg using named placeholders
(``%(name)s``); statement text is never built from values.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Union

import psycopg
from psycopg.rows import dict_row

from db.connection import PoolManager
from db.errors import InvalidParameterError, QueryExecutionError
from utils.logger import get_logger

logger = get_logger(__name__)

SqlValue = Union[int, str, bool, None]

_ALLOWED_TYPES = (int, str, bool, type(None))


@dataclass
class QueryResult:
    """
    Outcome of one statement.

    Attributes:
        rows: Returned rows in order, each a column name → value dict.
        row_count: Rows affected (mutations) or returned (queries).
    """
    rows: list[dict[str, Any]] = field(default_factory=list)
    row_count: int = 0

    def first(self) -> Optional[dict[str, Any]]:
        """The first row, or None for an empty result."""
        return self.rows[0] if self.rows else None


def validate_params(params: Optional[Mapping[str, Any]]) -> dict[str, SqlValue]:
    """
    Check that every bound value is an int, str, bool or None.

    Raises:
        InvalidParameterError: On a non-string name or an unsupported value type.
    """
    if not params:
        return {}
    checked: dict[str, SqlValue] = {}
    for name, value in params.items():
        if not isinstance(name, str) or not name:
            raise InvalidParameterError(f"Invalid parameter name: {name!r}")
        if not isinstance(value, _ALLOWED_TYPES):
            raise InvalidParameterError(
                f"Parameter '{name}' has unsupported type {type(value).__name__}"
            )
        checked[name] = value
    return checked


class QueryExecutor:
    """Executes statements against the application database."""

    def __init__(self, pool_manager: PoolManager):
        self.pool_manager = pool_manager

    def execute(
        self, statement: str, params: Optional[Mapping[str, SqlValue]] = None
    ) -> QueryResult:
        """
        Execute one statement and commit it.

        Args:
            statement: SQL text with ``%(name)s`` placeholders.
            params: Values to bind, keyed by placeholder name.

        Returns:
            A QueryResult. ``rows`` is empty for statements without a result set.

        Raises:
            InvalidParameterError: A value is not a supported scalar.
            ProvisioningError: First use and the schema or pool could not be set up.
            QueryExecutionError: The statement failed. Nothing is retried.
        """
        bound = validate_params(params)
        try:
            with self.pool_manager.connection() as conn:
                try:
                    with conn.cursor(row_factory=dict_row) as cur:
                        cur.execute(statement, bound or None)
                        rows = [dict(r) for r in cur.fetchall()] if cur.description else []
                        row_count = cur.rowcount
                    conn.commit()
                except psycopg.Error:
                    conn.rollback()
                    raise
        except psycopg.Error as e:
            logger.error(f"SQL error: {e}")
            raise QueryExecutionError("Statement execution failed") from e
        return QueryResult(rows=rows, row_count=row_count)
