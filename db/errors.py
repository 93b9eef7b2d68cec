"""
db/errors.py
------------
Exceptions raised by the database layer.
Driver errors never leave this package unwrapped.
"""


class DatabaseError(Exception):
    """Base class for all database layer failures."""


class ProvisioningError(DatabaseError):
    """The database or the tasks table could not be created or reached at startup."""


class QueryExecutionError(DatabaseError):
    """A statement failed to execute. The driver message is logged, not exposed."""


class InvalidParameterError(DatabaseError, TypeError):
    """A bound parameter is not one of int, str, bool or None."""
