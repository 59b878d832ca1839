"""
db/errors.py
------------
Typed failures raised by the data-access layer.
Callers branch on the exception class instead of inspecting strings.
"""

from psycopg2 import errors as pg_errors


class DataAccessError(Exception):
    """Base class for every failure raised while talking to the database."""

    def __init__(self, operation: str, message: str):
        super().__init__(f"{operation}: {message}")
        self.operation = operation
        self.message = message


class DuplicateRecordError(DataAccessError):
    """A unique constraint rejected the write."""


class ReferenceViolationError(DataAccessError):
    """A foreign key constraint rejected the write."""


class QueryError(DataAccessError):
    """Any other driver error raised while executing a statement."""


def translate_error(operation: str, exc: Exception) -> DataAccessError:
    """
    Map a psycopg2 exception onto the matching DataAccessError subclass.

    Args:
        operation: Name of the data-access operation that failed.
        exc: The exception raised by the driver.

    Returns:
        A DataAccessError ready to be raised.
    """
    message = getattr(exc, "pgerror", None) or str(exc)
    message = message.strip()
    if isinstance(exc, pg_errors.UniqueViolation):
        return DuplicateRecordError(operation, message)
    if isinstance(exc, pg_errors.ForeignKeyViolation):
        return ReferenceViolationError(operation, message)
    return QueryError(operation, message)
