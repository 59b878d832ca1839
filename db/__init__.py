"""
db/ - Database Layer
====================
Handles the PostgreSQL connection pool, statement execution and error translation.
This layer is the lowest in the architecture and has no dependencies on other layers.
"""

from db.connection import Database
from db.errors import (
    DataAccessError,
    DuplicateRecordError,
    QueryError,
    ReferenceViolationError,
)

__all__ = [
    "Database",
    "DataAccessError",
    "DuplicateRecordError",
    "QueryError",
    "ReferenceViolationError",
]
