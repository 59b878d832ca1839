"""
db/connection.py
----------------
Manages the PostgreSQL connection pool.
Uses psycopg2's ThreadedConnectionPool for efficient connection reuse.

The pool lives inside a `Database` handle that the application opens at
start-up and closes at shutdown; repositories receive the handle explicitly.
"""

from contextlib import contextmanager
from typing import Any, Iterator, Optional, Sequence, Mapping, Union

import psycopg2
from psycopg2 import pool, extras

from config import DATABASE_URL, DB_POOL_MIN, DB_POOL_MAX
from db.errors import translate_error
from utils.logger import get_logger

logger = get_logger(__name__)

Params = Union[Sequence[Any], Mapping[str, Any]]


class Database:
    """Handle owning a pool of PostgreSQL connections."""

    def __init__(
        self,
        dsn: str = DATABASE_URL,
        min_conn: int = DB_POOL_MIN,
        max_conn: int = DB_POOL_MAX,
    ):
        self.dsn = dsn
        self.min_conn = min_conn
        self.max_conn = max_conn
        self._pool: Optional[pool.ThreadedConnectionPool] = None

    # ── LIFECYCLE ─────────────────────────────────────────

    @property
    def is_open(self) -> bool:
        return self._pool is not None

    def open(self) -> None:
        """
        Create the connection pool.

        Raises:
            psycopg2.OperationalError: If the database is unreachable.
        """
        if self._pool is not None:
            return
        try:
            self._pool = pool.ThreadedConnectionPool(self.min_conn, self.max_conn, self.dsn)
            logger.info("Database connection pool initialized successfully.")
        except psycopg2.OperationalError as e:
            logger.error(f"Failed to initialize database pool: {e}")
            raise

    def close(self) -> None:
        """Close all connections in the pool."""
        if self._pool is not None:
            self._pool.closeall()
            self._pool = None
            logger.info("Database connection pool closed.")

    def __enter__(self) -> "Database":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ── CONNECTIONS ───────────────────────────────────────

    @contextmanager
    def connection(self) -> Iterator[Any]:
        """
        Borrow a connection from the pool for the duration of the block.

        Raises:
            RuntimeError: If the pool has not been opened.
        """
        if self._pool is None:
            raise RuntimeError("Database pool not initialized. Call open() first.")
        conn = self._pool.getconn()
        try:
            yield conn
        finally:
            # Dropped connections are discarded instead of reused
            self._pool.putconn(conn, close=bool(conn.closed))

    def execute(
        self,
        operation: str,
        sql: str,
        params: Params = (),
        fetch: str = "one",
    ):
        """
        Run a single statement and return its rows as dicts.

        Args:
            operation: Name used in logs and errors (e.g. 'add_user').
            sql: The parameterized statement.
            params: Positional sequence or named mapping of bound values.
            fetch: 'one' for the first row (or None), 'all' for every row.

        Returns:
            A dict, None, or a list of dicts depending on `fetch`.

        Raises:
            DataAccessError: If the driver rejects the statement.
        """
        with self.connection() as conn:
            try:
                with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                    cur.execute(sql, params)
                    if fetch == "all":
                        result = [dict(r) for r in cur.fetchall()]
                    else:
                        row = cur.fetchone()
                        result = dict(row) if row is not None else None
                conn.commit()
                return result
            except psycopg2.Error as e:
                logger.error(f"{operation} failed: {e}")
                try:
                    conn.rollback()
                except psycopg2.Error as rollback_error:
                    logger.error(f"{operation} rollback failed: {rollback_error}")
                raise translate_error(operation, e) from e
