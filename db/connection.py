"""
db/connection.py
----------------
Manages the PostgreSQL connection pool.
Uses psycopg2's ThreadedConnectionPool so concurrent callers can each
hold their own connection, and exposes scoped cursors/transactions that
always hand the connection back to the pool.
"""

import threading
from contextlib import contextmanager
from typing import Iterator, Optional

import psycopg2
from psycopg2 import extensions, extras, pool

from exceptions import ConnectivityError, QueryError
from utils.logger import get_logger

logger = get_logger(__name__)


@contextmanager
def translate_errors(context: str) -> Iterator[None]:
    """
    Convert psycopg2 errors raised inside the block into backend errors.

    Args:
        context: Short description of the operation, used as message prefix.

    Raises:
        ConnectivityError: On connection-level failures.
        QueryError: When the server rejected a statement.
    """
    try:
        yield
    except extensions.TransactionRollbackError as e:
        # Deadlock / serialization failure: the server aborted the statement
        logger.error(f"{context}: transaction aborted: {e}")
        raise QueryError(f"{context}: {e}") from e
    except (psycopg2.OperationalError, psycopg2.InterfaceError, pool.PoolError) as e:
        logger.error(f"{context}: connection failure: {e}")
        raise ConnectivityError(f"{context}: {e}") from e
    except psycopg2.Error as e:
        logger.error(f"{context}: query failed: {e}")
        raise QueryError(f"{context}: {e}") from e


class Database:
    """
    Connection pool plus scoped access to it.

    One instance is created by the composition root and passed to every
    service; nothing in the package reaches for a global connection.
    """

    def __init__(self, dsn: str, min_conn: int = 1, max_conn: int = 10):
        self.dsn = dsn
        self.min_conn = min_conn
        self.max_conn = max_conn
        self._pool: Optional[pool.ThreadedConnectionPool] = None
        # getconn() fails outright when the pool is exhausted; callers wait here instead
        self._slots = threading.BoundedSemaphore(max_conn)

    def open(self) -> None:
        """
        Initialize the database connection pool.

        Raises:
            ConnectivityError: If the database is unreachable.
        """
        if self._pool is not None:
            return
        try:
            self._pool = pool.ThreadedConnectionPool(self.min_conn, self.max_conn, self.dsn)
            logger.info("Database connection pool initialized successfully.")
        except psycopg2.OperationalError as e:
            logger.error(f"Failed to initialize database pool: {e}")
            raise ConnectivityError(f"Couldn't open connection: {e}") from e

    def close(self) -> None:
        """Close all connections in the pool."""
        if self._pool is not None:
            self._pool.closeall()
            self._pool = None
            logger.info("Database connection pool closed.")

    def __enter__(self) -> "Database":
        self.open()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ── Scoped access ─────────────────────────────────────

    @contextmanager
    def connection(self, context: str = "Database operation"):
        """
        Borrow a connection for the duration of the block.

        Blocks while all ``max_conn`` connections are borrowed. The pool
        rolls back any transaction left open when the connection is returned.
        """
        if self._pool is None:
            raise ConnectivityError("Database pool not initialized. Call open() first.")
        self._slots.acquire()
        try:
            with translate_errors(context):
                conn = self._pool.getconn()
        except Exception:
            self._slots.release()
            raise
        try:
            with translate_errors(context):
                yield conn
        finally:
            self._pool.putconn(conn)
            self._slots.release()

    @contextmanager
    def cursor(self, context: str = "Database query"):
        """Yield a dict-row cursor for read-only queries."""
        with self.connection(context) as conn:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                yield cur

    @contextmanager
    def transaction(self, context: str = "Database transaction"):
        """
        Yield a dict-row cursor inside a single transaction.

        Commits when the block exits normally; rolls back on any
        exception (driver or domain) and re-raises it.
        """
        with self.connection(context) as conn:
            try:
                with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                    yield cur
                conn.commit()
            except Exception:
                self._rollback(conn, context)
                raise

    @staticmethod
    def _rollback(conn, context: str) -> None:
        try:
            conn.rollback()
        except psycopg2.Error as e:
            # The connection is most likely dead; the original error is what matters.
            logger.error(f"{context}: rollback failed: {e}")
