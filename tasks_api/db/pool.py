"""
db/pool.py
----------
Manages the shared pool of database connections.

The SQLAlchemy engine's QueuePool does the blocking checkout (bounded by
``pool_timeout``). `ConnectionPool` adds explicit acquire/release, tracks the
connections it has handed out, and turns connection failures into
`PoolUnavailable`. Its lock covers that bookkeeping only; statements on
distinct connections run concurrently.
"""

import threading
from contextlib import contextmanager
from typing import Any, Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import DBAPIError, TimeoutError as PoolTimeoutError

from tasks_api.errors import PoolUnavailable
from tasks_api.utils.logger import get_logger

logger = get_logger(__name__)


class ConnectionPool:
    """Explicitly constructed, shareable handle over an engine's pool."""

    def __init__(self, engine: Engine):
        self._engine = engine
        self._lock = threading.Lock()
        self._checked_out: set[Connection] = set()
        self._closed = False
        logger.info(f"Database connection pool initialized for {engine.url.render_as_string()}")

    @classmethod
    def from_url(cls, url: str, **engine_options: Any) -> "ConnectionPool":
        """Create an engine for ``url`` and wrap its pool."""
        return cls(create_engine(url, **engine_options))

    @property
    def in_use(self) -> int:
        """Number of connections currently checked out."""
        with self._lock:
            return len(self._checked_out)

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    def acquire(self) -> Connection:
        """
        Check a connection out of the pool, blocking until one is free.

        Returns:
            A `sqlalchemy.engine.Connection` owned by the caller until
            `release` is called.

        Raises:
            PoolUnavailable: If the pool is closed, exhausted past its
                timeout, or the database cannot be reached.
        """
        with self._lock:
            if self._closed:
                raise PoolUnavailable("Connection pool is closed")

        try:
            conn = self._engine.connect()
        except PoolTimeoutError as e:
            logger.error(f"Timed out waiting for a database connection: {e}")
            raise PoolUnavailable("Connection pool exhausted") from e
        except DBAPIError as e:
            logger.error(f"Failed to connect to the database: {e}")
            raise PoolUnavailable("Database unreachable") from e

        with self._lock:
            if self._closed:
                conn.close()
                raise PoolUnavailable("Connection pool is closed")
            self._checked_out.add(conn)
        return conn

    def release(self, conn: Connection) -> None:
        """Return a connection obtained from `acquire` to the pool."""
        with self._lock:
            if conn not in self._checked_out:
                logger.warning("Ignoring release of a connection not checked out from this pool")
                return
            self._checked_out.discard(conn)
        conn.close()

    @contextmanager
    def connection(self) -> Iterator[Connection]:
        """Borrow a connection for the duration of a ``with`` block."""
        conn = self.acquire()
        try:
            yield conn
        finally:
            self.release(conn)

    def status(self) -> dict:
        with self._lock:
            return {
                "in_use": len(self._checked_out),
                "closed": self._closed,
                "pool": self._engine.pool.status(),
            }

    def close(self) -> None:
        """Dispose of every pooled connection. Safe to call twice."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._engine.dispose()
        logger.info("Database connection pool closed.")
