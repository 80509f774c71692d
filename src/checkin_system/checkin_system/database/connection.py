from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

import mysql.connector
from mysql.connector import pooling

from ..core.constants import DEFAULT_POOL_SIZE, DEFAULT_POOL_TIMEOUT
from ..core.exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str


class PooledConnection:
    """A borrowed pool connection; close() returns it and frees the slot."""

    def __init__(self, conn, slots: threading.BoundedSemaphore):
        self._conn = conn
        self._slots = slots
        self._released = False

    def close(self) -> None:
        if self._released:
            return
        self._released = True
        try:
            self._conn.close()
        finally:
            self._slots.release()

    def __getattr__(self, name):
        return getattr(self._conn, name)


class DatabaseConnection:
    """Connection pool owned by the application container.

    The pool is opened once when the container is built; repositories borrow a
    connection per operation and closing it hands it back to the pool.
    mysql-connector's pool fails at once when it is exhausted, so callers queue
    on a semaphore sized like the pool and give up after ``pool_timeout``.
    """

    def __init__(
        self,
        config: DBConfig,
        *,
        pool_size: int = DEFAULT_POOL_SIZE,
        pool_name: str = "checkin_pool",
        pool_timeout: float = DEFAULT_POOL_TIMEOUT,
    ):
        self._config = config
        self._pool_size = int(pool_size)
        self._pool_name = pool_name
        self._pool_timeout = float(pool_timeout)
        self._slots = threading.BoundedSemaphore(self._pool_size)
        self._pool: pooling.MySQLConnectionPool | None = None

    @property
    def config(self) -> DBConfig:
        return self._config

    def open(self) -> "DatabaseConnection":
        if self._pool is not None:
            return self
        try:
            self._pool = pooling.MySQLConnectionPool(
                pool_name=self._pool_name,
                pool_size=self._pool_size,
                host=self._config.host,
                port=int(self._config.port),
                user=self._config.user,
                password=self._config.password,
                database=self._config.database,
            )
        except mysql.connector.Error as exc:
            logger.error("Cannot open connection pool for %s: %s", self.describe(), exc)
            raise StoreUnavailableError() from exc
        logger.info("Connection pool ready (%s, size=%d)", self.describe(), self._pool_size)
        return self

    def connect(self, *, timeout: float | None = None) -> PooledConnection:
        if self._pool is None:
            raise StoreUnavailableError("Database connection pool is not open")

        wait = self._pool_timeout if timeout is None else timeout
        if not self._slots.acquire(timeout=wait):
            logger.error("No free connection in pool %s after %.1fs", self._pool_name, wait)
            raise StoreUnavailableError()
        try:
            conn = self._pool.get_connection()
        except BaseException:
            self._slots.release()
            raise
        return PooledConnection(conn, self._slots)

    def ping(self) -> bool:
        """Readiness probe: borrow a connection and run a trivial query."""
        if self._pool is None:
            return False
        try:
            conn = self.connect()
        except (mysql.connector.Error, StoreUnavailableError):
            return False
        try:
            cur = conn.cursor()
            try:
                cur.execute("SELECT 1")
                cur.fetchall()
            finally:
                cur.close()
            return True
        except mysql.connector.Error:
            return False
        finally:
            conn.close()

    def describe(self) -> str:
        c = self._config
        return f"{c.user}@{c.host}:{c.port}/{c.database}"
