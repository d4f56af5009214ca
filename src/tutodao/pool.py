"""ConnectionProvider: pooled DB-API connections."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from types import TracebackType
from typing import Any

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import QueuePool

from tutodao.config import DatabaseSettings
from tutodao.dialect import Dialect


class ConnectionProvider:
    """Hands out pooled DB-API connections.

    The pool holds at most ``max_pool_size`` connections and never overflows;
    a caller waiting longer than ``pool_timeout`` gets a pool error.

    Examples:
        >>> with ConnectionProvider(DatabaseSettings()) as provider:
        ...     with provider.connection() as conn:
        ...         conn.cursor().execute("SELECT 1")

    """

    def __init__(self, settings: DatabaseSettings | None = None) -> None:
        self._settings = settings if settings is not None else DatabaseSettings()
        self._dialect = Dialect.from_driver(self._settings.driver)
        self._pool = QueuePool(
            self._connect,
            pool_size=self._settings.max_pool_size,
            max_overflow=0,
            timeout=self._settings.pool_timeout,
        )

    @property
    def dialect(self) -> Dialect:
        return self._dialect

    @property
    def settings(self) -> DatabaseSettings:
        return self._settings

    @property
    def error_types(self) -> tuple[type[Exception], ...]:
        """Exception classes raised by the driver and the pool."""
        if self._dialect is Dialect.POSTGRESQL:
            import psycopg

            return (psycopg.Error, SQLAlchemyError)
        return (sqlite3.Error, SQLAlchemyError)

    @contextmanager
    def connection(self) -> Iterator[Any]:
        """Check out a connection and return it to the pool on exit."""
        conn = self._pool.connect()
        try:
            yield conn
        finally:
            conn.close()

    def checked_out(self) -> int:
        """Number of connections currently in use."""
        return self._pool.checkedout()

    def dispose(self) -> None:
        """Close every pooled connection."""
        self._pool.dispose()

    def __enter__(self) -> ConnectionProvider:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.dispose()

    def _connect(self) -> Any:
        logger.debug("Opening {} connection to {}", self._dialect.dialect_id, self._settings.url)
        if self._dialect is Dialect.POSTGRESQL:
            return self._connect_postgresql()
        return self._connect_sqlite()

    def _connect_sqlite(self) -> sqlite3.Connection:
        s = self._settings
        if s.username or s.password:
            logger.debug("sqlite ignores credentials")
        # isolation_level=None puts sqlite3 in autocommit mode
        isolation_level = None if s.auto_commit else (s.isolation_level or "DEFERRED")
        return sqlite3.connect(
            s.url,
            isolation_level=isolation_level,
            timeout=s.pool_timeout,
            uri=s.url.startswith("file:"),
        )

    def _connect_postgresql(self) -> Any:
        import psycopg

        s = self._settings
        kwargs: dict[str, Any] = {"autocommit": s.auto_commit}
        if s.username is not None:
            kwargs["user"] = s.username
        if s.password is not None:
            kwargs["password"] = s.password.get_secret_value()
        conn = psycopg.connect(s.url, **kwargs)
        if s.isolation_level:
            conn.isolation_level = psycopg.IsolationLevel[s.isolation_level.upper()]
        return conn
