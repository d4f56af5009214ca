"""Database: SQL file execution over pooled connections."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar

from loguru import logger

from tutodao._parse import parse_sql
from tutodao.exceptions import PersistenceError
from tutodao.loader import SQL_DIR, SqlLoader
from tutodao.mapper import create_mapper

if TYPE_CHECKING:
    from tutodao.mapper import RowMapper
    from tutodao.pool import ConnectionProvider

T = TypeVar("T")


class Database:
    """Loads, binds, runs and maps SQL files.

    Every call checks out its own connection and returns it before the call
    ends. Writes are committed before the connection goes back to the pool and
    rolled back on failure; no transaction spans two calls.

    Driver and pool errors surface as ``PersistenceError`` with the original
    exception chained.

    Examples:
        >>> db = Database(provider)
        >>> users = db.query(User, "users/find_all.sql")
        >>> user = db.query_one(User, "users/find_by_id.sql", {"id": "..."})
        >>> affected = db.execute("users/delete.sql", {"id": "..."})

    """

    def __init__(
        self,
        provider: ConnectionProvider,
        *,
        sql_dir: str | Path = SQL_DIR,
    ) -> None:
        """Initialize.

        Args:
            provider: pooled connection source
            sql_dir: base directory of SQL files

        """
        self._provider = provider
        self._loader = SqlLoader(sql_dir)

    @property
    def provider(self) -> ConnectionProvider:
        return self._provider

    def query(
        self,
        entity: type[T],
        sql_path: str,
        params: dict[str, Any] | None = None,
        *,
        mapper: RowMapper[T] | None = None,
    ) -> list[T]:
        """Run a SELECT and return every row as an entity.

        Args:
            entity: entity class
            sql_path: SQL file path relative to sql_dir
            params: parameter values by name
            mapper: custom mapper (chosen automatically when omitted)

        Returns:
            List of entities

        """
        rows = self._execute_query(sql_path, params)
        row_mapper = create_mapper(entity, mapper=mapper)
        return row_mapper.map_rows(rows)

    def query_one(
        self,
        entity: type[T],
        sql_path: str,
        params: dict[str, Any] | None = None,
        *,
        mapper: RowMapper[T] | None = None,
    ) -> T | None:
        """Run a SELECT and return the first row as an entity, or None."""
        rows = self._execute_query(sql_path, params)
        if not rows:
            return None
        row_mapper = create_mapper(entity, mapper=mapper)
        return row_mapper.map_row(rows[0])

    def execute(
        self,
        sql_path: str,
        params: dict[str, Any] | None = None,
    ) -> int:
        """Run an INSERT/UPDATE/DELETE (or DDL) and return the affected row count."""
        sql, bind_params = self._bind(sql_path, params)
        with self._connection() as conn:
            cursor = conn.cursor()
            try:
                cursor.execute(sql, bind_params)
                affected = cursor.rowcount
            except Exception:
                conn.rollback()
                raise
            finally:
                cursor.close()
            conn.commit()
        return affected

    def _execute_query(
        self,
        sql_path: str,
        params: dict[str, Any] | None,
    ) -> list[dict[str, Any]]:
        """Run a SELECT and return rows as dicts keyed by column name."""
        sql, bind_params = self._bind(sql_path, params)
        with self._connection() as conn:
            cursor = conn.cursor()
            try:
                cursor.execute(sql, bind_params)
                if cursor.description is None:
                    return []
                columns = [desc[0] for desc in cursor.description]
                return [dict(zip(columns, row)) for row in cursor.fetchall()]
            finally:
                cursor.close()

    def _bind(self, sql_path: str, params: dict[str, Any] | None) -> tuple[str, list[Any]]:
        dialect = self._provider.dialect
        sql_template = self._loader.load(sql_path, dialect=dialect)
        result = parse_sql(sql_template, params or {}, dialect=dialect)
        logger.debug("{}: {} {}", sql_path, result.sql, result.params)
        return result.sql, result.params

    @contextmanager
    def _connection(self) -> Iterator[Any]:
        """Check out a connection, translating driver errors."""
        try:
            with self._provider.connection() as conn:
                yield conn
        except self._provider.error_types as e:
            msg = f"Database operation failed: {e}"
            raise PersistenceError(msg) from e
