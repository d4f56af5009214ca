"""SQLite integration tests: pool → SQL file → bind → execute → mapping."""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Any
from uuid import uuid4

import pytest
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from tutodao import (
    ConnectionProvider,
    Database,
    DatabaseSettings,
    Dialect,
    MappingError,
    PersistenceError,
    SqlFileNotFoundError,
    SqlParseError,
    SqlUserRepository,
    User,
    initialize_schema,
)


class ColumnMapper:
    """Maps each row to the value of one column."""

    def __init__(self, column: str) -> None:
        self.column = column

    def map_row(self, row: dict[str, Any]) -> Any:
        return row[self.column]

    def map_rows(self, rows: list[dict[str, Any]]) -> list[Any]:
        return [self.map_row(row) for row in rows]


def _insert_raw(provider: ConnectionProvider, user_id: str, name: str, email: str) -> None:
    with provider.connection() as conn:
        conn.execute("INSERT INTO tuser (id, name, email) VALUES (?, ?, ?)", (user_id, name, email))
        conn.commit()


class TestConnectionProvider:
    def test_dialect_follows_driver(self, provider: ConnectionProvider) -> None:
        assert provider.dialect is Dialect.SQLITE

    def test_connection_is_returned(self, provider: ConnectionProvider) -> None:
        with provider.connection():
            assert provider.checked_out() == 1
        assert provider.checked_out() == 0

    def test_connection_is_returned_on_error(self, provider: ConnectionProvider) -> None:
        with pytest.raises(RuntimeError), provider.connection():
            raise RuntimeError("boom")
        assert provider.checked_out() == 0

    def test_pool_size_is_enforced(self, sqlite_settings: DatabaseSettings) -> None:
        """A checkout beyond max_pool_size times out."""
        settings = sqlite_settings.model_copy(update={"max_pool_size": 1, "pool_timeout": 0.1})
        with ConnectionProvider(settings) as provider, provider.connection():
            with pytest.raises(PoolTimeoutError), provider.connection():
                pass

    def test_shared_memory_database(self) -> None:
        """Pooled connections to a shared-cache URI see the same tables."""
        settings = DatabaseSettings(url=f"file:test-{uuid4()}?mode=memory&cache=shared")
        with ConnectionProvider(settings) as provider:
            db = Database(provider)
            initialize_schema(db)
            repo = SqlUserRepository(db)
            user = User(name="John Doe", email="johndoe@example.com")
            with provider.connection():
                # a second connection is used while the first is held
                assert repo.create(user) == user
            assert repo.get_by_id(user.id) == user

    def test_manual_commit_mode(self, sqlite_settings: DatabaseSettings) -> None:
        """Writes are committed when auto_commit is off."""
        settings = sqlite_settings.model_copy(
            update={"auto_commit": False, "isolation_level": "IMMEDIATE"}
        )
        with ConnectionProvider(settings) as provider:
            db = Database(provider)
            initialize_schema(db)
            user = User(name="John Doe", email="johndoe@example.com")
            assert SqlUserRepository(db).create(user) == user

        conn = sqlite3.connect(settings.url)
        try:
            rows = conn.execute("SELECT id, name FROM tuser").fetchall()
        finally:
            conn.close()
        assert rows == [(str(user.id), "John Doe")]


class TestDatabase:
    def test_execute_returns_affected_rows(self, db: Database) -> None:
        user = User(name="a", email="a@x")
        params = {"id": str(user.id), "name": user.name, "email": user.email}
        assert db.execute("users/insert.sql", params) == 1
        assert db.execute("users/update.sql", params) == 1
        assert db.execute("users/delete.sql", {"id": str(uuid4())}) == 0

    def test_id_is_stored_as_text(self, db: Database) -> None:
        user = User(name="a", email="a@x")
        db.execute("users/insert.sql", {"id": str(user.id), "name": "a", "email": "a@x"})
        with db.provider.connection() as conn:
            stored = conn.execute("SELECT id FROM tuser").fetchone()[0]
        assert stored == str(user.id)

    def test_query_one_without_rows(self, db: Database) -> None:
        assert db.query_one(User, "users/find_by_id.sql", {"id": str(uuid4())}) is None

    def test_query_with_custom_mapper(self, db: Database, provider: ConnectionProvider) -> None:
        _insert_raw(provider, str(uuid4()), "Jane Doe", "jane@example.com")
        names = db.query(User, "users/find_all.sql", mapper=ColumnMapper("name"))
        assert names == ["Jane Doe"]

    def test_schema_is_idempotent(self, db: Database) -> None:
        initialize_schema(db)
        assert db.query(User, "users/find_all.sql") == []

    def test_driver_error_is_wrapped(self, provider: ConnectionProvider) -> None:
        """Querying a missing table raises PersistenceError chained to the driver error."""
        db = Database(provider)
        with pytest.raises(PersistenceError) as exc_info:
            db.query(User, "users/find_all.sql")
        assert isinstance(exc_info.value.__cause__, sqlite3.OperationalError)
        assert provider.checked_out() == 0

    def test_bad_row_raises_mapping_error(self, db: Database, provider: ConnectionProvider) -> None:
        _insert_raw(provider, "not-a-uuid", "Broken", "broken@example.com")
        with pytest.raises(MappingError):
            db.query(User, "users/find_all.sql")

    def test_missing_parameter_is_not_wrapped(self, db: Database) -> None:
        with pytest.raises(SqlParseError):
            db.execute("users/delete.sql", {})

    def test_missing_sql_file(self, db: Database) -> None:
        with pytest.raises(SqlFileNotFoundError):
            db.execute("users/truncate.sql")

    def test_custom_sql_dir(self, provider: ConnectionProvider, tmp_path: Path) -> None:
        sql_dir = tmp_path / "sql"
        sql_dir.mkdir()
        (sql_dir / "count.sql").write_text("SELECT /* n */1 AS n", encoding="utf-8")
        db = Database(provider, sql_dir=sql_dir)
        rows = db.query(User, "count.sql", {"n": 7}, mapper=ColumnMapper("n"))
        assert rows == [7]


class TestRepositoryErrorPolicy:
    """Persistence failures become empty results instead of exceptions."""

    @pytest.fixture
    def broken_repo(self, provider: ConnectionProvider) -> SqlUserRepository:
        # no initialize_schema: every statement fails on the missing table
        return SqlUserRepository(Database(provider))

    def test_create(self, broken_repo: SqlUserRepository) -> None:
        assert broken_repo.create(User(name="a", email="a@x")) is None

    def test_get_by_id(self, broken_repo: SqlUserRepository) -> None:
        assert broken_repo.get_by_id(uuid4()) is None

    def test_get_all(self, broken_repo: SqlUserRepository) -> None:
        assert broken_repo.get_all() == []

    def test_update(self, broken_repo: SqlUserRepository) -> None:
        assert broken_repo.update(User(name="a", email="a@x")) is None

    def test_delete(self, broken_repo: SqlUserRepository) -> None:
        assert broken_repo.delete(uuid4()) is False

    def test_unmappable_rows(self, repository: SqlUserRepository, provider: ConnectionProvider) -> None:
        _insert_raw(provider, "not-a-uuid", "Broken", "broken@example.com")
        assert repository.get_all() == []

    def test_pool_exhaustion(self, sqlite_settings: DatabaseSettings) -> None:
        settings = sqlite_settings.model_copy(update={"max_pool_size": 1, "pool_timeout": 0.1})
        with ConnectionProvider(settings) as provider:
            db = Database(provider)
            initialize_schema(db)
            repo = SqlUserRepository(db)
            with provider.connection():
                assert repo.get_all() == []
                assert repo.create(User(name="a", email="a@x")) is None
