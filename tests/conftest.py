"""pytest shared setup: database fixtures."""

from __future__ import annotations

import os
from collections.abc import Generator
from pathlib import Path

import pytest

from tutodao import (
    ConnectionProvider,
    Database,
    DatabaseSettings,
    SqlUserRepository,
    initialize_schema,
)

POSTGRESQL_URL = os.environ.get(
    "TUTODAO_TEST_POSTGRESQL_URL",
    "host=localhost port=5432 dbname=tutodao_test user=tutodao password=tutodao_test_pass",
)


def _can_connect_postgresql() -> bool:
    """Whether a PostgreSQL server is reachable."""
    try:
        import psycopg

        conn = psycopg.connect(POSTGRESQL_URL, connect_timeout=3)
        conn.close()
    except Exception:
        return False
    return True


_pg_available: bool | None = None


def _is_pg_available() -> bool:
    global _pg_available
    if _pg_available is None:
        _pg_available = _can_connect_postgresql()
    return _pg_available


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip postgresql-marked tests when no server is reachable."""
    for item in items:
        if "postgresql" in item.keywords and not _is_pg_available():
            item.add_marker(pytest.mark.skip(reason="PostgreSQL is not available"))


@pytest.fixture
def sqlite_settings(tmp_path: Path) -> DatabaseSettings:
    """File-backed SQLite settings private to one test."""
    return DatabaseSettings(
        url=str(tmp_path / "tutodao.db"),
        driver="sqlite",
        max_pool_size=2,
        pool_timeout=0.5,
    )


@pytest.fixture
def provider(sqlite_settings: DatabaseSettings) -> Generator[ConnectionProvider, None, None]:
    with ConnectionProvider(sqlite_settings) as provider:
        yield provider


@pytest.fixture
def db(provider: ConnectionProvider) -> Database:
    """Database with the tuser table created."""
    database = Database(provider)
    initialize_schema(database)
    return database


@pytest.fixture
def repository(db: Database) -> SqlUserRepository:
    return SqlUserRepository(db)


@pytest.fixture
def postgresql_url() -> str:
    return POSTGRESQL_URL
