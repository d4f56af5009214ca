"""tutodao: user management over SQL files and pooled connections."""

from tutodao._parse import ParsedSQL, parse_sql
from tutodao.config import DatabaseSettings, Settings
from tutodao.database import Database
from tutodao.dialect import Dialect
from tutodao.exceptions import (
    MappingError,
    PersistenceError,
    SqlFileNotFoundError,
    SqlParseError,
    TutodaoError,
)
from tutodao.loader import SqlLoader
from tutodao.mapper import PydanticMapper, RowMapper, create_mapper
from tutodao.models import User
from tutodao.pool import ConnectionProvider
from tutodao.presenter import ConsolePresenter, OutputPresenter
from tutodao.repository import InMemoryUserRepository, SqlUserRepository, UserRepository
from tutodao.schema import initialize_schema
from tutodao.service import DelegatingUserService, UserService

__all__ = [
    "ConnectionProvider",
    "ConsolePresenter",
    "Database",
    "DatabaseSettings",
    "DelegatingUserService",
    "Dialect",
    "InMemoryUserRepository",
    "MappingError",
    "OutputPresenter",
    "ParsedSQL",
    "PersistenceError",
    "PydanticMapper",
    "RowMapper",
    "Settings",
    "SqlFileNotFoundError",
    "SqlLoader",
    "SqlParseError",
    "SqlUserRepository",
    "TutodaoError",
    "User",
    "UserRepository",
    "UserService",
    "create_mapper",
    "initialize_schema",
    "parse_sql",
]
