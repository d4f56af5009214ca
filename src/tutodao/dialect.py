"""Dialect enum: SQL dialect per supported driver."""

from __future__ import annotations

from enum import Enum


class Dialect(Enum):
    """SQL dialect of a supported driver.

    The first value is the driver identifier used in configuration and in
    dialect-specific SQL file names (``insert.sql-postgresql``).
    """

    SQLITE = ("sqlite", "?")
    POSTGRESQL = ("postgresql", "%s")

    def __init__(self, dialect_id: str, placeholder_fmt: str) -> None:
        self._dialect_id = dialect_id
        self._placeholder_fmt = placeholder_fmt

    @property
    def dialect_id(self) -> str:
        """Driver identifier."""
        return self._dialect_id

    @property
    def placeholder(self) -> str:
        """Bind placeholder of the driver's paramstyle."""
        return self._placeholder_fmt

    @classmethod
    def from_driver(cls, driver: str) -> Dialect:
        """Return the dialect for a driver identifier.

        Raises:
            ValueError: the driver is not supported

        """
        for member in cls:
            if member.dialect_id == driver.lower():
                return member
        supported = sorted(m.dialect_id for m in cls)
        msg = f"Unsupported driver: {driver!r}. Must be one of {supported}"
        raise ValueError(msg)
