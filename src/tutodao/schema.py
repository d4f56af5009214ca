"""Table creation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from tutodao.database import Database


def initialize_schema(db: Database) -> None:
    """Create the ``tuser`` table if it does not exist yet."""
    db.execute("users/create_table.sql")
    logger.debug("Schema ready")
