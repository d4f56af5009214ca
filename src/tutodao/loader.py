"""SqlLoader: SQL templates shipped as files."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from tutodao.exceptions import SqlFileNotFoundError

if TYPE_CHECKING:
    from tutodao.dialect import Dialect

SQL_DIR = Path(__file__).parent / "sql"


class SqlLoader:
    """Reads SQL templates below a base directory and keeps them in memory.

    A template is read from disk once per (path, dialect); repository calls
    reuse the cached text.
    """

    def __init__(self, base_path: str | Path = SQL_DIR) -> None:
        self.base_path = Path(base_path).resolve()
        self._cache: dict[tuple[str, Dialect | None], str] = {}

    def load(self, path: str, *, dialect: Dialect | None = None) -> str:
        """Return the template at ``path``.

        ``users/insert.sql-postgresql`` wins over ``users/insert.sql`` when the
        dialect is PostgreSQL.

        Raises:
            SqlFileNotFoundError: no readable file below base_path matches

        """
        key = (path, dialect)
        if key not in self._cache:
            self._cache[key] = self._locate(path, dialect).read_text(encoding="utf-8")
        return self._cache[key]

    def _locate(self, path: str, dialect: Dialect | None) -> Path:
        candidates = [f"{path}-{dialect.dialect_id}"] if dialect is not None else []
        candidates.append(path)
        for candidate in candidates:
            file_path = (self.base_path / candidate).resolve()
            # resolve() collapses "..", so escaping paths fail this check
            if file_path.is_relative_to(self.base_path) and file_path.is_file():
                return file_path
        msg = f"SQL file not found: {self.base_path / path}"
        raise SqlFileNotFoundError(msg)
