"""parse_sql: bind comment parameters in a two-way SQL template."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from tutodao.dialect import Dialect
from tutodao.exceptions import SqlParseError

# /* name */'default' or /* $name */'default'
PARAM_PATTERN = re.compile(
    r"/\*\s*\$?(\w+)\s*\*/\s*"
    r"("
    r"'[^']*'"  # 'string'
    r'|"[^"]*"'  # "string"
    r"|\d+(?:\.\d+)?"  # number
    r"|\w+"  # identifier
    r"|NULL"
    r")?"
)


@dataclass
class ParsedSQL:
    """Bound SQL ready for ``cursor.execute``."""

    sql: str
    params: list[Any] = field(default_factory=list)


def parse_sql(
    sql: str,
    params: dict[str, Any],
    *,
    dialect: Dialect = Dialect.SQLITE,
) -> ParsedSQL:
    """Replace each ``/* name */default`` marker with a placeholder.

    The default literal after the marker only keeps the file runnable in a SQL
    console and is dropped. Values are bound positionally in marker order.

    Args:
        sql: SQL template
        params: parameter values by name
        dialect: SQL dialect whose placeholder replaces each marker

    Returns:
        Bound SQL and positional parameters

    Raises:
        SqlParseError: the template references a name missing from params

    """
    marker = dialect.placeholder
    bind_params: list[Any] = []

    def _bind(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in params:
            msg = f"Missing parameter: {name!r}"
            raise SqlParseError(msg)
        bind_params.append(params[name])
        return marker

    bound = PARAM_PATTERN.sub(_bind, sql)
    return ParsedSQL(sql=bound.strip().rstrip(";"), params=bind_params)
