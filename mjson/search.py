from __future__ import annotations

import logging

from .db.client import DbClient
from .db.models import MatchedRow, SearchSpec
from .errors import RefusedError

logger = logging.getLogger(__name__)

LIKE_ESCAPE_CHAR = "!"

EXCERPT_LEAD = 30
EXCERPT_WIDTH = 74


def escape_like(fragment: str) -> str:
    """
    Escape the LIKE wildcards in ``fragment`` with ``!``.

    Backslashes are left alone: JSON fragments are full of them, which is why
    ``!`` rather than the default ``\\`` is the escape character.

    Raises:
        RefusedError: If the fragment itself contains ``!``
    """
    if LIKE_ESCAPE_CHAR in fragment:
        raise RefusedError(
            f"unsafe search pattern: {fragment!r} contains the LIKE escape "
            f"character {LIKE_ESCAPE_CHAR!r}"
        )
    return fragment.replace("%", "!%").replace("_", "!_")


def find_rows(client: DbClient, spec: SearchSpec, fragment: str) -> list[MatchedRow]:
    """
    Return the rows whose column contains ``fragment``.

    ``fragment`` is matched as given; callers JSON-escape it first when the
    column holds encoded values. Rows come back in database order.

    Raises:
        RefusedError: If ``fragment`` contains the LIKE escape character.
            No query is issued.
    """
    pattern = f"%{escape_like(fragment)}%"
    sql = (
        f"SELECT {spec.primary_key}, {spec.column} FROM {spec.table} "
        f"WHERE {spec.column} LIKE :pattern ESCAPE '{LIKE_ESCAPE_CHAR}'"
    )
    logger.debug("searching %s.%s for %r", spec.table, spec.column, fragment)
    rows = client.query(sql, {"pattern": pattern})
    return [
        MatchedRow(
            primary_key_value=row[spec.primary_key],
            column_value=row[spec.column] or "",
        )
        for row in rows
    ]


def render_excerpt(value: str, fragment: str) -> str:
    """
    Cut a fixed-width window around the first occurrence of ``fragment``.

    The window opens 30 characters before the match and spans 74 characters,
    or the whole match if that is longer. Both ends are clamped to the value.
    """
    position = value.find(fragment)
    if position < 0:
        # matched by a case-insensitive collation only
        position = 0
    start = max(position - EXCERPT_LEAD, 0)
    end = min(max(start + EXCERPT_WIDTH, position + len(fragment)), len(value))
    return f"...{value[start:end]}..."
