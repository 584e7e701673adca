from __future__ import annotations

import re
from typing import Any, Mapping

_IDENTIFIER_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")


def _validate_identifier(name: str, identifier_type: str = "identifier") -> str:
    """
    Validate that an identifier (table/column name) is safe for SQL interpolation.

    Identifiers cannot be bound as parameters, so table, column and primary
    key names supplied on the command line are checked here before they are
    placed into a statement.

    MySQL identifiers can contain letters, digits, underscores, and dollar signs,
    but we restrict to alphanumeric + underscore. Table prefixes such as
    ``mysite_`` therefore pass.

    Args:
        name: The identifier to validate
        identifier_type: Description of the identifier (for error messages)

    Returns:
        The validated identifier (unchanged if valid)

    Raises:
        TypeError: If identifier is not a string
        ValueError: If identifier contains unsafe characters or is invalid

    Example:
        >>> _validate_identifier("wp_postmeta", "table")
        'wp_postmeta'
        >>> _validate_identifier("'; DROP TABLE--", "table")
        ValueError: Invalid table '; DROP TABLE--': ...
    """
    if not isinstance(name, str):
        raise TypeError(f"{identifier_type} must be a string, got {type(name).__name__}")

    if not name:
        raise ValueError(f"{identifier_type} cannot be empty")

    if not _IDENTIFIER_RE.match(name):
        raise ValueError(
            f"Invalid {identifier_type} {name!r}: "
            "must start with letter/underscore and contain only alphanumeric characters and underscores"
        )

    if len(name) > 64:
        raise ValueError(f"{identifier_type} {name!r} exceeds MySQL's 64-character limit")

    return name


def build_update(
    table: str,
    set_values: Mapping[str, Any],
    where_values: Mapping[str, Any],
) -> tuple[str, dict[str, Any]]:
    """
    Build a parameterized ``UPDATE`` statement.

    Columns are sorted so the generated SQL is deterministic. SET and WHERE
    values get distinct parameter names, so the same column may appear in both.
    """
    table = _validate_identifier(table, "table")
    if not set_values:
        raise ValueError("set_values cannot be empty")
    if not where_values:
        raise ValueError("where_values cannot be empty; refusing unbounded UPDATE")

    params: dict[str, Any] = {}
    set_clauses = []
    for i, (col, val) in enumerate(sorted(set_values.items())):
        col = _validate_identifier(col, "column name")
        param_name = f"set_{i}"
        set_clauses.append(f"{col} = :{param_name}")
        params[param_name] = val

    where_clauses = []
    for i, (col, val) in enumerate(sorted(where_values.items())):
        col = _validate_identifier(col, "column name")
        param_name = f"where_{i}"
        where_clauses.append(f"{col} = :{param_name}")
        params[param_name] = val

    set_sql = ", ".join(set_clauses)
    where_sql = " AND ".join(where_clauses)
    return f"UPDATE {table} SET {set_sql} WHERE {where_sql}", params


def _parse_sql_operation(sql: str) -> tuple[str, str]:
    """
    Best-effort extraction of (table, op_type) from a SQL statement for metrics.

    Returns ("unknown", "unknown") when the statement is not recognised.
    """
    match = re.match(
        r"\s*(SELECT\b.*?\bFROM|UPDATE|INSERT\s+INTO|DELETE\s+FROM)\s+`?(\w+)`?",
        sql,
        re.IGNORECASE | re.DOTALL,
    )
    if not match:
        return "unknown", "unknown"
    op_type = match.group(1).split()[0].lower()
    return match.group(2), op_type
