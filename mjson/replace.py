from __future__ import annotations

import logging

from .db.client import DbClient
from .db.metrics import observe_replacements
from .db.models import ReplaceResult, SearchSpec
from .errors import DatabaseError, PartialReplaceError
from .escape import encode_fragment
from .search import find_rows

logger = logging.getLogger(__name__)


def replace(
    client: DbClient,
    spec: SearchSpec,
    search: str,
    replacement: str,
    encode_as_json: bool = True,
    label: str | None = None,
) -> ReplaceResult:
    """
    Replace every occurrence of ``search`` in the column named by ``spec``.

    With ``encode_as_json`` both strings are JSON-escaped first, so a literal
    like ``http://a.com`` matches the stored ``http:\\/\\/a.com``. Each changed
    row gets its own UPDATE keyed by the primary key; rows with no exact
    occurrence are not written.

    Counts are accumulated under ``label`` (the column name by default).

    There is no transaction around the pass. If an update fails, rows already
    written stay written and PartialReplaceError reports how far the pass got.
    Concurrent writers to the same rows are not guarded against.

    Raises:
        RefusedError: If the escaped search string contains ``!``
        PartialReplaceError: If an update fails part way through
        DatabaseError: If the search query fails
    """
    if encode_as_json:
        search = encode_fragment(search)
        replacement = encode_fragment(replacement)

    key = label or spec.column
    result = ReplaceResult()

    if not search:
        logger.warning("empty search string; nothing to replace")
        return result

    rows = find_rows(client, spec, search)
    logger.info(
        "replacing %r with %r in %s.%s: %d candidate rows",
        search,
        replacement,
        spec.table,
        spec.column,
        len(rows),
    )

    for index, row in enumerate(rows):
        count = row.column_value.count(search)
        if count == 0:
            continue

        new_value = row.column_value.replace(search, replacement)
        try:
            client.update(
                spec.table,
                {spec.column: new_value},
                {spec.primary_key: row.primary_key_value},
            )
        except DatabaseError as exc:
            raise PartialReplaceError(
                f"update of {spec.primary_key}={row.primary_key_value!r} failed after "
                f"{result.rows_updated} rows were updated: {exc}",
                result=result,
                rows_remaining=len(rows) - index,
                operation="update",
                table=spec.table,
                column=spec.column,
            ) from exc

        logger.debug(
            "%s=%r: replaced %d occurrences", spec.primary_key, row.primary_key_value, count
        )
        result.rows_updated += 1
        result.add(key, count)
        observe_replacements(spec.table, spec.column, count)

    logger.info("replaced %d occurrences in %d rows", result.total_count, result.rows_updated)
    return result
