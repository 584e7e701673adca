from __future__ import annotations

import logging
import time
from typing import Any, Mapping, Protocol

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from ..errors import DatabaseError
from .helpers import _parse_sql_operation, build_update
from .metrics import observe_db_query, observe_db_write
from .session import DbSession

logger = logging.getLogger(__name__)


class DbClient(Protocol):
    """
    Database capability handed to the search and replace functions.

    Every user-supplied value must travel through ``params`` / the value
    mappings and be bound by the driver, never concatenated into SQL.
    """

    def query(
        self,
        sql: str,
        params: Mapping[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        """Execute a SELECT and return its rows as dictionaries."""
        ...

    def update(
        self,
        table: str,
        set_values: Mapping[str, Any],
        where_values: Mapping[str, Any],
    ) -> int:
        """Execute a single-table UPDATE and return the affected row count."""
        ...


class SqlAlchemyDbClient:
    """
    DbClient backed by a SQLAlchemy Engine.

    Each call runs in its own DbSession. An UPDATE is committed as soon as it
    returns, so an interrupted replace pass leaves earlier rows updated.

    SQLAlchemy errors are re-raised as DatabaseError with the operation and
    table attached.
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def query(
        self,
        sql: str,
        params: Mapping[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        table, _ = _parse_sql_operation(sql)
        status = "success"
        try:
            with DbSession(self.engine) as session:
                rows = session.fetch_all(sql, params)
        except SQLAlchemyError as exc:
            status = "error"
            raise DatabaseError(str(exc), operation="query", table=table) from exc
        finally:
            observe_db_query(table, status)

        logger.debug("query on %s returned %d rows", table, len(rows))
        return rows

    def update(
        self,
        table: str,
        set_values: Mapping[str, Any],
        where_values: Mapping[str, Any],
    ) -> int:
        sql, params = build_update(table, set_values, where_values)
        column = ", ".join(sorted(set_values))

        start_time = time.monotonic()
        status = "success"
        try:
            with DbSession(self.engine) as session:
                return session.execute(sql, params)
        except SQLAlchemyError as exc:
            status = "error"
            raise DatabaseError(
                str(exc), operation="update", table=table, column=column
            ) from exc
        finally:
            observe_db_write(table, "update", status, time.monotonic() - start_time)
