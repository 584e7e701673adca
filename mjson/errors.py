from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .db.models import ReplaceResult


class MjsonError(Exception):
    """Base exception for mjson errors."""


class ConfigError(MjsonError):
    """Missing or invalid runtime configuration."""


class RefusedError(MjsonError):
    """The search pattern collides with the LIKE escape character."""


class DatabaseError(MjsonError):
    """
    Any connectivity, permission, or query failure from the database.

    Carries the operation and target so the failure can be diagnosed.
    """

    def __init__(
        self,
        message: str,
        *,
        operation: str | None = None,
        table: str | None = None,
        column: str | None = None,
    ) -> None:
        super().__init__(message)
        self.operation = operation
        self.table = table
        self.column = column

    def __str__(self) -> str:
        message = super().__str__()
        context = ", ".join(
            f"{name}={value}"
            for name, value in (
                ("operation", self.operation),
                ("table", self.table),
                ("column", self.column),
            )
            if value is not None
        )
        if not context:
            return message
        return f"{message} ({context})"


class PartialReplaceError(DatabaseError):
    """A replace pass stopped at a database error after some rows were written."""

    def __init__(
        self,
        message: str,
        *,
        result: ReplaceResult,
        rows_remaining: int,
        operation: str | None = None,
        table: str | None = None,
        column: str | None = None,
    ) -> None:
        super().__init__(message, operation=operation, table=table, column=column)
        self.result = result
        self.rows_remaining = rows_remaining

    @property
    def rows_updated(self) -> int:
        return self.result.rows_updated
