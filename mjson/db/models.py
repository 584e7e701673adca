from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .helpers import _validate_identifier


@dataclass(frozen=True)
class SearchSpec:
    """
    Where to look and what to look for.
    """
    table: str
    column: str
    primary_key: str
    literal: str

    def __post_init__(self) -> None:
        _validate_identifier(self.table, "table")
        _validate_identifier(self.column, "column")
        _validate_identifier(self.primary_key, "primary key")


@dataclass(frozen=True)
class MatchedRow:
    primary_key_value: Any
    column_value: str


@dataclass
class ReplaceResult:
    """
    Aggregated outcome of one replace pass.
    """
    per_key_counts: dict[str, int] = field(default_factory=dict)
    total_count: int = 0
    rows_updated: int = 0

    def add(self, key: str, count: int) -> None:
        self.per_key_counts[key] = self.per_key_counts.get(key, 0) + count
        self.total_count += count
