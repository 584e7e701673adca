from __future__ import annotations

import os
from dataclasses import dataclass

from .db.helpers import _validate_identifier
from .db.models import SearchSpec
from .errors import ConfigError

DB_URL_ENV = "MJSON_DB_URL"


@dataclass
class DbConfig:
    url: str
    prefix: str = ""
    table_name: str = "wp_postmeta"
    column: str = "meta_value"
    id_column: str = "meta_id"

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if not self.url:
            raise ConfigError(
                f"no database URL configured; pass --db-url or set {DB_URL_ENV}"
            )
        _validate_identifier(self.resolved_table, "table")
        _validate_identifier(self.column, "column")
        _validate_identifier(self.id_column, "primary key")

    @property
    def resolved_table(self) -> str:
        return f"{self.prefix}{self.table_name}"

    def to_search_spec(self, literal: str) -> SearchSpec:
        return SearchSpec(
            table=self.resolved_table,
            column=self.column,
            primary_key=self.id_column,
            literal=literal,
        )

    @classmethod
    def from_env(cls, url: str | None = None, **overrides: str) -> "DbConfig":
        """Build a config, falling back to MJSON_DB_URL when no URL is given."""
        resolved_url = url or os.environ.get(DB_URL_ENV, "")
        return cls(url=resolved_url, **overrides)
