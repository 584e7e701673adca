from .registry import (
    DB_QUERY_TOTAL,
    DB_WRITE_LATENCY_SECONDS,
    DB_WRITE_TOTAL,
    REPLACE_OCCURRENCES_TOTAL,
)

__all__ = [
    "DB_QUERY_TOTAL",
    "DB_WRITE_TOTAL",
    "DB_WRITE_LATENCY_SECONDS",
    "REPLACE_OCCURRENCES_TOTAL",
]
