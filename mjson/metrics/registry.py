from prometheus_client import Counter, Histogram

DB_QUERY_TOTAL = Counter(
    "mjson_db_query_total",
    "Number of SELECT queries issued against the target table",
    ["table", "status"],
)

DB_WRITE_TOTAL = Counter(
    "mjson_db_write_total",
    "Number of row writes issued against the target table",
    ["table", "op_type", "status"],
)

DB_WRITE_LATENCY_SECONDS = Histogram(
    "mjson_db_write_latency_seconds",
    "Latency of a single row write, including commit",
    ["table", "op_type"],
)

REPLACE_OCCURRENCES_TOTAL = Counter(
    "mjson_replace_occurrences_total",
    "Number of substring occurrences replaced",
    ["table", "column"],
)
