"""
Manage JSON-encoded strings in the database.

Examples:
    # Find a string
    $ mjson search "http://example.com"

    # Replace a string
    $ mjson replace "http://example1.com" "https://example2.com"

    # Replace a string in a specific table with a db prefix
    $ mjson replace "http://example1.com" "https://example2.com" \\
        --prefix="mysite_" --table="wp_postmeta" --column="meta_value" --primary="meta_id"
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Callable, Sequence

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from . import __version__
from .config import DbConfig
from .db.client import DbClient, SqlAlchemyDbClient
from .db.models import SearchSpec
from .errors import ConfigError, MjsonError, PartialReplaceError
from .escape import encode_fragment
from .replace import replace
from .search import find_rows, render_excerpt

VERSION = __version__

logger = logging.getLogger(__name__)


def _add_target_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--prefix", default="", help="Database table prefix. Default: '' (no prefix)")
    parser.add_argument("--table", default="wp_postmeta", help="Table to search. Default: wp_postmeta")
    parser.add_argument("--column", default="meta_value", help="Column to search. Default: meta_value")
    parser.add_argument("--primary", default="meta_id", help="Primary key column. Default: meta_id")


def build_parser(prog: str = "mjson") -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog,
        description="Search and replace JSON-encoded strings in a database column",
    )
    parser.add_argument("--db-url", default=None, help="SQLAlchemy database URL. Default: $MJSON_DB_URL")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    search_parser = subparsers.add_parser("search", help="Find JSON-encoded strings")
    search_parser.add_argument("search", help="The string to search for")
    _add_target_options(search_parser)

    replace_parser = subparsers.add_parser("replace", help="Replace JSON-encoded strings")
    replace_parser.add_argument("search", help="The string to search for")
    replace_parser.add_argument("replace", help="The string to replace it with")
    _add_target_options(replace_parser)

    version_parser = subparsers.add_parser("version", help="Show version of this package")
    version_parser.add_argument("--format", choices=["json", "text"], default=None, help="Output format")

    return parser


def version(output_format: str | None = None) -> str:
    if output_format == "json":
        return json.dumps(VERSION)
    if output_format == "text":
        return VERSION
    return f"Version of this package: {VERSION}"


def _print_header(rows: Sequence[tuple[str, str]]) -> None:
    print()
    for name, value in rows:
        print(f"{name:>10}: {value}")


def run_search(client: DbClient, spec: SearchSpec, prefix: str = "") -> int:
    _print_header(
        [("Find", spec.literal), ("Prefix", prefix), ("Table", spec.table), ("Column", spec.column)]
    )
    fragment = encode_fragment(spec.literal)
    rows = find_rows(client, spec, fragment)
    _print_header([("Found", f"{len(rows)} results:")])
    print()
    for row in rows:
        print(render_excerpt(row.column_value, fragment))
    print()
    return len(rows)


def run_replace(client: DbClient, spec: SearchSpec, replacement: str, prefix: str = "") -> int:
    _print_header(
        [
            ("Replace", spec.literal),
            ("With", replacement),
            ("Prefix", prefix),
            ("Table", spec.table),
            ("Column", spec.column),
            ("Primary", spec.primary_key),
        ]
    )
    result = replace(client, spec, spec.literal, replacement, encode_as_json=True)
    print()
    for key, key_count in result.per_key_counts.items():
        print(f"  {key:<40}: {key_count:3d} times")
    if result.total_count > 0:
        print(f"Success: Replaced string {result.total_count} times.")
    else:
        print(f"Warning: Replaced string {result.total_count} times.")
    print()
    return result.total_count


def main(
    argv: Sequence[str] | None = None,
    client_factory: Callable[[Engine], DbClient] = SqlAlchemyDbClient,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "version":
        print(version(args.format))
        return 0

    try:
        config = DbConfig.from_env(
            args.db_url,
            prefix=args.prefix,
            table_name=args.table,
            column=args.column,
            id_column=args.primary,
        )
    except (ConfigError, TypeError, ValueError) as exc:
        parser.error(str(exc))

    try:
        engine = create_engine(config.url, pool_pre_ping=True)
    except (SQLAlchemyError, ImportError) as exc:
        # unparseable URL or a DBAPI driver that is not installed
        parser.error(f"cannot use database URL {config.url!r}: {exc}")

    spec = config.to_search_spec(args.search)
    client = client_factory(engine)
    try:
        if args.command == "search":
            run_search(client, spec, prefix=config.prefix)
        else:
            run_replace(client, spec, args.replace, prefix=config.prefix)
    except PartialReplaceError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        print(
            f"Error: {exc.rows_updated} rows updated, {exc.rows_remaining} rows not attempted.",
            file=sys.stderr,
        )
        return 1
    except MjsonError as exc:
        logger.debug("command %s failed", args.command, exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    finally:
        engine.dispose()

    return 0


if __name__ == "__main__":
    sys.exit(main())
