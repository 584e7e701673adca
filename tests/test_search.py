from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from mjson.db.models import SearchSpec
from mjson.errors import RefusedError
from mjson.escape import encode_fragment
from mjson.search import escape_like, find_rows, render_excerpt


def _spec(table: str, literal: str = "") -> SearchSpec:
    return SearchSpec(table=table, column="meta_value", primary_key="meta_id", literal=literal)


def test_find_rows_matches_json_escaped_fragment(client, postmeta_table: str, seed) -> None:
    seed(
        postmeta_table,
        [
            {"meta_id": 1, "meta_value": '{"url":"http:\\/\\/example1.com\\/a"}'},
            {"meta_id": 2, "meta_value": '{"url":"http:\\/\\/other.com"}'},
            {"meta_id": 3, "meta_value": "plain http://example1.com"},
        ],
    )

    fragment = encode_fragment("http://example1.com")
    rows = find_rows(client, _spec(postmeta_table), fragment)

    assert [(r.primary_key_value, r.column_value) for r in rows] == [
        (1, '{"url":"http:\\/\\/example1.com\\/a"}'),
    ]


def test_find_rows_returns_empty_list_when_nothing_matches(client, postmeta_table: str, seed) -> None:
    seed(postmeta_table, [{"meta_id": 1, "meta_value": "nothing here"}])

    assert find_rows(client, _spec(postmeta_table), "absent") == []


def test_percent_and_underscore_match_literally(client, postmeta_table: str, seed) -> None:
    seed(
        postmeta_table,
        [
            {"meta_id": 1, "meta_value": "100% pure"},
            {"meta_id": 2, "meta_value": "1000 pure"},
            {"meta_id": 3, "meta_value": "key_name"},
            {"meta_id": 4, "meta_value": "keyXname"},
        ],
    )

    percent = find_rows(client, _spec(postmeta_table), "100%")
    underscore = find_rows(client, _spec(postmeta_table), "key_name")

    assert [r.primary_key_value for r in percent] == [1]
    assert [r.primary_key_value for r in underscore] == [3]


@pytest.mark.parametrize("fragment", ["wow!", "!leading", "mid!dle"])
def test_escape_character_is_refused_without_querying(fragment: str) -> None:
    client = MagicMock()

    with pytest.raises(RefusedError, match="unsafe search pattern"):
        find_rows(client, _spec("wp_postmeta"), fragment)

    client.query.assert_not_called()


def test_find_rows_binds_the_pattern() -> None:
    client = MagicMock()
    client.query.return_value = [{"meta_id": 7, "meta_value": None}]

    rows = find_rows(client, _spec("wp_postmeta"), "it's")

    sql, params = client.query.call_args.args
    assert "it's" not in sql
    assert "ESCAPE '!'" in sql
    assert params == {"pattern": "%it's%"}
    # NULL column values come back as empty strings
    assert rows[0].column_value == ""


def test_escape_like() -> None:
    assert escape_like("a%b_c\\d") == "a!%b!_c\\d"


def test_excerpt_of_short_value_is_clamped() -> None:
    assert render_excerpt("abcdefgh", "cd") == "...abcdefgh..."


def test_excerpt_window_around_match() -> None:
    value = "x" * 100 + "NEEDLE" + "y" * 100

    excerpt = render_excerpt(value, "NEEDLE")

    assert excerpt == "..." + "x" * 30 + "NEEDLE" + "y" * 38 + "..."


def test_excerpt_keeps_whole_long_match() -> None:
    value = "a" * 10 + "z" * 100

    assert render_excerpt(value, "z" * 100) == f"...{value}..."


def test_excerpt_when_fragment_not_found_verbatim() -> None:
    assert render_excerpt("Hello World", "hello") == "...Hello World..."
