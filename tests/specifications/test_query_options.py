"""Tests for QueryOptions.from_filter."""

from __future__ import annotations

import pytest

from docmap_specifications import AttributeSpecification, QueryOptions, WhereParseError


def test_empty_filter_gives_defaults() -> None:
    opts = QueryOptions.from_filter(None)
    assert opts.specification is None
    assert opts.limit is None
    assert opts.skip is None
    assert opts.order_by == []
    assert opts.fields == {}


def test_full_filter() -> None:
    opts = QueryOptions.from_filter(
        {
            "where": {"name": "John"},
            "order": "name DESC",
            "limit": "10",
            "skip": 5,
            "fields": ["name", "seq"],
        }
    )
    assert isinstance(opts.specification, AttributeSpecification)
    assert opts.limit == 10
    assert opts.skip == 5
    assert opts.order_by == [("name", "DESC")]
    assert opts.fields == {"name": True, "seq": True}


def test_offset_is_alias_for_skip() -> None:
    assert QueryOptions.from_filter({"offset": 3}).skip == 3


def test_order_list_defaults_to_ascending() -> None:
    opts = QueryOptions.from_filter({"order": ["name", "age desc"]})
    assert opts.order_by == [("name", "ASC"), ("age", "DESC")]


@pytest.mark.parametrize("order", ["name SIDEWAYS", "a b c"])
def test_invalid_order_rejected(order: str) -> None:
    with pytest.raises(WhereParseError) as exc_info:
        QueryOptions.from_filter({"order": order})
    assert exc_info.value.path == "order"


@pytest.mark.parametrize(("key", "value"), [("limit", -1), ("skip", "many")])
def test_invalid_paging_rejected(key: str, value: object) -> None:
    with pytest.raises(WhereParseError):
        QueryOptions.from_filter({key: value})


def test_fields_mapping_and_string() -> None:
    assert QueryOptions.from_filter({"fields": {"name": 1, "age": 0}}).fields == {
        "name": True,
        "age": False,
    }
    assert QueryOptions.from_filter({"fields": "name"}).fields == {"name": True}


def test_non_mapping_filter_rejected() -> None:
    with pytest.raises(WhereParseError):
        QueryOptions.from_filter(["where"])  # type: ignore[arg-type]

