"""Tests for column-name resolution."""
import pytest

from sqlconst.generators.constants_gen.naming import (
    resolve_columns,
    resolve_name,
    should_skip,
    to_identifier,
    to_snake_case,
)
from sqlconst.generators.constants_gen.types import FieldSpec


@pytest.mark.parametrize("name,expected", [
    ("orderId", "order_id"),
    ("id", "id"),
    ("createdAtUtc", "created_at_utc"),
    ("userID", "user_id"),
    ("Name", "name"),
    ("already_snake", "already_snake"),
])
def test_to_snake_case(name, expected):
    assert to_snake_case(name) == expected


@pytest.mark.parametrize("name", ["order_id", "a_b_c", "plain", "x1_y2"])
def test_to_snake_case_is_idempotent_on_underscore_names(name):
    once = to_snake_case(name)
    assert to_snake_case(once) == once == name


def test_override_wins_over_transform():
    field = FieldSpec(name="orderId", owner="m.T", column="ORDER_ID")

    assert resolve_name(field, snake_case=True) == "ORDER_ID"
    assert resolve_name(field, snake_case=False) == "ORDER_ID"


def test_transform_wins_over_identity():
    field = FieldSpec(name="orderId", owner="m.T")

    assert resolve_name(field, snake_case=True) == "order_id"
    assert resolve_name(field, snake_case=False) == "orderId"


def test_ignored_fields_are_skipped_before_resolution():
    ignored = FieldSpec(name="cacheValue", owner="m.T", column="CACHE", ignore=True)
    kept = FieldSpec(name="orderId", owner="m.T")
    asked = []

    def remarks(column):
        asked.append(column)
        return f"about {column}"

    columns = list(resolve_columns([ignored, kept], snake_case=True, remarks=remarks))

    assert should_skip(ignored)
    assert not should_skip(kept)
    assert [c.column for c in columns] == ["order_id"]
    assert columns[0].remarks == "about order_id"
    assert asked == ["order_id"]


@pytest.mark.parametrize("column,expected", [
    ("order_id", "order_id"),
    ("order id", "order_id"),
    ("1st_place", "_1st_place"),
    ("class", "class_"),
    ("x-y", "x_y"),
])
def test_to_identifier(column, expected):
    assert to_identifier(column) == expected
