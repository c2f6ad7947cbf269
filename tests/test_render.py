"""Tests for constants module rendering."""
import ast

import pytest

from sqlconst.column import Column
from sqlconst.core.workflow import Severity
from sqlconst.generators.constants_gen.render import HEADER, escape, render_constants_module
from sqlconst.generators.constants_gen.types import ResolvedColumn, TableSpec


def _table(**overrides):
    values = dict(
        qualname="shop.models.Order",
        module="shop.models",
        simple_name="Order",
        schema="",
        table_name="orders",
        alias="",
        constant=True,
        snake_case=True,
    )
    values.update(overrides)
    return TableSpec(**values)


def _load(content, class_name):
    namespace = {}
    exec(compile(content, "<generated>", "exec"), namespace)
    return namespace[class_name]


@pytest.mark.parametrize("value", [
    'say "hi"',
    "line one\nline two",
    "windows\r\nline",
    "C:\\temp\\new",
    'mixed \\" and \n',
    "",
])
def test_escape_round_trip(value):
    """Parsing the escaped literal gives back the input string."""
    assert ast.literal_eval('"' + escape(value) + '"') == value


def test_escape_none():
    assert escape(None) == ""


def test_table_constants():
    content = render_constants_module(
        _table(schema="sales"), [], 'Customer "orders"', package="shop.sql", class_name="Order_"
    )

    assert content.startswith(HEADER)
    assert "# package shop.sql" in content
    order = _load(content, "Order_")
    assert order._schema == "sales"
    assert order._tableName == "orders"
    assert order._tableAlias == "orders"
    assert order._remarks == 'Customer "orders"'
    assert order._all == "orders.*"
    assert order._count == "COUNT(*)"


def test_alias_is_used_for_wildcard_and_descriptors():
    columns = [ResolvedColumn(field_name="sku", column="sku", remarks="Stock unit")]
    content = render_constants_module(
        _table(table_name="order_lines", alias="ol"), columns, "", package="shop.sql", class_name="OrderLine_"
    )

    line = _load(content, "OrderLine_")
    assert line._tableName == "order_lines"
    assert line._tableAlias == "ol"
    assert line._all == "ol.*"
    assert line.sku == "sku"
    assert line.sku_ == Column(True, "ol", "sku", "", "Stock unit")
    assert str(line.sku_) == "ol.sku"


def test_column_constants_and_descriptors():
    columns = [
        ResolvedColumn(field_name="id", column="ID", remarks="Key\nprimary"),
        ResolvedColumn(field_name="orderId", column="order_id"),
    ]
    content = render_constants_module(_table(), columns, "", package="shop.sql", class_name="Order_")

    assert '    ID = "ID"' in content
    assert '    order_id = "order_id"' in content
    order = _load(content, "Order_")
    assert order.ID_.remarks == "Key\nprimary"
    assert order.ID_.qualified is True
    assert order.order_id_.name == "order_id"
    assert order.order_id_.remarks == ""


def test_column_name_that_is_not_an_identifier():
    columns = [ResolvedColumn(field_name="orderNo", column="order no")]
    content = render_constants_module(_table(), columns, "", package="shop.sql", class_name="Order_")

    order = _load(content, "Order_")
    assert order.order_no == "order no"
    assert order.order_no_.name == "order no"


def test_duplicate_columns_keep_first(diagnostics):
    columns = [
        ResolvedColumn(field_name="name", column="name", remarks="child"),
        ResolvedColumn(field_name="name", column="name", remarks="parent"),
        ResolvedColumn(field_name="tableName", column="_tableName"),
    ]
    content = render_constants_module(
        _table(), columns, "", package="shop.sql", class_name="Order_", diagnostics=diagnostics
    )

    order = _load(content, "Order_")
    assert order.name_.remarks == "child"
    assert order._tableName == "orders"
    assert content.count('    name = "name"') == 1
    assert diagnostics.count(Severity.WARNING) == 2


def test_custom_suffix():
    columns = [ResolvedColumn(field_name="id", column="id")]
    content = render_constants_module(
        _table(), columns, "", package="shop.sql", class_name="OrderX", suffix="X"
    )

    assert _load(content, "OrderX").idX.name == "id"


def test_failure_returns_partial_output(diagnostics):
    def columns():
        yield ResolvedColumn(field_name="id", column="id")
        raise RuntimeError("boom")

    content = render_constants_module(
        _table(), columns(), "", package="shop.sql", class_name="Order_", diagnostics=diagnostics
    )

    assert '    id = "id"' in content
    assert diagnostics.count(Severity.WARNING) == 1
    assert "boom" in diagnostics.messages[0][1]
