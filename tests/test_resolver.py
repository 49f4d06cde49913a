from __future__ import annotations

from sql_diagram.models import VIRTUAL_TABLE_ID
from sql_diagram.resolver import (
    TableRegistry,
    normalize_identifier,
    parse_table_and_alias,
    table_key,
)


def test_table_with_alias() -> None:
    parsed = parse_table_and_alias("users u")
    assert (parsed.name, parsed.alias, parsed.is_subquery) == ("users", "u", False)


def test_table_with_as_alias_and_schema() -> None:
    parsed = parse_table_and_alias("sales.orders AS o")
    assert parsed.name == "sales.orders"
    assert parsed.alias == "o"


def test_dotted_name_without_alias() -> None:
    parsed = parse_table_and_alias("sales.orders")
    assert parsed.name == "sales.orders"
    assert parsed.alias is None


def test_unmatched_expression_kept_verbatim() -> None:
    parsed = parse_table_and_alias('"Order Lines"')
    assert parsed.name == '"Order Lines"'
    assert parsed.alias is None


def test_subquery_with_alias() -> None:
    parsed = parse_table_and_alias("(SELECT id FROM t) AS m")
    assert parsed.is_subquery
    assert parsed.name == "(SELECT id FROM t)"
    assert parsed.alias == "m"


def test_subquery_without_alias() -> None:
    parsed = parse_table_and_alias("(SELECT id FROM t)")
    assert parsed.is_subquery
    assert parsed.alias is None


def test_identifier_normalization() -> None:
    assert normalize_identifier('"Users"') == "users"
    assert normalize_identifier("`Orders`") == "orders"
    assert normalize_identifier(None) is None
    assert table_key("Sales.Orders", None) == "orders"
    assert table_key("sales.orders", '"O"') == "o"


def test_registry_first_registration_wins() -> None:
    registry = TableRegistry()
    first = registry.register("users u")
    second = registry.register("customers u")
    assert first is second
    assert len(registry) == 1
    assert registry.to_list()[0].name == "users"


def test_registry_find_by_alias_and_name() -> None:
    registry = TableRegistry()
    orders = registry.register("sales.orders o")
    assert registry.find("o") is orders
    assert registry.find("ORDERS") is orders
    assert registry.find('"o"') is orders
    assert registry.find("nope") is None
    assert registry.find(None) is None


def test_registry_orphan_and_virtual() -> None:
    registry = TableRegistry()
    orphan = registry.orphan("X")
    assert orphan.id == "x"
    assert orphan.is_orphan
    virtual = registry.virtual()
    assert virtual is registry.virtual()
    assert virtual.id == VIRTUAL_TABLE_ID
    assert virtual.is_virtual
    assert registry.real_tables() == []
    assert registry.find("unspecified") is None
