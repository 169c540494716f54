"""Shared fixtures for sql-parse-tree tests."""

import pytest

from sql_parse_tree.parse_tree.nodes import ParseData, Property


@pytest.fixture
def select_tree() -> ParseData:
    """A small hand-built tree with nested children and properties."""
    root = ParseData(type_name="Select", text="SELECT a, b\nFROM t")
    column_a = ParseData(type_name="Column", text="a")
    column_a.add_child(
        ParseData(
            type_name="Identifier",
            text="a",
            properties=[Property(name="quoted", value="False"), Property(name="this", value="a")],
        )
    )
    column_b = ParseData(type_name="Column", text="b")
    source = ParseData(type_name="From", text="FROM t")
    source.add_child(
        ParseData(
            type_name="Table",
            text="t",
            properties=[
                Property(
                    name="hints",
                    value=[Property(value="NOLOCK"), Property(value=[Property(value="INDEX")])],
                )
            ],
        )
    )
    root.add_child(column_a)
    root.add_child(column_b)
    root.add_child(source)
    return root
