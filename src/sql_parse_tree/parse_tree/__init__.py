"""Parse tree module for capturing parsed SQL as an explicit, serializable tree.

This module provides the tree nodes, the traversal engine over sqlglot
expressions, the capture builder and the property reflector.
"""

from sql_parse_tree.parse_tree.builder import ParseTreeBuilder, capture
from sql_parse_tree.parse_tree.nodes import ParseData, Property
from sql_parse_tree.parse_tree.reflector import IdentitySet, declared_attributes, reflect
from sql_parse_tree.parse_tree.visitor import ExpressionVisitor, node_types

__all__ = [
    "ParseData",
    "Property",
    "ExpressionVisitor",
    "node_types",
    "ParseTreeBuilder",
    "capture",
    "IdentitySet",
    "declared_attributes",
    "reflect",
]
