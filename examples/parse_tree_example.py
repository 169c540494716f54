#!/usr/bin/env python3
"""Example demonstrating parse tree capture and rendering.

This example parses a query, captures its parse tree, prints it as a Markdown
outline, and then uses the traversal engine directly with a custom handler to
count node types.
"""

from collections import Counter

from sql_parse_tree.formatter import to_json, to_markdown
from sql_parse_tree.parse_tree.builder import capture
from sql_parse_tree.parse_tree.visitor import ExpressionVisitor
from sql_parse_tree.parser import parse_sql

EXAMPLE_SQL = """
SELECT u.id, u.name, COUNT(o.id) AS orders
FROM users AS u
LEFT JOIN orders AS o ON o.user_id = u.id
WHERE u.active = TRUE
GROUP BY u.id, u.name
"""


class NodeTypeCounter:
    """Counts the node types seen during a traversal."""

    def __init__(self, visitor: ExpressionVisitor):
        self.counts = Counter()
        for node_type in visitor.node_types():
            visitor.register(node_type, self.on_enter)

    def on_enter(self, node, proceed):
        self.counts[type(node).__name__] += 1
        proceed()


def main():
    """Demonstrate parse tree usage."""
    print("=" * 70)
    print("Parse Tree Example")
    print("=" * 70)
    print()

    root = parse_sql(EXAMPLE_SQL)
    tree = capture(root)

    print(f"Root: {tree.type_name}")
    print(f"Nodes: {tree.count()}")
    print()

    print("1. Markdown outline:")
    print("-" * 70)
    print(to_markdown(tree))

    print("2. First lines of the JSON document:")
    print("-" * 70)
    print("\n".join(to_json(tree).splitlines()[:12]))
    print()

    print("3. Node types counted with a custom handler:")
    print("-" * 70)
    visitor = ExpressionVisitor()
    counter = NodeTypeCounter(visitor)
    visitor.traverse(root)
    for name, count in counter.counts.most_common():
        print(f"  {name}: {count}")
    print()


if __name__ == "__main__":
    main()
