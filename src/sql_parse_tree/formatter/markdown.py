"""Markdown outline formatter.

Renders the parse tree as an indented numbered list. Each node shows its type
name in bold followed by the first line of its text; properties are listed
with dashes directly beneath the node.
"""

from typing import List, Optional

from sql_parse_tree.formatter.text import first_line, type_placeholder
from sql_parse_tree.parse_tree.nodes import ParseData, Property

NODE_INDENT = 3
PROPERTY_INDENT = 2
DEFAULT_TRUNCATE = 20


class MarkdownFormatter:
    """Formats a :class:`ParseData` tree as a Markdown outline.

    The indentation travels with each pending node rather than being kept on
    the formatter, so one instance can format any number of trees, and deep
    trees do not deepen the call stack.
    """

    def __init__(self, truncate: int = DEFAULT_TRUNCATE):
        """Initialize the formatter.

        Args:
            truncate: Maximum characters of node text shown before the ellipsis
        """
        self.truncate = truncate

    def format(self, data: ParseData) -> str:
        lines: List[str] = []
        pending = [(data, 0)]
        while pending:
            node, pad = pending.pop()
            self._add_node(node, lines, pad)
            for child in reversed(node.children or []):
                pending.append((child, pad + NODE_INDENT))
        return "\n".join(lines) + "\n"

    def _add_node(self, data: ParseData, lines: List[str], pad: int) -> None:
        line = f"{' ' * pad}1. **{data.type_name}**: "

        text = first_line(data.text)
        text = text.strip() if text else text
        if text:
            truncated = len(text) > self.truncate
            if truncated:
                text = text[: self.truncate]
            line += f"`{text.strip()}`"
            if truncated:
                line += "..."
        lines.append(line)

        self._add_properties(data.properties, lines, pad + NODE_INDENT)

    def _add_properties(
        self, properties: Optional[List[Property]], lines: List[str], pad: int
    ) -> None:
        if properties is None:
            return

        for prop in properties:
            prefix = f"{' ' * pad}- "
            if prop.name is not None:
                prefix += f"{prop.name}: "

            value = prop.value
            if value is None:
                lines.append(prefix)
            elif isinstance(value, str):
                lines.append(f"{prefix}_{value}_")
            elif isinstance(value, list):
                lines.append(prefix)
                self._add_properties(value, lines, pad + PROPERTY_INDENT)
            else:
                lines.append(prefix + type_placeholder(value))


def to_markdown(data: ParseData, truncate: int = DEFAULT_TRUNCATE) -> str:
    """Convenience function to render a parse tree as Markdown.

    Args:
        data: The parse tree
        truncate: Maximum characters of node text shown before the ellipsis

    Returns:
        The Markdown outline
    """
    return MarkdownFormatter(truncate=truncate).format(data)
