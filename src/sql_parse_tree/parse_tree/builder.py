"""Capture of a sqlglot expression tree as a :class:`ParseData` tree.

The builder hooks every node type in the traversal engine's catalog, records
one :class:`ParseData` per node entered, and once the walk is over runs the
property reflection pass over the whole tree.
"""

import logging
import time
from typing import List, Optional

from sqlglot import exp

from sql_parse_tree.errors import CaptureDepthError, CaptureSetupError, HookRegistrationError
from sql_parse_tree.parse_tree.nodes import ParseData
from sql_parse_tree.parse_tree.reflector import populate_properties
from sql_parse_tree.parse_tree.visitor import ExpressionVisitor, Proceed

logger = logging.getLogger(__name__)


class ParseTreeBuilder:
    """Builds :class:`ParseData` trees by observing an :class:`ExpressionVisitor`.

    The builder only observes: every handler it installs continues the default
    traversal, so the visitation order is exactly the visitor's own.
    """

    def __init__(self, visitor: Optional[ExpressionVisitor] = None):
        """Install a capture handler for every node type of the visitor.

        Args:
            visitor: Traversal engine to observe, a generic-dialect one if omitted

        Raises:
            CaptureSetupError: If any node type in the catalog cannot be hooked
        """
        started = time.perf_counter()
        self.visitor = visitor if visitor is not None else ExpressionVisitor()
        self._root: Optional[ParseData] = None
        self._stack: List[ParseData] = []

        catalog = self.visitor.node_types()
        for node_type in catalog:
            try:
                self.visitor.register(node_type, self._on_enter)
            except HookRegistrationError as e:
                raise CaptureSetupError(f"Cannot hook node type {node_type.__name__}: {e}") from e

        missing = [node_type.__name__ for node_type in catalog if self.visitor.handler_for(node_type) is None]
        if missing:
            raise CaptureSetupError(f"No capture handler installed for: {', '.join(missing)}")
        logger.info(
            "Create visitor time: %.6fs (%d node types)", time.perf_counter() - started, len(catalog)
        )

    def build(self, root: exp.Expression) -> ParseData:
        """Capture the tree rooted at ``root`` and reflect its properties.

        Args:
            root: The root sqlglot expression

        Returns:
            The captured tree, rooted at the first node entered

        Raises:
            CaptureDepthError: If sqlglot cannot print a node back to SQL text
                without exhausting the recursion limit
        """
        self._root = None
        self._stack = []

        started = time.perf_counter()
        try:
            self.visitor.traverse(root)
        except RecursionError as e:
            raise CaptureDepthError(
                f"Tree under {type(root).__name__} is nested too deeply to print as SQL text"
            ) from e
        logger.info("Visitor time: %.6fs", time.perf_counter() - started)

        if self._root is None:
            raise CaptureSetupError(f"Root node {type(root).__name__} was never visited")

        started = time.perf_counter()
        populate_properties(self._root)
        logger.info("Property time: %.6fs", time.perf_counter() - started)
        return self._root

    def _on_enter(self, node: exp.Expression, proceed: Proceed) -> None:
        data = ParseData.for_node(type(node).__name__, self.visitor.text_of(node), node)
        if self._root is None:
            self._root = data
        if self._stack:
            self._stack[-1].add_child(data)

        self._stack.append(data)
        proceed(self._leave)

    def _leave(self) -> None:
        self._stack.pop()


def capture(root: exp.Expression, dialect: Optional[str] = None, pretty: bool = True) -> ParseData:
    """Capture a sqlglot expression tree as a :class:`ParseData` tree.

    Args:
        root: The root sqlglot expression
        dialect: Dialect used to render each node's text
        pretty: Whether node text is pretty-printed over several lines

    Returns:
        The captured tree with properties populated
    """
    return ParseTreeBuilder(ExpressionVisitor(dialect=dialect, pretty=pretty)).build(root)
