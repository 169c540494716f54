"""Depth-first traversal engine over sqlglot expression trees.

sqlglot publishes its grammar as a large, open-ended hierarchy of
``Expression`` subclasses but offers no per-type visitor dispatch. This module
provides one: the node-type catalog is discovered from the class hierarchy at
construction time, handlers are registered per node type, and every handler
decides whether the default traversal into the node's children runs.

The walk keeps its own stack of pending child iterators, so the depth of the
SQL tree never turns into depth of the Python call stack. Long ``OR`` chains
are parsed as left-deep trees hundreds of levels high.
"""

from typing import Callable, Dict, Iterator, List, Optional, Tuple, Type

from sqlglot import exp

from sql_parse_tree.errors import HookRegistrationError
from sql_parse_tree.parser import Script

OnExit = Callable[[], None]


class Proceed:
    """Continuation handed to a handler along with its node.

    Calling it asks the visitor to go on into the node's children. ``on_exit``,
    when given, runs once every child has been visited.
    """

    __slots__ = ("requested", "on_exit")

    def __init__(self) -> None:
        self.requested = False
        self.on_exit: Optional[OnExit] = None

    def __call__(self, on_exit: Optional[OnExit] = None) -> None:
        self.requested = True
        self.on_exit = on_exit


Handler = Callable[[exp.Expression, Proceed], None]


def node_types() -> List[Type[exp.Expression]]:
    """Return every visitable node type currently known to sqlglot.

    The catalog is the ``Expression`` class together with all of its loaded
    subclasses, ordered by module and qualified name so it is stable from one
    run to the next.
    """
    found = {exp.Expression: None}
    pending = [exp.Expression]
    while pending:
        for subclass in pending.pop().__subclasses__():
            if subclass not in found:
                found[subclass] = None
                pending.append(subclass)
    return sorted(found, key=lambda cls: (cls.__module__, cls.__qualname__))


class ExpressionVisitor:
    """Visits a sqlglot tree depth-first, dispatching on each node's exact type.

    Nodes whose type has no registered handler are traversed silently.
    A handler receives the node and a :class:`Proceed` continuation; calling
    it continues the default traversal into the node's children, and a
    handler that never calls it prunes the subtree.

    Attributes:
        dialect: sqlglot dialect used to turn nodes back into SQL text
        pretty: Whether node text is pretty-printed over several lines
    """

    def __init__(self, dialect: Optional[str] = None, pretty: bool = True):
        self.dialect = dialect or None
        self.pretty = pretty
        self._catalog = node_types()
        self._known = frozenset(self._catalog)
        self._handlers: Dict[Type[exp.Expression], Handler] = {}

    def node_types(self) -> List[Type[exp.Expression]]:
        """Return the node-type catalog captured when this visitor was created."""
        return list(self._catalog)

    def register(self, node_type: Type[exp.Expression], handler: Handler) -> None:
        """Install ``handler`` for nodes whose exact type is ``node_type``.

        Raises:
            HookRegistrationError: If the type is not in the catalog or the
                handler is not callable
        """
        if node_type not in self._known:
            raise HookRegistrationError(f"{node_type!r} is not a visitable node type")
        if not callable(handler):
            raise HookRegistrationError(f"Handler for {node_type.__name__} is not callable")
        self._handlers[node_type] = handler

    def handler_for(self, node_type: Type[exp.Expression]) -> Optional[Handler]:
        return self._handlers.get(node_type)

    def traverse(self, root: exp.Expression) -> None:
        """Walk the tree rooted at ``root`` in depth-first, pre-order order."""
        frames: List[Tuple[Iterator[exp.Expression], Optional[OnExit]]] = [(iter((root,)), None)]
        while frames:
            children, on_exit = frames[-1]
            node = next(children, None)
            if node is None:
                frames.pop()
                if on_exit is not None:
                    on_exit()
                continue

            proceed = self.visit(node)
            if proceed.requested:
                frames.append((node.iter_expressions(), proceed.on_exit))

    def visit(self, node: exp.Expression) -> Proceed:
        """Dispatch ``node`` to its handler and report whether to descend."""
        proceed = Proceed()
        handler = self._handlers.get(type(node))
        if handler is None:
            proceed()
        else:
            handler(node, proceed)
        return proceed

    def text_of(self, node: exp.Expression) -> str:
        """Return the SQL text spanned by ``node``."""
        if isinstance(node, Script):
            return ";\n".join(self.text_of(statement) for statement in node.expressions)
        return node.sql(dialect=self.dialect, pretty=self.pretty)
