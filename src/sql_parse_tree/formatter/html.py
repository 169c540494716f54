"""Interactive HTML formatter.

Renders the parse tree as a single self-contained page: collapsible child
lists, a detail box for multi-line node text, global collapse/expand buttons
and a prefix search over node types and texts. Node ids are assigned in
depth-first order starting at 0 for every page rendered.

The tree is handed to the template as a flat sequence of open and close
events, so the page nests as deep as the tree without nesting template calls.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from jinja2 import Environment, PackageLoader

from sql_parse_tree.formatter.text import first_line, type_placeholder
from sql_parse_tree.parse_tree.nodes import ParseData, Property

MAX_DETAIL_ROWS = 5

_environment = Environment(
    loader=PackageLoader("sql_parse_tree.formatter", "templates"),
    autoescape=True,
    trim_blocks=True,
    lstrip_blocks=True,
)


@dataclass
class PropertyView:
    """Template-ready view of one property.

    ``kind`` is ``"text"`` for string values, ``"list"`` for nested property
    lists, ``"other"`` for any other value and ``"none"`` when absent.
    """

    name: Optional[str]
    kind: str
    text: str = ""
    items: Optional[List["PropertyView"]] = None


@dataclass
class NodeView:
    """Template-ready view of one node."""

    id: int
    type_name: str
    text: str
    first_line: str
    has_detail: bool
    rows: int
    has_children: bool
    properties: Optional[List[PropertyView]] = None


@dataclass
class RenderContext:
    """State of one render call.

    ``nodes`` holds every node in id order. ``events`` pairs ``"open"`` with
    each node as it is entered and ``"close"`` with each node that has
    children once they have all been listed.
    """

    next_id: int = 0
    nodes: List[NodeView] = field(default_factory=list)
    events: List[Tuple[str, NodeView]] = field(default_factory=list)


class HtmlFormatter:
    """Formats a :class:`ParseData` tree as an interactive HTML page."""

    def __init__(self, template_name: str = "parse_tree.html.j2"):
        self.template = _environment.get_template(template_name)

    def format(self, data: ParseData) -> str:
        context = RenderContext()
        pending: List[Union[ParseData, NodeView]] = [data]
        while pending:
            item = pending.pop()
            if isinstance(item, NodeView):
                context.events.append(("close", item))
                continue

            view = self._node_view(item, context)
            context.events.append(("open", view))
            if item.children is not None:
                pending.append(view)
                pending.extend(reversed(item.children))
        return self.template.render(count=context.next_id, nodes=context.nodes, events=context.events)

    def _node_view(self, data: ParseData, context: RenderContext) -> NodeView:
        line = first_line(data.text) or ""
        view = NodeView(
            id=context.next_id,
            type_name=data.type_name,
            text=data.text,
            first_line=line,
            has_detail=len(line) < len(data.text),
            rows=min(max(len(data.text.splitlines()), 1), MAX_DETAIL_ROWS),
            has_children=data.children is not None,
            properties=self._property_views(data.properties),
        )
        context.next_id += 1
        context.nodes.append(view)
        return view

    def _property_views(self, properties: Optional[List[Property]]) -> Optional[List[PropertyView]]:
        if properties is None:
            return None

        views = []
        for prop in properties:
            value = prop.value
            if value is None:
                views.append(PropertyView(name=prop.name, kind="none"))
            elif isinstance(value, str):
                views.append(PropertyView(name=prop.name, kind="text", text=value))
            elif isinstance(value, list):
                views.append(
                    PropertyView(name=prop.name, kind="list", items=self._property_views(value))
                )
            else:
                views.append(PropertyView(name=prop.name, kind="other", text=type_placeholder(value)))
        return views


def to_html(data: ParseData) -> str:
    """Convenience function to render a parse tree as an HTML page."""
    return HtmlFormatter().format(data)
