"""Reflection of node attributes into :class:`Property` lists.

Only the data declared by a node's concrete type is reflected. For sqlglot
nodes that is the ``args`` mapping; ``parent``, ``arg_key``, ``comments`` and
the other attributes shared by every expression are already represented by
the tree shape, the type name and the text.

A single identity-based visited set is threaded through the whole pass. Any
object that has been captured as a tree node, or reflected once as a property
value, is omitted everywhere it is reached afterwards. Sequences and mappings
are not recorded there: a container is listed wherever it is reached, and is
only skipped when it turns up inside itself.
"""

import datetime
import decimal
import logging
import uuid
from collections.abc import Mapping
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from sqlglot import exp

from sql_parse_tree.parse_tree.nodes import ParseData, Property

logger = logging.getLogger(__name__)

_SCALAR_TYPES = (
    str,
    bytes,
    bool,
    int,
    float,
    complex,
    decimal.Decimal,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    uuid.UUID,
)
_SEQUENCE_TYPES = (list, tuple, set, frozenset)

Converted = Union[str, List[Property]]


class IdentitySet:
    """A set that compares members by identity rather than equality.

    sqlglot expressions compare equal when they are structurally equal, so a
    regular ``set`` would merge distinct nodes that happen to look alike.
    """

    def __init__(self) -> None:
        self._members: Dict[int, Any] = {}

    def add(self, value: Any) -> None:
        self._members[id(value)] = value

    def discard(self, value: Any) -> None:
        self._members.pop(id(value), None)

    def __contains__(self, value: Any) -> bool:
        return id(value) in self._members

    def __len__(self) -> int:
        return len(self._members)


def is_scalar(value: Any) -> bool:
    return isinstance(value, _SCALAR_TYPES) or isinstance(value, Enum)


def scalar_text(value: Any) -> str:
    if isinstance(value, Enum):
        return value.name
    return str(value)


def declared_attributes(value: Any) -> List[Tuple[str, Any]]:
    """Return the ``(name, value)`` pairs declared by the value's concrete type.

    Attributes that cannot be read are reported with a ``None`` value.
    """
    if isinstance(value, exp.Expression):
        return list(value.args.items())
    if isinstance(value, Mapping):
        return [(str(key), item) for key, item in value.items()]

    names = [name for name in getattr(value, "__dict__", {}) if not name.startswith("_")]
    for cls in type(value).__mro__:
        slots = cls.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        names.extend(slot for slot in slots if not slot.startswith("_") and slot not in names)

    attributes = []
    for name in names:
        try:
            attribute = getattr(value, name)
        except Exception as e:
            logger.debug("Could not read %s.%s: %s", type(value).__name__, name, e)
            attribute = None
        attributes.append((name, attribute))
    return attributes


def reflect(
    value: Any, visited: IdentitySet, open_containers: Optional[IdentitySet] = None
) -> Optional[List[Property]]:
    """Convert the declared attributes of ``value`` into a sorted property list.

    Args:
        value: The object to reflect
        visited: Objects already consumed; updated in place
        open_containers: Sequences and mappings currently being listed

    Returns:
        Properties sorted by name, or None when nothing is left to show
    """
    if open_containers is None:
        open_containers = IdentitySet()

    properties = []
    for name, attribute in declared_attributes(value):
        converted = _convert(attribute, visited, open_containers)
        if converted is not None:
            properties.append(Property(name=name, value=converted))
    if not properties:
        return None
    return sorted(properties, key=lambda prop: prop.name)


def _convert(value: Any, visited: IdentitySet, open_containers: IdentitySet) -> Optional[Converted]:
    if value is None or value in visited:
        return None

    if is_scalar(value):
        return scalar_text(value)

    if isinstance(value, (Mapping,) + _SEQUENCE_TYPES):
        if value in open_containers:
            return None
        open_containers.add(value)
        try:
            return _convert_container(value, visited, open_containers)
        finally:
            open_containers.discard(value)

    visited.add(value)
    return reflect(value, visited, open_containers)


def _convert_container(
    value: Any, visited: IdentitySet, open_containers: IdentitySet
) -> Optional[Converted]:
    if isinstance(value, Mapping):
        return reflect(value, visited, open_containers)

    if isinstance(value, (set, frozenset)):
        value = sorted(value, key=str)
    items = []
    for item in value:
        converted = _convert(item, visited, open_containers)
        if converted is not None:
            items.append(Property(value=converted))
    return items or None


def populate_properties(root: ParseData) -> IdentitySet:
    """Reflect properties for every node of the tree in one pass.

    The visited set is seeded with the source object of every captured node
    before any reflection happens, so no tree node is ever repeated as
    property data.

    Returns:
        The visited set as it stands after the pass
    """
    visited = IdentitySet()
    for node in root.walk():
        if node.source is not None:
            visited.add(node.source)
    for node in root.walk():
        if node.source is not None:
            node.properties = reflect(node.source, visited)
    return visited
