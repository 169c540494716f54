"""JSON and YAML serialization of parse trees.

Both formats use the wire field names ``TypeName``, ``Text``, ``Children``,
``Properties``, ``Name`` and ``Value``. JSON omits absent fields; YAML also
omits empty strings and refuses documents nested deeper than a ceiling.

The plain document is assembled from a stack of pending nodes rather than by
recursing per tree level, so trees hundreds of levels deep can be written.
"""

import json
from itertools import repeat
from typing import Any, Dict, List, Optional

import yaml

from sql_parse_tree.errors import RenderDepthError
from sql_parse_tree.parse_tree.nodes import ParseData, Property

DEFAULT_YAML_MAX_DEPTH = 500


def to_json(data: ParseData) -> str:
    """Serialize a parse tree as indented JSON, leaving out absent fields."""
    document = _tree_document(data, omit_empty=False)
    try:
        return json.dumps(document, indent=2, ensure_ascii=False)
    except RecursionError as e:
        raise RenderDepthError("JSON document is nested too deeply to serialize") from e


def from_json(text: str) -> ParseData:
    """Load a parse tree back from :func:`to_json` output."""
    return ParseData.model_validate_json(text)


def to_yaml(data: ParseData, max_depth: int = DEFAULT_YAML_MAX_DEPTH) -> str:
    """Serialize a parse tree as YAML.

    Args:
        data: The parse tree
        max_depth: Deepest mapping/sequence nesting allowed in the document

    Returns:
        The YAML document

    Raises:
        RenderDepthError: If the document nests deeper than ``max_depth``
    """
    document = _tree_document(data, omit_empty=True, max_depth=max_depth)
    try:
        return yaml.safe_dump(document, sort_keys=False, allow_unicode=True, default_flow_style=False)
    except RecursionError as e:
        raise RenderDepthError("YAML document is nested too deeply to serialize") from e


def _check_depth(depth: int, max_depth: Optional[int]) -> None:
    if max_depth is not None and depth > max_depth:
        raise RenderDepthError(f"YAML document exceeds the maximum nesting depth of {max_depth}")


def _tree_document(
    data: ParseData, omit_empty: bool, max_depth: Optional[int] = None
) -> Dict[str, Any]:
    root: Dict[str, Any] = {}
    pending = [(data, root, 1)]
    while pending:
        node, document, depth = pending.pop()
        _check_depth(depth, max_depth)

        document["TypeName"] = node.type_name
        if node.text or not omit_empty:
            document["Text"] = node.text
        if node.children is not None and (node.children or not omit_empty):
            _check_depth(depth + 1, max_depth)
            children: List[Dict[str, Any]] = [{} for _ in node.children]
            document["Children"] = children
            pending.extend(zip(node.children, children, repeat(depth + 2)))
        if node.properties is not None and (node.properties or not omit_empty):
            document["Properties"] = _properties_document(
                node.properties, depth + 1, max_depth, omit_empty
            )
    return root


def _properties_document(
    properties: List[Property], depth: int, max_depth: Optional[int], omit_empty: bool
) -> List[Dict[str, Any]]:
    _check_depth(depth, max_depth)
    documents = []
    for prop in properties:
        _check_depth(depth + 1, max_depth)
        document: Dict[str, Any] = {}
        if prop.name or (prop.name is not None and not omit_empty):
            document["Name"] = prop.name

        value = prop.value
        if isinstance(value, list):
            if value or not omit_empty:
                document["Value"] = _properties_document(value, depth + 2, max_depth, omit_empty)
        elif value or (value is not None and not omit_empty):
            document["Value"] = value
        documents.append(document)
    return documents
