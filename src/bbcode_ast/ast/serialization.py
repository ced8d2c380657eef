#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbcode_ast/ast/serialization.py
"""JSON serialization and deserialization for BBCode AST nodes.

This module converts AST trees to and from plain dictionaries and JSON,
so parsed fragments can be stored or handed to tools in other languages.

The JSON format preserves:
- Every node kind and its fields
- Attribute insertion order (JSON objects keep key order)
- The ``None`` versus empty-string distinction for tag values
- Round-trip compatibility (AST → JSON → AST produces an equal tree)

Examples
--------
Serialize AST to JSON:

    >>> from bbcode_ast.ast import Root, Tag, Text
    >>> from bbcode_ast.ast.serialization import ast_to_json
    >>>
    >>> root = Root(children=[Tag(name="b", children=[Text(text="Hi")])])
    >>> json_str = ast_to_json(root, indent=2)

Deserialize JSON back to AST:

    >>> from bbcode_ast.ast.serialization import json_to_ast
    >>> json_to_ast(json_str).to_bbcode()
    '[b]Hi[/b]'

"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable

from bbcode_ast.ast.nodes import ListItem, Node, Root, Tag, Text

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


def _serialize_children(node: Root | Tag | ListItem) -> list[dict[str, Any]]:
    return [ast_to_dict(child) for child in node.children]


def _serialize_root(node: Root) -> dict[str, Any]:
    """Serialize a Root node."""
    return {"node_type": "Root", "children": _serialize_children(node)}


def _serialize_tag(node: Tag) -> dict[str, Any]:
    """Serialize a Tag node.

    ``value`` and ``closing_name`` are only written when set so that a
    missing key reads back as ``None``.
    """
    result: dict[str, Any] = {"node_type": "Tag", "name": node.name}
    if node.value is not None:
        result["value"] = node.value
    result["attributes"] = dict(node.attributes)
    result["children"] = _serialize_children(node)
    if node.closing_name is not None:
        result["closing_name"] = node.closing_name
    return result


def _serialize_list_item(node: ListItem) -> dict[str, Any]:
    """Serialize a ListItem node."""
    result: dict[str, Any] = {"node_type": "ListItem", "children": _serialize_children(node)}
    if node.closing_name is not None:
        result["closing_name"] = node.closing_name
    return result


def _serialize_text(node: Text) -> dict[str, Any]:
    """Serialize a Text node."""
    return {"node_type": "Text", "text": node.text}


_SERIALIZATION_DISPATCH: dict[type, Callable[[Any], dict[str, Any]]] = {
    Root: _serialize_root,
    Tag: _serialize_tag,
    ListItem: _serialize_list_item,
    Text: _serialize_text,
}


def ast_to_dict(node: Node) -> dict[str, Any]:
    """Convert an AST node to a dictionary representation.

    Parameters
    ----------
    node : Node
        The AST node to convert

    Returns
    -------
    dict
        Dictionary representation of the node

    Raises
    ------
    ValueError
        If the node is not one of the known node classes

    Examples
    --------
    >>> ast_to_dict(Text(text="Hello"))
    {'node_type': 'Text', 'text': 'Hello'}

    """
    node_class = type(node)
    serializer = _SERIALIZATION_DISPATCH.get(node_class)
    if serializer:
        return serializer(node)

    raise ValueError(f"Unknown node type for serialization: {node_class.__name__}")


def _deserialize_children(data: dict[str, Any]) -> list[Node]:
    children_data = data.get("children", [])
    if not isinstance(children_data, list):
        raise ValueError(f"'children' must be a list, got {type(children_data).__name__}")
    children = [dict_to_ast(child) for child in children_data]
    if any(isinstance(child, Root) for child in children):
        raise ValueError("Root node cannot appear as a child")
    return children


def _optional_str(data: dict[str, Any], key: str, node_type: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"{node_type} '{key}' must be a string or null, got {type(value).__name__}")
    return value


def _deserialize_root(data: dict[str, Any]) -> Root:
    """Deserialize Root node."""
    return Root(children=_deserialize_children(data))


def _deserialize_tag(data: dict[str, Any]) -> Tag:
    """Deserialize Tag node."""
    name = data.get("name")
    if not isinstance(name, str) or not name:
        raise ValueError("Tag node requires a non-empty string 'name'")

    attributes = data.get("attributes", {})
    if not isinstance(attributes, dict) or not all(
        isinstance(key, str) and isinstance(value, str) for key, value in attributes.items()
    ):
        raise ValueError(f"Tag '{name}' has invalid 'attributes'; expected a mapping of strings")

    return Tag(
        name=name,
        value=_optional_str(data, "value", "Tag"),
        attributes=dict(attributes),
        children=_deserialize_children(data),
        closing_name=_optional_str(data, "closing_name", "Tag"),
    )


def _deserialize_list_item(data: dict[str, Any]) -> ListItem:
    """Deserialize ListItem node."""
    return ListItem(children=_deserialize_children(data), closing_name=_optional_str(data, "closing_name", "ListItem"))


def _deserialize_text(data: dict[str, Any]) -> Text:
    """Deserialize Text node."""
    text = data.get("text")
    if not isinstance(text, str):
        raise ValueError("Text node requires a string 'text'")
    return Text(text=text)


_DESERIALIZATION_DISPATCH: dict[str, Callable[[dict[str, Any]], Node]] = {
    "Root": _deserialize_root,
    "Tag": _deserialize_tag,
    "ListItem": _deserialize_list_item,
    "Text": _deserialize_text,
}


def dict_to_ast(data: dict[str, Any]) -> Node:
    """Convert a dictionary representation back to an AST node.

    Children are attached directly, so the result has exactly the shape
    described by ``data`` (adjacent text entries are not merged).

    Parameters
    ----------
    data : dict
        Dictionary representation of a node

    Returns
    -------
    Node
        Reconstructed AST node

    Raises
    ------
    ValueError
        If the dictionary is malformed or names an unknown node type

    Examples
    --------
    >>> node = dict_to_ast({"node_type": "Text", "text": "Hello"})
    >>> print(node.text)
    Hello

    """
    if not isinstance(data, dict):
        raise ValueError(f"Expected a dictionary, got {type(data).__name__}")

    node_type = data.get("node_type")
    if not node_type:
        raise ValueError("Dictionary must contain 'node_type' field")

    deserializer = _DESERIALIZATION_DISPATCH.get(node_type)
    if not deserializer:
        raise ValueError(f"Unknown node type: {node_type}")

    return deserializer(data)


def ast_to_json(node: Node, indent: int | None = None) -> str:
    """Serialize an AST node to a JSON string with schema versioning.

    Parameters
    ----------
    node : Node
        The AST node to serialize
    indent : int or None, default = None
        Number of spaces for indentation (None for compact format)

    Returns
    -------
    str
        JSON string of the form ``{"schema_version": 1, "node_type": ...}``

    """
    node_dict = ast_to_dict(node)
    versioned_dict = {"schema_version": SCHEMA_VERSION, **node_dict}
    return json.dumps(versioned_dict, indent=indent, ensure_ascii=False)


def json_to_ast(json_str: str, validate_schema: bool = True) -> Node:
    """Deserialize a JSON string to an AST node.

    JSON without a ``schema_version`` field is read as version 1.

    Parameters
    ----------
    json_str : str
        JSON string representation
    validate_schema : bool, default True
        If True, raise on unsupported schema versions. If False, log a
        warning and attempt to read the document anyway.

    Returns
    -------
    Node
        Reconstructed AST node

    Raises
    ------
    ValueError
        If the JSON is malformed, describes an invalid tree, or has an
        unsupported schema version

    """
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object at top level, got {type(data).__name__}")

    schema_version = data.pop("schema_version", SCHEMA_VERSION)
    if schema_version != SCHEMA_VERSION:
        if validate_schema:
            raise ValueError(
                f"Unsupported schema version: {schema_version}. "
                f"This version of bbcode-ast supports schema version {SCHEMA_VERSION} only."
            )
        logger.warning("Schema version %s differs from supported version %s", schema_version, SCHEMA_VERSION)

    return dict_to_ast(data)


__all__ = [
    "ast_to_dict",
    "dict_to_ast",
    "ast_to_json",
    "json_to_ast",
]
