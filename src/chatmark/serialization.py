"""Tree serialization: JSON round-trip for chatmark nodes.

Converts typed nodes to/from JSON-compatible dicts. Useful for:
- Caching parsed messages outside the process
- Sending parsed messages between services
- Debugging and inspection

All output is deterministic (sorted keys) for cache-key stability. Loading
checks every field, so a tree that loads without error renders and walks
like a parsed one.

Example:
    from chatmark import parse
    from chatmark.serialization import to_json, from_json

    doc = parse("**Hello** ||World||")
    restored = from_json(to_json(doc))
    assert doc == restored

Recursion:
    to_dict and from_dict recurse a few frames per nesting level. Parsed
    trees nest at most six styled levels. Hand-built trees nested more than
    about 150 levels exhaust the default recursion limit and raise
    RecursionError here, although they still render.

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

import json
from dataclasses import fields
from typing import Any

from chatmark.errors import DeserializationError
from chatmark.nodes import (
    ELEMENT_TYPES,
    BlockQuote,
    Bold,
    Document,
    ElementCollection,
    ItalicsStar,
    ItalicsUnderscore,
    MultiLineCode,
    Node,
    OneLineCode,
    Plain,
    Spoiler,
    Strikethrough,
    Underline,
)

# Registry of node type names to classes for deserialization
_NODE_TYPES: dict[str, type[Node]] = {
    "Document": Document,
    "ElementCollection": ElementCollection,
    "Plain": Plain,
    "ItalicsStar": ItalicsStar,
    "ItalicsUnderscore": ItalicsUnderscore,
    "Bold": Bold,
    "Underline": Underline,
    "Strikethrough": Strikethrough,
    "Spoiler": Spoiler,
    "OneLineCode": OneLineCode,
    "MultiLineCode": MultiLineCode,
    "BlockQuote": BlockQuote,
}


def to_dict(node: Node) -> dict[str, Any]:
    """Convert a node to a JSON-compatible dict.

    Includes a ``_type`` discriminator field for deserialization.

    Args:
        node: Any chatmark node.

    Returns:
        Dict with ``_type`` and all node fields.

    """
    result: dict[str, Any] = {"_type": type(node).__name__}

    for f in fields(node):
        result[f.name] = _serialize_value(getattr(node, f.name))

    return result


def _serialize_value(value: Any) -> Any:
    """Serialize a single field value."""
    if isinstance(value, Node):
        return to_dict(value)
    if isinstance(value, tuple):
        return [_serialize_value(item) for item in value]
    # Primitives: str, None
    return value


def from_dict(data: dict[str, Any]) -> Node:
    """Reconstruct a typed node from a dict.

    Args:
        data: Dict with ``_type`` and node fields (as produced by to_dict).

    Returns:
        Typed node (frozen dataclass).

    Raises:
        DeserializationError: If ``_type`` is missing or unknown, a required
            field is absent, or a field holds the wrong kind of value.

    """
    if not isinstance(data, dict):
        msg = f"Expected a serialized node, got {type(data).__name__}"
        raise DeserializationError(msg)

    type_name = data.get("_type")
    if type_name is None:
        msg = "Missing '_type' field in serialized node"
        raise DeserializationError(msg)

    node_cls = _NODE_TYPES.get(type_name)
    if node_cls is None:
        msg = f"Unknown node type: {type_name!r}"
        raise DeserializationError(msg)

    kwargs: dict[str, Any] = {}
    for f in fields(node_cls):
        if f.name not in data:
            continue
        value = _deserialize_value(data[f.name])
        _check_field(type_name, f.name, value)
        kwargs[f.name] = value

    try:
        return node_cls(**kwargs)
    except TypeError as e:
        msg = f"Invalid fields for {type_name}: {e}"
        raise DeserializationError(msg) from e


def _deserialize_value(value: Any) -> Any:
    """Deserialize a single field value."""
    if isinstance(value, dict):
        return from_dict(value)
    if isinstance(value, list):
        return tuple(_deserialize_value(item) for item in value)
    return value


def _check_field(type_name: str, name: str, value: Any) -> None:
    """Reject field values the node types never hold."""
    match name:
        case "children":
            valid = isinstance(value, ElementCollection)
        case "elements":
            valid = isinstance(value, tuple) and all(
                isinstance(item, ELEMENT_TYPES) for item in value
            )
        case "language":
            valid = value is None or isinstance(value, str)
        case _:
            valid = isinstance(value, str)
    if not valid:
        if name == "elements" and isinstance(value, tuple):
            bad = next(item for item in value if not isinstance(item, ELEMENT_TYPES))
            got = f"a {type(bad).__name__} item"
        else:
            got = type(value).__name__
        msg = f"Invalid {name!r} for {type_name}: got {got}"
        raise DeserializationError(msg)


def to_json(doc: Document, *, indent: int | None = None) -> str:
    """Serialize a Document to a JSON string.

    Output is deterministic (sorted keys) for cache-key stability.

    Args:
        doc: Document to serialize.
        indent: JSON indentation level (None for compact).

    Returns:
        JSON string.

    """
    return json.dumps(to_dict(doc), sort_keys=True, indent=indent)


def from_json(data: str) -> Document:
    """Deserialize a Document from a JSON string.

    Raises:
        DeserializationError: If the JSON is malformed or does not
            represent a Document.

    """
    try:
        raw = json.loads(data)
    except json.JSONDecodeError as e:
        msg = f"Invalid JSON: {e}"
        raise DeserializationError(msg) from e
    node = from_dict(raw)
    if not isinstance(node, Document):
        msg = f"Expected Document, got {type(node).__name__}"
        raise DeserializationError(msg)
    return node
