"""AST serialization: JSON round-trip for Tessera AST nodes.

Converts typed AST nodes to/from JSON-compatible dicts. Useful for:
- Caching compiled templates to disk
- Shipping a compiled template to another process
- Debugging and inspection

All output is deterministic (sorted keys) for cache-key stability.

Example:
    from tessera import parse
    from tessera.serialization import to_json, from_json

    program = parse("{{ if user }}Hi {{ user.name }}{{ end }}")
    json_str = to_json(program)
    restored = from_json(json_str)
    assert program == restored

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

import json
from dataclasses import fields
from typing import Any

from tessera.location import SourceLocation
from tessera.nodes import (
    Binary,
    BooleanLiteral,
    For,
    Grouped,
    Identifier,
    If,
    Member,
    Node,
    NumberLiteral,
    Program,
    StringLiteral,
    Ternary,
    Text,
    This,
    Unary,
)

# Registry of node type names to classes for deserialization
_NODE_TYPES: dict[str, type[Node]] = {
    cls.__name__: cls
    for cls in (
        Program,
        Text,
        NumberLiteral,
        StringLiteral,
        BooleanLiteral,
        This,
        Identifier,
        Unary,
        Binary,
        Ternary,
        Grouped,
        Member,
        If,
        For,
    )
}


def to_dict(node: Node) -> dict[str, Any]:
    """Convert an AST node to a JSON-compatible dict.

    Includes a ``_type`` discriminator field for deserialization.
    Recursively serializes child nodes and SourceLocation objects.

    Args:
        node: Any Tessera AST node.

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
    if isinstance(value, SourceLocation):
        return {
            "_type": "SourceLocation",
            "lineno": value.lineno,
            "col_offset": value.col_offset,
            "offset": value.offset,
            "end_offset": value.end_offset,
            "end_lineno": value.end_lineno,
            "end_col_offset": value.end_col_offset,
            "source_file": value.source_file,
        }
    if isinstance(value, tuple):
        return [_serialize_value(item) for item in value]
    # Primitives: str, int, float, bool, None
    return value


def from_dict(data: dict[str, Any]) -> Node:
    """Reconstruct a typed AST node from a dict.

    Uses the ``_type`` discriminator to determine the node class.
    Recursively deserializes child nodes and SourceLocation objects.

    Args:
        data: Dict with ``_type`` and node fields (as produced by to_dict).

    Returns:
        Typed AST node (frozen dataclass).

    Raises:
        ValueError: If ``_type`` is missing or unknown.

    """
    type_name = data.get("_type")
    if type_name is None:
        msg = "Missing '_type' field in serialized node"
        raise ValueError(msg)

    node_cls = _NODE_TYPES.get(type_name)
    if node_cls is None:
        msg = f"Unknown node type: {type_name!r}"
        raise ValueError(msg)

    kwargs: dict[str, Any] = {}
    for f in fields(node_cls):
        if f.name in data:
            kwargs[f.name] = _deserialize_value(data[f.name])

    return node_cls(**kwargs)


def _deserialize_value(value: Any) -> Any:
    """Deserialize a single field value."""
    if isinstance(value, dict):
        if value.get("_type") == "SourceLocation":
            return SourceLocation(
                lineno=value["lineno"],
                col_offset=value["col_offset"],
                offset=value.get("offset", 0),
                end_offset=value.get("end_offset", 0),
                end_lineno=value.get("end_lineno"),
                end_col_offset=value.get("end_col_offset"),
                source_file=value.get("source_file"),
            )
        return from_dict(value)
    if isinstance(value, list):
        return tuple(_deserialize_value(item) for item in value)
    return value


def to_json(program: Program, *, indent: int | None = None) -> str:
    """Serialize a Program AST to a JSON string.

    Output is deterministic (sorted keys) for cache-key stability.

    Args:
        program: Program to serialize.
        indent: JSON indentation level (None for compact).

    Returns:
        JSON string.

    """
    return json.dumps(to_dict(program), sort_keys=True, indent=indent)


def from_json(data: str) -> Program:
    """Deserialize a Program AST from a JSON string.

    Args:
        data: JSON string (as produced by to_json).

    Returns:
        Program AST node.

    Raises:
        ValueError: If the JSON doesn't represent a Program.

    """
    node = from_dict(json.loads(data))
    if not isinstance(node, Program):
        msg = f"Expected Program, got {type(node).__name__}"
        raise ValueError(msg)
    return node
