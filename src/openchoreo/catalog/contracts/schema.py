# openchoreo/catalog/contracts/schema.py
"""
Schema node classification and flattened field contracts.

Component-type parameter schemas are loosely typed JSON Schema (draft-07)
trees. ``node_kind`` classifies a node into one of a closed set of shapes
so that the transformer can dispatch on it exhaustively.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

PRIMITIVE_TYPES = frozenset({"string", "number", "integer", "boolean", "null"})


class NodeKind(str, Enum):
    BOOLEAN = "boolean-schema"
    PRIMITIVE = "primitive"
    OBJECT = "object"
    ARRAY = "array"
    TUPLE = "tuple"
    CONDITIONAL = "conditional"


def _declares(node_type: Any, name: str) -> bool:
    if isinstance(node_type, list):
        return name in node_type
    return node_type == name


def node_kind(node: Any) -> NodeKind:
    """Classify a schema node.

    ``True``/``False`` (and anything that is not a mapping) is a boolean
    schema. An untyped node with ``properties`` is an object, as is any
    node whose ``type`` list contains ``object`` (``["object", "null"]``).
    A node with ``if``/``then``/``else``/``allOf`` and no ``type`` is a
    conditional. Arrays whose ``items`` is a list are tuples. Nodes
    without a recognised ``type`` are treated as primitives.
    """
    if not isinstance(node, dict):
        return NodeKind.BOOLEAN

    node_type = node.get("type")
    if _declares(node_type, "object") or (node_type is None and "properties" in node):
        return NodeKind.OBJECT
    if _declares(node_type, "array"):
        if isinstance(node.get("items"), list):
            return NodeKind.TUPLE
        return NodeKind.ARRAY
    if node_type is None and any(k in node for k in ("if", "then", "else", "allOf")):
        return NodeKind.CONDITIONAL
    return NodeKind.PRIMITIVE


@dataclass(frozen=True)
class FlatField:
    """One leaf of a flattened parameter schema.

    Attributes:
        path: Dot-joined property keys from the root (``docker.context``).
        display_name: Title of the leaf or a derived display name.
        type: JSON Schema type (``string`` when the source omits it).
        required: Whether the leaf is required.
        default: Default value from the schema, if any.
        description: Description from the schema, if any.
        parent_path: Dot path of the enclosing object, ``None`` at the root.
        parent_title: Title of the enclosing object, used for grouping.
    """

    path: str
    display_name: str
    type: str | list[str]
    required: bool
    default: Any = None
    description: str | None = None
    parent_path: str | None = None
    parent_title: str | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "path": self.path,
            "displayName": self.display_name,
            "type": self.type,
            "required": self.required,
        }
        if self.default is not None:
            out["default"] = self.default
        if self.description is not None:
            out["description"] = self.description
        if self.parent_path is not None:
            out["parentPath"] = self.parent_path
        if self.parent_title is not None:
            out["parentTitle"] = self.parent_title
        return out
