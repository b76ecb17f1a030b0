# openchoreo/catalog/core/schema/transformer.py
"""
JSON Schema (draft-07) to UI form schema transformation.

The output keeps the shape and every validation keyword of the source
(types, enums, constraints, ``required``, nested objects, arrays, tuples
and ``dependencies``) and adds ``ui:*`` presentation hints for the form
renderer. Validation itself stays with the downstream validator.

Malformed input never raises: nodes that are not mappings are boolean
schemas and are dropped, and missing optional keywords are omitted.
"""
from __future__ import annotations

import copy
import logging
import re
from typing import Any

from openchoreo.catalog.contracts.schema import NodeKind, node_kind

logger = logging.getLogger(__name__)

UiFieldNode = dict[str, Any]

_SEPARATORS = re.compile(r"[^0-9A-Za-z]+")

# Keywords copied verbatim whenever present on a node
_COMMON_KEYWORDS = ("description", "enum", "const", "examples", "readOnly")
_STRING_KEYWORDS = ("pattern", "minLength", "maxLength", "format")
_NUMERIC_KEYWORDS = (
    "minimum",
    "maximum",
    "exclusiveMinimum",
    "exclusiveMaximum",
    "multipleOf",
)
_ARRAY_KEYWORDS = ("minItems", "maxItems", "uniqueItems")
_OBJECT_KEYWORDS = ("minProperties", "maxProperties")

_FORMAT_HELP = {
    "email": "Enter a valid email address",
    "uri": "Enter a valid URL",
    "hostname": "Enter a valid URL",
}
_FORMAT_WIDGETS = {
    "date": "date",
    "date-time": "datetime",
}
TEXTAREA_MIN_LENGTH = 100


def format_title(key: str) -> str:
    """Derive a display title from a property key.

    ``"web-service"`` becomes ``"Web Service"`` and ``"docker.context"``
    becomes ``"Docker Context"``. Only the first letter of each token is
    upper-cased.
    """
    tokens = [t for t in _SEPARATORS.split(key) if t]
    return " ".join(t[:1].upper() + t[1:] for t in tokens)


def _has_type(node: dict[str, Any], name: str) -> bool:
    node_type = node.get("type")
    if isinstance(node_type, list):
        return name in node_type
    return node_type == name


def _copy_keywords(src: dict[str, Any], dst: UiFieldNode, keywords: tuple[str, ...]) -> None:
    for kw in keywords:
        if kw in src:
            dst[kw] = copy.deepcopy(src[kw])


def transform(schema: Any, key: str = "") -> UiFieldNode | None:
    """Transform one schema node into its UI counterpart.

    Args:
        schema: The source node.
        key: Property key of the node in its parent, used to derive a
            title for primitive leaves that have none.

    Returns:
        The transformed node, or ``None`` for boolean schemas.
    """
    kind = node_kind(schema)

    if kind is NodeKind.BOOLEAN:
        return None
    is_leaf = kind in (NodeKind.PRIMITIVE, NodeKind.CONDITIONAL)

    converted: UiFieldNode = {}
    if "type" in schema:
        converted["type"] = copy.deepcopy(schema["type"])
    if "title" in schema:
        converted["title"] = schema["title"]
    elif is_leaf and key:
        converted["title"] = format_title(key)
    if "default" in schema:
        converted["default"] = copy.deepcopy(schema["default"])

    _copy_keywords(schema, converted, _COMMON_KEYWORDS)

    if is_leaf:
        _copy_keywords(schema, converted, _STRING_KEYWORDS)
        _copy_keywords(schema, converted, _NUMERIC_KEYWORDS)
    if kind is NodeKind.CONDITIONAL:
        converted.update(convert_schema_object(schema))
    elif kind is NodeKind.OBJECT:
        _convert_object(schema, converted)
    elif kind is NodeKind.ARRAY:
        items = transform(schema.get("items"))
        if items is not None:
            converted["items"] = items
        _copy_keywords(schema, converted, _ARRAY_KEYWORDS)
    elif kind is NodeKind.TUPLE:
        # Positions matter in a tuple, so boolean members are kept as-is.
        converted["items"] = [
            item if isinstance(item, bool) else (transform(item) or {})
            for item in schema["items"]
        ]
        _copy_keywords(schema, converted, _ARRAY_KEYWORDS)
        if "additionalItems" in schema:
            additional = schema["additionalItems"]
            converted["additionalItems"] = (
                additional if isinstance(additional, bool) else transform(additional)
            )

    add_ui_hints(converted, schema)
    return converted


def _convert_object(schema: dict[str, Any], converted: UiFieldNode) -> None:
    if isinstance(schema.get("properties"), dict):
        converted["properties"] = convert_properties(schema)
    if isinstance(schema.get("required"), list):
        converted["required"] = list(schema["required"])

    additional = schema.get("additionalProperties")
    if isinstance(additional, bool):
        converted["additionalProperties"] = additional
    elif isinstance(additional, dict):
        converted["additionalProperties"] = transform(additional)

    _copy_keywords(schema, converted, _OBJECT_KEYWORDS)

    dependencies = convert_dependencies(schema)
    if dependencies:
        converted["dependencies"] = dependencies


def convert_properties(schema: Any) -> dict[str, UiFieldNode]:
    """Transform every property of an object schema, in declaration order."""
    if not isinstance(schema, dict):
        return {}
    properties = schema.get("properties")
    if not isinstance(properties, dict):
        return {}

    converted: dict[str, UiFieldNode] = {}
    for key, prop in properties.items():
        node = transform(prop, key)
        if node is None:
            logger.debug("Skipping boolean schema for property '%s'", key)
            continue
        converted[key] = node
    return converted


def add_ui_hints(converted: UiFieldNode, schema: dict[str, Any]) -> None:
    """Attach widget and help hints derived from ``type`` and ``format``."""
    if _has_type(schema, "boolean"):
        converted["ui:widget"] = "radio"

    if _has_type(schema, "string"):
        fmt = schema.get("format")
        if fmt in _FORMAT_HELP:
            converted["ui:help"] = _FORMAT_HELP[fmt]
        elif fmt in _FORMAT_WIDGETS:
            converted["ui:widget"] = _FORMAT_WIDGETS[fmt]

        max_length = schema.get("maxLength")
        if isinstance(max_length, (int, float)) and max_length > TEXTAREA_MIN_LENGTH:
            converted["ui:widget"] = "textarea"

    if _has_type(schema, "array"):
        converted["ui:options"] = {
            "orderable": True,
            "addable": True,
            "removable": True,
        }


def convert_dependencies(schema: Any) -> dict[str, Any] | None:
    """Convert the ``dependencies`` keyword of an object schema.

    Property dependencies (lists of sibling names) are copied unchanged.
    Schema dependencies are converted recursively and always come out as
    an ``allOf`` list: a lone conditional is wrapped in a one-element
    ``allOf``, an existing ``allOf`` is kept as is.

    Returns:
        The converted mapping, or ``None`` when nothing remains.
    """
    if not isinstance(schema, dict):
        return None
    dependencies = schema.get("dependencies")
    if not isinstance(dependencies, dict):
        return None

    converted: dict[str, Any] = {}
    for key, dep in dependencies.items():
        if isinstance(dep, list):
            converted[key] = list(dep)
        elif isinstance(dep, dict):
            dep_schema = convert_schema_object(dep)
            if "allOf" in dep_schema:
                converted[key] = dep_schema
            else:
                converted[key] = {"allOf": [dep_schema]}
        else:
            logger.debug("Skipping non-schema dependency for '%s'", key)

    return converted or None


def convert_schema_object(schema: dict[str, Any]) -> UiFieldNode:
    """Convert a conditional body (``if``/``then``/``else``/``allOf``).

    The ``if`` condition is evaluated by the renderer, never displayed,
    so it is copied untouched.
    """
    converted: UiFieldNode = {}

    if isinstance(schema.get("properties"), dict):
        converted["properties"] = convert_properties(schema)
    if isinstance(schema.get("required"), list):
        converted["required"] = list(schema["required"])

    if "if" in schema:
        converted["if"] = copy.deepcopy(schema["if"])
    for branch in ("then", "else"):
        body = schema.get(branch)
        if isinstance(body, dict):
            converted[branch] = convert_schema_object(body)

    if isinstance(schema.get("allOf"), list):
        converted["allOf"] = [
            convert_schema_object(member)
            for member in schema["allOf"]
            if isinstance(member, dict)
        ]

    return converted
