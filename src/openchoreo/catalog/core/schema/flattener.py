# openchoreo/catalog/core/schema/flattener.py
"""
Flatten nested parameter schemas into dot-addressed form fields.

Example: ``{docker: {context: ...}}`` becomes a single field with path
``docker.context``, grouped under the ``Docker`` parent title.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from openchoreo.catalog.contracts.schema import FlatField, NodeKind, node_kind
from openchoreo.catalog.core.schema.transformer import format_title

logger = logging.getLogger(__name__)


def format_field_name(key: str) -> str:
    """Human readable name for the last segment of a field path."""
    return format_title(key)


def flatten(
    schema: Any,
    parent_path: str = "",
    parent_required: Iterable[str] = (),
    parent_title: str | None = None,
) -> list[FlatField]:
    """Flatten an object schema into an ordered list of leaf fields.

    Properties are visited depth-first in declaration order. Nested
    object properties are expanded; everything else is a leaf.

    Args:
        schema: Object schema to flatten.
        parent_path: Dot path of ``schema`` inside the root schema.
        parent_required: Dot paths already known to be required.
        parent_title: Title of ``schema``, attached to its leaves.

    Returns:
        One :class:`FlatField` per leaf.
    """
    if not isinstance(schema, dict) or not isinstance(schema.get("properties"), dict):
        return []

    required = schema.get("required") if isinstance(schema.get("required"), list) else []
    accumulated = set(parent_required)

    fields: list[FlatField] = []
    for key, prop in schema["properties"].items():
        if not isinstance(prop, dict):
            continue

        full_path = f"{parent_path}.{key}" if parent_path else key
        is_required = key in required or full_path in accumulated

        if node_kind(prop) is NodeKind.OBJECT and isinstance(prop.get("properties"), dict):
            nested_required = accumulated | {f"{full_path}.{r}" for r in prop.get("required") or []}
            fields.extend(
                flatten(
                    prop,
                    full_path,
                    nested_required,
                    prop.get("title") or format_field_name(key),
                )
            )
            continue

        fields.append(
            FlatField(
                path=full_path,
                display_name=prop.get("title") or format_field_name(key),
                type=prop.get("type") or "string",
                required=is_required,
                default=prop.get("default"),
                description=prop.get("description"),
                parent_path=parent_path or None,
                parent_title=parent_title,
            )
        )

    return fields


def default_values(fields: Iterable[FlatField]) -> dict[str, Any]:
    """Initial form values: the defaults of all fields that declare one."""
    return {f.path: f.default for f in fields if f.default is not None}


def unflatten(flat: Mapping[str, Any]) -> dict[str, Any]:
    """Rebuild a nested mapping from dot-path keys.

    ``{"docker.context": "/app", "repository.url": "u"}`` becomes
    ``{"docker": {"context": "/app"}, "repository": {"url": "u"}}``.
    """
    nested: dict[str, Any] = {}
    for path, value in flat.items():
        parts = path.split(".")
        current = nested
        for part in parts[:-1]:
            child = current.get(part)
            if not isinstance(child, dict):
                child = {}
                current[part] = child
            current = child
        current[parts[-1]] = value
    return nested
