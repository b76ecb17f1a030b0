"""Parameter schema transformation and flattening."""
from openchoreo.catalog.core.schema.flattener import (
    default_values,
    flatten,
    format_field_name,
    unflatten,
)
from openchoreo.catalog.core.schema.transformer import (
    UiFieldNode,
    convert_dependencies,
    convert_properties,
    format_title,
    transform,
)

__all__ = [
    "default_values",
    "flatten",
    "format_field_name",
    "unflatten",
    "UiFieldNode",
    "convert_dependencies",
    "convert_properties",
    "format_title",
    "transform",
]
