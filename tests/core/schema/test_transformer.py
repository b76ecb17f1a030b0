# tests/core/schema/test_transformer.py
from __future__ import annotations

import copy

import pytest
from jsonschema import Draft7Validator

from openchoreo.catalog.core.schema.transformer import (
    convert_dependencies,
    format_title,
    transform,
)


def _strip_ui(node):
    """Drop ``ui:*`` hints so the result can be checked as plain JSON Schema."""
    if isinstance(node, dict):
        return {k: _strip_ui(v) for k, v in node.items() if not k.startswith("ui:")}
    if isinstance(node, list):
        return [_strip_ui(v) for v in node]
    return node


class TestFormatTitle:
    @pytest.mark.parametrize(
        "key,expected",
        [
            ("web-service", "Web Service"),
            ("docker.context", "Docker Context"),
            ("replicas", "Replicas"),
            ("max_connections", "Max Connections"),
            ("--x--", "X"),
        ],
    )
    def test_splits_and_capitalizes(self, key, expected):
        assert format_title(key) == expected


class TestPrimitives:
    def test_constraints_copied_verbatim(self):
        schema = {
            "type": "object",
            "properties": {
                "replicas": {
                    "type": "integer",
                    "minimum": 1,
                    "maximum": 10,
                    "multipleOf": 1,
                    "default": 2,
                },
                "name": {
                    "type": "string",
                    "pattern": "^[a-z]+$",
                    "minLength": 3,
                    "maxLength": 20,
                    "enum": ["abc", "def"],
                },
            },
        }
        out = transform(schema)
        replicas = out["properties"]["replicas"]
        assert replicas["minimum"] == 1
        assert replicas["maximum"] == 10
        assert replicas["multipleOf"] == 1
        assert replicas["default"] == 2
        name = out["properties"]["name"]
        assert name["pattern"] == "^[a-z]+$"
        assert (name["minLength"], name["maxLength"]) == (3, 20)
        assert name["enum"] == ["abc", "def"]

    def test_title_derived_from_key_only_when_absent(self):
        schema = {
            "type": "object",
            "properties": {
                "image-tag": {"type": "string"},
                "port": {"type": "integer", "title": "HTTP Port"},
            },
        }
        props = transform(schema)["properties"]
        assert props["image-tag"]["title"] == "Image Tag"
        assert props["port"]["title"] == "HTTP Port"

    def test_source_is_not_mutated(self):
        schema = {
            "type": "object",
            "properties": {"tags": {"type": "array", "items": {"type": "string"}}},
            "required": ["tags"],
        }
        before = copy.deepcopy(schema)
        transform(schema)
        assert schema == before


class TestUiHints:
    def test_boolean_gets_radio(self):
        out = transform({"type": "boolean"}, "enabled")
        assert out["ui:widget"] == "radio"

    @pytest.mark.parametrize(
        "fmt,key,value",
        [
            ("email", "ui:help", "Enter a valid email address"),
            ("uri", "ui:help", "Enter a valid URL"),
            ("hostname", "ui:help", "Enter a valid URL"),
            ("date", "ui:widget", "date"),
            ("date-time", "ui:widget", "datetime"),
        ],
    )
    def test_string_formats(self, fmt, key, value):
        out = transform({"type": "string", "format": fmt}, "field")
        assert out[key] == value
        assert out["format"] == fmt

    def test_long_strings_use_textarea(self):
        assert transform({"type": "string", "maxLength": 101})["ui:widget"] == "textarea"
        assert "ui:widget" not in transform({"type": "string", "maxLength": 100})

    def test_arrays_are_editable(self):
        out = transform({"type": "array", "items": {"type": "string"}})
        assert out["ui:options"] == {"orderable": True, "addable": True, "removable": True}


class TestObjectsAndArrays:
    def test_nested_object_keeps_shape_and_required(self):
        schema = {
            "type": "object",
            "required": ["resources"],
            "properties": {
                "resources": {
                    "type": "object",
                    "required": ["cpu"],
                    "properties": {
                        "cpu": {"type": "string"},
                        "memory": {"type": "string"},
                    },
                    "additionalProperties": False,
                }
            },
        }
        out = transform(schema)
        assert out["required"] == ["resources"]
        resources = out["properties"]["resources"]
        assert list(resources["properties"]) == ["cpu", "memory"]
        assert resources["required"] == ["cpu"]
        assert resources["additionalProperties"] is False

    def test_nullable_object_keeps_nested_properties(self):
        schema = {
            "type": "object",
            "properties": {
                "resources": {
                    "type": ["object", "null"],
                    "required": ["cpu"],
                    "properties": {
                        "cpu": {"type": "string"},
                        "memory": {"type": "string"},
                    },
                }
            },
        }
        resources = transform(schema)["properties"]["resources"]
        assert resources["type"] == ["object", "null"]
        assert list(resources["properties"]) == ["cpu", "memory"]
        assert resources["required"] == ["cpu"]

    def test_nullable_array_transforms_items(self):
        out = transform({"type": ["array", "null"], "items": {"type": "string"}})
        assert out["items"] == {"type": "string"}
        assert out["ui:options"]["addable"] is True

    def test_additional_properties_schema_is_transformed(self):
        schema = {"type": "object", "additionalProperties": {"type": "boolean"}}
        out = transform(schema)
        assert out["additionalProperties"] == {"type": "boolean", "ui:widget": "radio"}

    def test_tuple_items_keep_order_and_length(self):
        schema = {
            "type": "array",
            "items": [{"type": "string"}, {"type": "integer", "minimum": 0}, True],
            "minItems": 2,
            "maxItems": 3,
            "uniqueItems": True,
        }
        out = transform(schema)
        assert len(out["items"]) == 3
        assert out["items"][0]["type"] == "string"
        assert out["items"][1]["minimum"] == 0
        assert out["items"][2] is True
        assert (out["minItems"], out["maxItems"], out["uniqueItems"]) == (2, 3, True)

    def test_boolean_properties_are_dropped(self):
        schema = {"type": "object", "properties": {"anything": True, "port": {"type": "integer"}}}
        assert list(transform(schema)["properties"]) == ["port"]

    def test_boolean_schema_transforms_to_none(self):
        assert transform(True) is None
        assert transform(False) is None


class TestDependencies:
    def test_property_dependency_copied(self):
        schema = {
            "type": "object",
            "properties": {"a": {"type": "string"}, "b": {"type": "string"}},
            "dependencies": {"a": ["b"]},
        }
        assert transform(schema)["dependencies"] == {"a": ["b"]}

    def test_single_conditional_wrapped_once(self):
        condition = {"properties": {"tls": {"const": True}}}
        schema = {
            "type": "object",
            "properties": {"tls": {"type": "boolean"}},
            "dependencies": {
                "tls": {
                    "if": condition,
                    "then": {
                        "properties": {"cert": {"type": "string"}},
                        "required": ["cert"],
                    },
                }
            },
        }
        dep = transform(schema)["dependencies"]["tls"]
        assert len(dep["allOf"]) == 1
        branch = dep["allOf"][0]
        assert branch["if"] == condition
        assert branch["then"]["required"] == ["cert"]
        assert branch["then"]["properties"]["cert"]["title"] == "Cert"

    def test_existing_all_of_not_double_wrapped(self):
        schema = {
            "dependencies": {
                "mode": {
                    "allOf": [
                        {"if": {"properties": {"mode": {"const": "a"}}},
                         "then": {"properties": {"x": {"type": "string"}}}},
                        {"if": {"properties": {"mode": {"const": "b"}}},
                         "then": {"properties": {"y": {"type": "string"}}},
                         "else": {"properties": {"z": {"type": "string"}}}},
                    ]
                }
            }
        }
        dep = convert_dependencies(schema)["mode"]
        assert len(dep["allOf"]) == 2
        assert "allOf" not in dep["allOf"][0]
        assert list(dep["allOf"][1]["else"]["properties"]) == ["z"]

    def test_boolean_dependency_skipped(self):
        schema = {"dependencies": {"a": True, "b": ["c"]}}
        assert convert_dependencies(schema) == {"b": ["c"]}

    def test_only_boolean_dependencies_yield_none(self):
        assert convert_dependencies({"dependencies": {"a": False}}) is None
        assert convert_dependencies({"type": "object"}) is None

    def test_if_condition_copied_untouched(self):
        condition = {"properties": {"kind": {"enum": ["x", "y"]}}, "required": ["kind"]}
        schema = {"dependencies": {"kind": {"if": condition, "then": {"required": ["z"]}}}}
        dep = convert_dependencies(schema)["kind"]["allOf"][0]
        assert dep["if"] == condition
        assert dep["if"] is not condition

    def test_untyped_conditional_leaf_keeps_its_keywords(self):
        schema = {
            "type": "object",
            "properties": {
                "mode": {
                    "description": "Deployment mode",
                    "default": "a",
                    "enum": ["a", "b"],
                    "allOf": [{"if": {"const": "a"}, "then": {}}],
                }
            },
        }
        mode = transform(schema)["properties"]["mode"]
        assert mode["title"] == "Mode"
        assert mode["description"] == "Deployment mode"
        assert mode["default"] == "a"
        assert mode["enum"] == ["a", "b"]
        assert mode["allOf"] == [{"if": {"const": "a"}, "then": {}}]


class TestMalformedInput:
    def test_malformed_nodes_do_not_raise(self):
        schema = {
            "type": "object",
            "properties": {
                "items-none": {"type": "array"},
                "weird": {"type": "object", "properties": "nope"},
                "deps": {"type": "object", "dependencies": ["not", "a", "map"]},
            },
            "required": "not-a-list",
        }
        out = transform(schema)
        assert "items" not in out["properties"]["items-none"]
        assert "properties" not in out["properties"]["weird"]
        assert "dependencies" not in out["properties"]["deps"]
        assert "required" not in out


class TestDraft7Validity:
    def test_transformed_schema_is_valid_draft7(self):
        schema = {
            "type": "object",
            "required": ["port"],
            "properties": {
                "port": {"type": "integer", "minimum": 1, "maximum": 65535},
                "email": {"type": "string", "format": "email"},
                "hosts": {"type": "array", "items": {"type": "string"}, "minItems": 1},
                "pair": {"type": "array", "items": [{"type": "string"}, {"type": "number"}]},
                "tls": {"type": "boolean"},
            },
            "dependencies": {
                "tls": {
                    "if": {"properties": {"tls": {"const": True}}},
                    "then": {"properties": {"cert": {"type": "string"}}, "required": ["cert"]},
                }
            },
        }
        out = _strip_ui(transform(schema))
        Draft7Validator.check_schema(out)
        assert Draft7Validator(out).is_valid(
            {"port": 80, "email": "a@b.c", "hosts": ["x"], "tls": True, "cert": "pem"}
        )
        assert not Draft7Validator(out).is_valid({"port": 80, "tls": True})
