# tests/core/schema/test_flattener.py
from __future__ import annotations

from openchoreo.catalog.core.schema.flattener import (
    default_values,
    flatten,
    format_field_name,
    unflatten,
)
from openchoreo.catalog.core.schema.transformer import transform

BUILD_SCHEMA = {
    "type": "object",
    "required": ["docker"],
    "properties": {
        "docker": {
            "type": "object",
            "title": "Docker Settings",
            "required": ["context"],
            "properties": {
                "context": {"type": "string", "default": "/app"},
                "filePath": {"type": "string", "description": "Path to the Dockerfile"},
            },
        },
        "repository": {
            "type": "object",
            "properties": {
                "url": {"type": "string"},
                "revision": {
                    "type": "object",
                    "required": ["branch"],
                    "properties": {
                        "branch": {"type": "string", "default": "main"},
                        "commit": {"type": "string"},
                    },
                },
            },
        },
        "verbose": {"type": "boolean"},
        "level": {},
    },
}


def _leaf_paths(node, prefix=""):
    paths = []
    for key, prop in (node.get("properties") or {}).items():
        path = f"{prefix}.{key}" if prefix else key
        if "properties" in prop:
            paths.extend(_leaf_paths(prop, path))
        else:
            paths.append(path)
    return paths


class TestFlatten:
    def test_depth_first_declaration_order(self):
        paths = [f.path for f in flatten(BUILD_SCHEMA)]
        assert paths == [
            "docker.context",
            "docker.filePath",
            "repository.url",
            "repository.revision.branch",
            "repository.revision.commit",
            "verbose",
            "level",
        ]

    def test_paths_are_unique_and_one_per_leaf(self):
        fields = flatten(BUILD_SCHEMA)
        assert len(fields) == 7
        assert len({f.path for f in fields}) == len(fields)

    def test_required_from_immediate_and_accumulated(self):
        by_path = {f.path: f for f in flatten(BUILD_SCHEMA)}
        assert by_path["docker.context"].required is True
        assert by_path["docker.filePath"].required is False
        assert by_path["repository.revision.branch"].required is True
        assert by_path["repository.revision.commit"].required is False
        assert by_path["verbose"].required is False

    def test_parent_metadata(self):
        by_path = {f.path: f for f in flatten(BUILD_SCHEMA)}
        context = by_path["docker.context"]
        assert context.parent_path == "docker"
        assert context.parent_title == "Docker Settings"
        assert by_path["repository.revision.branch"].parent_title == "Revision"
        assert by_path["verbose"].parent_path is None
        assert by_path["verbose"].parent_title is None

    def test_leaf_defaults(self):
        by_path = {f.path: f for f in flatten(BUILD_SCHEMA)}
        assert by_path["docker.filePath"].display_name == "FilePath"
        assert by_path["docker.filePath"].description == "Path to the Dockerfile"
        assert by_path["level"].type == "string"
        assert by_path["verbose"].type == "boolean"

    def test_explicit_parent_required(self):
        schema = {"type": "object", "properties": {"name": {"type": "string"}}}
        fields = flatten(schema, "meta", ["meta.name"], "Meta")
        assert fields[0].path == "meta.name"
        assert fields[0].required is True
        assert fields[0].parent_title == "Meta"

    def test_non_object_input(self):
        assert flatten(True) == []
        assert flatten({"type": "string"}) == []

    def test_matches_transform_leaf_paths(self):
        transformed = transform(BUILD_SCHEMA)
        assert _leaf_paths(transformed) == [f.path for f in flatten(BUILD_SCHEMA)]

    def test_nullable_object_is_expanded(self):
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
        fields = flatten(schema)
        assert [f.path for f in fields] == ["resources.cpu", "resources.memory"]
        assert [f.required for f in fields] == [True, False]
        assert _leaf_paths(transform(schema)) == [f.path for f in fields]

    def test_to_dict_uses_wire_names(self):
        field = flatten(BUILD_SCHEMA)[0]
        assert field.to_dict() == {
            "path": "docker.context",
            "displayName": "Context",
            "type": "string",
            "required": True,
            "default": "/app",
            "parentPath": "docker",
            "parentTitle": "Docker Settings",
        }


class TestHelpers:
    def test_format_field_name(self):
        assert format_field_name("file-path") == "File Path"

    def test_default_values(self):
        assert default_values(flatten(BUILD_SCHEMA)) == {
            "docker.context": "/app",
            "repository.revision.branch": "main",
        }

    def test_unflatten(self):
        flat = {
            "docker.context": "/app",
            "docker.filePath": "/Dockerfile",
            "repository.url": "https://example.com/repo.git",
            "verbose": True,
        }
        assert unflatten(flat) == {
            "docker": {"context": "/app", "filePath": "/Dockerfile"},
            "repository": {"url": "https://example.com/repo.git"},
            "verbose": True,
        }
