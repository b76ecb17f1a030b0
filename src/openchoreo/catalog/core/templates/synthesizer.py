# openchoreo/catalog/core/templates/synthesizer.py
"""
Onboarding template synthesis from component types.

Every component type yields one template with an ordered list of
parameter sections:

1. ``Component Metadata``: identity fields, always present.
2. ``<title> Configuration``: the type's own parameters, when it has any.
3. ``CI Setup``: built-in CI gate, when the type allows build workflows.
4. ``Addons``: addon selection, always present.

and a single ``openchoreo:component:create`` step whose input mirrors
the section field names.
"""
from __future__ import annotations

import logging
from typing import Any

from openchoreo.catalog.contracts.entity import TEMPLATE_API_VERSION, TemplateDefinition
from openchoreo.catalog.contracts.upstream import ComponentType
from openchoreo.catalog.core.constants import Annotations
from openchoreo.catalog.core.schema.transformer import (
    convert_dependencies,
    convert_properties,
    format_title,
)
from openchoreo.catalog.core.tags import derive_tags

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE_OWNER = "guests"
DEFAULT_TEMPLATE_NAMESPACE = "openchoreo"

TEMPLATE_TYPE = "Component Type"
CREATE_COMPONENT_ACTION = "openchoreo:component:create"

METADATA_SECTION_TITLE = "Component Metadata"
CI_SECTION_TITLE = "CI Setup"
ADDONS_SECTION_TITLE = "Addons"

EXTERNAL_CI_NOTE = (
    "## Configure your CI\n\n"
    "This section contains details for configuring your CI pipeline "
    "to notify OpenChoreo for each build."
)


def parameter_token(field: str) -> str:
    """Scaffolder expansion token for a form field."""
    return f"${{{{ parameters.{field} }}}}"


class TemplateSynthesizer:
    """Builds template definitions from component types.

    Args:
        default_owner: Owner of the generated templates.
        namespace: Catalog namespace of the templates, also used as the
            template name prefix.
    """

    def __init__(
        self,
        default_owner: str = DEFAULT_TEMPLATE_OWNER,
        namespace: str = DEFAULT_TEMPLATE_NAMESPACE,
    ) -> None:
        self.default_owner = default_owner or DEFAULT_TEMPLATE_OWNER
        self.namespace = namespace or DEFAULT_TEMPLATE_NAMESPACE

    def template_name(self, component_type_name: str) -> str:
        return f"template-{self.namespace}-{component_type_name}"

    def synthesize(
        self, component_type: ComponentType, organization_name: str
    ) -> TemplateDefinition:
        metadata = component_type.metadata
        title = metadata.display_name or format_title(metadata.name)

        annotations = {
            Annotations.CTD_NAME: metadata.name,
            Annotations.CTD_GENERATED: "true",
        }
        if metadata.display_name:
            annotations[Annotations.CTD_DISPLAY_NAME] = metadata.display_name

        return TemplateDefinition(
            kind="Template",
            name=self.template_name(metadata.name),
            namespace=self.namespace,
            title=title,
            description=metadata.description or f"Create a {title} component",
            tags=derive_tags(
                ["openchoreo", "component-type"],
                [metadata.name, metadata.workload_type.lower()],
                metadata.tags,
            ),
            annotations=annotations,
            api_version=TEMPLATE_API_VERSION,
            spec={
                "owner": self.default_owner,
                "type": TEMPLATE_TYPE,
                "parameters": self.parameter_sections(component_type, organization_name),
                "steps": [self.create_step(component_type)],
            },
        )

    # -- Sections --------------------------------------------------------------

    def parameter_sections(
        self, component_type: ComponentType, organization_name: str
    ) -> list[dict[str, Any]]:
        sections = [metadata_section(organization_name)]

        configuration = configuration_section(component_type)
        if configuration is not None:
            sections.append(configuration)

        ci = ci_section(component_type.metadata.allowed_workflows)
        if ci is not None:
            sections.append(ci)

        sections.append(addons_section(organization_name))
        return sections

    def create_step(self, component_type: ComponentType) -> dict[str, Any]:
        metadata = component_type.metadata
        properties = component_type.input_parameters_schema.get("properties")

        step_input: dict[str, Any] = {
            "orgName": parameter_token("organization_name"),
            "projectName": parameter_token("project_name"),
            "componentName": parameter_token("component_name"),
            "displayName": parameter_token("displayName"),
            "description": parameter_token("description"),
            "componentType": metadata.name,
            "component_type_workload_type": metadata.workload_type,
        }
        if isinstance(properties, dict):
            for key in properties:
                step_input[key] = parameter_token(key)

        for key in (
            "useBuiltInCI",
            "repo_url",
            "branch",
            "component_path",
            "workflow_name",
            "workflow_parameters",
            "addons",
        ):
            step_input[key] = parameter_token(key)

        return {
            "id": "create-component",
            "name": "Create OpenChoreo Component",
            "action": CREATE_COMPONENT_ACTION,
            "input": step_input,
        }


def metadata_section(organization_name: str) -> dict[str, Any]:
    return {
        "title": METADATA_SECTION_TITLE,
        "required": ["organization_name", "project_name", "component_name"],
        "properties": {
            "component_name": {
                "title": "Component Name",
                "type": "string",
                "description": "Unique name for your component",
                "ui:field": "EntityNamePicker",
            },
            "displayName": {
                "title": "Display Name",
                "type": "string",
                "description": "Human-readable display name",
            },
            "description": {
                "title": "Description",
                "type": "string",
                "description": "Brief description of what this component does",
            },
            "organization_name": {
                "title": "Organization",
                "type": "string",
                "description": "The organization where this component will be created",
                "default": organization_name,
                "ui:disabled": True,
                "ui:help": "Organization is determined by the CTD and cannot be changed",
            },
            "project_name": {
                "title": "Project",
                "type": "string",
                "description": "Select the project",
                "ui:field": "EntityPicker",
                "ui:options": {"catalogFilter": [{"kind": "System"}]},
            },
        },
    }


def configuration_section(component_type: ComponentType) -> dict[str, Any] | None:
    """Section holding the component type's own parameters.

    ``None`` when the schema declares no properties. A schema whose
    properties are all boolean schemas still gets the section, with an
    empty ``properties`` mapping.
    """
    schema = component_type.input_parameters_schema
    if not isinstance(schema.get("properties"), dict) or not schema["properties"]:
        return None
    properties = convert_properties(schema)

    metadata = component_type.metadata
    title = metadata.display_name or format_title(metadata.name)
    required = schema.get("required")

    section: dict[str, Any] = {
        "title": f"{title} Configuration",
        "required": list(required) if isinstance(required, list) else [],
        "properties": properties,
    }
    dependencies = convert_dependencies(schema)
    if dependencies:
        section["dependencies"] = dependencies
    return section


def ci_section(allowed_workflows: list[str]) -> dict[str, Any] | None:
    """Built-in CI gate; ``None`` when no build workflow is allowed."""
    if not allowed_workflows:
        return None

    return {
        "title": CI_SECTION_TITLE,
        "required": ["useBuiltInCI"],
        "properties": {
            "useBuiltInCI": {
                "title": "Use Built-in CI in OpenChoreo",
                "description": (
                    "OpenChoreo provides built-in CI capabilities for building components. "
                    "Enable this to use the built-in CI."
                ),
                "type": "boolean",
                "ui:widget": "radio",
            },
        },
        "dependencies": {
            "useBuiltInCI": {
                "allOf": [
                    {
                        "if": {"properties": {"useBuiltInCI": {"const": True}}},
                        "then": {
                            "properties": {
                                "workflow_name": {
                                    "title": "Build Workflow",
                                    "type": "string",
                                    "description": (
                                        "Select the build workflow to use for this component"
                                    ),
                                    "enum": list(allowed_workflows),
                                    "ui:field": "BuildWorkflowPicker",
                                },
                                # Resolved at render time from the selected workflow's schema.
                                "workflow_parameters": {
                                    "title": "Workflow Parameters",
                                    "type": "object",
                                    "ui:field": "BuildWorkflowParameters",
                                },
                            },
                            "required": ["workflow_name", "workflow_parameters"],
                        },
                    },
                    {
                        "if": {"properties": {"useBuiltInCI": {"const": False}}},
                        "then": {
                            "properties": {
                                "external_ci_note": {
                                    "type": "null",
                                    "ui:widget": "markdown",
                                    "description": EXTERNAL_CI_NOTE,
                                },
                            },
                        },
                    },
                ],
            },
        },
    }


def addons_section(organization_name: str) -> dict[str, Any]:
    return {
        "title": ADDONS_SECTION_TITLE,
        "description": "Add optional addons to enhance your component functionality",
        "properties": {
            "addons": {
                "title": "Component Addons",
                "type": "array",
                "description": (
                    "Select and configure addons for your component. "
                    "You can add multiple addons."
                ),
                "ui:field": "AddonsField",
                "ui:options": {"organizationName": organization_name},
            },
        },
    }
