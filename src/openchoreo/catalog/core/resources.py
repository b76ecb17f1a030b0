# openchoreo/catalog/core/resources.py
"""
Component resource builder.

Turns the resolved input of the ``openchoreo:component:create`` template
step into the payload accepted by the platform's ``/apply`` endpoint.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping

from openchoreo.catalog.core.schema.flattener import unflatten

logger = logging.getLogger(__name__)

RESOURCE_API_VERSION = "openchoreo.dev/v1alpha1"
DISPLAY_NAME_ANNOTATION = "openchoreo.dev/display-name"
DESCRIPTION_ANNOTATION = "openchoreo.dev/description"
DEFAULT_WORKLOAD_TYPE = "deployment"

# Step input keys that belong to the template itself, not to the component type.
SCAFFOLDER_KEYS = frozenset(
    {
        "orgName",
        "projectName",
        "componentName",
        "displayName",
        "description",
        "componentType",
        "useBuiltInCI",
        "workflow_name",
        "workflow_parameters",
        "addons",
        "external_ci_note",
        "repo_url",
        "branch",
        "component_path",
        "component_type_workload_type",
    }
)


def entity_ref_name(ref: str) -> str:
    """``system:default/shop`` -> ``shop``; plain names pass through."""
    return ref.split("/")[-1]


def extract_ctd_parameters(step_input: Mapping[str, Any]) -> dict[str, Any]:
    """Keep only the component-type parameters of a step input."""
    return {k: v for k, v in step_input.items() if k not in SCAFFOLDER_KEYS}


def build_component_resource(step_input: Mapping[str, Any]) -> dict[str, Any]:
    """Build a Component resource from a resolved step input.

    Args:
        step_input: Step input with every expansion token already resolved.

    Returns:
        The resource as a JSON-ready mapping.

    Raises:
        KeyError: If ``orgName``, ``projectName``, ``componentName`` or
            ``componentType`` is missing.
    """
    org_name = entity_ref_name(step_input["orgName"])
    project_name = entity_ref_name(step_input["projectName"])
    workload_type = step_input.get("component_type_workload_type") or DEFAULT_WORKLOAD_TYPE

    annotations: dict[str, str] = {}
    if step_input.get("displayName"):
        annotations[DISPLAY_NAME_ANNOTATION] = step_input["displayName"]
    if step_input.get("description"):
        annotations[DESCRIPTION_ANNOTATION] = step_input["description"]

    spec: dict[str, Any] = {
        "owner": {"projectName": project_name},
        "componentType": f"{workload_type}/{step_input['componentType']}",
        "parameters": extract_ctd_parameters(step_input),
    }

    workflow_name = step_input.get("workflow_name")
    workflow_parameters = step_input.get("workflow_parameters")
    if step_input.get("useBuiltInCI") and workflow_name and workflow_parameters:
        spec["workflow"] = {
            "name": workflow_name,
            "schema": unflatten(workflow_parameters),
        }

    addons = step_input.get("addons") or []
    if addons:
        # UI-only keys (id, schema) are dropped.
        spec["traits"] = [
            {
                "name": addon["name"],
                "instanceName": addon.get("instanceName"),
                "config": addon.get("config") or {},
            }
            for addon in addons
        ]

    resource = {
        "apiVersion": RESOURCE_API_VERSION,
        "kind": "Component",
        "metadata": {
            "name": step_input["componentName"],
            "namespace": org_name,
            "annotations": annotations,
        },
        "spec": spec,
    }
    logger.debug(
        "Built component resource %s/%s (%s)",
        org_name,
        step_input["componentName"],
        spec["componentType"],
    )
    return resource
