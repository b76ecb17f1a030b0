# openchoreo/catalog/core/actions.py
"""
Handler for the ``openchoreo:component:create`` template step.

The step input arrives with every ``${{ parameters.* }}`` token already
resolved. The handler builds the Component resource and applies it
through the platform API.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from openchoreo.catalog.core.clients.openchoreo import (
    OpenChoreoApiClient,
    OpenChoreoApiError,
)
from openchoreo.catalog.core.resources import build_component_resource
from openchoreo.catalog.core.templates.synthesizer import CREATE_COMPONENT_ACTION

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComponentCreated:
    """Outputs of a successful create step."""

    component_name: str
    project_name: str
    organization_name: str
    response: Any = None

    def to_dict(self) -> dict[str, str]:
        return {
            "componentName": self.component_name,
            "projectName": self.project_name,
            "organizationName": self.organization_name,
        }


class CreateComponentAction:
    """Applies a new component for a resolved template step."""

    action_id = CREATE_COMPONENT_ACTION

    def __init__(self, *, client: OpenChoreoApiClient) -> None:
        self._client = client

    async def handle(self, step_input: Mapping[str, Any]) -> ComponentCreated:
        """Build the Component resource and apply it.

        Raises:
            ValueError: A required step input key is missing.
            OpenChoreoApiError: The platform rejected the resource.
        """
        try:
            resource = build_component_resource(step_input)
        except KeyError as exc:
            raise ValueError(f"Step input is missing {exc.args[0]!r}") from exc

        metadata = resource["metadata"]
        project_name = resource["spec"]["owner"]["projectName"]
        logger.info(
            "Creating component %s in project %s of organization %s",
            metadata["name"],
            project_name,
            metadata["namespace"],
        )

        try:
            response = await self._client.apply_resource(resource)
        except OpenChoreoApiError:
            logger.error(
                "Failed to create component %s in organization %s",
                metadata["name"],
                metadata["namespace"],
            )
            raise

        return ComponentCreated(
            component_name=metadata["name"],
            project_name=project_name,
            organization_name=metadata["namespace"],
            response=response,
        )
