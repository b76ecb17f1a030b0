# openchoreo/catalog/core/form_schemas.py
"""
Render-time schema lookups for the onboarding form.

Templates only carry placeholders for workflow parameters and addons;
the form resolves them through these lookups once the user has picked a
workflow or an addon.
"""
from __future__ import annotations

import logging

from openchoreo.catalog.contracts.schema import FlatField
from openchoreo.catalog.contracts.upstream import AddonListItem, Page
from openchoreo.catalog.core.clients.openchoreo import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    OpenChoreoApiClient,
)
from openchoreo.catalog.core.schema.flattener import flatten
from openchoreo.catalog.core.schema.transformer import UiFieldNode, transform

logger = logging.getLogger(__name__)


class FormSchemaService:
    """Facade over the schema endpoints used while a form is filled in."""

    def __init__(self, *, client: OpenChoreoApiClient) -> None:
        self._client = client

    async def workflow_fields(self, org_name: str, workflow_name: str) -> list[FlatField]:
        """Flat, dot-addressed parameter fields of a build workflow."""
        schema = await self._client.get_workflow_schema(org_name, workflow_name)
        fields = flatten(schema)
        logger.debug(
            "Workflow %s in org %s has %d parameter fields",
            workflow_name,
            org_name,
            len(fields),
        )
        return fields

    async def list_addons(
        self,
        org_name: str,
        page: int = DEFAULT_PAGE,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> Page[AddonListItem]:
        return await self._client.list_addons(org_name, page=page, page_size=page_size)

    async def addon_schema(self, org_name: str, addon_name: str) -> UiFieldNode:
        schema = await self._client.get_addon_schema(org_name, addon_name)
        return transform(schema) or {}
