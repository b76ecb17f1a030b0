# openchoreo/catalog/core/provider.py
"""
OpenChoreoEntityProvider – synchronizes the OpenChoreo resource hierarchy
into the software catalog.

One run walks::

    organizations
      ├─ environments
      ├─ dataplanes
      ├─ projects ─ components ─ [complete component, for services]
      └─ component types ─ schemas (concurrent) ─ templates

and commits everything it collected as a single full-replacement
mutation. Every per-scope fetch is isolated: a failure is logged and
the scope contributes nothing, siblings are unaffected. Only a failure
to list organizations or to commit ends the run without a commit.
"""
from __future__ import annotations

import asyncio
import contextlib
import logging
from collections import Counter
from dataclasses import dataclass, field

from openchoreo.catalog.contracts.entity import EntityRecord
from openchoreo.catalog.contracts.sink import (
    DeferredEntity,
    EntityProviderConnection,
    FullMutation,
)
from openchoreo.catalog.contracts.upstream import (
    ComponentType,
    ComponentTypeListItem,
    Organization,
    Project,
)
from openchoreo.catalog.core.clients.openchoreo import OpenChoreoApiClient
from openchoreo.catalog.core.constants import (
    LOCATION_KEY,
    MANAGED_BY_LOCATION,
    MANAGED_BY_ORIGIN_LOCATION,
    PROVIDER_NAME,
)
from openchoreo.catalog.core.templates.synthesizer import TemplateSynthesizer
from openchoreo.catalog.core.translators import EntityTranslator

logger = logging.getLogger(__name__)

SERVICE_COMPONENT_TYPE = "Service"


@dataclass
class SyncReport:
    """Outcome of one synchronization run.

    Attributes:
        entities: Everything collected during the run, in hierarchy order.
        committed: Whether the full mutation was accepted by the sink.
        error: Reason the run ended without a commit, if it did.
    """

    entities: list[EntityRecord] = field(default_factory=list)
    committed: bool = False
    error: str | None = None

    @property
    def counts(self) -> dict[str, int]:
        return dict(Counter(e.kind for e in self.entities))

    def count(self, kind: str) -> int:
        return self.counts.get(kind, 0)


class OpenChoreoEntityProvider:
    """Entity provider backed by the OpenChoreo API."""

    def __init__(
        self,
        *,
        client: OpenChoreoApiClient,
        translator: EntityTranslator,
        synthesizer: TemplateSynthesizer,
        schema_fetch_concurrency: int = 10,
        page_size: int = 100,
    ) -> None:
        self._client = client
        self._translator = translator
        self._synthesizer = synthesizer
        self._schema_fetch_concurrency = schema_fetch_concurrency
        self._page_size = page_size
        self._connection: EntityProviderConnection | None = None

    def get_provider_name(self) -> str:
        return PROVIDER_NAME

    async def connect(self, connection: EntityProviderConnection) -> SyncReport:
        """Attach the catalog sink and run a first synchronization."""
        self._connection = connection
        return await self.run()

    async def run(self) -> SyncReport:
        if self._connection is None:
            raise RuntimeError("Connection not initialized")

        report = SyncReport()
        logger.info("Fetching organizations and projects from OpenChoreo API")

        try:
            organizations = await self._client.get_all_organizations(
                page_size=self._page_size
            )
        except Exception as exc:
            logger.exception("Failed to run %s: could not list organizations", PROVIDER_NAME)
            report.error = f"list organizations: {exc}"
            return report
        logger.debug("Found %d organizations from OpenChoreo", len(organizations))

        entities = [self._translator.organization_to_domain(org) for org in organizations]
        for org in organizations:
            entities.extend(await self._environment_entities(org))
        for org in organizations:
            entities.extend(await self._dataplane_entities(org))
        for org in organizations:
            entities.extend(await self._project_entities(org))
        for org in organizations:
            entities.extend(await self._template_entities(org))

        report.entities = entities
        self._warn_duplicates(entities)

        mutation = FullMutation(
            entities=[DeferredEntity(entity=e, location_key=LOCATION_KEY) for e in entities]
        )
        try:
            await self._connection.apply_mutation(mutation)
        except Exception as exc:
            logger.exception("Failed to run %s: commit rejected", PROVIDER_NAME)
            report.error = f"apply mutation: {exc}"
            return report

        report.committed = True
        logger.info(
            "Successfully processed %d entities (%d domains, %d systems, %d components, "
            "%d apis, %d environments, %d dataplanes, %d templates)",
            len(entities),
            report.count("Domain"),
            report.count("System"),
            report.count("Component"),
            report.count("API"),
            report.count("Environment"),
            report.count("Dataplane"),
            report.count("Template"),
        )
        return report

    # -- Organization scopes ---------------------------------------------------

    async def _environment_entities(self, org: Organization) -> list[EntityRecord]:
        try:
            environments = await self._client.get_all_environments(
                org.name, page_size=self._page_size
            )
        except Exception as exc:
            logger.warning(
                "Failed to fetch environments for organization %s: %s", org.name, exc
            )
            return []
        logger.debug(
            "Found %d environments in organization: %s", len(environments), org.name
        )
        return [self._translator.environment_to_entity(env, org.name) for env in environments]

    async def _dataplane_entities(self, org: Organization) -> list[EntityRecord]:
        try:
            dataplanes = await self._client.get_all_dataplanes(
                org.name, page_size=self._page_size
            )
        except Exception as exc:
            logger.warning(
                "Failed to fetch dataplanes for organization %s: %s", org.name, exc
            )
            return []
        logger.debug("Found %d dataplanes in organization: %s", len(dataplanes), org.name)
        return [self._translator.dataplane_to_entity(dp, org.name) for dp in dataplanes]

    async def _project_entities(self, org: Organization) -> list[EntityRecord]:
        try:
            projects = await self._client.get_all_projects(org.name, page_size=self._page_size)
        except Exception as exc:
            logger.warning("Failed to fetch projects for organization %s: %s", org.name, exc)
            return []
        logger.debug("Found %d projects in organization: %s", len(projects), org.name)

        entities: list[EntityRecord] = []
        for project in projects:
            entities.append(self._translator.project_to_system(project, org.name))
            entities.extend(await self._component_entities(org, project))
        return entities

    # -- Project scope ---------------------------------------------------------

    async def _component_entities(
        self, org: Organization, project: Project
    ) -> list[EntityRecord]:
        try:
            components = await self._client.get_all_components(
                org.name, project.name, page_size=self._page_size
            )
        except Exception as exc:
            logger.warning(
                "Failed to fetch components for project %s in organization %s: %s",
                project.name,
                org.name,
                exc,
            )
            return []
        logger.debug("Found %d components in project: %s", len(components), project.name)

        entities: list[EntityRecord] = []
        for component in components:
            if component.type != SERVICE_COMPONENT_TYPE:
                entities.append(
                    self._translator.component_to_entity(component, org.name, project.name)
                )
                continue

            try:
                complete = await self._client.get_component(
                    org.name, project.name, component.name
                )
            except Exception as exc:
                logger.warning(
                    "Failed to fetch complete component details for %s: %s",
                    component.name,
                    exc,
                )
                entities.append(
                    self._translator.component_to_entity(component, org.name, project.name)
                )
                continue

            entities.append(
                self._translator.service_component_to_entity(complete, org.name, project.name)
            )
            entities.extend(
                self._translator.workload_to_api_entities(complete, org.name, project.name)
            )
        return entities

    # -- Component types -------------------------------------------------------

    async def _template_entities(self, org: Organization) -> list[EntityRecord]:
        logger.info(
            "Fetching component types from OpenChoreo API for org: %s", org.name
        )
        try:
            page = await self._client.list_component_types(
                org.name, page_size=self._page_size
            )
        except Exception as exc:
            logger.warning(
                "Failed to fetch component types for org %s: %s", org.name, exc
            )
            return []
        logger.debug(
            "Found %d component types in organization: %s (total: %d)",
            len(page.items),
            org.name,
            page.total_count,
        )

        component_types = await self._fetch_schemas(org, page.items)

        templates: list[EntityRecord] = []
        for component_type in component_types:
            try:
                template = self._synthesizer.synthesize(component_type, org.name)
            except Exception as exc:
                logger.warning(
                    "Failed to convert component type %s to template: %s",
                    component_type.name,
                    exc,
                )
                continue
            template.annotations[MANAGED_BY_LOCATION] = LOCATION_KEY
            template.annotations[MANAGED_BY_ORIGIN_LOCATION] = LOCATION_KEY
            templates.append(template)

        logger.info(
            "Successfully generated %d template entities from component types in org: %s",
            len(templates),
            org.name,
        )
        return templates

    async def _fetch_schemas(
        self, org: Organization, items: list[ComponentTypeListItem]
    ) -> list[ComponentType]:
        """Fetch all schemas concurrently; failed fetches are dropped."""
        if self._schema_fetch_concurrency > 0:
            semaphore = asyncio.Semaphore(self._schema_fetch_concurrency)
        else:
            semaphore = None

        async def fetch_one(item: ComponentTypeListItem) -> ComponentType | None:
            guard = semaphore if semaphore is not None else contextlib.nullcontext()
            async with guard:
                try:
                    return await self._client.get_component_type_with_schema(org.name, item)
                except Exception as exc:
                    logger.warning(
                        "Failed to fetch schema for component type %s in org %s: %s",
                        item.name,
                        org.name,
                        exc,
                    )
                    return None

        results = await asyncio.gather(*(fetch_one(item) for item in items))
        return [ct for ct in results if ct is not None]

    @staticmethod
    def _warn_duplicates(entities: list[EntityRecord]) -> None:
        seen = Counter(e.ref for e in entities)
        for ref, count in seen.items():
            if count > 1:
                logger.warning(
                    "Entity %s produced %d times in one run; the catalog keeps the last one",
                    ref,
                    count,
                )
