# openchoreo/catalog/core/translators.py
"""
Translation of OpenChoreo resources into catalog entities.

Every translator is a pure function of its inputs: the same upstream
record and scope always yield an identical entity. Organizations become
domains in the ``default`` namespace; everything below an organization
lives in a namespace named after it, so that equally named projects or
environments in different organizations never collide.
"""
from __future__ import annotations

import logging

from openchoreo.catalog.contracts.entity import DEFAULT_NAMESPACE, EntityRecord
from openchoreo.catalog.contracts.upstream import (
    CompleteComponent,
    Component,
    DataPlane,
    Environment,
    Organization,
    Project,
    WorkloadEndpoint,
)
from openchoreo.catalog.core.constants import (
    DEFAULT_API_TYPE,
    ENDPOINT_API_TYPES,
    INFRASTRUCTURE_OWNER,
    LOCATION_KEY,
    MANAGED_BY_LOCATION,
    MANAGED_BY_ORIGIN_LOCATION,
    SOURCE_LOCATION,
    Annotations,
    Labels,
)
from openchoreo.catalog.core.tags import derive_tags

logger = logging.getLogger(__name__)

NO_SCHEMA_DEFINITION = "No schema available"


def endpoint_api_type(endpoint_type: str) -> str:
    """Map a workload endpoint type to a catalog API interface kind."""
    return ENDPOINT_API_TYPES.get(endpoint_type, DEFAULT_API_TYPE)


def api_entity_name(component_name: str, endpoint_name: str) -> str:
    return f"{component_name}-{endpoint_name}"


def domain_ref(org_name: str) -> str:
    return f"domain:{DEFAULT_NAMESPACE}/{org_name}"


def _component_spec_type(component_type: str) -> str:
    if component_type == "WebApplication":
        return "website"
    return component_type.lower()


class EntityTranslator:
    """Builds catalog entities from upstream records.

    Args:
        default_owner: Owner group for domains, systems, components and APIs.
        location_key: Origin marker written into the managed-by annotations.
    """

    def __init__(self, *, default_owner: str, location_key: str = LOCATION_KEY) -> None:
        self._default_owner = default_owner
        self._location_key = location_key

    @property
    def default_owner(self) -> str:
        return self._default_owner

    def _annotations(self, **extra: str) -> dict[str, str]:
        return {
            MANAGED_BY_LOCATION: self._location_key,
            MANAGED_BY_ORIGIN_LOCATION: self._location_key,
            **extra,
        }

    # -- Organization / project ------------------------------------------------

    def organization_to_domain(self, organization: Organization) -> EntityRecord:
        return EntityRecord(
            kind="Domain",
            name=organization.name,
            namespace=DEFAULT_NAMESPACE,
            title=organization.display_name or organization.name,
            description=organization.description or organization.name,
            tags=derive_tags(["openchoreo", "organization", "domain"], [organization.name]),
            annotations=self._annotations(
                **{
                    Annotations.ORGANIZATION: organization.name,
                    Annotations.NAMESPACE: organization.namespace,
                    Annotations.CREATED_AT: organization.created_at,
                    Annotations.STATUS: organization.status,
                }
            ),
            labels={Labels.MANAGED: "true"},
            spec={"owner": self._default_owner},
        )

    def project_to_system(self, project: Project, org_name: str) -> EntityRecord:
        return EntityRecord(
            kind="System",
            name=project.name,
            namespace=org_name,
            title=project.display_name or project.name,
            description=project.description or project.name,
            tags=derive_tags(["openchoreo", "project"], [project.name]),
            annotations=self._annotations(
                **{
                    Annotations.PROJECT_ID: project.name,
                    Annotations.ORGANIZATION: org_name,
                }
            ),
            labels={Labels.MANAGED: "true"},
            spec={
                "owner": self._default_owner,
                "domain": domain_ref(org_name),
            },
        )

    # -- Infrastructure --------------------------------------------------------

    def environment_to_entity(self, environment: Environment, org_name: str) -> EntityRecord:
        env_type = "production" if environment.is_production else "non-production"
        return EntityRecord(
            kind="Environment",
            name=environment.name,
            namespace=org_name,
            title=environment.display_name or environment.name,
            description=environment.description or f"{environment.name} environment",
            tags=derive_tags(["openchoreo", "environment", env_type], [environment.name]),
            annotations=self._annotations(
                **{
                    Annotations.ENVIRONMENT: environment.name,
                    Annotations.ORGANIZATION: org_name,
                    Annotations.NAMESPACE: environment.namespace,
                    Annotations.CREATED_AT: environment.created_at,
                    Annotations.STATUS: environment.status,
                    Annotations.DATA_PLANE_REF: environment.data_plane_ref,
                    Annotations.DNS_PREFIX: environment.dns_prefix,
                    Annotations.IS_PRODUCTION: str(environment.is_production).lower(),
                }
            ),
            labels={
                Labels.MANAGED: "true",
                Labels.ENVIRONMENT_TYPE: env_type,
            },
            spec={
                "type": env_type,
                "owner": INFRASTRUCTURE_OWNER,
                "domain": domain_ref(org_name),
                "isProduction": environment.is_production,
                "dataPlaneRef": environment.data_plane_ref,
                "dnsPrefix": environment.dns_prefix,
            },
        )

    def dataplane_to_entity(self, dataplane: DataPlane, org_name: str) -> EntityRecord:
        return EntityRecord(
            kind="Dataplane",
            name=dataplane.name,
            namespace=org_name,
            title=dataplane.display_name or dataplane.name,
            description=dataplane.description or f"{dataplane.name} dataplane",
            tags=derive_tags(["openchoreo", "dataplane", "infrastructure"], [dataplane.name]),
            annotations=self._annotations(
                **{
                    Annotations.ORGANIZATION: org_name,
                    Annotations.NAMESPACE: dataplane.namespace or "",
                    Annotations.CREATED_AT: dataplane.created_at or "",
                    Annotations.STATUS: dataplane.status or "",
                    Annotations.KUBERNETES_CLUSTER_NAME: dataplane.kubernetes_cluster_name or "",
                    Annotations.API_SERVER_URL: dataplane.api_server_url or "",
                    Annotations.PUBLIC_VIRTUAL_HOST: dataplane.public_virtual_host or "",
                    Annotations.ORGANIZATION_VIRTUAL_HOST: dataplane.organization_virtual_host
                    or "",
                    Annotations.OBSERVER_URL: dataplane.observer_url or "",
                    Annotations.OBSERVER_USERNAME: dataplane.observer_username or "",
                }
            ),
            labels={
                Labels.MANAGED: "true",
                Labels.DATAPLANE: "true",
            },
            spec={
                "type": "kubernetes",
                "owner": INFRASTRUCTURE_OWNER,
                "domain": domain_ref(org_name),
                "kubernetesClusterName": dataplane.kubernetes_cluster_name,
                "apiServerURL": dataplane.api_server_url,
                "publicVirtualHost": dataplane.public_virtual_host,
                "organizationVirtualHost": dataplane.organization_virtual_host,
                "observerURL": dataplane.observer_url,
            },
        )

    # -- Components and APIs ---------------------------------------------------

    def component_to_entity(
        self,
        component: Component,
        org_name: str,
        project_name: str,
        provides_apis: list[str] | None = None,
    ) -> EntityRecord:
        type_tag = component.type.lower().replace("/", "-")

        annotations = self._annotations(
            **{
                Annotations.COMPONENT: component.name,
                Annotations.COMPONENT_TYPE: component.type,
                Annotations.PROJECT: project_name,
                Annotations.ORGANIZATION: org_name,
                Annotations.CREATED_AT: component.created_at,
                Annotations.STATUS: component.status,
            }
        )
        if component.repository_url:
            annotations[SOURCE_LOCATION] = f"url:{component.repository_url}"
        if component.branch:
            annotations[Annotations.BRANCH] = component.branch

        spec = {
            "type": _component_spec_type(component.type),
            "lifecycle": component.status.lower(),
            "owner": self._default_owner,
            "system": project_name,
        }
        if provides_apis:
            spec["providesApis"] = list(provides_apis)

        return EntityRecord(
            kind="Component",
            name=component.name,
            namespace=org_name,
            title=component.name,
            description=component.description or component.name,
            tags=derive_tags(["openchoreo", "component", type_tag], [component.name, type_tag]),
            annotations=annotations,
            labels={Labels.MANAGED: "true"},
            spec=spec,
        )

    def service_component_to_entity(
        self,
        component: CompleteComponent,
        org_name: str,
        project_name: str,
    ) -> EntityRecord:
        """Component entity for a service, listing one API per workload endpoint."""
        endpoints = (component.workload.endpoints if component.workload else None) or {}
        provides_apis = [api_entity_name(component.name, name) for name in endpoints]
        return self.component_to_entity(component, org_name, project_name, provides_apis)

    def workload_to_api_entities(
        self,
        component: CompleteComponent,
        org_name: str,
        project_name: str,
    ) -> list[EntityRecord]:
        endpoints = (component.workload.endpoints if component.workload else None) or {}
        return [
            self._endpoint_to_api(component.name, name, endpoint, org_name, project_name)
            for name, endpoint in endpoints.items()
        ]

    def _endpoint_to_api(
        self,
        component_name: str,
        endpoint_name: str,
        endpoint: WorkloadEndpoint,
        org_name: str,
        project_name: str,
    ) -> EntityRecord:
        definition = NO_SCHEMA_DEFINITION
        if endpoint.schema_ and endpoint.schema_.content:
            definition = endpoint.schema_.content

        return EntityRecord(
            kind="API",
            name=api_entity_name(component_name, endpoint_name),
            namespace=org_name,
            title=f"{component_name} {endpoint_name} API",
            description=(
                f"{endpoint.type} endpoint for {component_name} service on port {endpoint.port}"
            ),
            tags=derive_tags(["openchoreo", "api", endpoint.type.lower()], [endpoint_name]),
            annotations=self._annotations(
                **{
                    Annotations.COMPONENT: component_name,
                    Annotations.ENDPOINT_NAME: endpoint_name,
                    Annotations.ENDPOINT_TYPE: endpoint.type,
                    Annotations.ENDPOINT_PORT: str(endpoint.port),
                    Annotations.PROJECT: project_name,
                    Annotations.ORGANIZATION: org_name,
                }
            ),
            labels={Labels.MANAGED: "true"},
            spec={
                "type": endpoint_api_type(endpoint.type),
                "lifecycle": "production",
                "owner": self._default_owner,
                "system": project_name,
                "definition": definition,
            },
        )
