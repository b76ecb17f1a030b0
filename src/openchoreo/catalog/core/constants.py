# openchoreo/catalog/core/constants.py
"""Annotation, label and naming constants shared by translators and templates."""
from __future__ import annotations

PROVIDER_NAME = "OpenChoreoEntityProvider"
LOCATION_KEY = f"provider:{PROVIDER_NAME}"

MANAGED_BY_LOCATION = "backstage.io/managed-by-location"
MANAGED_BY_ORIGIN_LOCATION = "backstage.io/managed-by-origin-location"
SOURCE_LOCATION = "backstage.io/source-location"


class Annotations:
    PROJECT = "openchoreo.io/project"
    ORGANIZATION = "openchoreo.io/organization"
    ENVIRONMENT = "openchoreo.io/environment"
    COMPONENT = "openchoreo.io/component"
    BRANCH = "openchoreo.io/branch"
    NAMESPACE = "openchoreo.io/namespace"
    CREATED_AT = "openchoreo.io/created-at"
    STATUS = "openchoreo.io/status"
    PROJECT_ID = "openchoreo.io/project-id"
    COMPONENT_TYPE = "openchoreo.io/component-type"
    ENDPOINT_NAME = "openchoreo.io/endpoint-name"
    ENDPOINT_TYPE = "openchoreo.io/endpoint-type"
    ENDPOINT_PORT = "openchoreo.io/endpoint-port"
    DATA_PLANE_REF = "openchoreo.io/data-plane-ref"
    DNS_PREFIX = "openchoreo.io/dns-prefix"
    IS_PRODUCTION = "openchoreo.io/is-production"
    KUBERNETES_CLUSTER_NAME = "openchoreo.io/kubernetes-cluster-name"
    API_SERVER_URL = "openchoreo.io/api-server-url"
    PUBLIC_VIRTUAL_HOST = "openchoreo.io/public-virtual-host"
    ORGANIZATION_VIRTUAL_HOST = "openchoreo.io/organization-virtual-host"
    OBSERVER_URL = "openchoreo.io/observer-url"
    OBSERVER_USERNAME = "openchoreo.io/observer-username"
    CTD_NAME = "openchoreo.io/ctd-name"
    CTD_DISPLAY_NAME = "openchoreo.io/ctd-display-name"
    CTD_GENERATED = "openchoreo.io/ctd-generated"


class Labels:
    MANAGED = "openchoreo.io/managed"
    ENVIRONMENT_TYPE = "openchoreo.io/environment-type"
    DATAPLANE = "openchoreo.io/dataplane"


# Workload endpoint type -> catalog API interface kind. Unknown types map to openapi.
ENDPOINT_API_TYPES: dict[str, str] = {
    "REST": "openapi",
    "HTTP": "openapi",
    "GraphQL": "graphql",
    "gRPC": "grpc",
    "Websocket": "asyncapi",
    "TCP": "openapi",
    "UDP": "openapi",
}
DEFAULT_API_TYPE = "openapi"

# Owner used for infrastructure entities (environments, dataplanes).
INFRASTRUCTURE_OWNER = "guests"
