# openchoreo/catalog/contracts/upstream.py
"""
Read-only records fetched from the OpenChoreo API on every sync cycle.

Field names follow Python conventions; the camelCase wire names are kept
as aliases so API payloads validate directly. Unknown fields are ignored
so that additive API changes do not break a sync run.
"""
from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field


class UpstreamModel(BaseModel):
    """Base for all upstream records."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class Organization(UpstreamModel):
    name: str
    display_name: str | None = Field(default=None, alias="displayName")
    description: str | None = None
    namespace: str = ""
    created_at: str = Field(default="", alias="createdAt")
    status: str = ""


class Project(UpstreamModel):
    name: str
    org_name: str | None = Field(default=None, alias="orgName")
    display_name: str | None = Field(default=None, alias="displayName")
    description: str | None = None
    deployment_pipeline: str | None = Field(default=None, alias="deploymentPipeline")
    created_at: str = Field(default="", alias="createdAt")
    status: str = ""


class Environment(UpstreamModel):
    name: str
    namespace: str = ""
    display_name: str | None = Field(default=None, alias="displayName")
    description: str | None = None
    data_plane_ref: str = Field(default="", alias="dataPlaneRef")
    is_production: bool = Field(default=False, alias="isProduction")
    dns_prefix: str = Field(default="", alias="dnsPrefix")
    created_at: str = Field(default="", alias="createdAt")
    status: str = ""


class DataPlane(UpstreamModel):
    name: str
    namespace: str | None = None
    display_name: str | None = Field(default=None, alias="displayName")
    description: str | None = None
    kubernetes_cluster_name: str | None = Field(default=None, alias="kubernetesClusterName")
    api_server_url: str | None = Field(default=None, alias="apiServerURL")
    public_virtual_host: str | None = Field(default=None, alias="publicVirtualHost")
    organization_virtual_host: str | None = Field(
        default=None, alias="organizationVirtualHost"
    )
    observer_url: str | None = Field(default=None, alias="observerURL")
    observer_username: str | None = Field(default=None, alias="observerUsername")
    created_at: str | None = Field(default=None, alias="createdAt")
    status: str | None = None


class Component(UpstreamModel):
    name: str
    type: str
    description: str | None = None
    project_name: str | None = Field(default=None, alias="projectName")
    org_name: str | None = Field(default=None, alias="orgName")
    repository_url: str | None = Field(default=None, alias="repositoryUrl")
    branch: str | None = None
    created_at: str = Field(default="", alias="createdAt")
    status: str = ""


class EndpointSchema(UpstreamModel):
    content: str | None = None


class WorkloadEndpoint(UpstreamModel):
    type: str
    port: int
    schema_: EndpointSchema | None = Field(default=None, alias="schema")


class Workload(UpstreamModel):
    name: str | None = None
    endpoints: dict[str, WorkloadEndpoint] | None = None


class CompleteComponent(Component):
    """A component fetched with its workload (``?include=type,workload``)."""

    workload: Workload | None = None


class ComponentTypeListItem(UpstreamModel):
    name: str
    workload_type: str = Field(default="", alias="workloadType")
    created_at: str = Field(default="", alias="createdAt")
    display_name: str | None = Field(default=None, alias="displayName")
    description: str | None = None
    tags: list[str] = Field(default_factory=list)
    allowed_workflows: list[str] = Field(default_factory=list, alias="allowedWorkflows")


class ComponentType(UpstreamModel):
    """Component type metadata (list endpoint) joined with its parameter schema."""

    metadata: ComponentTypeListItem
    input_parameters_schema: dict[str, Any] = Field(
        default_factory=dict, alias="inputParametersSchema"
    )

    @property
    def name(self) -> str:
        return self.metadata.name


class AddonListItem(UpstreamModel):
    name: str
    created_at: str = Field(default="", alias="createdAt")


T = TypeVar("T")


class Page(UpstreamModel, Generic[T]):
    """The ``data`` part of a list envelope."""

    items: list[T] = Field(default_factory=list)
    total_count: int = Field(default=0, alias="totalCount")
    page: int = 1
    page_size: int = Field(default=0, alias="pageSize")
