# tests/conftest.py
from __future__ import annotations

import pytest

from openchoreo.catalog.contracts.sink import FullMutation
from openchoreo.catalog.contracts.upstream import (
    CompleteComponent,
    Component,
    ComponentType,
    ComponentTypeListItem,
    DataPlane,
    Environment,
    Organization,
    Page,
    Project,
)
from openchoreo.catalog.core.clients.openchoreo import OpenChoreoApiError


class FakeOpenChoreoClient:
    """In-memory stand-in for OpenChoreoApiClient.

    ``failures`` maps a call key such as ``"projects:acme"`` or
    ``"schema:acme/web-service"`` to the exception it should raise.
    """

    def __init__(self) -> None:
        self.organizations: list[Organization] = []
        self.projects: dict[str, list[Project]] = {}
        self.environments: dict[str, list[Environment]] = {}
        self.dataplanes: dict[str, list[DataPlane]] = {}
        self.components: dict[tuple[str, str], list[Component]] = {}
        self.complete_components: dict[tuple[str, str, str], CompleteComponent] = {}
        self.component_types: dict[str, list[ComponentTypeListItem]] = {}
        self.schemas: dict[tuple[str, str], dict] = {}
        self.failures: dict[str, Exception] = {}
        self.calls: list[str] = []
        self.page_sizes: dict[str, int] = {}

    def _call(self, key: str) -> None:
        self.calls.append(key)
        if key in self.failures:
            raise self.failures[key]

    async def get_all_organizations(self, page_size=100):
        self._call("orgs")
        self.page_sizes["orgs"] = page_size
        return list(self.organizations)

    async def get_all_projects(self, org_name, page_size=100):
        self._call(f"projects:{org_name}")
        self.page_sizes["projects"] = page_size
        return list(self.projects.get(org_name, []))

    async def get_all_environments(self, org_name, page_size=100):
        self._call(f"environments:{org_name}")
        self.page_sizes["environments"] = page_size
        return list(self.environments.get(org_name, []))

    async def get_all_dataplanes(self, org_name, page_size=100):
        self._call(f"dataplanes:{org_name}")
        self.page_sizes["dataplanes"] = page_size
        return list(self.dataplanes.get(org_name, []))

    async def get_all_components(self, org_name, project_name, page_size=100):
        self._call(f"components:{org_name}/{project_name}")
        self.page_sizes["components"] = page_size
        return list(self.components.get((org_name, project_name), []))

    async def get_component(self, org_name, project_name, component_name):
        self._call(f"component:{org_name}/{project_name}/{component_name}")
        return self.complete_components[(org_name, project_name, component_name)]

    async def list_component_types(self, org_name, page=1, page_size=100):
        self._call(f"component-types:{org_name}")
        self.page_sizes["component-types"] = page_size
        items = self.component_types.get(org_name, [])
        return Page[ComponentTypeListItem](
            items=items, total_count=len(items), page=page, page_size=page_size
        )

    async def get_component_type_with_schema(self, org_name, item):
        self._call(f"schema:{org_name}/{item.name}")
        return ComponentType(
            metadata=item,
            input_parameters_schema=self.schemas.get((org_name, item.name), {}),
        )


class RecordingConnection:
    """Catalog sink that records every mutation it receives."""

    def __init__(self, error: Exception | None = None) -> None:
        self.mutations: list[FullMutation] = []
        self.error = error

    async def apply_mutation(self, mutation: FullMutation) -> None:
        self.mutations.append(mutation)
        if self.error is not None:
            raise self.error


@pytest.fixture
def web_service_type() -> ComponentTypeListItem:
    return ComponentTypeListItem(name="web-service", workload_type="deployment")


@pytest.fixture
def web_service_schema() -> dict:
    return {
        "type": "object",
        "properties": {"port": {"type": "integer", "default": 8080}},
    }


@pytest.fixture
def fake_client(web_service_type, web_service_schema) -> FakeOpenChoreoClient:
    """One organization with a project, a web app, a service and a component type."""
    client = FakeOpenChoreoClient()
    client.organizations = [Organization(name="acme", display_name="ACME Corp")]
    client.environments["acme"] = [
        Environment(name="dev", data_plane_ref="dp-1"),
        Environment(name="prod", data_plane_ref="dp-1", is_production=True),
    ]
    client.dataplanes["acme"] = [DataPlane(name="dp-1", kubernetes_cluster_name="kind")]
    client.projects["acme"] = [Project(name="shop")]
    client.components[("acme", "shop")] = [
        Component(name="storefront", type="WebApplication", status="Ready"),
        Component(name="orders", type="Service", status="Ready"),
    ]
    client.complete_components[("acme", "shop", "orders")] = CompleteComponent.model_validate(
        {
            "name": "orders",
            "type": "Service",
            "status": "Ready",
            "workload": {
                "endpoints": {
                    "rest": {"type": "REST", "port": 8080},
                    "events": {"type": "Websocket", "port": 9090},
                }
            },
        }
    )
    client.component_types["acme"] = [web_service_type]
    client.schemas[("acme", "web-service")] = web_service_schema
    return client


@pytest.fixture
def api_error() -> OpenChoreoApiError:
    return OpenChoreoApiError("test", "boom", status_code=500)
