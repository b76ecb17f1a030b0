# openchoreo/catalog/core/clients/openchoreo.py
"""
Thin async client for the OpenChoreo REST API.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from openchoreo.catalog.contracts.upstream import (
    AddonListItem,
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

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 100


class OpenChoreoApiError(RuntimeError):
    """A failed OpenChoreo API call.

    Attributes:
        operation: Short name of the failed call (``list projects``).
        status_code: HTTP status, when the server answered.
    """

    def __init__(
        self, operation: str, message: str, status_code: int | None = None
    ) -> None:
        super().__init__(f"{operation}: {message}")
        self.operation = operation
        self.status_code = status_code


class OpenChoreoApiClient:
    """HTTP client for the OpenChoreo API.

    Every response is an envelope::

        { success: bool, data: <object> | { items, totalCount, page, pageSize } }

    Only the ``data`` part is returned to callers.
    """

    def __init__(
        self,
        *,
        base_url: str,
        token: str | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._base = base_url.rstrip("/")
        self._token = token
        self._timeout = timeout

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = (
                self._token
                if self._token.lower().startswith("bearer")
                else f"Bearer {self._token}"
            )
        return headers

    async def _get(
        self,
        operation: str,
        path: str,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        return await self._request(operation, "GET", path, params=params)

    async def _request(
        self,
        operation: str,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            try:
                resp = await client.request(
                    method,
                    f"{self._base}{path}",
                    params=params,
                    json=json,
                    headers=self._headers(),
                )
                resp.raise_for_status()
                body = resp.json()
            except httpx.HTTPStatusError as ex:
                logger.warning(
                    "%s failed status=%s reason=%s",
                    operation,
                    ex.response.status_code,
                    ex.response.text,
                )
                raise OpenChoreoApiError(
                    operation,
                    f"HTTP {ex.response.status_code}",
                    status_code=ex.response.status_code,
                ) from ex
            except httpx.HTTPError as ex:
                logger.warning("%s failed: %s", operation, ex)
                raise OpenChoreoApiError(operation, str(ex)) from ex
            except ValueError as ex:
                logger.warning("%s returned a non-JSON body", operation)
                raise OpenChoreoApiError(
                    operation, "invalid JSON response", status_code=resp.status_code
                ) from ex

        if not isinstance(body, dict) or body.get("success") is not True:
            logger.warning("%s returned an unsuccessful envelope", operation)
            raise OpenChoreoApiError(
                operation, "API request was not successful", status_code=resp.status_code
            )
        return body.get("data")

    async def _list(
        self,
        operation: str,
        path: str,
        page: int = DEFAULT_PAGE,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> dict[str, Any]:
        data = await self._get(
            operation, path, params={"page": page, "pageSize": page_size}
        )
        return data if isinstance(data, dict) else {}

    # -- Hierarchy -------------------------------------------------------------

    async def get_all_organizations(
        self, page_size: int = DEFAULT_PAGE_SIZE
    ) -> list[Organization]:
        data = await self._list("list organizations", "/orgs", page_size=page_size)
        return Page[Organization].model_validate(data).items

    async def get_all_projects(
        self, org_name: str, page_size: int = DEFAULT_PAGE_SIZE
    ) -> list[Project]:
        data = await self._list(
            "list projects", f"/orgs/{org_name}/projects", page_size=page_size
        )
        return Page[Project].model_validate(data).items

    async def get_all_environments(
        self, org_name: str, page_size: int = DEFAULT_PAGE_SIZE
    ) -> list[Environment]:
        data = await self._list(
            "list environments", f"/orgs/{org_name}/environments", page_size=page_size
        )
        return Page[Environment].model_validate(data).items

    async def get_all_dataplanes(
        self, org_name: str, page_size: int = DEFAULT_PAGE_SIZE
    ) -> list[DataPlane]:
        data = await self._list(
            "list dataplanes", f"/orgs/{org_name}/dataplanes", page_size=page_size
        )
        return Page[DataPlane].model_validate(data).items

    async def get_all_components(
        self, org_name: str, project_name: str, page_size: int = DEFAULT_PAGE_SIZE
    ) -> list[Component]:
        data = await self._list(
            "list components",
            f"/orgs/{org_name}/projects/{project_name}/components",
            page_size=page_size,
        )
        return Page[Component].model_validate(data).items

    async def get_component(
        self, org_name: str, project_name: str, component_name: str
    ) -> CompleteComponent:
        """Fetch one component together with its type and workload."""
        data = await self._get(
            "get component",
            f"/orgs/{org_name}/projects/{project_name}/components/{component_name}",
            params={"include": "type,workload"},
        )
        return CompleteComponent.model_validate(data or {})

    # -- Component types -------------------------------------------------------

    async def list_component_types(
        self,
        org_name: str,
        page: int = DEFAULT_PAGE,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> Page[ComponentTypeListItem]:
        data = await self._list(
            "list component types", f"/orgs/{org_name}/component-types", page, page_size
        )
        return Page[ComponentTypeListItem].model_validate(data)

    async def get_component_type_schema(
        self, org_name: str, component_type_name: str
    ) -> dict[str, Any]:
        data = await self._get(
            "get component type schema",
            f"/orgs/{org_name}/component-types/{component_type_name}/schema",
        )
        return data if isinstance(data, dict) else {}

    async def get_component_type_with_schema(
        self, org_name: str, item: ComponentTypeListItem
    ) -> ComponentType:
        schema = await self.get_component_type_schema(org_name, item.name)
        return ComponentType(metadata=item, input_parameters_schema=schema)

    # -- Addons and workflows --------------------------------------------------

    async def list_addons(
        self,
        org_name: str,
        page: int = DEFAULT_PAGE,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> Page[AddonListItem]:
        data = await self._list("list addons", f"/orgs/{org_name}/traits", page, page_size)
        return Page[AddonListItem].model_validate(data)

    async def get_addon_schema(self, org_name: str, addon_name: str) -> dict[str, Any]:
        data = await self._get(
            "get addon schema", f"/orgs/{org_name}/traits/{addon_name}/schema"
        )
        return data if isinstance(data, dict) else {}

    async def get_workflow_schema(self, org_name: str, workflow_name: str) -> dict[str, Any]:
        data = await self._get(
            "get workflow schema", f"/orgs/{org_name}/workflows/{workflow_name}/schema"
        )
        return data if isinstance(data, dict) else {}

    # -- Resources -------------------------------------------------------------

    async def apply_resource(self, resource: Mapping[str, Any]) -> Any:
        """Create or update a resource through ``POST /apply``."""
        metadata = resource.get("metadata") or {}
        logger.info(
            "Applying %s resource: %s in organization: %s",
            resource.get("kind"),
            metadata.get("name"),
            metadata.get("namespace"),
        )
        return await self._request(
            "apply resource", "POST", "/apply", json={"resource": dict(resource)}
        )
