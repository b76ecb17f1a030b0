"""Public contracts for the OpenChoreo catalog synchronization core."""
from openchoreo.catalog.contracts.entity import EntityRecord, EntityRef, TemplateDefinition
from openchoreo.catalog.contracts.schema import FlatField, NodeKind, node_kind
from openchoreo.catalog.contracts.sink import (
    DeferredEntity,
    EntityProviderConnection,
    FullMutation,
)
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
    Workload,
    WorkloadEndpoint,
)

__all__ = [
    "EntityRecord", "EntityRef", "TemplateDefinition",
    "FlatField", "NodeKind", "node_kind",
    "DeferredEntity", "EntityProviderConnection", "FullMutation",
    "AddonListItem", "CompleteComponent", "Component", "ComponentType",
    "ComponentTypeListItem", "DataPlane", "Environment", "Organization",
    "Page", "Project", "Workload", "WorkloadEndpoint",
]
