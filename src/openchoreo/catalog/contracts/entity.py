# openchoreo/catalog/contracts/entity.py
"""
Entity contracts for the software catalog.

An entity record is produced fresh on every sync cycle from upstream data
and is never patched afterwards. Its identity is the triple
``(kind, namespace, name)``, which must be unique within one cycle.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

DEFAULT_NAMESPACE = "default"
CATALOG_API_VERSION = "backstage.io/v1alpha1"
TEMPLATE_API_VERSION = "scaffolder.backstage.io/v1beta3"


@dataclass(frozen=True)
class EntityRef:
    kind: str
    namespace: str
    name: str

    def __str__(self) -> str:
        return f"{self.kind.lower()}:{self.namespace}/{self.name}"


@dataclass
class EntityRecord:
    """A typed catalog entity.

    Attributes:
        kind: Catalog kind (``Domain``, ``System``, ``Component``, ``API``,
            ``Environment``, ``Dataplane`` or ``Template``).
        name: Entity name, unique within ``(kind, namespace)``.
        namespace: Catalog namespace.
        title: Human readable title.
        description: Free text description.
        tags: Ordered tag list without duplicates.
        annotations: String-keyed annotation mapping.
        labels: String-keyed label mapping.
        spec: Kind-specific relationships and settings.
        api_version: Catalog schema version for the kind.
    """

    kind: str
    name: str
    namespace: str = DEFAULT_NAMESPACE
    title: str | None = None
    description: str | None = None
    tags: list[str] = field(default_factory=list)
    annotations: dict[str, str] = field(default_factory=dict)
    labels: dict[str, str] = field(default_factory=dict)
    spec: dict[str, Any] = field(default_factory=dict)
    api_version: str = CATALOG_API_VERSION

    @property
    def ref(self) -> EntityRef:
        return EntityRef(kind=self.kind, namespace=self.namespace, name=self.name)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the catalog wire format."""
        metadata: dict[str, Any] = {
            "name": self.name,
            "namespace": self.namespace,
        }
        if self.title is not None:
            metadata["title"] = self.title
        if self.description is not None:
            metadata["description"] = self.description
        metadata["tags"] = list(self.tags)
        if self.annotations:
            metadata["annotations"] = dict(self.annotations)
        if self.labels:
            metadata["labels"] = dict(self.labels)

        return {
            "apiVersion": self.api_version,
            "kind": self.kind,
            "metadata": metadata,
            "spec": self.spec,
        }


# Templates share the entity envelope; their spec holds ``parameters`` and ``steps``.
TemplateDefinition = EntityRecord
