# openchoreo/catalog/contracts/sink.py
"""
Contracts for the catalog-mutation sink.

The sink only supports full replacement: every sync cycle submits the
complete entity set, and anything previously submitted under the same
location key that is absent from the new set is considered stale.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Protocol, runtime_checkable

from openchoreo.catalog.contracts.entity import EntityRecord


@dataclass(frozen=True)
class DeferredEntity:
    entity: EntityRecord
    location_key: str


@dataclass(frozen=True)
class FullMutation:
    entities: list[DeferredEntity] = field(default_factory=list)
    type: Literal["full"] = "full"


@runtime_checkable
class EntityProviderConnection(Protocol):
    async def apply_mutation(self, mutation: FullMutation) -> None: ...
