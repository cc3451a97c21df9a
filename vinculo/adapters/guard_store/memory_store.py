"""In-memory guard store — implements GuardStorePort without persistence."""

from __future__ import annotations

from collections import defaultdict

from vinculo.application.ports.guard_store import GuardStorePort
from vinculo.domain.value_objects.enums import ResourceKind
from vinculo.domain.value_objects.resource_key import ResourceKey


class InMemoryGuardStore(GuardStorePort):
    """Lives as long as the object; share one instance to simulate a reload."""

    def __init__(self):
        self._completed: dict[ResourceKind, set[str]] = defaultdict(set)

    def is_completed(self, key: ResourceKey) -> bool:
        return key.slug in self._completed.get(key.kind, set())

    def mark_completed(self, key: ResourceKey) -> None:
        self._completed[key.kind].add(key.slug)

    def remove(self, key: ResourceKey) -> None:
        self._completed.get(key.kind, set()).discard(key.slug)

    def clear(self, kind: ResourceKind | None = None) -> None:
        if kind is None:
            self._completed.clear()
        else:
            self._completed.pop(kind, None)
