"""Port interface for the guard's durable mirror."""

from abc import ABC, abstractmethod

from vinculo.domain.value_objects.enums import ResourceKind
from vinculo.domain.value_objects.resource_key import ResourceKey


class GuardStorePort(ABC):
    """Remembers completed increments across restarts.

    Only the COMPLETED marker is persisted; in-flight state is volatile.
    Implementations must not raise on read: an unreadable record counts as empty.
    """

    @abstractmethod
    def is_completed(self, key: ResourceKey) -> bool:
        ...

    @abstractmethod
    def mark_completed(self, key: ResourceKey) -> None:
        ...

    @abstractmethod
    def remove(self, key: ResourceKey) -> None:
        ...

    @abstractmethod
    def clear(self, kind: ResourceKind | None = None) -> None:
        """Drop every marker, or only the markers of one resource kind."""
        ...
