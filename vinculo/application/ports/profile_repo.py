"""Port interface for memorial profile persistence."""

from abc import ABC, abstractmethod

from vinculo.domain.entities.memorial_profile import MemorialProfile
from vinculo.domain.value_objects.enums import ResourceKind


class ProfileRepository(ABC):
    @abstractmethod
    async def save(self, profile: MemorialProfile) -> MemorialProfile:
        ...

    @abstractmethod
    async def get_by_id(self, kind: ResourceKind, profile_id: str) -> MemorialProfile | None:
        ...

    @abstractmethod
    async def get_public_by_slug(self, kind: ResourceKind, slug: str) -> MemorialProfile | None:
        """Return the profile only if it is published and not soft-deleted."""
        ...

    @abstractmethod
    async def increment_visits(self, kind: ResourceKind, profile_id: str) -> int | None:
        """Atomically add one visit and return the new total.

        Must be a single UPDATE ... RETURNING, never read-modify-write.
        Returns None if no row matched.
        """
        ...
