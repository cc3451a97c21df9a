"""RegisterVisitUseCase — server side of the visit counter."""

from __future__ import annotations

import logging

from vinculo.application.ports.profile_repo import ProfileRepository
from vinculo.domain.value_objects.enums import ResourceKind

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGES: dict[ResourceKind, str] = {
    ResourceKind.PROFILE: "Perfil no encontrado",
    ResourceKind.FAMILY: "Perfil familiar no encontrado",
}


class ProfileNotFoundError(LookupError):
    def __init__(self, kind: ResourceKind, ref: str):
        super().__init__(NOT_FOUND_MESSAGES[kind])
        self.kind = kind
        self.ref = ref


class RegisterVisitUseCase:
    """Adds one visit to a memorial profile and returns the new total."""

    def __init__(self, profile_repo: ProfileRepository):
        self._profiles = profile_repo

    async def by_slug(self, kind: ResourceKind, slug: str) -> int:
        """Count a visit on a public page. Unpublished or deleted profiles are not found."""
        profile = await self._profiles.get_public_by_slug(kind, slug)
        if profile is None:
            raise ProfileNotFoundError(kind, slug)
        return await self._increment(kind, profile.id)

    async def by_id(self, kind: ResourceKind, profile_id: str) -> int:
        return await self._increment(kind, profile_id)

    async def _increment(self, kind: ResourceKind, profile_id: str) -> int:
        total = await self._profiles.increment_visits(kind, profile_id)
        if total is None:
            raise ProfileNotFoundError(kind, profile_id)
        logger.info("Visit registered on %s/%s → %d", kind.value, profile_id, total)
        return total
