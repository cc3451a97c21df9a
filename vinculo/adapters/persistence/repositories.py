"""SQLAlchemy repository implementations."""

from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from vinculo.adapters.persistence.models import FamilyProfileModel, ProfileModel
from vinculo.application.ports.profile_repo import ProfileRepository
from vinculo.domain.entities.memorial_profile import MemorialProfile
from vinculo.domain.value_objects.enums import ResourceKind

_MODELS: dict[ResourceKind, type[ProfileModel] | type[FamilyProfileModel]] = {
    ResourceKind.PROFILE: ProfileModel,
    ResourceKind.FAMILY: FamilyProfileModel,
}

# ─── Mappers ─────────────────────────────────────────────────────────


def _profile_to_domain(kind: ResourceKind, m: ProfileModel | FamilyProfileModel) -> MemorialProfile:
    title = m.family_name if isinstance(m, FamilyProfileModel) else m.name
    return MemorialProfile(
        id=m.id,
        kind=kind,
        slug=m.slug,
        title=title,
        is_published=m.is_published,
        deleted_at=m.deleted_at,
        visit_count=m.visit_count,
    )


def _profile_to_model(profile: MemorialProfile) -> ProfileModel | FamilyProfileModel:
    common = dict(
        slug=profile.slug,
        is_published=profile.is_published,
        deleted_at=profile.deleted_at,
        visit_count=profile.visit_count,
    )
    if profile.id:
        common["id"] = profile.id
    if profile.kind == ResourceKind.FAMILY:
        return FamilyProfileModel(family_name=profile.title, **common)
    return ProfileModel(name=profile.title, **common)


# ─── Repositories ────────────────────────────────────────────────────


class SqlProfileRepository(ProfileRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def save(self, profile: MemorialProfile) -> MemorialProfile:
        m = _profile_to_model(profile)
        self._s.add(m)
        await self._s.flush()
        profile.id = m.id
        return profile

    async def get_by_id(self, kind: ResourceKind, profile_id: str) -> MemorialProfile | None:
        model = _MODELS[kind]
        m = await self._s.get(model, profile_id, populate_existing=True)
        return _profile_to_domain(kind, m) if m else None

    async def get_public_by_slug(self, kind: ResourceKind, slug: str) -> MemorialProfile | None:
        model = _MODELS[kind]
        result = await self._s.execute(
            select(model)
            .where(
                model.slug == slug,
                model.is_published.is_(True),
                model.deleted_at.is_(None),
            )
            .execution_options(populate_existing=True)
        )
        m = result.scalar_one_or_none()
        return _profile_to_domain(kind, m) if m else None

    async def increment_visits(self, kind: ResourceKind, profile_id: str) -> int | None:
        model = _MODELS[kind]
        result = await self._s.execute(
            update(model)
            .where(model.id == profile_id)
            .values(visit_count=model.visit_count + 1)
            .returning(model.visit_count)
            .execution_options(synchronize_session=False)
        )
        return result.scalar_one_or_none()
