"""Seed the database with demo memorial profiles.

Usage:
    python -m vinculo.tools.seed_db
    python -m vinculo.tools.seed_db --drop  # drop existing data first
    python -m vinculo.tools.seed_db --verify-only
"""

from __future__ import annotations

import argparse
import asyncio
import logging

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from vinculo.adapters.persistence.database import Base, async_session_factory, engine
from vinculo.adapters.persistence.models import FamilyProfileModel, ProfileModel

logging.basicConfig(level=logging.INFO, format="%(levelname)s | %(message)s")
logger = logging.getLogger(__name__)

DEMO_PROFILES: list[dict] = [
    {"slug": "maria-lopez", "name": "María López", "is_published": True},
    {"slug": "jose-martinez", "name": "José Martínez", "is_published": True},
    {"slug": "borrador-ana", "name": "Ana Ruiz", "is_published": False},
]

DEMO_FAMILY_PROFILES: list[dict] = [
    {"slug": "familia-garcia", "family_name": "Familia García", "is_published": True},
    {"slug": "familia-perez", "family_name": "Familia Pérez", "is_published": False},
]


async def _drop_all(session: AsyncSession) -> None:
    logger.info("Dropping existing profiles...")
    await session.execute(delete(FamilyProfileModel))
    await session.execute(delete(ProfileModel))
    await session.commit()


async def seed(drop: bool = False) -> dict[str, int]:
    """Insert demo profiles, skipping slugs that already exist."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    counts = {"profiles": 0, "family_profiles": 0}
    async with async_session_factory() as session:
        if drop:
            await _drop_all(session)

        existing = set((await session.execute(select(ProfileModel.slug))).scalars().all())
        for row in DEMO_PROFILES:
            if row["slug"] in existing:
                continue
            session.add(ProfileModel(**row))
            counts["profiles"] += 1

        existing = set((await session.execute(select(FamilyProfileModel.slug))).scalars().all())
        for row in DEMO_FAMILY_PROFILES:
            if row["slug"] in existing:
                continue
            session.add(FamilyProfileModel(**row))
            counts["family_profiles"] += 1

        await session.commit()

    logger.info("Seeded %d profiles, %d family profiles", counts["profiles"], counts["family_profiles"])
    return counts


async def _verify_data() -> None:
    async with async_session_factory() as session:
        profiles = (await session.execute(select(ProfileModel))).scalars().all()
        families = (await session.execute(select(FamilyProfileModel))).scalars().all()

        print(f"\n{'='*50}")
        print("SEED VERIFICATION")
        print(f"{'='*50}")
        print(f"Profiles:        {len(profiles)} ({sum(p.is_published for p in profiles)} published)")
        print(f"Family profiles: {len(families)} ({sum(f.is_published for f in families)} published)")
        for p in profiles:
            print(f"  profiles/{p.slug}: {p.visit_count} visits")
        for f in families:
            print(f"  family-profiles/{f.slug}: {f.visit_count} visits")
        print(f"{'='*50}\n")


def main():
    parser = argparse.ArgumentParser(description="Seed the visit counter database with demo profiles")
    parser.add_argument(
        "--drop", action="store_true",
        help="Drop existing profiles before seeding",
    )
    parser.add_argument(
        "--verify-only", action="store_true",
        help="Only run verification, don't seed",
    )
    args = parser.parse_args()

    if args.verify_only:
        asyncio.run(_verify_data())
    else:
        async def run_all():
            await seed(drop=args.drop)
            await _verify_data()
        asyncio.run(run_all())


if __name__ == "__main__":
    main()
