"""Health check endpoint for the visit counter."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from vinculo.adapters.persistence.database import get_session
from vinculo.adapters.persistence.models import FamilyProfileModel, ProfileModel
from vinculo.config import settings
from vinculo.domain.value_objects.enums import ResourceKind
from vinculo.infrastructure.api.limiter import limiter

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

_COUNTED = {
    ResourceKind.PROFILE: ProfileModel,
    ResourceKind.FAMILY: FamilyProfileModel,
}


@router.get("/health")
async def health_check(session: AsyncSession = Depends(get_session)):
    """Report database reachability, public visit totals and the visit rate limit."""
    visits: dict[str, dict[str, int]] = {}
    try:
        for kind, model in _COUNTED.items():
            stmt = select(
                func.count(model.id),
                func.coalesce(func.sum(model.visit_count), 0),
            ).where(model.is_published.is_(True), model.deleted_at.is_(None))
            public_profiles, total_visits = (await session.execute(stmt)).one()
            visits[kind.value] = {
                "public_profiles": int(public_profiles),
                "total_visits": int(total_visits),
            }
        db_status = "connected"
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Health check could not read visit totals: %s", e)
        db_status = f"error: {e}"
        visits = {}

    return {
        "status": "ok" if db_status == "connected" else "degraded",
        "database": db_status,
        "visits": visits,
        "rate_limit": {
            "enabled": limiter.enabled,
            "limit": settings.visit_rate_limit,
        },
    }
