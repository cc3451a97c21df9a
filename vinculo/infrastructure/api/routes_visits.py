"""Public visit endpoints — one route set per resource kind."""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from vinculo.adapters.persistence.database import get_session
from vinculo.application.ports.profile_repo import ProfileRepository
from vinculo.application.use_cases.register_visit import (
    NOT_FOUND_MESSAGES,
    ProfileNotFoundError,
    RegisterVisitUseCase,
)
from vinculo.domain.value_objects.enums import ResourceKind
from vinculo.infrastructure.api.dependencies import get_profile_repo, get_register_visit_uc
from vinculo.infrastructure.api.limiter import visit_rate_limit

logger = logging.getLogger(__name__)

router = APIRouter(tags=["visits"])

INCREMENT_ERROR = "Error al incrementar visitas"
INTERNAL_ERROR = "Error interno del servidor"


@router.get("/{kind}/public/{slug}")
async def get_public_profile(
    kind: ResourceKind,
    slug: str,
    profile_repo: ProfileRepository = Depends(get_profile_repo),
):
    """Public profile summary, including the current visit count."""
    profile = await profile_repo.get_public_by_slug(kind, slug)
    if profile is None:
        return _error(404, NOT_FOUND_MESSAGES[kind])
    return {
        "success": True,
        "data": {
            "id": profile.id,
            "slug": profile.slug,
            "title": profile.title,
            "visit_count": profile.visit_count,
        },
    }


@router.post("/{kind}/public/{slug}/visit")
@visit_rate_limit
async def visit_by_slug(
    request: Request,
    kind: ResourceKind,
    slug: str,
    uc: RegisterVisitUseCase = Depends(get_register_visit_uc),
    session: AsyncSession = Depends(get_session),
):
    """Count one visit on a published profile."""
    try:
        total = await uc.by_slug(kind, slug)
        await session.commit()
    except ProfileNotFoundError as e:
        return _error(404, str(e))
    except SQLAlchemyError:
        logger.exception("Error incrementing visits for %s/%s", kind.value, slug)
        await session.rollback()
        return _error(500, INCREMENT_ERROR)
    except Exception:
        logger.exception("Unexpected error registering visit for %s/%s", kind.value, slug)
        await session.rollback()
        return _error(500, INTERNAL_ERROR)

    return {"success": True, "visit_count": total}


@router.post("/{kind}/{profile_id}/visit")
@visit_rate_limit
async def visit_by_id(
    request: Request,
    kind: ResourceKind,
    profile_id: str,
    uc: RegisterVisitUseCase = Depends(get_register_visit_uc),
    session: AsyncSession = Depends(get_session),
):
    """Count one visit by profile id (used by owner previews)."""
    try:
        total = await uc.by_id(kind, profile_id)
        await session.commit()
    except ProfileNotFoundError as e:
        return _error(404, str(e))
    except SQLAlchemyError:
        logger.exception("Error incrementing visits for %s/%s", kind.value, profile_id)
        await session.rollback()
        return _error(500, INCREMENT_ERROR)
    except Exception:
        logger.exception("Unexpected error registering visit for %s/%s", kind.value, profile_id)
        await session.rollback()
        return _error(500, INTERNAL_ERROR)

    return {"success": True, "visit_count": total}


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})
