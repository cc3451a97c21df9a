"""FastAPI dependency injection — wires adapters into use cases."""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from vinculo.adapters.persistence.database import get_session
from vinculo.adapters.persistence.repositories import SqlProfileRepository
from vinculo.application.use_cases.register_visit import RegisterVisitUseCase


def get_profile_repo(session: AsyncSession = Depends(get_session)) -> SqlProfileRepository:
    return SqlProfileRepository(session)


def get_register_visit_uc(
    profile_repo: SqlProfileRepository = Depends(get_profile_repo),
) -> RegisterVisitUseCase:
    return RegisterVisitUseCase(profile_repo=profile_repo)
