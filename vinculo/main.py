"""Eterno Vínculo visit counter — FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded

from vinculo.adapters.persistence.database import engine
from vinculo.config import settings
from vinculo.infrastructure.api.limiter import limiter, rate_limit_exceeded_handler
from vinculo.infrastructure.api.routes_health import router as health_router
from vinculo.infrastructure.api.routes_visits import router as visits_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    try:
        async with engine.begin():
            pass  # Connection pool warmed up
        logger.info("Database connection established")
    except Exception as e:
        logger.warning("Database not available on startup: %s", e)
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s | %(message)s",
    )

    app = FastAPI(
        title="Eterno Vínculo — visit counter",
        description="Public memorial profile visit counting",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    # Register routers
    app.include_router(health_router, prefix="/api")
    app.include_router(visits_router, prefix="/api")

    return app


app = create_app()
