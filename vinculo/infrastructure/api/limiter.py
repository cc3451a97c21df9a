"""Per-client rate limiting for the public visit endpoints (slowapi)."""

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from vinculo.config import settings

RATE_LIMIT_MESSAGE = "Demasiadas visitas registradas, intenta más tarde"

# Counters live in memory; every visit route shares the "visits" scope per IP.
limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)

visit_rate_limit = limiter.shared_limit(settings.visit_rate_limit, scope="visits")


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    return JSONResponse(status_code=429, content={"error": RATE_LIMIT_MESSAGE})
