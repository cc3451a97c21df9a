"""httpx visit API client — implements VisitApiPort."""

from __future__ import annotations

import logging

import httpx

from vinculo.application.ports.visit_api_port import (
    DEFAULT_VISIT_ERROR,
    RateLimitedError,
    VisitApiError,
    VisitApiPort,
)
from vinculo.config import settings
from vinculo.domain.value_objects.resource_key import ResourceKey

logger = logging.getLogger(__name__)

_UNSET = object()


class HttpxVisitApiClient(VisitApiPort):
    """POSTs to ``{base_url}/{kind}/public/{slug}/visit``.

    Pass ``client`` to reuse a connection pool (or a mock transport in tests);
    otherwise one AsyncClient is opened per call.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout=_UNSET,
        client: httpx.AsyncClient | None = None,
    ):
        self._base_url = (base_url or settings.api_base_url).rstrip("/")
        if timeout is _UNSET:
            timeout = settings.visit_request_timeout
        # None falls back to httpx's own default timeout
        self._timeout = httpx.USE_CLIENT_DEFAULT if timeout is None else timeout
        self._client = client

    async def increment(self, key: ResourceKey) -> int:
        url = self._base_url + key.visit_path()
        try:
            if self._client is not None:
                response = await self._client.post(url, timeout=self._timeout)
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.post(url, timeout=self._timeout)
        except httpx.HTTPError as e:
            logger.warning("Visit API unreachable for %s: %s", key, e)
            raise VisitApiError(DEFAULT_VISIT_ERROR) from e

        if response.status_code == httpx.codes.TOO_MANY_REQUESTS:
            raise RateLimitedError(_error_message(response), status_code=response.status_code)

        if response.is_error:
            raise VisitApiError(_error_message(response), status_code=response.status_code)

        return _visit_count(response)

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return DEFAULT_VISIT_ERROR
    if isinstance(payload, dict) and isinstance(payload.get("error"), str) and payload["error"]:
        return payload["error"]
    return DEFAULT_VISIT_ERROR


def _visit_count(response: httpx.Response) -> int:
    try:
        payload = response.json()
    except ValueError as e:
        raise VisitApiError(DEFAULT_VISIT_ERROR, status_code=response.status_code) from e

    if not isinstance(payload, dict) or payload.get("success") is not True:
        raise VisitApiError(_error_message(response), status_code=response.status_code)

    count = payload.get("visit_count")
    if isinstance(count, bool) or not isinstance(count, int) or count < 0:
        logger.warning("Malformed visit_count in response: %r", count)
        raise VisitApiError(DEFAULT_VISIT_ERROR, status_code=response.status_code)
    return count
