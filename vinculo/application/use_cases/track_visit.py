"""VisitTracker — binds the increment guard to one mounted public view."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from vinculo.application.ports.visit_api_port import (
    DEFAULT_VISIT_ERROR,
    RateLimitedError,
    VisitApiError,
    VisitApiPort,
)
from vinculo.application.services.increment_guard import IncrementGuard
from vinculo.domain.value_objects.resource_key import ResourceKey

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VisitSnapshot:
    """What a view renders."""

    visit_count: int
    is_loading: bool
    error: str | None


class VisitTracker:
    """Per-view controller for the visit counter.

    The displayed count only ever comes from ``initial_count`` or from a
    server response; it is never incremented locally.
    """

    def __init__(
        self,
        key: ResourceKey,
        guard: IncrementGuard,
        api: VisitApiPort,
        initial_count: int = 0,
    ):
        self._key = key
        self._guard = guard
        self._api = api
        self.visit_count = initial_count
        self.is_loading = False
        self.error: str | None = None
        self._tried = False

    @property
    def key(self) -> ResourceKey:
        return self._key

    def snapshot(self) -> VisitSnapshot:
        return VisitSnapshot(
            visit_count=self.visit_count,
            is_loading=self.is_loading,
            error=self.error,
        )

    async def mount(self) -> VisitSnapshot:
        """Count the visit once for this view instance."""
        if not self._key.is_empty() and not self._tried:
            await self.increment_visit()
        return self.snapshot()

    async def increment_visit(self) -> None:
        """Register the visit unless this browser already did.

        Safe to call repeatedly: only the first eligible call per key
        reaches the network. Never raises.
        """
        if self._tried or self._key.is_empty():
            return

        if not self._guard.can_increment(self._key):
            logger.debug("Visit for %s already counted or in flight", self._key)
            self._tried = True
            return

        self._tried = True
        self._guard.start_increment(self._key)
        self.is_loading = True
        self.error = None

        try:
            self.visit_count = await self._api.increment(self._key)
            self._guard.complete_increment(self._key)
        except asyncio.CancelledError:
            # View torn down mid-request; the key must not stay in flight.
            self._guard.reset(self._key)
            self._tried = False
            raise
        except RateLimitedError:
            logger.info("Visit for %s rate-limited; treating as counted", self._key)
            self._guard.complete_increment(self._key)
        except VisitApiError as e:
            logger.warning("Error incrementing visit count for %s: %s", self._key, e.message)
            self._fail(e.message or DEFAULT_VISIT_ERROR)
        except Exception:
            logger.exception("Unexpected error incrementing visit count for %s", self._key)
            self._fail(DEFAULT_VISIT_ERROR)
        finally:
            self.is_loading = False

    def _fail(self, message: str) -> None:
        # Leave the key retryable by the next mount or manual call.
        self.error = message
        self._guard.reset(self._key)
        self._tried = False
