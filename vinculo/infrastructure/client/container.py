"""Visit client composition root — wires the guard, store and API client.

Build one container at application start and hand it (or its guard) to
every consumer. The guard it owns is the process-wide singleton: two
containers means two independent "tabs". Containers that should hear each
other over the cross-tab channel are given the same ``ChannelRegistry``.
"""

from __future__ import annotations

import logging

import httpx

from vinculo.adapters.broadcast.in_process_channel import ChannelRegistry
from vinculo.adapters.guard_store.json_file_store import JsonFileGuardStore
from vinculo.adapters.http.visit_api_client import HttpxVisitApiClient
from vinculo.application.ports.broadcast_channel import BroadcastChannelPort
from vinculo.application.ports.guard_store import GuardStorePort
from vinculo.application.ports.visit_api_port import VisitApiPort
from vinculo.application.services.increment_guard import IncrementGuard
from vinculo.application.use_cases.track_visit import VisitTracker
from vinculo.config import Settings, settings as default_settings
from vinculo.domain.value_objects.enums import ResourceKind
from vinculo.domain.value_objects.resource_key import ResourceKey

logger = logging.getLogger(__name__)


class VisitClientContainer:
    def __init__(
        self,
        config: Settings | None = None,
        store: GuardStorePort | None = None,
        api: VisitApiPort | None = None,
        channel: BroadcastChannelPort | None = None,
        channels: ChannelRegistry | None = None,
    ):
        config = config or default_settings
        self._http: httpx.AsyncClient | None = None

        if store is None:
            store = JsonFileGuardStore(config.guard_store_path)
        self.channels = channels if channels is not None else ChannelRegistry()
        if channel is None and config.guard_cross_tab_sync:
            channel = self.channels.get(config.guard_channel_name)
            logger.info("Cross-tab visit sync enabled on channel '%s'", config.guard_channel_name)
        if api is None:
            self._http = httpx.AsyncClient()
            api = HttpxVisitApiClient(
                base_url=config.api_base_url,
                timeout=config.visit_request_timeout,
                client=self._http,
            )

        self.store = store
        self.api = api
        self.guard = IncrementGuard(store, channel=channel)

    def tracker(self, kind: ResourceKind, slug: str, initial_count: int = 0) -> VisitTracker:
        return VisitTracker(
            ResourceKey(kind=kind, slug=slug),
            guard=self.guard,
            api=self.api,
            initial_count=initial_count,
        )

    async def aclose(self) -> None:
        self.guard.close()
        if self._http is not None:
            await self._http.aclose()

    async def __aenter__(self) -> "VisitClientContainer":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()
