"""IncrementGuard — process-wide arbiter against duplicate visit increments.

One guard is constructed at application start and shared by reference with
every VisitTracker. It tracks, per ResourceKey, whether an increment is
in flight or already counted, and mirrors the completed marker into a
durable store so the answer survives restarts.

Guard operations are synchronous and never raise. Callers on an asyncio
loop get a race-free check-then-act as long as no ``await`` sits between
``can_increment`` and ``start_increment``.
"""

from __future__ import annotations

import logging
from collections import defaultdict

from vinculo.application.ports.broadcast_channel import BroadcastChannelPort, GuardEvent
from vinculo.application.ports.guard_store import GuardStorePort
from vinculo.domain.value_objects.enums import GuardState, ResourceKind
from vinculo.domain.value_objects.resource_key import ResourceKey

logger = logging.getLogger(__name__)


class IncrementGuard:
    def __init__(self, store: GuardStorePort, channel: BroadcastChannelPort | None = None):
        self._store = store
        self._channel = channel
        self._states: dict[ResourceKind, dict[str, GuardState]] = defaultdict(dict)
        if channel is not None:
            channel.subscribe(id(self), self._on_peer_event)

    def state(self, key: ResourceKey) -> GuardState:
        """In-memory state only; does not consult the durable mirror."""
        return self._states[key.kind].get(key.slug, GuardState.IDLE)

    def can_increment(self, key: ResourceKey) -> bool:
        current = self.state(key)
        if current in (GuardState.IN_FLIGHT, GuardState.COMPLETED):
            return False

        if self._store.is_completed(key):
            logger.debug("Durable marker found for %s", key)
            self._states[key.kind][key.slug] = GuardState.COMPLETED
            return False

        return True

    def start_increment(self, key: ResourceKey) -> None:
        self._states[key.kind][key.slug] = GuardState.IN_FLIGHT
        self._publish(key, GuardState.IN_FLIGHT)

    def complete_increment(self, key: ResourceKey) -> None:
        self._states[key.kind][key.slug] = GuardState.COMPLETED
        self._store.mark_completed(key)
        self._publish(key, GuardState.COMPLETED)

    def reset(self, key: ResourceKey) -> None:
        self._states[key.kind].pop(key.slug, None)
        self._store.remove(key)
        self._publish(key, GuardState.IDLE)

    def reset_all(self, kind: ResourceKind | None = None) -> None:
        """Forget every key (or every key of one kind), durable markers included."""
        if kind is None:
            self._states.clear()
        else:
            self._states.pop(kind, None)
        self._store.clear(kind)
        logger.info("Visit guard reset (%s)", kind.value if kind else "all kinds")

    def close(self) -> None:
        if self._channel is not None:
            self._channel.unsubscribe(id(self))
            self._channel = None

    def _publish(self, key: ResourceKey, state: GuardState) -> None:
        if self._channel is not None:
            self._channel.publish(GuardEvent(key=key, state=state, origin=id(self)))

    def _on_peer_event(self, event: GuardEvent) -> None:
        # Peers share the durable store, so only memory is touched here.
        if event.state == GuardState.IDLE:
            self._states[event.key.kind].pop(event.key.slug, None)
        else:
            self._states[event.key.kind][event.key.slug] = event.state
