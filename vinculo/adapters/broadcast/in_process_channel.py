"""In-process broadcast channel — implements BroadcastChannelPort.

A ``ChannelRegistry`` hands out channels by name, so every guard opened
against the same registry and name (one per "tab") hears the others, much
like a browser BroadcastChannel. Registries are owned by whoever composes
the guards; there is no process-wide default.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from vinculo.application.ports.broadcast_channel import BroadcastChannelPort, GuardEvent

logger = logging.getLogger(__name__)


class InProcessBroadcastChannel(BroadcastChannelPort):
    def __init__(self, name: str):
        self.name = name
        self._subscribers: dict[int, Callable[[GuardEvent], None]] = {}

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def publish(self, event: GuardEvent) -> None:
        for subscriber_id, callback in list(self._subscribers.items()):
            if subscriber_id != event.origin:
                callback(event)
        logger.debug("Broadcast %s=%s on '%s'", event.key, event.state.value, self.name)

    def subscribe(self, subscriber_id: int, callback: Callable[[GuardEvent], None]) -> None:
        self._subscribers[subscriber_id] = callback

    def unsubscribe(self, subscriber_id: int) -> None:
        self._subscribers.pop(subscriber_id, None)


class ChannelRegistry:
    """Named channels shared by the guards composed against this registry."""

    def __init__(self):
        self._channels: dict[str, InProcessBroadcastChannel] = {}

    def get(self, name: str) -> InProcessBroadcastChannel:
        if name not in self._channels:
            self._channels[name] = InProcessBroadcastChannel(name)
        return self._channels[name]
