"""Port interface for cross-tab guard notifications."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass

from vinculo.domain.value_objects.enums import GuardState
from vinculo.domain.value_objects.resource_key import ResourceKey


@dataclass(frozen=True)
class GuardEvent:
    key: ResourceKey
    state: GuardState
    origin: int


class BroadcastChannelPort(ABC):
    @abstractmethod
    def publish(self, event: GuardEvent) -> None:
        """Deliver the event to every subscriber except its origin."""
        ...

    @abstractmethod
    def subscribe(self, subscriber_id: int, callback: Callable[[GuardEvent], None]) -> None:
        ...

    @abstractmethod
    def unsubscribe(self, subscriber_id: int) -> None:
        ...
