"""Domain enums — pure Python, no external dependencies."""

from enum import Enum


class ResourceKind(str, Enum):
    """Countable resource kinds. The value is the route segment on the API."""

    PROFILE = "profiles"
    FAMILY = "family-profiles"


class GuardState(str, Enum):
    IDLE = "idle"
    IN_FLIGHT = "in_flight"
    COMPLETED = "completed"
