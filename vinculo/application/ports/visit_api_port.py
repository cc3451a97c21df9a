"""Port interface for the remote visit increment endpoint."""

from abc import ABC, abstractmethod

from vinculo.domain.value_objects.resource_key import ResourceKey

DEFAULT_VISIT_ERROR = "Error al registrar visita"


class VisitApiError(Exception):
    """The increment call failed (network, server error or malformed response)."""

    def __init__(self, message: str = DEFAULT_VISIT_ERROR, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class RateLimitedError(VisitApiError):
    """The endpoint refused the call because this client incremented too recently."""


class VisitApiPort(ABC):
    @abstractmethod
    async def increment(self, key: ResourceKey) -> int:
        """Register one visit and return the updated total.

        Raises:
            RateLimitedError: on a rate-limit rejection (HTTP 429).
            VisitApiError: on any other failure.
        """
        ...
