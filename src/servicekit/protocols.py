"""Protocol interfaces for requests, transports and executors."""

from typing import Any, Protocol, runtime_checkable

from servicekit.body import RequestBody
from servicekit.models import CachePolicy, RequestMethod, Response, WireRequest
from servicekit.transport import TransportExchange


@runtime_checkable
class RequestDescriptor(Protocol):
    """Protocol for request descriptions accepted by the composer.

    ``servicekit.models.Request`` is the default implementation; any
    object exposing these attributes can be composed and executed.
    """

    endpoint: str
    method: RequestMethod | None
    parameters: dict[str, Any] | None
    headers: dict[str, str] | None
    body: RequestBody | None
    timeout: float | None
    cache_policy: CachePolicy | None


@runtime_checkable
class Transport(Protocol):
    """Protocol for the component that performs the HTTP exchange.

    Cancelling the awaiting task must abort the in-flight call.
    """

    async def send(self, request: WireRequest) -> TransportExchange:
        """Submit a resolved request.

        Args:
            request: Resolved wire request.

        Returns:
            Exchange holding the response object (if any) and body bytes.

        Raises:
            TransportError: If the call fails before producing a response.
        """
        ...


@runtime_checkable
class RequestExecutor(Protocol):
    """Protocol for anything that can execute a request."""

    async def execute(self, request: RequestDescriptor | None) -> Response:
        """Execute a request and return its successful response.

        Raises:
            NetworkError: On any failure.
        """
        ...
