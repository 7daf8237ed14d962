"""Transport boundary and the default httpx-backed transport."""

from dataclasses import dataclass

import httpx
import structlog

from servicekit.models import HttpResponseHead, WireRequest


logger = structlog.get_logger()


@dataclass(frozen=True)
class TransportExchange:
    """Raw outcome of a transport call.

    Attributes:
        response: Response object, an ``HttpResponseHead`` for HTTP
            exchanges. None if the transport produced nothing.
        body: Body bytes, None if none accompanied the response.
    """

    response: object | None
    body: bytes | None


class TransportError(Exception):
    """Raised when the transport call fails before producing a response."""

    def __init__(self, inner: Exception) -> None:
        """Initialize the error.

        Args:
            inner: Underlying exception from the HTTP stack.
        """
        self.inner = inner
        super().__init__(f"Transport failed: {inner!r}")


class HttpxTransport:
    """Transport that performs exchanges with ``httpx.AsyncClient``.

    A client passed in is left open; a client created here is closed by
    ``aclose``. Cancelling the awaiting task aborts the in-flight request
    and releases its connection.
    """

    def __init__(self, client: httpx.AsyncClient | None = None) -> None:
        """Initialize the transport.

        Args:
            client: Client to send requests with (default: a new client).
        """
        self._client = client if client is not None else httpx.AsyncClient(
            follow_redirects=True
        )
        self._owns_client = client is None
        self._log = logger.bind(component="transport")

    async def send(self, request: WireRequest) -> TransportExchange:
        """Send a wire request.

        Args:
            request: Resolved wire request.

        Returns:
            Exchange with the response head and body bytes.

        Raises:
            TransportError: If the request cannot be built or httpx fails
                before a response is received.
        """
        try:
            http_request = self._client.build_request(
                method=request.method.value,
                url=request.url,
                headers=self._build_headers(request),
                content=request.body,
                timeout=request.timeout,
            )
            response = await self._client.send(http_request)
        except (httpx.HTTPError, UnicodeEncodeError) as e:
            self._log.debug(
                "transport_error",
                method=request.method.value,
                error_type=type(e).__name__,
            )
            raise TransportError(e) from e

        head = HttpResponseHead(
            status_code=response.status_code,
            headers=dict(response.headers),
            url=str(response.url),
        )
        return TransportExchange(response=head, body=response.content)

    async def aclose(self) -> None:
        """Close the client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()

    def _build_headers(self, request: WireRequest) -> dict[str, str]:
        """Build request headers, adding cache policy headers.

        Args:
            request: Resolved wire request.

        Returns:
            Headers dictionary.
        """
        headers = dict(request.headers)
        present = {k.lower() for k in headers}
        for key, value in request.cache_policy.request_headers.items():
            if key.lower() not in present:
                headers[key] = value
        return headers
