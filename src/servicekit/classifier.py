"""Classify raw transport exchanges into responses."""

from servicekit.errors import EmptyDataError, InvalidResponseError, NoResponseError
from servicekit.models import HttpResponseHead, Response, ResponseOutcome
from servicekit.transport import TransportExchange


def classify_outcome(head: HttpResponseHead | None) -> ResponseOutcome:
    """Classify an optional response head.

    Args:
        head: Response head, or None if nothing was received.

    Returns:
        NO_RESPONSE without a head, otherwise SUCCESS/FAILURE by status.
    """
    if head is None:
        return ResponseOutcome.no_response()
    return ResponseOutcome.from_status(head.status_code)


def classify(exchange: TransportExchange) -> Response:
    """Classify a transport exchange.

    Checks run in a fixed order: missing response, non-HTTP response,
    missing body, then status.

    Args:
        exchange: Raw transport outcome.

    Returns:
        Response with a SUCCESS or FAILURE outcome.

    Raises:
        NoResponseError: If there is no response object.
        InvalidResponseError: If the response is not an HTTP response.
        EmptyDataError: If the HTTP response has no body.
    """
    response = exchange.response
    if response is None:
        raise NoResponseError()

    if not isinstance(response, HttpResponseHead):
        raise InvalidResponseError(type(response).__name__)

    if exchange.body is None:
        raise EmptyDataError(response.status_code)

    return Response(
        outcome=classify_outcome(response),
        head=response,
        body=exchange.body,
    )
