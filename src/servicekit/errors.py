"""Error types for the service layer.

Every failure of an execution is raised as a ``NetworkError`` subclass so
callers handle composition, transport and status failures on one path.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from servicekit.models import Response


class NetworkErrorClass(str, Enum):
    """Classification of service errors.

    - INVALID_CONFIGURATION: Base URL is not an absolute URL
    - INVALID_URL: Base URL and endpoint do not compose into a valid URL
    - INVALID_HEADER: A merged header cannot be sent on the wire
    - MISSING_ENDPOINT: Nothing to execute
    - NO_RESPONSE: Transport produced no response or failed
    - INVALID_RESPONSE: Transport produced a non-HTTP response
    - EMPTY_DATA: HTTP response without a body
    - HTTP_STATUS: Status code outside the success range
    - ENCODING: Request body could not be encoded
    - DECODING: Response body could not be decoded
    """

    INVALID_CONFIGURATION = "INVALID_CONFIGURATION"
    INVALID_URL = "INVALID_URL"
    INVALID_HEADER = "INVALID_HEADER"
    MISSING_ENDPOINT = "MISSING_ENDPOINT"
    NO_RESPONSE = "NO_RESPONSE"
    INVALID_RESPONSE = "INVALID_RESPONSE"
    EMPTY_DATA = "EMPTY_DATA"
    HTTP_STATUS = "HTTP_STATUS"
    ENCODING = "ENCODING"
    DECODING = "DECODING"


class NetworkError(Exception):
    """Base exception for service errors.

    Provides structured error information for logging and reporting.
    """

    def __init__(
        self,
        error_class: NetworkErrorClass,
        message: str,
        details: dict[str, str | int | bool | None] | None = None,
    ) -> None:
        """Initialize the network error.

        Args:
            error_class: Classification of the error.
            message: Human-readable error message.
            details: Additional structured error details.
        """
        super().__init__(message)
        self.error_class = error_class
        self.message = message
        self.details = details or {}

    def to_dict(
        self,
    ) -> dict[str, str | dict[str, str | int | bool | None]]:
        """Convert error to dictionary for logging/serialization.

        Returns:
            Dictionary representation of the error.
        """
        return {
            "error_class": self.error_class.value,
            "message": self.message,
            "details": self.details,
        }


class InvalidConfigurationError(NetworkError):
    """Base URL of a service configuration is not an absolute URL."""

    def __init__(self, base_url: str, reason: str | None = None) -> None:
        message = f"Invalid base URL: {base_url!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(
            error_class=NetworkErrorClass.INVALID_CONFIGURATION,
            message=message,
            details={"base_url": base_url},
        )
        self.base_url = base_url


class InvalidURLError(NetworkError):
    """Base URL and endpoint do not compose into a valid URL."""

    def __init__(self, url: str, reason: str | None = None) -> None:
        message = f"Invalid url: {url!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(
            error_class=NetworkErrorClass.INVALID_URL,
            message=message,
            details={"url": url},
        )
        self.url = url


class InvalidHeaderError(NetworkError):
    """A merged header name or value cannot be sent on the wire."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(
            error_class=NetworkErrorClass.INVALID_HEADER,
            message=f"Invalid header {name!r}: {reason}",
            details={"header": name},
        )
        self.name = name


class MissingEndpointError(NetworkError):
    """Execution attempted without a request."""

    def __init__(self) -> None:
        super().__init__(
            error_class=NetworkErrorClass.MISSING_ENDPOINT,
            message="No request to execute",
        )


class NoResponseError(NetworkError):
    """Transport returned no response, or failed before producing one."""

    def __init__(self, message: str = "No response received") -> None:
        super().__init__(error_class=NetworkErrorClass.NO_RESPONSE, message=message)


class InvalidResponseError(NetworkError):
    """Transport returned a response that is not an HTTP response."""

    def __init__(self, response_type: str) -> None:
        super().__init__(
            error_class=NetworkErrorClass.INVALID_RESPONSE,
            message=f"Expected an HTTP response, got {response_type}",
            details={"response_type": response_type},
        )


class EmptyDataError(NetworkError):
    """HTTP response arrived without body bytes."""

    def __init__(self, status_code: int) -> None:
        super().__init__(
            error_class=NetworkErrorClass.EMPTY_DATA,
            message=f"Response ({status_code}) has no body",
            details={"status_code": status_code},
        )


class HTTPStatusError(NetworkError):
    """Response status is outside the success range.

    Attributes:
        response: The classified response, for inspecting status and body.
    """

    def __init__(self, response: Response) -> None:
        super().__init__(
            error_class=NetworkErrorClass.HTTP_STATUS,
            message=f"Request failed with status {response.status_code}",
            details={"status_code": response.status_code},
        )
        self.response = response

    @property
    def status_code(self) -> int:
        """Status code of the failed response."""
        return self.response.status_code


class BodyEncodingError(NetworkError):
    """Request body payload is not encodable under its declared encoding."""

    def __init__(self, encoding: str, reason: str) -> None:
        super().__init__(
            error_class=NetworkErrorClass.ENCODING,
            message=f"Cannot encode body as {encoding}: {reason}",
            details={"encoding": encoding},
        )
        self.encoding = encoding


class ResponseDecodingError(NetworkError):
    """Response body could not be decoded into the expected type.

    Attributes:
        response: The response whose body failed to decode.
    """

    def __init__(self, response: Response, reason: str) -> None:
        super().__init__(
            error_class=NetworkErrorClass.DECODING,
            message=f"Cannot decode response body: {reason}",
            details={"status_code": response.status_code},
        )
        self.response = response
