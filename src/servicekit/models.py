"""Data models for requests, wire requests and responses."""

import json
from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field

from servicekit.body import RequestBody
from servicekit.constants import (
    DEFAULT_TEXT_ENCODING,
    HTTP_STATUS_OK_MAX,
    HTTP_STATUS_OK_MIN,
)


class RequestMethod(str, Enum):
    """HTTP methods supported by the service."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"


class CachePolicy(str, Enum):
    """Cache behavior requested for a call.

    - USE_PROTOCOL_CACHE_POLICY: Follow the server's caching headers
    - RELOAD_IGNORING_LOCAL_CACHE_DATA: Skip locally cached data
    - RELOAD_IGNORING_LOCAL_AND_REMOTE_CACHE_DATA: Skip all caches
    - RETURN_CACHE_DATA_ELSE_LOAD: Prefer cached data, even stale
    - RETURN_CACHE_DATA_DONT_LOAD: Only cached data, never load
    - RELOAD_REVALIDATING_CACHE_DATA: Revalidate cached data with origin
    """

    USE_PROTOCOL_CACHE_POLICY = "use_protocol_cache_policy"
    RELOAD_IGNORING_LOCAL_CACHE_DATA = "reload_ignoring_local_cache_data"
    RELOAD_IGNORING_LOCAL_AND_REMOTE_CACHE_DATA = (
        "reload_ignoring_local_and_remote_cache_data"
    )
    RETURN_CACHE_DATA_ELSE_LOAD = "return_cache_data_else_load"
    RETURN_CACHE_DATA_DONT_LOAD = "return_cache_data_dont_load"
    RELOAD_REVALIDATING_CACHE_DATA = "reload_revalidating_cache_data"

    @property
    def request_headers(self) -> dict[str, str]:
        """Request headers expressing this policy on the wire."""
        return dict(_CACHE_POLICY_HEADERS[self])


_CACHE_POLICY_HEADERS: dict[CachePolicy, dict[str, str]] = {
    CachePolicy.USE_PROTOCOL_CACHE_POLICY: {},
    CachePolicy.RELOAD_IGNORING_LOCAL_CACHE_DATA: {
        "Cache-Control": "no-cache",
        "Pragma": "no-cache",
    },
    CachePolicy.RELOAD_IGNORING_LOCAL_AND_REMOTE_CACHE_DATA: {
        "Cache-Control": "no-cache, no-store",
        "Pragma": "no-cache",
    },
    CachePolicy.RETURN_CACHE_DATA_ELSE_LOAD: {"Cache-Control": "max-stale"},
    CachePolicy.RETURN_CACHE_DATA_DONT_LOAD: {"Cache-Control": "only-if-cached"},
    CachePolicy.RELOAD_REVALIDATING_CACHE_DATA: {"Cache-Control": "max-age=0"},
}


class OutcomeKind(str, Enum):
    """Tag of a response outcome."""

    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"
    NO_RESPONSE = "NO_RESPONSE"


class ResponseOutcome(BaseModel):
    """Classified result of a transport exchange.

    SUCCESS and FAILURE carry the status code, NO_RESPONSE carries none.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: OutcomeKind
    status_code: int | None = None

    @classmethod
    def success(cls, status_code: int) -> "ResponseOutcome":
        return cls(kind=OutcomeKind.SUCCESS, status_code=status_code)

    @classmethod
    def failure(cls, status_code: int) -> "ResponseOutcome":
        return cls(kind=OutcomeKind.FAILURE, status_code=status_code)

    @classmethod
    def no_response(cls) -> "ResponseOutcome":
        return cls(kind=OutcomeKind.NO_RESPONSE)

    @classmethod
    def from_status(cls, status_code: int | None) -> "ResponseOutcome":
        """Classify a status code.

        Args:
            status_code: HTTP status code, or None if nothing was received.

        Returns:
            SUCCESS for 200 <= status < 299, NO_RESPONSE for None,
            FAILURE otherwise.
        """
        if status_code is None:
            return cls.no_response()
        if HTTP_STATUS_OK_MIN <= status_code < HTTP_STATUS_OK_MAX:
            return cls.success(status_code)
        return cls.failure(status_code)

    @property
    def is_success(self) -> bool:
        """Check if the outcome is SUCCESS."""
        return self.kind == OutcomeKind.SUCCESS


class Request(BaseModel):
    """Description of one logical HTTP call.

    Anything left unset falls back to the service configuration when the
    request is composed. ``parameters`` is carried as-is and never merged
    into the URL or the body.
    """

    model_config = ConfigDict(
        extra="forbid", validate_assignment=True
    )

    endpoint: str = ""
    method: RequestMethod = RequestMethod.GET
    parameters: dict[str, Any] | None = None
    headers: dict[str, str] | None = None
    body: RequestBody | None = None
    timeout: Annotated[float, Field(gt=0)] | None = None
    cache_policy: CachePolicy | None = None


class WireRequest(BaseModel):
    """Fully resolved request, ready for the transport."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    url: Annotated[str, Field(min_length=1, description="Absolute URL")]
    method: RequestMethod
    headers: dict[str, str] = Field(default_factory=dict)
    timeout: Annotated[float, Field(gt=0, description="Timeout in seconds")]
    cache_policy: CachePolicy
    body: bytes | None = None


class HttpResponseHead(BaseModel):
    """Status line and headers of an HTTP response."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    status_code: int = Field(ge=100, le=999, description="HTTP status code")
    headers: dict[str, str] = Field(
        default_factory=dict, description="Response headers"
    )
    url: str = Field(default="", description="Final URL of the exchange")


class Response(BaseModel):
    """Classified response of a completed HTTP exchange."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    outcome: ResponseOutcome
    head: HttpResponseHead
    body: bytes | None = None

    @property
    def status_code(self) -> int:
        """HTTP status code of the response."""
        return self.head.status_code

    @property
    def headers(self) -> dict[str, str]:
        """Response headers."""
        return self.head.headers

    def as_text(self, encoding: str | None = None) -> str | None:
        """Decode the body as text.

        Args:
            encoding: Text encoding (default: UTF-8).

        Returns:
            Decoded text, or None if there is no body or the bytes do not
            decode under the encoding.
        """
        if self.body is None:
            return None
        try:
            return self.body.decode(encoding or DEFAULT_TEXT_ENCODING)
        except UnicodeDecodeError:
            return None

    def json_data(self) -> Any:
        """Parse the body as JSON.

        Returns:
            Parsed value, or None if there is no body.

        Raises:
            json.JSONDecodeError: If the body is not valid JSON.
        """
        if self.body is None:
            return None
        return json.loads(self.body)
