"""Client-side service layer for composing and executing HTTP requests.

Requests are described declaratively, merged with service defaults,
submitted once over a transport and resolved into a typed Response or a
NetworkError.
"""

from servicekit.body import BodyEncoder, BodyEncoding, JsonEncoder, RequestBody
from servicekit.classifier import classify, classify_outcome
from servicekit.composer import compose, merge_headers, resolve_url, validate_headers
from servicekit.config import ServiceConfiguration
from servicekit.errors import (
    BodyEncodingError,
    EmptyDataError,
    HTTPStatusError,
    InvalidConfigurationError,
    InvalidHeaderError,
    InvalidResponseError,
    InvalidURLError,
    MissingEndpointError,
    NetworkError,
    NetworkErrorClass,
    NoResponseError,
    ResponseDecodingError,
)
from servicekit.metrics import ServiceMetrics
from servicekit.models import (
    CachePolicy,
    HttpResponseHead,
    OutcomeKind,
    Request,
    RequestMethod,
    Response,
    ResponseOutcome,
    WireRequest,
)
from servicekit.operation import JsonOperation
from servicekit.protocols import RequestDescriptor, RequestExecutor, Transport
from servicekit.service import Service
from servicekit.settings import ServiceSettings, get_settings
from servicekit.transport import HttpxTransport, TransportError, TransportExchange


__all__ = [
    # Service
    "Service",
    "ServiceConfiguration",
    "ServiceSettings",
    "get_settings",
    # Requests
    "Request",
    "RequestMethod",
    "RequestBody",
    "BodyEncoding",
    "BodyEncoder",
    "JsonEncoder",
    "CachePolicy",
    "WireRequest",
    # Composition
    "compose",
    "merge_headers",
    "resolve_url",
    "validate_headers",
    # Responses
    "Response",
    "ResponseOutcome",
    "OutcomeKind",
    "HttpResponseHead",
    "classify",
    "classify_outcome",
    # Transport
    "Transport",
    "TransportExchange",
    "TransportError",
    "HttpxTransport",
    # Protocols
    "RequestDescriptor",
    "RequestExecutor",
    # Operations
    "JsonOperation",
    # Errors
    "NetworkError",
    "NetworkErrorClass",
    "InvalidConfigurationError",
    "InvalidURLError",
    "InvalidHeaderError",
    "MissingEndpointError",
    "NoResponseError",
    "InvalidResponseError",
    "EmptyDataError",
    "HTTPStatusError",
    "BodyEncodingError",
    "ResponseDecodingError",
    # Metrics
    "ServiceMetrics",
]
