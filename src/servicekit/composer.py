"""Compose request descriptions into wire requests.

Everything here is pure: no I/O, no logging, no mutation of inputs.
"""

import re
from typing import TYPE_CHECKING

from servicekit.config import ServiceConfiguration
from servicekit.constants import CONTENT_TYPE_HEADER
from servicekit.errors import InvalidHeaderError, InvalidURLError
from servicekit.models import CachePolicy, RequestMethod, WireRequest
from servicekit.urls import parse_absolute_url


if TYPE_CHECKING:
    from servicekit.protocols import RequestDescriptor


# RFC 9110 token characters
_HEADER_NAME_RE = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")
_FORBIDDEN_VALUE_CHARS = frozenset("\r\n\x00")


def merge_headers(
    configuration: ServiceConfiguration,
    request: "RequestDescriptor",
) -> dict[str, str]:
    """Merge service default headers with request headers.

    Request headers win on conflict, key by key.

    Args:
        configuration: Service configuration.
        request: Request description.

    Returns:
        New merged headers dictionary.
    """
    headers = dict(configuration.default_headers)
    if request.headers:
        headers.update(request.headers)
    return headers


def validate_headers(headers: dict[str, str]) -> None:
    """Check that every header can be written to the wire.

    Names must be RFC 9110 tokens. Values must be ASCII and free of line
    breaks and NUL bytes.

    Args:
        headers: Merged headers.

    Raises:
        InvalidHeaderError: If a name or value cannot be sent.
    """
    for name, value in headers.items():
        if not _HEADER_NAME_RE.fullmatch(name):
            raise InvalidHeaderError(name, "name is not a token")
        if not value.isascii():
            raise InvalidHeaderError(name, "value is not ASCII")
        if _FORBIDDEN_VALUE_CHARS.intersection(value):
            raise InvalidHeaderError(name, "value contains a line break or NUL")


def resolve_url(
    configuration: ServiceConfiguration,
    request: "RequestDescriptor",
) -> str:
    """Resolve the absolute URL of a request.

    The endpoint is appended to the base URL as-is, with no slash
    normalization, and the result is re-parsed.

    Args:
        configuration: Service configuration.
        request: Request description.

    Returns:
        Absolute URL string.

    Raises:
        InvalidURLError: If the concatenation is not a valid URL.
    """
    url = f"{configuration.base_url}{request.endpoint}"
    try:
        parse_absolute_url(url)
    except ValueError as e:
        raise InvalidURLError(url, str(e)) from e
    return url


def resolve_timeout(
    configuration: ServiceConfiguration,
    request: "RequestDescriptor",
) -> float:
    """Request timeout if set, else the service default."""
    if request.timeout is not None:
        return request.timeout
    return configuration.default_timeout


def resolve_cache_policy(
    configuration: ServiceConfiguration,
    request: "RequestDescriptor",
) -> CachePolicy:
    """Request cache policy if set, else the service default."""
    if request.cache_policy is not None:
        return request.cache_policy
    return configuration.default_cache_policy


def compose(
    configuration: ServiceConfiguration,
    request: "RequestDescriptor",
) -> WireRequest:
    """Compose a request against a service configuration.

    Args:
        configuration: Service configuration.
        request: Request description.

    Returns:
        Fully resolved WireRequest.

    Raises:
        InvalidURLError: If the URL cannot be composed.
        InvalidHeaderError: If a merged header cannot be sent.
        BodyEncodingError: If the body cannot be encoded.
    """
    url = resolve_url(configuration, request)
    headers = merge_headers(configuration, request)

    body: bytes | None = None
    if request.body is not None:
        body = request.body.encoded()
        if not any(k.lower() == CONTENT_TYPE_HEADER.lower() for k in headers):
            headers[CONTENT_TYPE_HEADER] = request.body.content_type
    validate_headers(headers)

    return WireRequest(
        url=url,
        method=request.method or RequestMethod.GET,
        headers=headers,
        timeout=resolve_timeout(configuration, request),
        cache_policy=resolve_cache_policy(configuration, request),
        body=body,
    )
