"""Observability module for structured logging."""

from servicekit.observability.logging import (
    RequestContextTokens,
    bind_request_context,
    clear_request_context,
    configure_logging,
)


__all__ = [
    "RequestContextTokens",
    "bind_request_context",
    "clear_request_context",
    "configure_logging",
]
