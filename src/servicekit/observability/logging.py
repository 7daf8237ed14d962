"""Structured logging configuration and per-request log context."""

import contextvars
import logging
import sys
from collections.abc import Mapping
from typing import Any, TextIO

import structlog


RequestContextTokens = Mapping[str, contextvars.Token[Any]]


def configure_logging(
    level: int = logging.INFO,
    output: TextIO = sys.stderr,
    json_format: bool = True,
) -> None:
    """Configure structured logging for the service layer.

    Every event is merged with the bound request context, so transport
    and state machine events carry the ``request_id`` of the execution
    that emitted them.

    Args:
        level: Logging level (default: INFO).
        output: Output stream (default: stderr).
        json_format: Whether to use JSON format (default: True).
    """
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
    ]
    processors.append(
        structlog.processors.JSONRenderer(sort_keys=True)
        if json_format
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=output),
        cache_logger_on_first_use=False,
    )


def bind_request_context(request_id: str, **context: Any) -> RequestContextTokens:
    """Bind an execution's context to all log events in the current context.

    Args:
        request_id: Identifier of the execution.
        **context: Extra key/value pairs, e.g. ``service``.

    Returns:
        Tokens restoring the previous values when passed to
        ``clear_request_context``.
    """
    return structlog.contextvars.bind_contextvars(request_id=request_id, **context)


def clear_request_context(tokens: RequestContextTokens | None = None) -> None:
    """Remove request context from log events.

    Args:
        tokens: Tokens from ``bind_request_context``. When given, the
            values bound before are restored; otherwise ``request_id`` is
            unbound.
    """
    if tokens is None:
        structlog.contextvars.unbind_contextvars("request_id")
        return
    structlog.contextvars.reset_contextvars(**tokens)
