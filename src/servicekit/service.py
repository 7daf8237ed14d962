"""Execution engine: compose, submit, classify."""

import asyncio
import time
import uuid
from types import TracebackType

import structlog

from servicekit.classifier import classify
from servicekit.composer import compose
from servicekit.config import ServiceConfiguration
from servicekit.errors import (
    HTTPStatusError,
    MissingEndpointError,
    NetworkError,
    NoResponseError,
)
from servicekit.metrics import ServiceMetrics
from servicekit.models import Response, WireRequest
from servicekit.observability import bind_request_context, clear_request_context
from servicekit.protocols import RequestDescriptor, Transport
from servicekit.redact import redact_headers, redact_url_credentials
from servicekit.state_machine import ExecutionState, ExecutionStateMachine
from servicekit.transport import HttpxTransport, TransportError


logger = structlog.get_logger()


class Service:
    """Executes requests against a configured backend service.

    Each call to ``execute`` composes the request against the current
    configuration, submits it to the transport exactly once and resolves
    to a single Response or NetworkError. Executions are independent and
    may run concurrently without limit.
    """

    def __init__(
        self,
        configuration: ServiceConfiguration,
        transport: Transport | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            configuration: Service configuration, owned by the caller.
            transport: Transport to submit requests with (default: a new
                HttpxTransport owned and closed by this service).
        """
        self._configuration = configuration
        self._owned_transport: HttpxTransport | None = None
        if transport is None:
            self._owned_transport = HttpxTransport()
            transport = self._owned_transport
        self._transport = transport
        self._metrics = ServiceMetrics.get_instance()
        self._log = logger.bind(
            component="service",
            service=configuration.name,
            base_url=redact_url_credentials(configuration.base_url),
        )

    @property
    def configuration(self) -> ServiceConfiguration:
        """Get the service configuration."""
        return self._configuration

    @property
    def headers(self) -> dict[str, str]:
        """Get the service's default headers."""
        return dict(self._configuration.default_headers)

    async def __aenter__(self) -> "Service":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the transport if this service created it."""
        if self._owned_transport is not None:
            await self._owned_transport.aclose()

    def submit(self, request: RequestDescriptor | None) -> "asyncio.Task[Response]":
        """Schedule an execution as a task.

        Cancelling the returned task cancels the in-flight transport call;
        the task then resolves as cancelled and delivers no result.

        Args:
            request: Request to execute.

        Returns:
            Task resolving to the Response or raising a NetworkError.
        """
        return asyncio.get_running_loop().create_task(self.execute(request))

    async def execute(self, request: RequestDescriptor | None) -> Response:
        """Execute a request.

        Args:
            request: Request to execute.

        Returns:
            Response with a SUCCESS outcome.

        Raises:
            MissingEndpointError: If no request is given.
            InvalidURLError: If the URL cannot be composed.
            InvalidHeaderError: If a merged header cannot be sent.
            BodyEncodingError: If the body cannot be encoded.
            NoResponseError: If the transport produced no response.
            InvalidResponseError: If the response is not HTTP.
            EmptyDataError: If the response has no body.
            HTTPStatusError: If the status is outside the success range.
        """
        if request is None:
            error = MissingEndpointError()
            self._metrics.record_failure(error.error_class)
            self._log.warning("request_failed", **error.to_dict())
            raise error

        request_id = uuid.uuid4().hex[:12]
        machine = ExecutionStateMachine(request_id)
        log = self._log.bind(
            method=request.method.value if request.method else "GET",
            endpoint=request.endpoint,
        )

        tokens = bind_request_context(request_id)
        start_time_ns = time.perf_counter_ns()
        try:
            return await self._execute(request, machine, log)
        except Exception as e:
            if not machine.is_terminal():
                machine.transition(ExecutionState.FAILED)
                log.error("request_aborted", error_type=type(e).__name__)
            raise
        finally:
            duration_ms = (time.perf_counter_ns() - start_time_ns) / 1_000_000
            self._metrics.record_duration(duration_ms)
            clear_request_context(tokens)

    async def _execute(
        self,
        request: RequestDescriptor,
        machine: ExecutionStateMachine,
        log: structlog.stdlib.BoundLogger,
    ) -> Response:
        """Run one execution through its states.

        Args:
            request: Request to execute.
            machine: State machine of this execution.
            log: Bound logger.

        Returns:
            Successful Response.
        """
        try:
            wire_request = compose(self._configuration, request)
        except NetworkError as e:
            self._fail(machine, e, log)
            raise

        machine.transition(ExecutionState.COMPOSED)
        log.debug(
            "request_composed",
            url=redact_url_credentials(wire_request.url),
            headers=redact_headers(wire_request.headers),
            timeout=wire_request.timeout,
            cache_policy=wire_request.cache_policy.value,
            body_bytes=len(wire_request.body) if wire_request.body else 0,
        )

        response = await self._submit(wire_request, machine, log)

        if not response.outcome.is_success:
            status_error = HTTPStatusError(response)
            self._fail(machine, status_error, log)
            raise status_error

        machine.transition(ExecutionState.SUCCEEDED)
        log.info(
            "request_complete",
            status_code=response.status_code,
            bytes=len(response.body or b""),
        )
        return response

    async def _submit(
        self,
        wire_request: WireRequest,
        machine: ExecutionStateMachine,
        log: structlog.stdlib.BoundLogger,
    ) -> Response:
        """Submit a wire request and classify what comes back.

        Args:
            wire_request: Composed request.
            machine: State machine of this execution.
            log: Bound logger.

        Returns:
            Classified Response, successful or not.
        """
        machine.transition(ExecutionState.SUBMITTED)
        log.debug("request_submitted")

        try:
            exchange = await self._transport.send(wire_request)
        except asyncio.CancelledError:
            self._cancel(machine, log)
            raise
        except TransportError as e:
            no_response = NoResponseError(str(e))
            self._fail(machine, no_response, log)
            raise no_response from e

        # A transport may swallow the cancellation and return anyway.
        task = asyncio.current_task()
        if task is not None and task.cancelling():
            self._cancel(machine, log)
            raise asyncio.CancelledError

        try:
            response = classify(exchange)
        except NetworkError as e:
            self._fail(machine, e, log)
            raise

        self._metrics.record_response(response.status_code, len(response.body or b""))
        return response

    def _fail(
        self,
        machine: ExecutionStateMachine,
        error: NetworkError,
        log: structlog.stdlib.BoundLogger,
    ) -> None:
        """Move an execution to FAILED and record the error."""
        machine.transition(ExecutionState.FAILED)
        self._metrics.record_failure(error.error_class)
        log.warning("request_failed", **error.to_dict())

    def _cancel(
        self,
        machine: ExecutionStateMachine,
        log: structlog.stdlib.BoundLogger,
    ) -> None:
        """Move an execution to CANCELLED and record it."""
        machine.transition(ExecutionState.CANCELLED)
        self._metrics.record_cancellation()
        log.info("request_cancelled")
