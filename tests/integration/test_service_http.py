"""Integration tests executing requests against a local HTTP server."""

import asyncio
import json
import threading
import time
from collections.abc import Generator
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from servicekit.body import RequestBody
from servicekit.config import ServiceConfiguration
from servicekit.errors import HTTPStatusError, NoResponseError
from servicekit.metrics import ServiceMetrics
from servicekit.models import (
    CachePolicy,
    OutcomeKind,
    Request,
    RequestMethod,
    Response,
)
from servicekit.operation import JsonOperation
from servicekit.service import Service


class ApiHandler(BaseHTTPRequestHandler):
    """Small JSON API used by the tests."""

    def log_message(self, format: str, *args: object) -> None:  # noqa: A002
        """Suppress log messages during tests."""

    def _send(self, status: int, body: bytes, content_type: str) -> None:
        try:
            self.send_response(status)
            self.send_header("Content-Type", content_type)
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            self.wfile.write(body)
        except (BrokenPipeError, ConnectionResetError):
            pass

    def do_GET(self) -> None:  # noqa: N802
        """Serve users, echo headers, or stall."""
        if self.path == "/v2/users/5":
            self._send(200, b'{"id": 5, "name": "ana"}', "application/json")
        elif self.path == "/v2/headers":
            echoed = {k.lower(): v for k, v in self.headers.items()}
            self._send(200, json.dumps(echoed).encode(), "application/json")
        elif self.path == "/v2/slow":
            time.sleep(1.0)
            self._send(200, b"late", "text/plain")
        else:
            self._send(404, b"not found", "text/plain")

    def do_POST(self) -> None:  # noqa: N802
        """Echo the posted JSON body with 201."""
        length = int(self.headers.get("Content-Length", "0"))
        payload = json.loads(self.rfile.read(length))
        self._send(201, json.dumps({"received": payload}).encode(), "application/json")

    def do_DELETE(self) -> None:  # noqa: N802
        """Delete always succeeds with an empty body."""
        self._send(204, b"", "text/plain")


@pytest.fixture
def base_url() -> Generator[str, None, None]:
    """Run the API on an ephemeral port."""
    server = ThreadingHTTPServer(("127.0.0.1", 0), ApiHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    host, port = server.server_address[0], server.server_address[1]
    if isinstance(host, bytes):
        host = host.decode("utf-8")
    yield f"http://{host}:{port}/v2"
    server.shutdown()
    server.server_close()


@pytest.fixture(autouse=True)
def _reset_metrics() -> None:
    ServiceMetrics.reset()


def _run(
    base_url: str,
    request: Request,
    default_headers: dict[str, str] | None = None,
) -> Response:
    async def run() -> Response:
        configuration = ServiceConfiguration(
            base_url=base_url, default_headers=default_headers or {}
        )
        async with Service(configuration) as service:
            return await service.execute(request)

    return asyncio.run(run())


class TestServiceOverHttp:
    """End-to-end executions over httpx."""

    def test_get_success(self, base_url: str) -> None:
        """A GET resolves to a successful response."""
        response = _run(base_url, Request(endpoint="/users/5"))

        assert response.outcome.kind == OutcomeKind.SUCCESS
        assert response.json_data() == {"id": 5, "name": "ana"}
        assert response.headers["content-type"] == "application/json"

    def test_not_found(self, base_url: str) -> None:
        """A 404 resolves to HTTPStatusError with the body."""
        with pytest.raises(HTTPStatusError) as exc_info:
            _run(base_url, Request(endpoint="/users/404"))

        response = exc_info.value.response
        assert response.outcome.status_code == 404
        assert response.as_text() == "not found"

    def test_post_json(self, base_url: str) -> None:
        """A JSON body reaches the server."""
        request = Request(
            endpoint="/users",
            method=RequestMethod.POST,
            body=RequestBody.json({"name": "ana"}),
        )

        response = _run(base_url, request)

        assert response.status_code == 201
        assert response.json_data() == {"received": {"name": "ana"}}

    def test_delete_empty_body(self, base_url: str) -> None:
        """A 204 with no content is a success with an empty body."""
        response = _run(base_url, Request(endpoint="/users/5", method="DELETE"))

        assert response.status_code == 204
        assert response.body == b""

    def test_headers_and_cache_policy(self, base_url: str) -> None:
        """Merged headers and cache policy headers are sent."""
        request = Request(
            endpoint="/headers",
            headers={"X-Request": "req", "X-Shared": "request"},
            cache_policy=CachePolicy.RELOAD_IGNORING_LOCAL_CACHE_DATA,
        )

        response = _run(
            base_url,
            request,
            default_headers={"X-Service": "svc", "X-Shared": "service"},
        )

        echoed = response.json_data()
        assert echoed["x-service"] == "svc"
        assert echoed["x-request"] == "req"
        assert echoed["x-shared"] == "request"
        assert echoed["cache-control"] == "no-cache"

    def test_timeout_is_no_response(self, base_url: str) -> None:
        """A request that times out resolves to NoResponseError."""
        with pytest.raises(NoResponseError):
            _run(base_url, Request(endpoint="/slow", timeout=0.2))

        assert ServiceMetrics.get_instance().failures_total == {"NO_RESPONSE": 1}

    def test_connection_refused_is_no_response(self) -> None:
        """An unreachable host resolves to NoResponseError."""
        with pytest.raises(NoResponseError):
            _run("http://127.0.0.1:9", Request(endpoint="/x", timeout=2.0))

    def test_cancel_in_flight(self, base_url: str) -> None:
        """Cancelling a slow request delivers no result."""

        async def run() -> bool:
            configuration = ServiceConfiguration(base_url=base_url)
            async with Service(configuration) as service:
                task = service.submit(Request(endpoint="/slow"))
                await asyncio.sleep(0.1)
                task.cancel()
                with pytest.raises(asyncio.CancelledError):
                    await task
                return task.cancelled()

        assert asyncio.run(run())
        assert ServiceMetrics.get_instance().cancellations_total == 1

    def test_json_operation(self, base_url: str) -> None:
        """JsonOperation decodes the body of a live response."""

        async def run() -> object:
            configuration = ServiceConfiguration(base_url=base_url)
            async with Service(configuration) as service:
                return await JsonOperation(Request(endpoint="/users/5")).execute(service)

        assert asyncio.run(run()) == {"id": 5, "name": "ana"}
