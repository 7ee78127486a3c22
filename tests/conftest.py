"""Shared fixtures: a scriptable mock registry served through httpx.MockTransport,
and a socket server that drips its response body for timeout tests."""

import json
import socket
import threading
import time
from typing import Any, Callable, Optional

import httpx
import pytest

from schemareg.config import RegistryConfig

BASE_URL = "http://test-registry:8081"


class MockRegistry:
    """Records every request and answers with a canned response.

    ``respond`` sets the next answers; ``handler`` may be replaced with any
    callable taking an ``httpx.Request`` for tests that need per-request logic.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.content: bytes = b"{}"
        self.handler: Optional[Callable[[httpx.Request], httpx.Response]] = None

    def respond(self, body: Any = None, status_code: int = 200, raw: Optional[bytes] = None) -> None:
        self.status_code = status_code
        self.content = raw if raw is not None else json.dumps(body).encode("utf-8")

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.handler is not None:
            return self.handler(request)
        return httpx.Response(self.status_code, content=self.content)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last_request.content)


@pytest.fixture
def config() -> RegistryConfig:
    """Test configuration."""
    return RegistryConfig(host=BASE_URL)


@pytest.fixture
def registry() -> MockRegistry:
    return MockRegistry()


@pytest.fixture
def http_client(registry: MockRegistry):
    with httpx.Client(transport=httpx.MockTransport(registry)) as client:
        yield client


@pytest.fixture
async def async_http_client(registry: MockRegistry):
    async with httpx.AsyncClient(transport=httpx.MockTransport(registry)) as client:
        yield client


class DripServer(threading.Thread):
    """Sends response headers at once, then the body one byte every ``interval`` seconds."""

    def __init__(self, body: bytes, interval: float) -> None:
        super().__init__(daemon=True)
        self.body = body
        self.interval = interval
        self.stopped = threading.Event()
        self.sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self.sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self.sock.bind(("127.0.0.1", 0))
        self.sock.listen()
        self.sock.settimeout(0.1)
        self.port = self.sock.getsockname()[1]

    def run(self) -> None:
        while not self.stopped.is_set():
            try:
                conn, _ = self.sock.accept()
            except socket.timeout:
                continue
            except OSError:
                return
            with conn:
                try:
                    self._serve(conn)
                except OSError:
                    pass

    def _serve(self, conn: socket.socket) -> None:
        request = b""
        while b"\r\n\r\n" not in request:
            chunk = conn.recv(4096)
            if not chunk:
                return
            request += chunk
        conn.sendall(
            b"HTTP/1.1 200 OK\r\n"
            b"Content-Type: application/json\r\n"
            b"Content-Length: %d\r\n"
            b"Connection: close\r\n\r\n" % len(self.body)
        )
        for byte in self.body:
            if self.stopped.is_set():
                return
            conn.sendall(bytes([byte]))
            time.sleep(self.interval)

    def stop(self) -> None:
        self.stopped.set()
        self.sock.close()
        self.join(timeout=2.0)


@pytest.fixture
def drip_server():
    """Factory starting DripServer instances; all are stopped at teardown."""
    servers = []

    def start(body: bytes, interval: float) -> DripServer:
        server = DripServer(body, interval)
        server.start()
        servers.append(server)
        return server

    yield start
    for server in servers:
        server.stop()
