"""
Integration Test Fixtures.

A real HTTP server on 127.0.0.1 speaking the execution server's endpoints,
so the client is exercised over actual sockets rather than MockTransport.
"""

import json
import socket
import threading
from collections.abc import Generator
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any

import pytest


class StubServerState:
    """Canned responses and request log shared with the handler thread."""

    def __init__(self) -> None:
        self.root_status = 200
        self.prompt_response: dict[str, Any] = {"prompt_id": "abc123", "number": 1, "node_errors": {}}
        self.history: dict[str, Any] = {}
        self.interrupt_status = 200
        self.received: list[tuple[str, str, Any]] = []


def _make_handler(state: StubServerState) -> type[BaseHTTPRequestHandler]:
    class Handler(BaseHTTPRequestHandler):
        def log_message(self, format: str, *args: Any) -> None:
            pass

        def _read_json(self) -> Any:
            length = int(self.headers.get("Content-Length") or 0)
            if not length:
                return None
            return json.loads(self.rfile.read(length))

        def _send(self, status: int, body: Any = None) -> None:
            payload = json.dumps(body if body is not None else {}).encode("utf-8")
            self.send_response(status)
            self.send_header("Content-Type", "application/json")
            self.send_header("Content-Length", str(len(payload)))
            self.end_headers()
            self.wfile.write(payload)

        def do_GET(self) -> None:
            state.received.append(("GET", self.path, None))
            if self.path == "/":
                self._send(state.root_status)
            elif self.path.startswith("/history/"):
                job_id = self.path[len("/history/"):]
                entry = state.history.get(job_id)
                self._send(200, {job_id: entry} if entry is not None else {})
            else:
                self._send(404)

        def do_POST(self) -> None:
            body = self._read_json()
            state.received.append(("POST", self.path, body))
            if self.path == "/prompt":
                self._send(200, state.prompt_response)
            elif self.path == "/interrupt":
                self._send(state.interrupt_status)
            else:
                self._send(404)

    return Handler


class StubServer:
    def __init__(self, server: ThreadingHTTPServer, state: StubServerState) -> None:
        self.server = server
        self.state = state

    @property
    def address(self) -> str:
        host, port = self.server.server_address[:2]
        return f"{host}:{port}"


@pytest.fixture
def stub_server() -> Generator[StubServer, None, None]:
    """Run a stub execution server for the duration of one test."""
    state = StubServerState()
    server = ThreadingHTTPServer(("127.0.0.1", 0), _make_handler(state))
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield StubServer(server, state)
    finally:
        server.shutdown()
        server.server_close()
        thread.join(timeout=5)


@pytest.fixture
def unused_address() -> str:
    """An address on 127.0.0.1 with no listener."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    return f"127.0.0.1:{port}"
