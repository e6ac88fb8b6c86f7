"""Shared test helpers."""

from __future__ import annotations

import asyncio
import threading
import time
from collections.abc import Iterator
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import httpx
import pytest

SLOW_SECONDS = 2.0


def make_transport(routes: dict[str, int | Exception | tuple[float, int]]) -> httpx.MockTransport:
    """MockTransport answering by URL.

    A value is a status code, an exception to raise, or ``(delay_seconds, status)``.
    Unknown URLs answer 404.
    """

    async def handler(request: httpx.Request) -> httpx.Response:
        outcome = routes.get(str(request.url), 404)
        if isinstance(outcome, Exception):
            raise outcome
        if isinstance(outcome, tuple):
            delay, outcome = outcome
            await asyncio.sleep(delay)
        return httpx.Response(outcome, json={"ok": outcome == 200})

    return httpx.MockTransport(handler)


class _Handler(BaseHTTPRequestHandler):
    """``/slow...`` answers 200 after SLOW_SECONDS; everything else answers 200 at once."""

    def do_GET(self) -> None:
        if self.path.startswith("/slow"):
            time.sleep(SLOW_SECONDS)
        try:
            self.send_response(200)
            self.send_header("Content-Length", "0")
            self.end_headers()
        except (BrokenPipeError, ConnectionResetError):
            pass  # client already gave up

    def log_message(self, format: str, *args: object) -> None:
        pass


class _Server(ThreadingHTTPServer):
    daemon_threads = True
    request_queue_size = 512


@pytest.fixture
def local_server(monkeypatch: pytest.MonkeyPatch) -> Iterator[str]:
    """Real HTTP server on a free local port; yields its base URL."""
    for var in ("HTTP_PROXY", "HTTPS_PROXY", "ALL_PROXY", "http_proxy", "https_proxy", "all_proxy"):
        monkeypatch.delenv(var, raising=False)
    server = _Server(("127.0.0.1", 0), _Handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield f"http://127.0.0.1:{server.server_address[1]}"
    finally:
        server.shutdown()
        server.server_close()
