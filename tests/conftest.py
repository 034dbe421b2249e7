"""
pytest configuration and fixtures.
"""

import http.client
import socket
import threading
from typing import Generator, Optional
import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from chirpy import HTTPServer, ServerConfig, HitCounter, create_app
from chirpy.http import HTTPRequest, RequestParser


@pytest.fixture
def sample_get_request() -> bytes:
    """Sample HTTP GET request."""
    return (
        b"GET /api/metrics?verbose=1&format=text HTTP/1.1\r\n"
        b"Host: localhost:8080\r\n"
        b"User-Agent: pytest\r\n"
        b"Accept: text/plain\r\n"
        b"Connection: keep-alive\r\n"
        b"\r\n"
    )


@pytest.fixture
def sample_post_request() -> bytes:
    """Sample chirp validation POST with a JSON body."""
    body = b'{"body": "I had something interesting for breakfast"}'
    return (
        b"POST /api/validate_chirp HTTP/1.1\r\n"
        b"Host: localhost:8080\r\n"
        b"Content-Type: application/json\r\n"
        + f"Content-Length: {len(body)}\r\n".encode()
        + b"Connection: close\r\n"
        b"\r\n"
        + body
    )


@pytest.fixture
def static_dir(tmp_path: Path) -> Path:
    """A small site: an index page, an asset and a subdirectory without index."""
    (tmp_path / "index.html").write_text("<html><body>Welcome to Chirpy</body></html>")
    (tmp_path / "assets").mkdir()
    (tmp_path / "assets" / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\nfake")
    (tmp_path / "notes").mkdir()
    (tmp_path / "notes" / "readme.txt").write_text("hello")
    return tmp_path


@pytest.fixture
def config(static_dir: Path) -> ServerConfig:
    """Test server configuration."""
    return ServerConfig(
        host="127.0.0.1",
        port=0,  # Let OS pick a free port
        min_workers=2,
        max_workers=4,
        timeout=5.0,
        keep_alive_timeout=1.0,
        static_dir=str(static_dir),
        log_level="WARNING",
    )


@pytest.fixture
def free_port() -> int:
    """Get a free port for testing."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(('127.0.0.1', 0))
        return s.getsockname()[1]


@pytest.fixture
def hits() -> HitCounter:
    return HitCounter()


@pytest.fixture
def app(config: ServerConfig, hits: HitCounter) -> HTTPServer:
    """Chirpy app with every route registered, not listening."""
    return create_app(config, counter=hits)


def _build_request(
    method: str,
    path: str,
    body: bytes = b"",
    headers: Optional[dict] = None,
) -> HTTPRequest:
    lines = [f"{method} {path} HTTP/1.1", "Host: localhost"]
    for name, value in (headers or {}).items():
        lines.append(f"{name}: {value}")
    if body:
        lines.append(f"Content-Length: {len(body)}")
    raw = ("\r\n".join(lines) + "\r\n\r\n").encode() + body
    return RequestParser().parse(raw, ("127.0.0.1", 50000))


@pytest.fixture
def make_request():
    """Build an HTTPRequest the way the parser would from the wire."""
    return _build_request


class TestServer:
    """Test server helper that runs in a background thread."""

    __test__ = False

    def __init__(self, server: HTTPServer):
        self.server = server
        self._thread: Optional[threading.Thread] = None

    @property
    def port(self) -> int:
        return self.server.port

    def start(self):
        """Start server in background thread and wait until it listens."""
        self._thread = threading.Thread(target=self.server.run, daemon=True)
        self._thread.start()

        if not self.server.wait_until_ready(timeout=5.0):
            raise RuntimeError("Server failed to start")

    def stop(self):
        self.server.stop()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=10.0)

    def request(
        self,
        method: str,
        path: str,
        body: Optional[bytes] = None,
        headers: Optional[dict] = None,
    ) -> tuple[int, dict, bytes]:
        """One request on a fresh connection. Returns (status, headers, body)."""
        conn = http.client.HTTPConnection("127.0.0.1", self.port, timeout=5.0)
        try:
            conn.request(method, path, body=body, headers=headers or {})
            response = conn.getresponse()
            data = response.read()
            return response.status, {k.lower(): v for k, v in response.getheaders()}, data
        finally:
            conn.close()


@pytest.fixture
def test_server(app: HTTPServer) -> Generator[TestServer, None, None]:
    """A running Chirpy server on a random port."""
    test_srv = TestServer(app)
    test_srv.start()

    yield test_srv

    test_srv.stop()
