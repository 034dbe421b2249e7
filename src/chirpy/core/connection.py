"""
=============================================================================
CLIENT CONNECTION
=============================================================================

Wraps one accepted client socket.

TCP is a byte stream, not a message stream. A single recv() may return half
a request, or one and a half requests when a keep-alive client pipelines.
Connection keeps a buffer across reads and hands out exactly one request at
a time:

    recv() → buffer ──► has "\r\n\r\n"? ──no──► recv() again
                              │
                             yes
                              ▼
                  read Content-Length from the head
                              │
                              ▼
                  recv() until head + body are buffered
                              │
                              ▼
                  return that slice, keep the rest for next time

Lifecycle:

    NEW → READING → PROCESSING → WRITING → KEEP_ALIVE → READING → ...
                                                 │
                                                 └──► CLOSING → CLOSED

The first request gets the full ``timeout``; later requests on the same
connection get the shorter ``keep_alive_timeout`` and an idle client is
dropped quietly instead of being sent a 408.

=============================================================================
"""

import socket
import time
import logging
import uuid
from enum import Enum
from dataclasses import dataclass, field
from typing import Optional

logger = logging.getLogger(__name__)


class ConnectionState(Enum):
    NEW = "new"
    READING = "reading"
    PROCESSING = "processing"
    WRITING = "writing"
    KEEP_ALIVE = "keep_alive"
    CLOSING = "closing"
    CLOSED = "closed"


@dataclass
class Connection:
    """
    A client connection with buffered, request-at-a-time reads.

    Attributes:
        socket: The accepted client socket.
        address: Peer (ip, port).
        id: Short random id used to correlate log lines.
        requests_handled: Requests read so far on this connection.
    """

    socket: socket.socket
    address: tuple[str, int]

    id: str = field(default_factory=lambda: uuid.uuid4().hex[:8])
    state: ConnectionState = ConnectionState.NEW
    created_at: float = field(default_factory=time.time)
    last_activity: float = field(default_factory=time.time)
    requests_handled: int = 0

    buffer_size: int = 8192
    timeout: Optional[float] = 30.0
    keep_alive_timeout: float = 5.0
    max_request_size: int = 1024 * 1024

    _buffer: bytes = field(default=b"", repr=False)

    def __post_init__(self):
        self.socket.setblocking(True)
        if self.timeout:
            self.socket.settimeout(self.timeout)

    @property
    def client_ip(self) -> str:
        return self.address[0]

    @property
    def idle_time(self) -> float:
        return time.time() - self.last_activity

    def read_request(self) -> Optional[bytes]:
        """
        Read one complete request (head and body) from the socket.

        Returns:
            The request bytes, or None if the client closed the connection
            or went idle between keep-alive requests.

        Raises:
            TimeoutError: The first request did not arrive in time.
            ValueError: The request grew past max_request_size.
        """
        self.state = ConnectionState.READING
        self.last_activity = time.time()

        if self.requests_handled > 0:
            self.socket.settimeout(self.keep_alive_timeout)

        try:
            while b"\r\n\r\n" not in self._buffer:
                if not self._fill():
                    return None

            header_end = self._buffer.find(b"\r\n\r\n")
            body_start = header_end + 4
            content_length = self._parse_content_length(self._buffer[:header_end])

            while len(self._buffer) - body_start < content_length:
                if not self._fill():
                    break  # client hung up mid-body; the parser will reject it

            request_end = body_start + content_length
            request_data = self._buffer[:request_end]
            self._buffer = self._buffer[request_end:]

            self.requests_handled += 1
            self.last_activity = time.time()
            return request_data

        except socket.timeout:
            if self.requests_handled > 0:
                logger.debug(f"[{self.id}] Keep-alive timeout")
                return None
            raise TimeoutError("Request read timeout")

        finally:
            self.socket.settimeout(self.timeout)

    def _fill(self) -> bool:
        """Append one recv() worth of data to the buffer. False on EOF."""
        try:
            chunk = self.socket.recv(self.buffer_size)
        except (ConnectionResetError, BrokenPipeError):
            chunk = b""
        if not chunk:
            return False

        self._buffer += chunk
        self.last_activity = time.time()
        if len(self._buffer) > self.max_request_size:
            raise ValueError(f"Request too large: {len(self._buffer)} bytes")
        return True

    @staticmethod
    def _parse_content_length(head: bytes) -> int:
        # Just enough header parsing to know how much body to wait for;
        # RequestParser validates the value properly afterwards.
        for line in head.decode("latin-1").lower().split("\r\n"):
            if line.startswith("content-length:"):
                try:
                    return max(int(line.split(":", 1)[1].strip()), 0)
                except ValueError:
                    return 0
        return 0

    def send_response(self, data: bytes) -> bool:
        """sendall() the response. False if the client is already gone."""
        self.state = ConnectionState.WRITING
        try:
            self.socket.sendall(data)
            self.last_activity = time.time()
            return True
        except OSError as e:
            logger.warning(f"[{self.id}] Send failed: {e}")
            return False

    def set_keep_alive(self):
        self.state = ConnectionState.KEEP_ALIVE

    def close(self):
        """
        Half-close, drain, then close.

        Closing a socket that still has unread data makes the kernel send a
        RST, which can destroy a response the client has not read yet.
        """
        if self.state == ConnectionState.CLOSED:
            return

        self.state = ConnectionState.CLOSING

        try:
            self.socket.shutdown(socket.SHUT_WR)
        except OSError:
            pass

        try:
            self.socket.settimeout(0.5)
            while self.socket.recv(1024):
                pass
        except OSError:
            pass

        try:
            self.socket.close()
        except OSError:
            pass

        self.state = ConnectionState.CLOSED
        logger.debug(f"[{self.id}] Connection closed after {self.requests_handled} requests")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
