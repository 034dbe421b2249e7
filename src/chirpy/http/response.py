"""
=============================================================================
HTTP RESPONSE BUILDER
=============================================================================

Builds HTTP/1.1 responses and serializes them for the socket.

    HTTP/1.1 200 OK\r\n                              ← status line
    Content-Type: text/plain; charset=utf-8\r\n      ← headers
    Content-Length: 8\r\n                            ← filled in by to_bytes()
    Date: Mon, 19 Oct 2026 12:00:00 GMT\r\n          ← filled in by to_bytes()
    Server: Chirpy/1.0\r\n                           ← filled in by to_bytes()
    \r\n
    Hits: 3\n                                        ← body

Handlers usually go through ResponseBuilder or one of the module-level
shortcuts:

    ResponseBuilder().text("OK").build()     200 text/plain
    respond_with_json(200, {...})            200 application/json
    respond_with_error(400, "Chirp is too long")
    method_not_allowed(["GET"])              405, empty body, Allow header

respond_with_json() is the only place a payload is serialized for the API
endpoints, so it is also where an unserializable payload turns into a
logged 500 instead of a crashed worker.

=============================================================================
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Any, Union
import json
import logging

from .status_codes import HTTPStatus
from .mime_types import get_content_type

logger = logging.getLogger(__name__)


@dataclass
class HTTPResponse:
    """
    An HTTP response ready to be written to a connection.

    Content-Length, Date and Server are added at serialization time unless a
    handler set them explicitly.
    """

    status: HTTPStatus = HTTPStatus.OK
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    version: str = "HTTP/1.1"

    @property
    def status_line(self) -> str:
        """e.g. ``HTTP/1.1 405 Method Not Allowed``"""
        status = HTTPStatus(self.status)
        return f"{self.version} {int(status)} {status.phrase}"

    def set_header(self, name: str, value: str) -> "HTTPResponse":
        self.headers[name] = value
        return self

    def set_body(self, body: Union[str, bytes]) -> "HTTPResponse":
        self.body = body.encode("utf-8") if isinstance(body, str) else body
        return self

    def to_bytes(
        self,
        server_name: str = "Chirpy/1.0",
        include_body: bool = True,
    ) -> bytes:
        """
        Serialize the status line, headers and body.

        Args:
            server_name: Value for the Server header.
            include_body: False for HEAD requests. Content-Length still
                          describes the body that a GET would have returned.
        """
        response_headers = dict(self.headers)

        if "Content-Length" not in response_headers:
            response_headers["Content-Length"] = str(len(self.body))
        if "Date" not in response_headers:
            response_headers["Date"] = format_http_date(datetime.now(timezone.utc))
        if "Server" not in response_headers:
            response_headers["Server"] = server_name

        lines = [self.status_line]
        for name, value in response_headers.items():
            lines.append(f"{name}: {value}")
        lines.append("")

        head = "\r\n".join(lines).encode("utf-8") + b"\r\n"
        return head + self.body if include_body else head


class ResponseBuilder:
    """
    Fluent builder for HTTPResponse.

        response = (ResponseBuilder()
            .status(HTTPStatus.OK)
            .html(page)
            .no_cache()
            .build())

    Every method except build() returns the builder.
    """

    def __init__(self):
        self._status = HTTPStatus.OK
        self._headers: Dict[str, str] = {}
        self._body: bytes = b""

    def status(self, status: HTTPStatus) -> "ResponseBuilder":
        self._status = status
        return self

    def header(self, name: str, value: str) -> "ResponseBuilder":
        self._headers[name] = value
        return self

    def headers(self, headers: Dict[str, str]) -> "ResponseBuilder":
        self._headers.update(headers)
        return self

    def content_type(self, content_type: str) -> "ResponseBuilder":
        return self.header("Content-Type", content_type)

    def body(self, body: Union[str, bytes]) -> "ResponseBuilder":
        """Raw body; strings are UTF-8 encoded. Content-Type is left alone."""
        self._body = body.encode("utf-8") if isinstance(body, str) else body
        return self

    def text(self, text: str, content_type: str = "text/plain; charset=utf-8") -> "ResponseBuilder":
        self._body = text.encode("utf-8")
        self._headers["Content-Type"] = content_type
        return self

    def html(self, html: str) -> "ResponseBuilder":
        self._body = html.encode("utf-8")
        self._headers["Content-Type"] = "text/html; charset=utf-8"
        return self

    def json(self, data: Any, pretty: bool = False) -> "ResponseBuilder":
        """
        JSON body with ``application/json; charset=utf-8``.

        Raises:
            TypeError: ``data`` holds something json cannot encode.
            ValueError: ``data`` is circular.
        """
        indent = 2 if pretty else None
        self._body = json.dumps(data, indent=indent, ensure_ascii=False).encode("utf-8")
        self._headers["Content-Type"] = "application/json; charset=utf-8"
        return self

    def file(self, content: bytes, filename: str) -> "ResponseBuilder":
        """File body with Content-Type taken from the file name."""
        self._body = content
        self._headers["Content-Type"] = get_content_type(filename)
        return self

    def no_cache(self) -> "ResponseBuilder":
        self._headers["Cache-Control"] = "no-store, no-cache, must-revalidate"
        self._headers["Pragma"] = "no-cache"
        self._headers["Expires"] = "0"
        return self

    def cache(self, max_age: int = 3600) -> "ResponseBuilder":
        self._headers["Cache-Control"] = f"public, max-age={max_age}"
        return self

    def close_connection(self) -> "ResponseBuilder":
        self._headers["Connection"] = "close"
        return self

    def build(self) -> HTTPResponse:
        return HTTPResponse(
            status=self._status,
            headers=self._headers,
            body=self._body,
        )


def format_http_date(dt: datetime) -> str:
    """
    Format a UTC datetime as an RFC 7231 HTTP-date.

    Built by hand rather than with strftime because %a and %b follow the
    process locale and HTTP dates must always be English.

        >>> format_http_date(datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc))
        'Mon, 19 Oct 2026 12:00:00 GMT'
    """
    days = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
    months = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
              "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
    return (
        f"{days[dt.weekday()]}, "
        f"{dt.day:02d} {months[dt.month - 1]} {dt.year} "
        f"{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d} GMT"
    )


# =============================================================================
# SHORTCUTS
# =============================================================================

def forbidden(message: str = "Forbidden") -> HTTPResponse:
    return ResponseBuilder().status(HTTPStatus.FORBIDDEN).json({"error": message}).build()


def not_found(message: str = "Not Found") -> HTTPResponse:
    return ResponseBuilder().status(HTTPStatus.NOT_FOUND).json({"error": message}).build()


def method_not_allowed(allowed_methods: list[str]) -> HTTPResponse:
    """
    405 with an empty body.

    RFC 7231 requires the Allow header; Chirpy's endpoints have never sent a
    body with this status, so none is added here either.
    """
    return (ResponseBuilder()
        .status(HTTPStatus.METHOD_NOT_ALLOWED)
        .header("Allow", ", ".join(allowed_methods))
        .build())


def internal_error(message: str = "Internal Server Error") -> HTTPResponse:
    """500 with a generic message. Never put exception text in here."""
    return ResponseBuilder().status(HTTPStatus.INTERNAL_SERVER_ERROR).json({"error": message}).build()


def respond_with_json(status: HTTPStatus, payload: Any) -> HTTPResponse:
    """
    Serialize ``payload`` as the JSON body of a ``status`` response.

    A payload that cannot be encoded is logged and answered with a generic
    500; the original status is discarded.
    """
    try:
        return ResponseBuilder().status(status).json(payload).build()
    except (TypeError, ValueError) as e:
        logger.error(f"Error marshalling JSON: {e}")
        return internal_error()


def respond_with_error(status: HTTPStatus, message: str) -> HTTPResponse:
    """
    ``{"error": message}`` with the given status. 5xx errors are also logged,
    4xx ones are the client's problem and are only visible in the access log.
    """
    if status > 499:
        logger.error(f"Responding with 5XX error: {message}")
    return respond_with_json(status, {"error": message})
