"""
=============================================================================
HTTP PROTOCOL LAYER
=============================================================================

Everything between "bytes arrived on a socket" and "bytes go back out":

    request.py       raw bytes → HTTPRequest        (RequestParser)
    router.py        HTTPRequest → handler          (Router)
    response.py      handler result → bytes         (HTTPResponse, ResponseBuilder)
    status_codes.py  HTTPStatus enum with reason phrases
    mime_types.py    file extension → Content-Type

Nothing in here knows about chirps or hit counts; that lives in
chirpy.handlers and chirpy.app.

=============================================================================
"""

from .request import HTTPRequest, RequestParser, HTTPParseError
from .response import (
    HTTPResponse,
    ResponseBuilder,
    forbidden,
    not_found,
    method_not_allowed,
    internal_error,
    respond_with_json,
    respond_with_error,
)
from .router import Router, Route, RouteMatch
from .status_codes import HTTPStatus
from .mime_types import get_mime_type, get_content_type

__all__ = [
    "HTTPRequest",
    "RequestParser",
    "HTTPParseError",
    "HTTPResponse",
    "ResponseBuilder",
    "forbidden",
    "not_found",
    "method_not_allowed",
    "internal_error",
    "respond_with_json",
    "respond_with_error",
    "Router",
    "Route",
    "RouteMatch",
    "HTTPStatus",
    "get_mime_type",
    "get_content_type",
]
