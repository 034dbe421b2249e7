"""
=============================================================================
STATIC FILE HANDLER
=============================================================================

Serves files from one root directory. Chirpy mounts it twice:

    /app/*path   counted by the hit counter, "/app" stripped off the path
    fallback     everything no route claims, path used as-is

    GET /app/assets/logo.png   → <root>/assets/logo.png
    GET /index.html            → <root>/index.html

Lookup order for a resolved path:

    outside root?          → 403
    directory, no slash?   → 301 to the same URL with a trailing slash
    directory?             → index.html, else an HTML listing
    missing?               → 404
    If-None-Match == ETag? → 304
    otherwise              → 200 with the file

HEAD needs nothing special here: the server drops the body on the way out
and keeps the headers.

=============================================================================
"""

import html
import logging
from pathlib import Path
from datetime import datetime, timezone

from ..http.request import HTTPRequest
from ..http.response import (
    HTTPResponse, ResponseBuilder, HTTPStatus,
    not_found, forbidden, format_http_date,
)
from ..http.mime_types import get_content_type

logger = logging.getLogger(__name__)


class StaticFileHandler:
    """
    Serve files from ``root_dir``.

        static = StaticFileHandler(root_dir="public", url_prefix="/app")
        router.any("/app/*path", static.handle)
        router.fallback(static.handle)

    Args:
        root_dir: Directory to serve. Must exist.
        url_prefix: Prefix stripped from request paths that did not come
                    through a wildcard route.
        index_file: File served for a directory.
        cache_max_age: Cache-Control max-age, in seconds.
        enable_directory_listing: List directories that have no index file.
    """

    def __init__(
        self,
        root_dir: str,
        url_prefix: str = "",
        index_file: str = "index.html",
        cache_max_age: int = 3600,
        enable_directory_listing: bool = True,
    ):
        self.root_dir = Path(root_dir).resolve()
        self.url_prefix = url_prefix.rstrip("/")
        self.index_file = index_file
        self.cache_max_age = cache_max_age
        self.enable_directory_listing = enable_directory_listing

        if not self.root_dir.is_dir():
            raise ValueError(f"Static root directory does not exist: {root_dir}")

    def _relative_path(self, request: HTTPRequest) -> str:
        if "path" in request.path_params:
            return request.path_params["path"]

        path = request.path
        if self.url_prefix and (path == self.url_prefix or path.startswith(self.url_prefix + "/")):
            path = path[len(self.url_prefix):]
        return path

    def handle(self, request: HTTPRequest) -> HTTPResponse:
        file_path = self._relative_path(request).lstrip("/")
        full_path = (self.root_dir / file_path).resolve()

        try:
            full_path.relative_to(self.root_dir)
        except ValueError:
            logger.warning(f"Path traversal attempt: {file_path}")
            return forbidden("Access denied")

        if full_path.is_dir():
            if not request.path.endswith("/"):
                return (ResponseBuilder()
                    .status(HTTPStatus.MOVED_PERMANENTLY)
                    .header("Location", request.path + "/")
                    .build())

            index_path = full_path / self.index_file
            if index_path.is_file():
                full_path = index_path
            elif self.enable_directory_listing:
                return self._directory_listing(full_path, request.path)
            else:
                return forbidden("Directory listing not allowed")

        if not full_path.is_file():
            return not_found(f"File not found: {file_path}")

        return self._serve_file(full_path, request)

    def _serve_file(self, path: Path, request: HTTPRequest) -> HTTPResponse:
        try:
            stat = path.stat()
            etag = f'"{int(stat.st_mtime)}-{stat.st_size}"'

            if request.headers.get("if-none-match", "") == etag:
                return (ResponseBuilder()
                    .status(HTTPStatus.NOT_MODIFIED)
                    .header("ETag", etag)
                    .build())

            mtime = datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc)
            return (ResponseBuilder()
                .status(HTTPStatus.OK)
                .file(path.read_bytes(), path.name)
                .header("ETag", etag)
                .header("Last-Modified", format_http_date(mtime))
                .cache(self.cache_max_age)
                .build())

        except PermissionError:
            return forbidden("Permission denied")
        except OSError as e:
            logger.error(f"Error serving file {path}: {e}")
            return (ResponseBuilder()
                .status(HTTPStatus.INTERNAL_SERVER_ERROR)
                .json({"error": "Failed to read file"})
                .build())

    def _directory_listing(self, path: Path, url_path: str) -> HTTPResponse:
        entries = []
        if path != self.root_dir:
            entries.append('<a href="../">../</a>')

        for entry in sorted(path.iterdir()):
            name = entry.name + ("/" if entry.is_dir() else "")
            escaped = html.escape(name)
            entries.append(f'<a href="{escaped}">{escaped}</a>')

        page = (
            "<!DOCTYPE html>\n"
            f"<html><head><title>Index of {html.escape(url_path)}</title></head>\n"
            "<body>\n<pre>\n"
            + "\n".join(entries)
            + "\n</pre>\n</body></html>\n"
        )
        return ResponseBuilder().html(page).build()
