"""
=============================================================================
MIME TYPE DETECTION
=============================================================================

Maps file extensions to Content-Type values for the static file server.

The browser decides how to treat a response from its Content-Type alone:
serve a stylesheet as text/plain and the page renders unstyled, serve a
script as application/octet-stream and it never runs. Chirpy's /app/ tree
is a small static site, so the table below covers what such a site ships.

Text types get a charset parameter:

    index.html  → text/html; charset=utf-8
    logo.png    → image/png

=============================================================================
"""

from pathlib import Path
from typing import Optional


MIME_TYPES = {
    # Documents
    ".html": "text/html",
    ".htm": "text/html",
    ".css": "text/css",
    ".js": "text/javascript",
    ".mjs": "text/javascript",
    ".json": "application/json",
    ".xml": "application/xml",
    ".txt": "text/plain",
    ".md": "text/markdown",
    ".csv": "text/csv",
    # Images
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".svg": "image/svg+xml",
    ".webp": "image/webp",
    ".ico": "image/x-icon",
    # Fonts
    ".woff": "font/woff",
    ".woff2": "font/woff2",
    ".ttf": "font/ttf",
    # Everything else a site might link to
    ".pdf": "application/pdf",
    ".zip": "application/zip",
    ".wasm": "application/wasm",
    ".mp4": "video/mp4",
    ".mp3": "audio/mpeg",
}

DEFAULT_MIME_TYPE = "application/octet-stream"

# application/* and image/* types that are still text on the wire
_TEXTUAL_TYPES = {
    "application/json",
    "application/xml",
    "image/svg+xml",
}


def get_mime_type(path: str | Path, default: Optional[str] = None) -> str:
    """
    Look up the MIME type for a file name by its (case-insensitive) suffix.

    Examples:
        >>> get_mime_type("assets/logo.PNG")
        'image/png'
        >>> get_mime_type("notes.unknown")
        'application/octet-stream'
    """
    suffix = Path(path).suffix.lower()
    return MIME_TYPES.get(suffix, default or DEFAULT_MIME_TYPE)


def is_text_type(mime_type: str) -> bool:
    """True when the type should carry a charset parameter."""
    return mime_type.startswith("text/") or mime_type in _TEXTUAL_TYPES


def get_content_type(path: str | Path, charset: str = "utf-8") -> str:
    """
    Full Content-Type header value for a file.

        >>> get_content_type("index.html")
        'text/html; charset=utf-8'
        >>> get_content_type("logo.png")
        'image/png'
    """
    mime_type = get_mime_type(path)
    if is_text_type(mime_type):
        return f"{mime_type}; charset={charset}"
    return mime_type
