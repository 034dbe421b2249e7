"""
Chirpy: a small HTTP service on a from-scratch HTTP/1.1 stack.

    from chirpy import create_app, ServerConfig

    server = create_app(ServerConfig(port=8080, static_dir="public"))
    server.run()

Endpoints: /api/healthz, /app/* (counted static files), /api/metrics,
/admin/metrics, /api/reset, /api/validate_chirp.
"""

__version__ = "1.0.0"

from .config import ServerConfig
from .metrics import HitCounter
from .chirps import Chirp, ChirpError, censor, validate_chirp
from .server import HTTPServer
from .app import create_app

__all__ = [
    "ServerConfig",
    "HitCounter",
    "Chirp",
    "ChirpError",
    "censor",
    "validate_chirp",
    "HTTPServer",
    "create_app",
    "__version__",
]
