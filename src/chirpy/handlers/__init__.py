"""
Request handlers. Each takes an HTTPRequest and returns an HTTPResponse;
state they need (the hit counter, the static root) is given to the
handler object when create_app() builds it.
"""

from .chirps import ChirpHandler
from .health import HealthHandler
from .metrics import MetricsHandler
from .static import StaticFileHandler

__all__ = [
    "ChirpHandler",
    "HealthHandler",
    "MetricsHandler",
    "StaticFileHandler",
]
