"""
Request/response middleware.

    base.py      Middleware, MiddlewarePipeline
    logging.py   LoggingMiddleware: access log and X-Request-ID
    metrics.py   MetricsMiddleware: counts hits on a wrapped route
"""

from .base import (
    Middleware,
    MiddlewarePipeline,
    NextHandler,
)
from .logging import LoggingMiddleware, RequestLog
from .metrics import MetricsMiddleware

__all__ = [
    "Middleware",
    "MiddlewarePipeline",
    "NextHandler",
    "LoggingMiddleware",
    "RequestLog",
    "MetricsMiddleware",
]
