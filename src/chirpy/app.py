"""
=============================================================================
APPLICATION FACTORY
=============================================================================

Builds a ready-to-run Chirpy server:

    hits = HitCounter()

    LoggingMiddleware                                    (every request)
      └── Router
            GET  /api/healthz          health.readiness
            ANY  /app/*path            MetricsMiddleware(hits) → static.handle
            GET  /admin/metrics        metrics.admin
            GET  /api/metrics          metrics.hits
            ANY  /api/reset            metrics.reset
            POST /api/validate_chirp   chirps.validate
            fallback                   static.handle   (not counted)

Only /app/ is counted. The fallback serves the same directory so "/" still
shows the site, but those requests leave the counter alone.

=============================================================================
"""

import logging
from typing import Optional

from .config import ServerConfig
from .handlers import ChirpHandler, HealthHandler, MetricsHandler, StaticFileHandler
from .metrics import HitCounter
from .middleware import LoggingMiddleware, MetricsMiddleware, MiddlewarePipeline
from .server import HTTPServer

logger = logging.getLogger(__name__)


def create_app(
    config: Optional[ServerConfig] = None,
    counter: Optional[HitCounter] = None,
) -> HTTPServer:
    """
    Create a Chirpy server.

    Args:
        config: Server configuration; defaults to ServerConfig().
        counter: Hit counter to use. Pass one in to inspect it from tests.

    Returns:
        An HTTPServer with every route registered. Call run() to serve.

    Raises:
        ValueError: The configuration is invalid or static_dir is missing.
    """
    config = config or ServerConfig()
    hits = counter if counter is not None else HitCounter()

    server = HTTPServer(config)

    health = HealthHandler()
    metrics = MetricsHandler(hits)
    chirps = ChirpHandler()
    static = StaticFileHandler(root_dir=config.static_dir)

    server.use(LoggingMiddleware(log_format=config.log_format))

    router = server.router
    api = router.group("/api")
    admin = router.group("/admin")

    api.get("/healthz")(health.readiness)

    counted_static = MiddlewarePipeline().add(MetricsMiddleware(hits)).wrap(static.handle)
    router.any(f"{config.static_url_prefix}/*path", counted_static)

    admin.get("/metrics")(metrics.admin)
    api.get("/metrics")(metrics.hits)
    api.any("/reset", metrics.reset)
    api.post("/validate_chirp")(chirps.validate)

    router.fallback(static.handle)

    logger.debug(f"Serving files from {static.root_dir}")
    return server
