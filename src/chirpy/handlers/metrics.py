"""
=============================================================================
METRICS HANDLERS
=============================================================================

Read and reset the /app/ hit counter.

    GET /api/metrics     text/plain   "Hits: 3\n"
    GET /admin/metrics   text/html    "... Chirpy has been visited 3 times! ..."
    ANY /api/reset       text/plain   "Hits reset to 0\n"

None of these are counted themselves; the counter only moves for requests
routed through MetricsMiddleware.

=============================================================================
"""

import logging

from ..http.request import HTTPRequest
from ..http.response import HTTPResponse, ResponseBuilder
from ..metrics import HitCounter

logger = logging.getLogger(__name__)

ADMIN_TEMPLATE = """<html>
  <body>
    <h1>Welcome, Chirpy Admin</h1>
    <p>Chirpy has been visited {hits} times!</p>
  </body>
</html>
"""


class MetricsHandler:
    """Handlers bound to one HitCounter."""

    def __init__(self, counter: HitCounter):
        self.counter = counter

    def hits(self, request: HTTPRequest) -> HTTPResponse:
        return (ResponseBuilder()
            .text(f"Hits: {self.counter.value}\n")
            .no_cache()
            .build())

    def admin(self, request: HTTPRequest) -> HTTPResponse:
        return (ResponseBuilder()
            .html(ADMIN_TEMPLATE.format(hits=self.counter.value))
            .no_cache()
            .build())

    def reset(self, request: HTTPRequest) -> HTTPResponse:
        self.counter.reset()
        logger.info("Hit counter reset")
        return (ResponseBuilder()
            .text("Hits reset to 0\n")
            .no_cache()
            .build())
