"""
Counting middleware for the static file subtree.

The hit is recorded before the wrapped handler runs, so a request counts
once no matter how the handler answers: a file, a 404 for a missing file,
a 403 for a path outside the root, or an exception.
"""

import logging

from .base import Middleware, NextHandler
from ..http.request import HTTPRequest
from ..http.response import HTTPResponse
from ..metrics import HitCounter

logger = logging.getLogger(__name__)


class MetricsMiddleware(Middleware):
    """
    Increments a HitCounter for every request that reaches it.

    Attach it per route, not globally, or every API call would be counted:

        counted = MiddlewarePipeline().add(MetricsMiddleware(hits)).wrap(static.handle)
        router.any("/app/*path", counted)
    """

    def __init__(self, counter: HitCounter):
        self.counter = counter

    def __call__(self, request: HTTPRequest, next: NextHandler) -> HTTPResponse:
        hits = self.counter.increment()
        logger.debug(f"Hit #{hits}: {request.method} {request.path}")
        return next(request)
