"""
=============================================================================
MIDDLEWARE INTERFACE
=============================================================================

A middleware sees the request on the way in and the response on the way
out, and decides whether the rest of the chain runs at all:

    Request ──► LoggingMiddleware ──► Router ──► MetricsMiddleware ──► static
                      │                                                  │
    Response ◄────────┴──────────────────────────────────────────────────┘

The same interface is used in two places:

- globally, through HTTPServer.use(), wrapped around router.handle;
- per route, wrapped around a single handler before it is registered:

      counted = MiddlewarePipeline().add(MetricsMiddleware(hits)).wrap(static.handle)
      router.any("/app/*path", counted)

=============================================================================
"""

from abc import ABC, abstractmethod
from typing import Callable, List
import logging

from ..http.request import HTTPRequest
from ..http.response import HTTPResponse

logger = logging.getLogger(__name__)

NextHandler = Callable[[HTTPRequest], HTTPResponse]


class Middleware(ABC):
    """
    Base class for middleware.

        class Stamp(Middleware):
            def __call__(self, request, next):
                response = next(request)
                response.set_header("X-Stamp", "1")
                return response

    Returning without calling ``next`` short-circuits the chain.
    """

    @abstractmethod
    def __call__(self, request: HTTPRequest, next: NextHandler) -> HTTPResponse:
        pass

    @property
    def name(self) -> str:
        return self.__class__.__name__


class MiddlewarePipeline:
    """
    Ordered list of middleware around a final handler.

    The first middleware added is the outermost: it runs first on the
    request and last on the response.

        handler = MiddlewarePipeline().use(LoggingMiddleware()).wrap(router.handle)
    """

    def __init__(self):
        self._middleware: List[Middleware] = []

    def add(self, middleware: Middleware) -> "MiddlewarePipeline":
        self._middleware.append(middleware)
        logger.debug(f"Added middleware: {middleware.name}")
        return self

    def use(self, *middleware: Middleware) -> "MiddlewarePipeline":
        for mw in middleware:
            self.add(mw)
        return self

    def wrap(self, handler: NextHandler) -> NextHandler:
        """Return ``handler`` wrapped in every middleware, outermost first."""
        current = handler
        for middleware in reversed(self._middleware):
            current = self._create_wrapped_handler(middleware, current)
        return current

    @staticmethod
    def _create_wrapped_handler(middleware: Middleware, next_handler: NextHandler) -> NextHandler:
        def wrapped(request: HTTPRequest) -> HTTPResponse:
            return middleware(request, next_handler)
        return wrapped

    def __len__(self) -> int:
        return len(self._middleware)

    def __iter__(self):
        return iter(self._middleware)
