"""
=============================================================================
URL ROUTER
=============================================================================

Dispatches each request to exactly one handler.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                        CHIRPY ROUTE TABLE                           │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   GET   /api/healthz           → health.readiness                   │
    │   ANY   /app/*path             → [MetricsMiddleware] static.handle  │
    │   GET   /admin/metrics         → metrics.admin                      │
    │   GET   /api/metrics           → metrics.hits                       │
    │   ANY   /api/reset             → metrics.reset                      │
    │   POST  /api/validate_chirp    → chirps.validate                    │
    │   ----  fallback               → static.handle  (everything else)   │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
MATCHING RULES
=============================================================================

1. PATH FIRST. Routes are tried in registration order; the first route
   whose pattern matches the path AND whose method matches wins.

2. 405 BEFORE FALLBACK. If some route matched the path but none matched
   the method, the answer is 405 with an Allow header, even though the
   fallback would happily accept the request. "POST /api/healthz" is a
   405, not a static file lookup.

3. FALLBACK LAST. Only a path no route knows about reaches the fallback
   handler. Without a fallback such a request is a 404.

Patterns:

    /api/metrics        static segments, exact match; "/api/metrics/" is
                        a different path and falls through to the fallback
    /users/:id          one segment captured as path_params["id"]
    /app/*path          the prefix itself and everything under it;
                        the remainder (prefix stripped) is path_params["path"]

    "/app"            → {"path": ""}
    "/app/"           → {"path": ""}
    "/app/logo.png"   → {"path": "logo.png"}
    "/application"    → no match

=============================================================================
"""

from dataclasses import dataclass, field
from typing import Callable, Optional, Dict, List
import logging
import re

from .request import HTTPRequest
from .response import HTTPResponse, not_found, method_not_allowed

logger = logging.getLogger(__name__)

Handler = Callable[[HTTPRequest], HTTPResponse]

ALL_METHODS = ["DELETE", "GET", "HEAD", "OPTIONS", "PATCH", "POST", "PUT"]


@dataclass
class Route:
    """A URL pattern bound to a handler, optionally restricted to one method."""

    path: str
    method: Optional[str]            # None = any method
    handler: Handler
    _pattern: Optional[re.Pattern] = field(default=None, repr=False)
    _param_names: List[str] = field(default_factory=list, repr=False)


@dataclass
class RouteMatch:
    route: Route
    params: Dict[str, str]


class Router:
    """
    Path-first HTTP router with a fallback handler.

        router = Router()

        @router.get("/api/healthz")
        def healthz(request):
            return ResponseBuilder().text("OK").build()

        api = router.group("/api")
        api.any("/reset", metrics.reset)

        router.fallback(static.handle)

        response = router.handle(request)
    """

    def __init__(self, prefix: str = "", parent: Optional["Router"] = None):
        self.prefix = prefix.rstrip("/")
        self._parent = parent
        self._routes: List[Route] = []
        self._fallback: Optional[Handler] = None

    # =========================================================================
    # REGISTRATION
    # =========================================================================

    def add_route(self, path: str, handler: Handler, method: Optional[str] = None) -> Route:
        """
        Register ``handler`` for ``path``.

        Args:
            path: URL pattern, relative to this router's prefix.
            handler: Callable taking an HTTPRequest, returning an HTTPResponse.
            method: HTTP method, or None to accept every method.
        """
        full_path = self.prefix + path
        if self._parent is not None:
            # Groups register into the root table so ordering stays global.
            return self._root().add_route(full_path, handler, method)

        pattern, param_names = self._compile_pattern(full_path)
        route = Route(
            path=full_path,
            method=method.upper() if method else None,
            handler=handler,
            _pattern=pattern,
            _param_names=param_names,
        )
        self._routes.append(route)

        logger.debug(f"Registered route {route.method or 'ANY'} {route.path}")
        return route

    def _root(self) -> "Router":
        router = self
        while router._parent is not None:
            router = router._parent
        return router

    def _compile_pattern(self, path: str) -> tuple[re.Pattern, List[str]]:
        """
        Compile a route pattern into an anchored regex.

            /api/metrics   → ^/api/metrics$
            /users/:id     → ^/users/(?P<id>[^/]+)$
            /app/*path     → ^/app(?:/(?P<path>.*))?$
            /*path         → ^(?:/(?P<path>.*))?$
        """
        param_names: List[str] = []
        regex_parts = ["^"]

        for segment in path.split("/"):
            if not segment:
                continue

            if segment.startswith(":"):
                param_name = segment[1:]
                param_names.append(param_name)
                regex_parts.append(f"/(?P<{param_name}>[^/]+)")
            elif segment.startswith("*"):
                param_name = segment[1:] or "wildcard"
                param_names.append(param_name)
                regex_parts.append(f"(?:/(?P<{param_name}>.*))?")
                break  # wildcard swallows the rest of the path
            else:
                regex_parts.append("/" + re.escape(segment))

        if len(regex_parts) == 1:
            regex_parts.append("/")
        regex_parts.append("$")
        return re.compile("".join(regex_parts)), param_names

    def route(self, path: str, method: Optional[str] = None) -> Callable[[Handler], Handler]:
        """Decorator form of add_route(). Returns the handler unchanged."""
        def decorator(handler: Handler) -> Handler:
            self.add_route(path, handler, method)
            return handler
        return decorator

    def get(self, path: str) -> Callable[[Handler], Handler]:
        return self.route(path, "GET")

    def post(self, path: str) -> Callable[[Handler], Handler]:
        return self.route(path, "POST")

    def any(self, path: str, handler: Handler) -> Route:
        """Register ``handler`` for every method on ``path``."""
        return self.add_route(path, handler, None)

    def group(self, prefix: str) -> "Router":
        """
        A child router whose routes are registered under ``prefix``.

            api = router.group("/api")
            api.get("/healthz")(health.readiness)     # GET /api/healthz
        """
        return Router(self.prefix + prefix, parent=self)

    def fallback(self, handler: Handler) -> Handler:
        """Handler for paths that no route matches. Usable as a decorator."""
        self._root()._fallback = handler
        return handler

    # =========================================================================
    # MATCHING
    # =========================================================================

    def match(self, method: str, path: str) -> Optional[RouteMatch]:
        """
        First route matching both ``method`` and ``path``, or None.
        """
        method = method.upper()

        for route in self._root()._routes:
            if route.method and route.method != method:
                continue
            found = route._pattern.match(path) if route._pattern else None
            if found:
                params = {k: v or "" for k, v in found.groupdict().items()}
                return RouteMatch(route=route, params=params)

        return None

    def get_allowed_methods(self, path: str) -> List[str]:
        """Methods some route accepts for ``path``; empty if no route knows it."""
        methods = set()

        for route in self._root()._routes:
            if route._pattern and route._pattern.match(path):
                if route.method is None:
                    return list(ALL_METHODS)
                methods.add(route.method)

        return sorted(methods)

    def handle(self, request: HTTPRequest) -> HTTPResponse:
        """
        Dispatch ``request``: matching route, else 405, else fallback, else 404.
        """
        found = self.match(request.method, request.path)
        if found:
            request.path_params = found.params
            return found.route.handler(request)

        allowed = self.get_allowed_methods(request.path)
        if allowed:
            return method_not_allowed(allowed)

        fallback = self._root()._fallback
        if fallback is not None:
            return fallback(request)

        return not_found(f"No route matches {request.path}")

    # =========================================================================
    # INTROSPECTION
    # =========================================================================

    def routes(self) -> List[Route]:
        return list(self._root()._routes)

    def describe(self) -> List[str]:
        """One ``METHOD  /path`` line per route, in matching order."""
        lines = [f"{route.method or 'ANY':8} {route.path}" for route in self.routes()]
        if self._root()._fallback is not None:
            lines.append(f"{'*':8} (fallback)")
        return lines
