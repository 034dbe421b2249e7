"""
Readiness endpoint.

    GET /api/healthz  →  200 text/plain "OK"

Load balancers poll this, so it does no work and touches no shared state.
"""

from ..http.request import HTTPRequest
from ..http.response import HTTPResponse, ResponseBuilder


class HealthHandler:
    def readiness(self, request: HTTPRequest) -> HTTPResponse:
        return ResponseBuilder().text("OK").no_cache().build()
