from __future__ import annotations
import time
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from paysign.config import settings
from paysign.metrics import REQS, LAT


class BodySizeLimitMiddleware(BaseHTTPMiddleware):
    """Reject request bodies larger than ``settings.max_body_bytes`` with 413.

    Content-Length is checked first; the body is read as well because
    chunked requests carry no length.
    """

    async def dispatch(self, request: Request, call_next):
        declared = request.headers.get("content-length")
        if declared and declared.isdigit() and int(declared) > settings.max_body_bytes:
            return Response("Payload too large", status_code=413)
        if request.method in ("POST", "PUT", "PATCH"):
            if len(await request.body()) > settings.max_body_bytes:
                return Response("Payload too large", status_code=413)
        return await call_next(request)


def _route_label(request: Request) -> str:
    # Route template, not the raw URL, keeps label cardinality bounded.
    route = request.scope.get("route")
    return getattr(route, "path", None) or "unmatched"


class RequestMetricsMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        resp = await call_next(request)
        path = _route_label(request)
        LAT.labels(path=path, method=request.method).observe(time.perf_counter() - start)
        REQS.labels(path=path, method=request.method, status=str(resp.status_code)).inc()
        return resp
