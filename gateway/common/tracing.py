"""Per-request context for the gateway's logs.

Each request gets a RequestContext held in a context variable for as long
as it is being handled, including the worker thread ogr2ogr runs in. Log
filters read it from there; see gateway.common.log_utils.
"""

import contextvars
import time
from dataclasses import dataclass, replace
from logging import getLogger

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = getLogger(__name__)

# Correlation id supplied by a reverse proxy or the caller, echoed back unchanged
TRACE_HEADER = "x-request-id"


@dataclass(frozen=True)
class RequestContext:
    method: str
    url: str
    trace_id: str | None = None
    status_code: int | None = None

    def http_fields(self) -> dict:
        fields: dict = {"request": {"method": self.method}}
        if self.status_code is not None:
            fields["response"] = {"status_code": self.status_code}
        return fields


current_request: contextvars.ContextVar[RequestContext | None] = contextvars.ContextVar(
    "current_request", default=None
)


class TraceIdMiddleware(BaseHTTPMiddleware):
    """Binds a RequestContext and writes one access line per request."""

    async def dispatch(self, request: Request, call_next):
        context = RequestContext(
            method=request.method,
            url=str(request.url),
            trace_id=request.headers.get(TRACE_HEADER) or None,
        )
        token = current_request.set(context)
        started = time.perf_counter()
        try:
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - started) * 1000

            current_request.set(replace(context, status_code=response.status_code))
            logger.info(
                f"{request.method} {request.url.path} {response.status_code} {elapsed_ms:.1f}ms"
            )
            if context.trace_id:
                response.headers[TRACE_HEADER] = context.trace_id
            return response
        finally:
            current_request.reset(token)
