"""Request ids, trace ids and timing for every call through the gateway."""
from __future__ import annotations
import logging
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

log = logging.getLogger("apigateway")

REQUEST_ID_HEADER = "x-request-id"
TRACE_ID_HEADER = "x-trace-id"

class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Stamps `request.state` with `request_id`, `trace_id` and `started_at`
    (a perf_counter reading). `meta_for` reads the same attributes, so the
    envelope meta, the response headers and the access log agree.
    """
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        state = request.state
        state.started_at = time.perf_counter()
        state.request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        state.trace_id = request.headers.get(TRACE_ID_HEADER) or uuid.uuid4().hex

        try:
            response: Response = await call_next(request)
        except Exception:
            log.exception("http %s %s crashed request_id=%s dur_ms=%s",
                          request.method, request.url.path, state.request_id, _elapsed_ms(state.started_at))
            raise

        response.headers[REQUEST_ID_HEADER] = state.request_id
        response.headers[TRACE_ID_HEADER] = state.trace_id
        log.info("http %s %s status=%s dur_ms=%s request_id=%s agent=%s",
                 request.method, request.url.path, response.status_code,
                 _elapsed_ms(state.started_at), state.request_id, request.headers.get("user-agent", "-"))
        return response

def _elapsed_ms(started_at: float) -> int:
    return int((time.perf_counter() - started_at) * 1000)
