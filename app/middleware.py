"""Envelope access log: one line per request, tagged with request ID and task kind."""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from neuralpay_gateway.core.logging import request_context

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Bind a request ID for the whole request and write the access log line.

    The envelope endpoint stores the resolved task kind on ``request.state.task``;
    requests that never reach the router (405, /health) are logged without one.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        with request_context() as rid:
            request.state.request_id = rid
            start = time.perf_counter()
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - start) * 1000

            task = getattr(request.state, "task", None)
            logger.info(
                "%s %s task=%s -> %s (%.0f ms)",
                request.method,
                request.url.path,
                task or "-",
                response.status_code,
                elapsed_ms,
            )
            response.headers[REQUEST_ID_HEADER] = rid
            return response
