"""Request context middleware: request ids, timing and access logging.

- Reuses the caller's ``X-Request-ID`` or generates one, and exposes it to
  every log record written while the request is handled
- Adds ``X-Request-ID`` and ``X-Response-Time`` to the response
- Logs one structured line per request
"""

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from ..core.logging_config import request_id_var

logger = logging.getLogger(__name__)

# Static file hits would drown out the API lines at INFO.
_QUIET_PREFIXES = ("/uploads/",)


class RequestContextMiddleware(BaseHTTPMiddleware):

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        rid = request.headers.get("x-request-id") or uuid.uuid4().hex[:16]
        token = request_id_var.set(rid)
        try:
            start = time.monotonic()
            response = await call_next(request)
            duration_ms = round((time.monotonic() - start) * 1000, 1)

            response.headers["X-Request-ID"] = rid
            response.headers["X-Response-Time"] = f"{duration_ms}ms"

            path = request.url.path
            log = logger.debug if path.startswith(_QUIET_PREFIXES) else logger.info
            log(
                f"{request.method} {path} {response.status_code}",
                extra={
                    "method": request.method,
                    "path": path,
                    "status_code": response.status_code,
                    "duration_ms": duration_ms,
                },
            )
            return response
        finally:
            request_id_var.reset(token)
