"""
Request ID middleware.

Binds an id to every request so ledger and publish logs of one call can
be correlated, and echoes it in the X-Request-ID response header.
"""

import logging
import re
import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from editeur.infrastructure.monitoring.logger import set_request_id

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# Caller ids are echoed into logs and headers; anything else is replaced
_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9._-]{1,128}$")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Accept or generate a request id and log request completion."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        incoming = request.headers.get(REQUEST_ID_HEADER)
        if incoming and not _VALID_REQUEST_ID.match(incoming):
            incoming = None
        request_id = set_request_id(incoming)

        started = time.monotonic()
        response = await call_next(request)

        logger.debug(
            f"{request.method} {request.url.path} -> {response.status_code}",
            extra={
                "status": response.status_code,
                "duration_ms": round((time.monotonic() - started) * 1000, 1),
            },
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
