# ==============================================================================
# REQUEST LOGGER MIDDLEWARE
# ==============================================================================
# One log line per catalog request, tagged with a request id that is
# echoed back in the X-Request-ID header
# ==============================================================================

from __future__ import annotations

import logging
import time
import uuid
from typing import Awaitable, Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from catalog_api.core.constants import APIConstants

logger = logging.getLogger(__name__)

CallNext = Callable[[Request], Awaitable[Response]]


def _describe(request: Request) -> str:
    # include= is the interesting part of most catalog reads
    if request.url.query:
        return f"{request.method} {request.url.path}?{request.url.query}"
    return f"{request.method} {request.url.path}"


class RequestLoggerMiddleware(BaseHTTPMiddleware):
    """
    Log every request with its status and duration.

    The caller's ``X-Request-ID`` is reused when present. The id is also
    stored on ``request.state.request_id`` for handlers that want it.
    """

    async def dispatch(self, request: Request, call_next: CallNext) -> Response:
        request_id = request.headers.get(APIConstants.REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]
        request.state.request_id = request_id
        description = _describe(request)
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            elapsed = (time.perf_counter() - started) * 1000
            logger.exception(f"[{request_id}] {description} failed after {elapsed:.2f}ms")
            raise

        elapsed = (time.perf_counter() - started) * 1000
        level = logging.INFO
        if response.status_code >= 500:
            level = logging.ERROR
        elif response.status_code >= 400:
            level = logging.WARNING
        logger.log(level, f"[{request_id}] {description} -> {response.status_code} ({elapsed:.2f}ms)")

        response.headers[APIConstants.REQUEST_ID_HEADER] = request_id
        response.headers[APIConstants.RESPONSE_TIME_HEADER] = f"{elapsed:.2f}ms"
        return response
