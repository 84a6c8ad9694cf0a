"""Request logging middleware for the Wordbank API."""

import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from ...core.logging import get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# Polled by load balancers; only logged at debug level
QUIET_PATHS = {"/health"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Tags every request with an id and logs how it ended and how long it took."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        route = f"{request.method} {request.url.path}"
        log = logger.debug if request.url.path in QUIET_PATHS else logger.info

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.error(
                f"[{request_id}] {route} raised {type(e).__name__} after {elapsed_ms:.0f}ms",
                exc_info=True
            )
            raise

        elapsed_ms = (time.perf_counter() - started) * 1000
        log(
            f"[{request_id}] {route} -> {response.status_code} in {elapsed_ms:.0f}ms",
            extra={
                "request_id": request_id,
                "client_ip": request.client.host if request.client else None,
                "status_code": response.status_code,
            }
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
