"""Rate limiting middleware for the Wordbank API."""

import time
from collections import defaultdict, deque
from typing import Callable, Deque, Dict, Optional

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from ..core.config import settings

LIMITED_PREFIX = "/api/"


class RateLimitingMiddleware(BaseHTTPMiddleware):
    """
    Sliding-window limit per client address on the /api/ routes.

    Bulk calls hold a worker while the AI service answers, so a client that
    floods /bulk is turned away with 429 instead of queuing.
    """

    def __init__(self, app: Callable, requests_per_window: Optional[int] = None, window_seconds: Optional[int] = None):
        super().__init__(app)
        self.limit = requests_per_window or settings.rate_limit_requests
        self.window = window_seconds or settings.rate_limit_window
        self.hits: Dict[str, Deque[float]] = defaultdict(deque)

    def _record(self, client: str, now: float) -> Optional[float]:
        """Register a hit; return seconds until a slot frees up when over the limit."""
        hits = self.hits[client]
        while hits and now - hits[0] >= self.window:
            hits.popleft()

        if len(hits) >= self.limit:
            return self.window - (now - hits[0])

        hits.append(now)
        return None

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if not request.url.path.startswith(LIMITED_PREFIX):
            return await call_next(request)

        client = request.client.host if request.client else "unknown"
        now = time.time()
        retry_after = self._record(client, now)
        if retry_after is not None:
            return JSONResponse(
                status_code=429,
                content={"detail": "Too many requests. Please try again later."},
                headers={"Retry-After": str(max(1, int(retry_after)))}
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(self.limit)
        response.headers["X-RateLimit-Remaining"] = str(max(0, self.limit - len(self.hits[client])))
        return response
