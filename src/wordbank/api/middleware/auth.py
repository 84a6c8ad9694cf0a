"""API key authentication middleware for the Wordbank API."""

import hmac
import os
from typing import Callable, List

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from ..core.config import settings
from ...core.logging import get_logger
from ...core.settings import BackendSettings

logger = get_logger(__name__)

OPEN_PATHS = {"/health", "/", "/docs", "/redoc", "/openapi.json"}


def configured_api_keys() -> List[str]:
    """
    Collect the accepted keys from WORDBANK_API_KEY, the comma-separated
    WORDBANK_API_KEYS and the stored ``api_key`` setting.
    """
    keys = []

    single = os.getenv("WORDBANK_API_KEY", "").strip()
    if single:
        keys.append(single)

    for key in os.getenv("WORDBANK_API_KEYS", "").split(","):
        if key.strip():
            keys.append(key.strip())

    stored = BackendSettings.get_api_key()
    if stored and str(stored).strip():
        keys.append(str(stored).strip())

    return keys


class AuthenticationMiddleware(BaseHTTPMiddleware):
    """
    Requires a valid key in the ``X-API-Key`` header.

    With no key configured anywhere the API runs unsecured.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path in OPEN_PATHS:
            return await call_next(request)

        valid_keys = configured_api_keys()
        if not valid_keys:
            return await call_next(request)

        api_key = request.headers.get(settings.api_key_header)
        if not api_key:
            logger.warning(f"Missing API key for request to {request.url.path}")
            return JSONResponse(
                status_code=401,
                content={"error": "Unauthorized", "message": f"Missing {settings.api_key_header} header"}
            )

        if not any(hmac.compare_digest(api_key, key) for key in valid_keys):
            logger.warning(f"Invalid API key for request to {request.url.path}")
            return JSONResponse(
                status_code=401,
                content={"error": "Unauthorized", "message": "Invalid API key"}
            )

        return await call_next(request)
