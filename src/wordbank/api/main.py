"""FastAPI application for the Wordbank vocabulary service."""

import sqlite3
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse

load_dotenv()

from .. import __version__
from .core.config import settings
from .middleware.auth import AuthenticationMiddleware
from .middleware.logging import RequestLoggingMiddleware
from .middleware.rate_limiting import RateLimitingMiddleware
from .routes import vocabulary, settings as settings_routes
from ..core.logging import setup_logging, get_logger
from ..core.settings import BackendSettings
from ..features.vocabulary.exceptions import InvalidRequestError

setup_logging()
logger = get_logger(__name__)

BULK_INPUT_ERROR = "Invalid input. Expected words array."


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Create the schema on startup and report whether enrichment is available."""
    from ..storage.src.project.initialize_database import setup_database

    setup_database()
    if BackendSettings.get_gemini_api_key():
        logger.info(f"Wordbank API started, enrichment model {BackendSettings.get_gemini_model()}")
    else:
        logger.warning("Wordbank API started without a Gemini API key; words will be stored without groups or sentences")

    yield
    logger.info("Wordbank API stopped")


app = FastAPI(
    title="Wordbank API",
    description="Vocabulary ingestion with AI-assigned groups and example sentences",
    version=__version__,
    lifespan=lifespan
)

# Last added runs first: auth, rate limiting, logging, then host and CORS checks
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.allowed_hosts)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(RateLimitingMiddleware)
app.add_middleware(AuthenticationMiddleware)

app.include_router(vocabulary.router, prefix="/api/v1/vocabulary", tags=["vocabulary"])
app.include_router(settings_routes.router, prefix="/api/v1/settings", tags=["settings"])


@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "service": "wordbank-api",
        "enrichment_configured": bool(BackendSettings.get_gemini_api_key()),
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


@app.get("/")
async def root():
    return {
        "message": "Wordbank API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health"
    }


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies and query parameters are a 400, not FastAPI's default 422."""
    logger.debug(f"Rejected {request.url.path}: {exc.errors()}")
    message = BULK_INPUT_ERROR if request.url.path.endswith("/bulk") else "Invalid input"
    return JSONResponse(
        status_code=400,
        content={"error": message, "details": jsonable_encoder(exc.errors())}
    )


@app.exception_handler(InvalidRequestError)
async def invalid_request_handler(request: Request, exc: InvalidRequestError):
    return JSONResponse(status_code=400, content={"error": exc.message, "details": exc.details})


@app.exception_handler(sqlite3.Error)
async def storage_exception_handler(request: Request, exc: sqlite3.Error):
    logger.error(f"Storage error on {request.method} {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=503,
        content={
            "error": "Storage unavailable",
            "request_id": getattr(request.state, "request_id", None)
        }
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.method} {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "request_id": getattr(request.state, "request_id", None)
        }
    )
