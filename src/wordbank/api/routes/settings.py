"""Runtime settings routes: log level and the enrichment service."""

from typing import Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from ...core.logging import get_logger, setup_logging
from ...core.settings import BackendSettings, LogLevel

router = APIRouter()
logger = get_logger(__name__)


class LogLevelUpdate(BaseModel):
    level: LogLevel


class EnrichmentSettingsUpdate(BaseModel):
    """Gemini credentials; omitted fields are left unchanged."""
    api_key: Optional[str] = Field(default=None, min_length=1)
    model: Optional[str] = Field(default=None, min_length=1)


def _enrichment_status():
    return {
        "enrichment_configured": bool(BackendSettings.get_gemini_api_key()),
        "gemini_model": BackendSettings.get_gemini_model(),
    }


@router.get("")
async def get_settings():
    """Current log level and enrichment configuration. The API key is never returned."""
    return {"log_level": BackendSettings.get_log_level(), **_enrichment_status()}


@router.get("/log-level")
async def get_log_level():
    return {"log_level": BackendSettings.get_log_level()}


@router.post("/log-level")
async def set_log_level(update: LogLevelUpdate):
    """Persist the log level and apply it to this process."""
    if not BackendSettings.set_log_level(update.level):
        raise HTTPException(status_code=500, detail="Failed to update log level")

    setup_logging(update.level)
    return {"message": f"Log level updated to {update.level.value}"}


@router.post("/enrichment")
async def set_enrichment_settings(update: EnrichmentSettingsUpdate):
    """
    Store the Gemini API key and/or model.

    The next bulk request picks the new values up; requests already running
    keep the client they started with.
    """
    if update.api_key is None and update.model is None:
        raise HTTPException(status_code=400, detail="Provide api_key or model")

    if update.api_key is not None and not BackendSettings.set_gemini_api_key(update.api_key):
        raise HTTPException(status_code=500, detail="Failed to store Gemini API key")
    if update.model is not None and not BackendSettings.set_gemini_model(update.model):
        raise HTTPException(status_code=500, detail="Failed to store Gemini model")

    logger.info(f"Enrichment settings updated (model: {BackendSettings.get_gemini_model()})")
    return {"message": "Enrichment settings updated", **_enrichment_status()}
